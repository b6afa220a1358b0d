"""
Procedural obstacle maps for the grid rover.

Generates scattered obstacles, straight walls and a ring around a start
cell. Output is compatible with World.from_map_dict().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple
import json
import os
import random

from .geometry_utils import ORIGIN, Vector, in_square
from .orientation import Orientation, unit_vector
from .world import World


DEFAULT_NAMES: Tuple[str, ...] = ("rock", "crater", "boulder")
MAP_KINDS = ("random", "wall", "ring", "wall_plus_random")


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@dataclass
class MapGeneratorConfig:
    """Parameters for procedural map generation."""

    kind: str = "random"
    extent: int = 10
    count: int = 10
    names: Tuple[str, ...] = DEFAULT_NAMES
    keep_clear: List[Tuple[int, int]] = field(default_factory=lambda: [(0, 0)])
    wall_start: Tuple[int, int] = (0, 3)
    wall_direction: str = "EAST"
    wall_length: int = 5
    seed: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> MapGeneratorConfig:
        cfg = cls()
        for key, value in data.items():
            if not hasattr(cfg, key):
                raise ValueError(f"Unknown map generator option: {key}")
            setattr(cfg, key, value)
        cfg.names = tuple(cfg.names)
        cfg.keep_clear = [tuple(c) for c in cfg.keep_clear]
        cfg.wall_start = tuple(cfg.wall_start)
        return cfg


def _cell(position: Vector, name: str) -> Dict[str, Any]:
    return {"x": position.x, "y": position.y, "name": name}


# ---------------------------------------------------------------------------
# Layouts
# ---------------------------------------------------------------------------


def generate_random_obstacles(
    extent: int,
    count: int,
    rng: Optional[random.Random] = None,
    names: Sequence[str] = DEFAULT_NAMES,
    keep_clear: Sequence[Vector] = (ORIGIN,),
) -> Dict[str, Any]:
    """
    Scatter ``count`` obstacles on distinct cells of [-extent, extent]^2.
    Cells in ``keep_clear`` stay free. Fewer obstacles are placed when the
    square has no room left.
    """
    if extent < 0:
        raise ValueError(f"extent must be non-negative, got {extent}")
    if not names:
        raise ValueError("names must not be empty")
    rng = rng or random.Random()
    blocked = set(keep_clear)
    free = [
        Vector(x, y)
        for x in range(-extent, extent + 1)
        for y in range(-extent, extent + 1)
        if Vector(x, y) not in blocked
    ]
    chosen = rng.sample(free, min(max(count, 0), len(free)))
    return {"obstacles": [_cell(p, rng.choice(list(names))) for p in chosen]}


def generate_wall(
    start: Vector,
    direction: Orientation,
    length: int,
    name: str = "wall",
) -> Dict[str, Any]:
    """Straight line of ``length`` cells starting at ``start``."""
    step = unit_vector(direction)
    cells: List[Dict[str, Any]] = []
    position = start
    for _ in range(max(length, 0)):
        cells.append(_cell(position, name))
        position = position.plus(step)
    return {"obstacles": cells}


def generate_ring(center: Vector, radius: int, name: str = "ridge") -> Dict[str, Any]:
    """Square ring of cells at Chebyshev distance ``radius`` from ``center``."""
    if radius < 1:
        raise ValueError(f"radius must be at least 1, got {radius}")
    cells = []
    for dx in range(-radius, radius + 1):
        for dy in range(-radius, radius + 1):
            if max(abs(dx), abs(dy)) == radius:
                cells.append(_cell(center.plus(Vector(dx, dy)), name))
    return {"obstacles": cells}


def generate_map(config: MapGeneratorConfig) -> Dict[str, Any]:
    """Generate a map dict from a generator config."""
    rng = random.Random(config.seed) if config.seed is not None else random.Random()
    if config.kind == "random":
        return generate_random_obstacles(
            config.extent,
            config.count,
            rng=rng,
            names=config.names,
            keep_clear=[Vector(x, y) for x, y in config.keep_clear],
        )
    if config.kind == "wall":
        return generate_wall(
            Vector(*config.wall_start),
            Orientation.from_name(config.wall_direction),
            config.wall_length,
        )
    if config.kind == "ring":
        return generate_ring(ORIGIN, config.extent)
    if config.kind == "wall_plus_random":
        data = generate_wall(
            Vector(*config.wall_start),
            Orientation.from_name(config.wall_direction),
            config.wall_length,
        )
        wall_cells = [Vector(o["x"], o["y"]) for o in data["obstacles"]]
        keep_clear = [Vector(x, y) for x, y in config.keep_clear] + wall_cells
        scatter = generate_random_obstacles(
            config.extent, config.count, rng=rng, names=config.names, keep_clear=keep_clear
        )
        data["obstacles"] = data["obstacles"] + scatter["obstacles"]
        return data
    raise KeyError(f"Unknown map kind: {config.kind}. Available: {list(MAP_KINDS)}")


def world_from_generator(config: MapGeneratorConfig) -> World:
    """Build a World instance from a generator config."""
    return World.from_map_dict(generate_map(config))


def cells_within(data: Dict[str, Any], extent: int) -> bool:
    """True if every obstacle in a map dict lies inside [-extent, extent]^2."""
    return all(in_square(Vector.from_dict(o), extent) for o in data.get("obstacles", []))


def save_generated_map(data: Dict[str, Any], path: str) -> None:
    """Write generated map dict to a JSON file."""
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
