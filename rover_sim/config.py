"""
Simulation configuration.

Configs are YAML files (see ``configs/sim.yaml``) with ``rover``, ``map``
and ``logging`` sections. Omitted keys fall back to the defaults below.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

from .geometry_utils import Vector
from .map_generator import MapGeneratorConfig, world_from_generator
from .orientation import Orientation
from .rover import Rover
from .world import World


def load_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


@dataclass
class SimConfig:
    start: Vector = Vector(0, 0)
    orientation: Orientation = Orientation.NORTH
    map_path: Optional[str] = None
    generator: Optional[MapGeneratorConfig] = None
    telemetry_path: Optional[str] = None
    seed: int = 0

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any]) -> SimConfig:
        """Build a config from a parsed YAML dict, validating values."""
        rover_cfg = cfg.get("rover") or {}
        map_cfg = cfg.get("map") or {}
        logging_cfg = cfg.get("logging") or {}
        seed = int(cfg.get("seed", 0))

        start = Vector.from_dict(
            {"x": rover_cfg.get("start_x", 0), "y": rover_cfg.get("start_y", 0)}
        )
        orientation = Orientation.from_name(rover_cfg.get("orientation", "NORTH"))

        generator = None
        if map_cfg.get("generator") is not None:
            generator = MapGeneratorConfig.from_dict(map_cfg["generator"])
            if generator.seed is None:
                generator.seed = seed

        return cls(
            start=start,
            orientation=orientation,
            map_path=map_cfg.get("path"),
            generator=generator,
            telemetry_path=logging_cfg.get("telemetry_path"),
            seed=seed,
        )

    @classmethod
    def from_file(cls, path: str) -> SimConfig:
        return cls.from_dict(load_yaml(path))


def build_world(cfg: SimConfig) -> World:
    """World from the configured map file and/or generator (file obstacles win)."""
    world = World()
    if cfg.generator is not None:
        world = world_from_generator(cfg.generator)
    if cfg.map_path is not None:
        world.add_obstacles(World.from_map_file(cfg.map_path).obstacles.items())
    return world


def build_rover(cfg: SimConfig, world: World) -> Rover:
    return Rover(position=cfg.start, orientation=cfg.orientation, scanner=world.scanner())
