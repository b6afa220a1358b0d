from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Tuple
import json

from .geometry_utils import Vector
from .orientation import unit_vector
from .rover import ObstacleScanner, Rover

DEFAULT_OBSTACLE_NAME = "obstacle"


class World:
    """Known obstacles on the infinite grid.

    The world has no bounds; it only records which cells are occupied and
    what occupies them. Rovers do not hold a reference to the world, they
    get a read-only scanner from ``World.scanner()`` instead.

    Parameters
    ----------
    obstacles : dict[Vector, str], optional
        Occupied cells mapped to a description ("rock", "crater", ...).
    """

    def __init__(self, obstacles: Optional[Dict[Vector, str]] = None) -> None:
        self.obstacles: Dict[Vector, str] = dict(obstacles) if obstacles is not None else {}

    # ------------------------------------------------------------------
    # Map loading
    # ------------------------------------------------------------------
    @classmethod
    def from_map_dict(cls, data: Dict[str, Any]) -> World:
        """Create world from a dict describing obstacle cells."""
        world = cls()
        for o in data.get("obstacles", []):
            world.add_obstacle(Vector.from_dict(o), str(o.get("name", DEFAULT_OBSTACLE_NAME)))
        return world

    @classmethod
    def from_map_file(cls, path: str) -> World:
        """Create world from a JSON map file."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Map file {path} must contain a JSON object")
        return cls.from_map_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize world description to a Python dict."""
        return {
            "obstacles": [
                {"x": p.x, "y": p.y, "name": name}
                for p, name in sorted(self.obstacles.items(), key=lambda item: item[0].to_tuple())
            ],
        }

    # ------------------------------------------------------------------
    # Obstacles
    # ------------------------------------------------------------------
    def clear_obstacles(self) -> None:
        self.obstacles.clear()

    def add_obstacle(self, position: Vector, name: str = DEFAULT_OBSTACLE_NAME) -> None:
        """Add (or rename) the obstacle on a cell."""
        self.obstacles[position] = name

    def add_obstacles(self, cells: Iterable[Tuple[Vector, str]]) -> None:
        for position, name in cells:
            self.add_obstacle(position, name)

    def obstacle_at(self, position: Vector) -> Optional[str]:
        return self.obstacles.get(position)

    def is_blocked(self, position: Vector) -> bool:
        return position in self.obstacles

    def occupied_cells(self) -> List[Vector]:
        return sorted(self.obstacles, key=Vector.to_tuple)

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------
    def scanner(self) -> ObstacleScanner:
        """Scanner reporting the obstacle on the cell ahead of a rover, if any.

        The returned function reads the world at call time, so obstacles
        added later are seen by rovers already carrying the scanner.
        """

        def scan(rover: Rover) -> Optional[str]:
            ahead = rover.position.plus(unit_vector(rover.orientation))
            return self.obstacle_at(ahead)

        return scan

    def __len__(self) -> int:
        return len(self.obstacles)
