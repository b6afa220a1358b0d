"""
Geometry utilities for the grid rover simulation.

Provides the integer grid vector used for rover positions and displacements,
plus small distance helpers used by map generation and run metrics.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple


# ---------------------------------------------------------------------------
# Grid vector
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Vector:
    """Immutable integer coordinate on the infinite grid.

    Attributes
    ----------
    x : int
        Column, increasing to the east.
    y : int
        Row, increasing to the north.
    """

    x: int
    y: int

    def plus(self, other: Vector) -> Vector:
        """Component-wise sum."""
        return Vector(self.x + other.x, self.y + other.y)

    def reversed(self) -> Vector:
        """Vector pointing the opposite way."""
        return Vector(-self.x, -self.y)

    def to_tuple(self) -> Tuple[int, int]:
        return self.x, self.y

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Vector:
        """Build a vector from a {"x": .., "y": ..} mapping (map files, config)."""
        return cls(_as_int(data["x"], "x"), _as_int(data["y"], "y"))

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


ORIGIN = Vector(0, 0)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def manhattan_distance(a: Vector, b: Vector) -> int:
    """Number of unit grid steps between two cells."""
    return abs(a.x - b.x) + abs(a.y - b.y)


def in_square(position: Vector, extent: int) -> bool:
    """Return True if position lies inside [-extent, extent] on both axes."""
    return -extent <= position.x <= extent and -extent <= position.y <= extent


def _as_int(value: Any, name: str) -> int:
    # bool is an int subclass but never a valid coordinate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Coordinate '{name}' must be an integer, got {value!r}")
    if int(value) != value:
        raise ValueError(f"Coordinate '{name}' must be an integer, got {value!r}")
    return int(value)
