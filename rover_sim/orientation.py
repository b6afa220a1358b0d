from __future__ import annotations

from enum import Enum

from .geometry_utils import Vector


class Orientation(Enum):
    """Compass heading of the rover, in clockwise order."""

    NORTH = "N"
    EAST = "E"
    SOUTH = "S"
    WEST = "W"

    def turn_right(self) -> Orientation:
        return _CYCLE[(_CYCLE.index(self) + 1) % len(_CYCLE)]

    def turn_left(self) -> Orientation:
        return _CYCLE[(_CYCLE.index(self) - 1) % len(_CYCLE)]

    @classmethod
    def from_name(cls, name: str) -> Orientation:
        """Look up a heading by name ("north") or letter ("N"), ignoring case."""
        key = str(name).strip().upper()
        for orientation in cls:
            if key in (orientation.name, orientation.value):
                return orientation
        raise ValueError(
            f"Unknown orientation: {name!r}. Available: {[o.name for o in cls]}"
        )


_CYCLE = (Orientation.NORTH, Orientation.EAST, Orientation.SOUTH, Orientation.WEST)

_UNIT_VECTORS = {
    Orientation.NORTH: Vector(0, 1),
    Orientation.EAST: Vector(1, 0),
    Orientation.SOUTH: Vector(0, -1),
    Orientation.WEST: Vector(-1, 0),
}


def unit_vector(orientation: Orientation) -> Vector:
    """One grid step in the direction the orientation faces."""
    return _UNIT_VECTORS[orientation]
