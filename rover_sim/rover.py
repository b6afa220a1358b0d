from __future__ import annotations

from dataclasses import dataclass, field, replace
from functools import reduce
from itertools import accumulate
from typing import Any, Callable, Dict, List, Optional, Tuple

from .commands import execute, parse_command, split_commands
from .geometry_utils import ORIGIN, Vector
from .orientation import Orientation

ObstacleScanner = Callable[["Rover"], Optional[str]]


def no_obstacles(rover: Rover) -> Optional[str]:
    """Scanner that never reports anything."""
    return None


@dataclass(frozen=True)
class Obstacle:
    """Description of whatever stopped the last forward move."""

    description: str


@dataclass(frozen=True)
class Rover:
    """Immutable rover on the grid.

    Every command produces a new ``Rover``; earlier values stay valid as
    snapshots. Equality and hashing only look at ``position`` and
    ``orientation``: two rovers in the same pose are equal whatever their
    error history or obstacle state.

    Attributes
    ----------
    position : Vector
        Current grid cell.
    orientation : Orientation
        Current heading.
    errors : tuple[str, ...]
        Parse errors in the order they were received.
    scanner : callable
        ``scanner(rover) -> Optional[str]``, consulted before each forward
        move. Carried unchanged through every transition.
    obstacle : Obstacle or None
        Set only by a forward move that the scanner blocked.
    """

    position: Vector
    orientation: Orientation
    errors: Tuple[str, ...] = field(default=(), compare=False, repr=False)
    scanner: ObstacleScanner = field(default=no_obstacles, compare=False, repr=False)
    obstacle: Optional[Obstacle] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not callable(self.scanner):
            raise TypeError(f"Obstacle scanner must be callable, got {self.scanner!r}")
        object.__setattr__(self, "errors", tuple(self.errors))

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def initial(cls, position: Vector, orientation: Orientation) -> Rover:
        return cls(position=position, orientation=orientation)

    @classmethod
    def default(cls) -> Rover:
        """Rover at the origin facing north, with nothing in its way."""
        return cls(position=ORIGIN, orientation=Orientation.NORTH)

    @classmethod
    def with_scanner(cls, scanner: ObstacleScanner) -> Rover:
        return cls(position=ORIGIN, orientation=Orientation.NORTH, scanner=scanner)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def with_error(self, error: str) -> Rover:
        return replace(self, errors=self.errors + (error,), obstacle=None)

    def turned(self, orientation: Orientation) -> Rover:
        return replace(self, orientation=orientation, obstacle=None)

    def moved_to(self, position: Vector) -> Rover:
        return replace(self, position=position, obstacle=None)

    def stopped_by(self, description: str) -> Rover:
        return replace(self, obstacle=Obstacle(description))

    # ------------------------------------------------------------------
    # Command stream
    # ------------------------------------------------------------------
    def receive(self, commands: str) -> Rover:
        """Execute a comma-separated command stream and return the final rover."""
        return reduce(
            lambda rover, token: execute(parse_command(token), rover),
            split_commands(commands),
            self,
        )

    def trace(self, commands: str) -> List[Rover]:
        """Like ``receive`` but keep every intermediate rover.

        The first element is ``self``; there is one more element than tokens.
        """
        return list(
            accumulate(
                split_commands(commands),
                lambda rover, token: execute(parse_command(token), rover),
                initial=self,
            )
        )

    def scan(self) -> Optional[str]:
        return self.scanner(self)

    def report(self) -> str:
        """Parse errors in order, then the current obstacle, one per line."""
        messages = list(self.errors)
        if self.obstacle is not None:
            messages.append(self.obstacle.description)
        return "\n".join(messages)

    # ------------------------------------------------------------------
    # Utility
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        """Serialize rover state to a dict for logging/telemetry."""
        return {
            "x": self.position.x,
            "y": self.position.y,
            "orientation": self.orientation.name,
            "errors": list(self.errors),
            "obstacle": self.obstacle.description if self.obstacle is not None else None,
        }

    def __str__(self) -> str:
        return f"Rover{{position={self.position}, orientation={self.orientation.name}}}"
