"""
Rover command parsing and execution.

A command stream is a comma-separated string of single-letter tokens.
Each token parses into one variant of the closed ``Command`` union; parsing
never fails, unrecognized tokens become ``Unknown`` and are reported later
through ``Rover.report()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Union

from .orientation import unit_vector

if TYPE_CHECKING:
    from .rover import Rover


COMMAND_SEPARATOR = ","


@dataclass(frozen=True)
class TurnRight:
    pass


@dataclass(frozen=True)
class TurnLeft:
    pass


@dataclass(frozen=True)
class Forward:
    pass


@dataclass(frozen=True)
class Backward:
    pass


@dataclass(frozen=True)
class Unknown:
    """Token that matched no known command; ``raw`` keeps the original text."""

    raw: str

    @property
    def message(self) -> str:
        return f"Could not parse [{self.raw}] as a known command"


Command = Union[TurnRight, TurnLeft, Forward, Backward, Unknown]


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_command(token: str) -> Command:
    match token.lower():
        case "r":
            return TurnRight()
        case "l":
            return TurnLeft()
        case "f":
            return Forward()
        case "b":
            return Backward()
        case _:
            return Unknown(token)


def split_commands(stream: str) -> List[str]:
    """Split a command stream into raw tokens. Empty tokens are kept."""
    return stream.split(COMMAND_SEPARATOR)


def parse_commands(stream: str) -> List[Command]:
    return [parse_command(token) for token in split_commands(stream)]


def command_symbol(command: Command) -> str:
    """Short label for telemetry records."""
    match command:
        case TurnRight():
            return "r"
        case TurnLeft():
            return "l"
        case Forward():
            return "f"
        case Backward():
            return "b"
        case Unknown(raw=raw):
            return raw
    raise TypeError(f"Not a rover command: {command!r}")


# ---------------------------------------------------------------------------
# Execution
# ---------------------------------------------------------------------------


def execute(command: Command, rover: Rover) -> Rover:
    """Apply one command to a rover and return the resulting rover.

    Forward motion consults the rover's obstacle scanner first and stops in
    place when it reports something. Backward motion never scans.
    """
    match command:
        case TurnRight():
            return rover.turned(rover.orientation.turn_right())
        case TurnLeft():
            return rover.turned(rover.orientation.turn_left())
        case Forward():
            obstacle = rover.scan()
            if obstacle is not None:
                return rover.stopped_by(obstacle)
            return rover.moved_to(rover.position.plus(unit_vector(rover.orientation)))
        case Backward():
            step = unit_vector(rover.orientation).reversed()
            return rover.moved_to(rover.position.plus(step))
        case Unknown():
            return rover.with_error(command.message)
    raise TypeError(f"Not a rover command: {command!r}")
