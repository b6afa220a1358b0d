"""
Top-level package for the grid rover simulator.

Components:
- geometry_utils: integer grid vector and distance helpers
- orientation: compass headings, turning, unit steps
- commands: command parsing and execution
- rover: immutable rover state and command-stream ingestion
- world: known obstacle cells and the scanner built from them
- map_generator: procedural obstacle maps (scatter, walls, rings)
- metrics: per-run and batch statistics
- config: YAML simulation config
"""

from .geometry_utils import Vector, ORIGIN
from .orientation import Orientation, unit_vector
from .commands import Backward, Command, Forward, TurnLeft, TurnRight, Unknown, parse_command
from .rover import Obstacle, Rover, no_obstacles
from .world import World

__all__ = [
    "Vector",
    "ORIGIN",
    "Orientation",
    "unit_vector",
    "Command",
    "TurnRight",
    "TurnLeft",
    "Forward",
    "Backward",
    "Unknown",
    "parse_command",
    "Obstacle",
    "Rover",
    "no_obstacles",
    "World",
]
