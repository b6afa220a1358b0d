from __future__ import annotations

from typing import Optional

import pytest

from rover_sim.geometry_utils import Vector
from rover_sim.orientation import Orientation, unit_vector
from rover_sim.rover import Obstacle, Rover, no_obstacles


def rock_at_0_1(rover: Rover) -> Optional[str]:
    ahead = rover.position.plus(unit_vector(rover.orientation))
    return "rock" if ahead == Vector(0, 1) else None


def test_default_rover() -> None:
    rover = Rover.default()
    assert rover.position == Vector(0, 0)
    assert rover.orientation == Orientation.NORTH
    assert rover.errors == ()
    assert rover.obstacle is None
    assert rover.scan() is None
    assert rover.report() == ""


def test_initial_rover_uses_given_pose() -> None:
    rover = Rover.initial(Vector(3, -2), Orientation.WEST)
    assert rover.position == Vector(3, -2)
    assert rover.orientation == Orientation.WEST
    assert rover.scanner is no_obstacles


def test_three_forwards_from_origin() -> None:
    rover = Rover.default().receive("f,f,f")
    assert rover.position == Vector(0, 3)
    assert rover.orientation == Orientation.NORTH
    assert rover.report() == ""


def test_turn_then_forward() -> None:
    turned = Rover.default().receive("r")
    assert turned.orientation == Orientation.EAST
    assert turned.receive("f").position == Vector(1, 0)
    assert Rover.default().receive("r,f") == Rover.initial(Vector(1, 0), Orientation.EAST)


def test_mixed_case_commands() -> None:
    rover = Rover.default().receive("F,R,F,L,B")
    assert rover == Rover.initial(Vector(1, 0), Orientation.NORTH)


@pytest.mark.parametrize("o", list(Orientation))
def test_forward_without_scanner_advances_one_step(o: Orientation) -> None:
    start = Rover.initial(Vector(5, 5), o)
    moved = start.receive("f")
    assert moved.position == Vector(5, 5).plus(unit_vector(o))
    assert moved.obstacle is None


def test_unknown_command_is_reported_and_stream_continues() -> None:
    rover = Rover.default().receive("x,f")
    assert rover.report() == "Could not parse [x] as a known command"
    assert rover.position == Vector(0, 1)


def test_errors_accumulate_in_order_with_duplicates() -> None:
    rover = Rover.default().receive("x,Y,x")
    assert rover.errors == (
        "Could not parse [x] as a known command",
        "Could not parse [Y] as a known command",
        "Could not parse [x] as a known command",
    )


def test_empty_stream_records_one_empty_token_error() -> None:
    rover = Rover.default().receive("")
    assert rover.errors == ("Could not parse [] as a known command",)
    assert rover.position == Vector(0, 0)


def test_consecutive_and_trailing_commas_are_unknown() -> None:
    rover = Rover.default().receive("f,,f,")
    assert rover.position == Vector(0, 2)
    assert rover.report() == "\n".join(["Could not parse [] as a known command"] * 2)


def test_obstacle_blocks_forward() -> None:
    rover = Rover.with_scanner(rock_at_0_1).receive("f")
    assert rover.position == Vector(0, 0)
    assert rover.obstacle == Obstacle("rock")
    assert rover.report() == "rock"


def test_obstacle_cleared_by_next_transition() -> None:
    rover = Rover.with_scanner(rock_at_0_1)
    assert rover.receive("f,l").report() == ""
    assert rover.receive("f,r,f").position == Vector(1, 0)


def test_halted_rover_can_retry_forward() -> None:
    blocked = Rover.with_scanner(rock_at_0_1).receive("f,f")
    assert blocked.position == Vector(0, 0)
    assert blocked.report() == "rock"


def test_backward_ignores_blocking_scanner() -> None:
    rover = Rover.with_scanner(lambda r: "wall").receive("b,b")
    assert rover.position == Vector(0, -2)
    assert rover.obstacle is None


def test_report_lists_errors_before_obstacle() -> None:
    rover = Rover.with_scanner(rock_at_0_1).receive("q,f")
    assert rover.report() == "Could not parse [q] as a known command\nrock"


def test_scanner_sees_current_rover() -> None:
    seen = []

    def scanner(rover: Rover) -> Optional[str]:
        seen.append((rover.position, rover.orientation))
        return None

    Rover.with_scanner(scanner).receive("f,r,f")
    assert seen == [(Vector(0, 0), Orientation.NORTH), (Vector(0, 1), Orientation.EAST)]


def test_equality_ignores_errors_and_obstacle() -> None:
    clean = Rover.default().receive("f,r")
    noisy = Rover.with_scanner(lambda r: None).receive("zz,f,?,r")
    assert clean == noisy
    assert hash(clean) == hash(noisy)
    assert clean.errors != noisy.errors
    assert Rover.default().stopped_by("rock") == Rover.default()
    assert Rover.default() != Rover.initial(Vector(0, 0), Orientation.EAST)


def test_transitions_leave_snapshots_untouched() -> None:
    start = Rover.default()
    end = start.receive("f,x,r")
    assert start.position == Vector(0, 0)
    assert start.errors == ()
    assert end.position == Vector(0, 1)
    with pytest.raises(AttributeError):
        start.position = Vector(9, 9)  # type: ignore[misc]


def test_scanner_is_carried_through_transitions() -> None:
    rover = Rover.with_scanner(rock_at_0_1).receive("r,x,b,l")
    assert rover.scanner is rock_at_0_1


def test_trace_keeps_every_snapshot() -> None:
    trace = Rover.default().trace("f,r,f")
    assert [r.position for r in trace] == [Vector(0, 0), Vector(0, 1), Vector(0, 1), Vector(1, 1)]
    assert trace[-1] == Rover.default().receive("f,r,f")


def test_scanner_must_be_callable() -> None:
    with pytest.raises(TypeError):
        Rover(position=Vector(0, 0), orientation=Orientation.NORTH, scanner=None)  # type: ignore[arg-type]


def test_string_and_dict_forms() -> None:
    rover = Rover.with_scanner(rock_at_0_1).receive("x,f")
    assert str(rover) == "Rover{position=(0, 0), orientation=NORTH}"
    assert rover.to_dict() == {
        "x": 0,
        "y": 0,
        "orientation": "NORTH",
        "errors": ["Could not parse [x] as a known command"],
        "obstacle": "rock",
    }
