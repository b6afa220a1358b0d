from __future__ import annotations

import math

import pytest

from rover_sim.geometry_utils import Vector
from rover_sim.metrics import BatchAggregator, simulate, simulate_batch, summarize_trace
from rover_sim.rover import Rover
from rover_sim.world import World


def test_summarize_trace_counts() -> None:
    world = World({Vector(1, 1): "rock"})
    rover = Rover.with_scanner(world.scanner())
    final, metrics = simulate(rover, "f,r,f,x,b,b")
    assert final.position == Vector(-2, 1)
    assert metrics.commands == 6
    assert metrics.errors == 1
    assert metrics.obstacle_stops == 1
    assert metrics.path_length == 3
    assert metrics.displacement == 3
    assert metrics.final_orientation == "EAST"
    assert metrics.to_dict()["final_position"] == {"x": -2, "y": 1}


def test_summarize_trace_requires_start() -> None:
    with pytest.raises(ValueError):
        summarize_trace([])


def test_batch_runs_are_independent() -> None:
    world = World({Vector(0, 2): "crater"})
    rover = Rover.with_scanner(world.scanner())
    finals, agg = simulate_batch(rover, ["f,f", "r,f,f", "q"])
    assert [r.position for r in finals] == [Vector(0, 1), Vector(2, 0), Vector(0, 0)]
    assert agg.count == 3
    assert math.isclose(agg.mean_displacement, 1.0)
    assert math.isclose(agg.mean_errors, 1.0 / 3.0)
    assert math.isclose(agg.stop_rate, 1.0 / 3.0)
    assert agg.summary()["count"] == 3.0


def test_empty_aggregator() -> None:
    agg = BatchAggregator()
    assert agg.summary() == {
        "count": 0.0,
        "mean_displacement": 0.0,
        "mean_path_length": 0.0,
        "mean_errors": 0.0,
        "stop_rate": 0.0,
    }
