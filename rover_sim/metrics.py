"""
Run metrics for rover command streams.

Summarizes a single command stream from its trace of rover snapshots and
aggregates statistics over batches of independent streams.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple
import numpy as np

from .geometry_utils import Vector, manhattan_distance
from .rover import Rover


# ---------------------------------------------------------------------------
# Run-level metrics
# ---------------------------------------------------------------------------


@dataclass
class RunMetrics:
    """Metrics for a single command stream."""

    commands: int
    errors: int
    obstacle_stops: int
    path_length: int
    displacement: int
    final_position: Vector
    final_orientation: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "commands": self.commands,
            "errors": self.errors,
            "obstacle_stops": self.obstacle_stops,
            "path_length": self.path_length,
            "displacement": self.displacement,
            "final_position": {"x": self.final_position.x, "y": self.final_position.y},
            "final_orientation": self.final_orientation,
        }


def summarize_trace(trace: Sequence[Rover]) -> RunMetrics:
    """Compute metrics from a trace as returned by ``Rover.trace``."""
    if not trace:
        raise ValueError("trace must contain at least the starting rover")
    start, final = trace[0], trace[-1]
    path_length = sum(
        manhattan_distance(prev.position, cur.position) for prev, cur in zip(trace, trace[1:])
    )
    return RunMetrics(
        commands=len(trace) - 1,
        errors=len(final.errors) - len(start.errors),
        obstacle_stops=sum(1 for r in trace[1:] if r.obstacle is not None),
        path_length=path_length,
        displacement=manhattan_distance(start.position, final.position),
        final_position=final.position,
        final_orientation=final.orientation.name,
    )


def simulate(rover: Rover, commands: str) -> Tuple[Rover, RunMetrics]:
    """Run a command stream and return the final rover with its metrics."""
    trace = rover.trace(commands)
    return trace[-1], summarize_trace(trace)


# ---------------------------------------------------------------------------
# Batch aggregation
# ---------------------------------------------------------------------------


class BatchAggregator:
    """Collect metrics from many runs and report means and totals."""

    def __init__(self) -> None:
        self._runs: List[RunMetrics] = []

    def add(self, metrics: RunMetrics) -> None:
        self._runs.append(metrics)

    def _mean(self, attr: str) -> float:
        if not self._runs:
            return 0.0
        return float(np.mean([getattr(m, attr) for m in self._runs]))

    @property
    def count(self) -> int:
        return len(self._runs)

    @property
    def mean_displacement(self) -> float:
        return self._mean("displacement")

    @property
    def mean_path_length(self) -> float:
        return self._mean("path_length")

    @property
    def mean_errors(self) -> float:
        return self._mean("errors")

    @property
    def stop_rate(self) -> float:
        """Fraction of runs that hit at least one obstacle."""
        if not self._runs:
            return 0.0
        return float(np.mean([m.obstacle_stops > 0 for m in self._runs]))

    def summary(self) -> Dict[str, float]:
        return {
            "count": float(self.count),
            "mean_displacement": self.mean_displacement,
            "mean_path_length": self.mean_path_length,
            "mean_errors": self.mean_errors,
            "stop_rate": self.stop_rate,
        }


def simulate_batch(
    rover: Rover,
    streams: Sequence[str],
) -> Tuple[List[Rover], BatchAggregator]:
    """Run independent command streams, each from the same starting rover."""
    aggregator = BatchAggregator()
    finals: List[Rover] = []
    for commands in streams:
        final, metrics = simulate(rover, commands)
        finals.append(final)
        aggregator.add(metrics)
    return finals, aggregator
