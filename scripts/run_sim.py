from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

# Ensure project root is on path when running this script directly
_script_dir = Path(__file__).resolve().parent
_project_root = _script_dir.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from rover_sim.config import SimConfig, build_rover, build_world
from rover_sim.metrics import BatchAggregator, summarize_trace
from rover_sim.world import World
from telemetry.logger import TelemetryLogger


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Drive a grid rover with command streams.")
    parser.add_argument(
        "--config",
        type=str,
        default="configs/sim.yaml",
        help="Path to sim YAML config.",
    )
    parser.add_argument(
        "--commands",
        type=str,
        action="append",
        required=True,
        help="Comma-separated command stream, e.g. 'f,f,r,f'. Repeat for a batch.",
    )
    parser.add_argument(
        "--map",
        type=str,
        default=None,
        help="JSON obstacle map; replaces the map configured in --config.",
    )
    parser.add_argument(
        "--telemetry",
        type=str,
        default=None,
        help="JSONL telemetry output; overrides logging.telemetry_path.",
    )
    args = parser.parse_args(argv)

    cfg = SimConfig.from_file(args.config)
    if args.map is not None:
        world = World.from_map_file(args.map)
    else:
        world = build_world(cfg)
    rover = build_rover(cfg, world)

    telemetry_path = args.telemetry or cfg.telemetry_path
    telemetry_logger = TelemetryLogger(telemetry_path) if telemetry_path else None

    print(f"Start: {rover} with {len(world)} known obstacles")

    aggregator = BatchAggregator()
    try:
        for run_id, commands in enumerate(args.commands):
            trace = rover.trace(commands)
            final = trace[-1]
            aggregator.add(summarize_trace(trace))
            if telemetry_logger is not None:
                telemetry_logger.log_trace(commands, trace, run_id=run_id)

            print(f"[{run_id}] {commands!r} -> {final}")
            report = final.report()
            if report:
                for line in report.splitlines():
                    print(f"    {line}")
    finally:
        if telemetry_logger is not None:
            telemetry_logger.close()

    if aggregator.count > 1:
        summary = aggregator.summary()
        print()
        print("=" * 48)
        print(f"  Runs:               {aggregator.count}")
        print(f"  Mean displacement:  {summary['mean_displacement']:.2f}")
        print(f"  Mean path length:   {summary['mean_path_length']:.2f}")
        print(f"  Mean errors:        {summary['mean_errors']:.2f}")
        print(f"  Stop rate:          {summary['stop_rate']:.1%}")
        print("=" * 48)
    return 0


if __name__ == "__main__":
    sys.exit(main())
