from __future__ import annotations

import json
import os
import threading
from typing import Any, Dict, List, Optional, Sequence, TextIO

from rover_sim.commands import command_symbol, parse_command, split_commands
from rover_sim.rover import Rover


class TelemetryLogger:
    """Structured JSONL logger for rover telemetry.

    Thread-safe, append-only logging of dict records, one JSON object per line.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        self._lock = threading.Lock()
        self._fp: Optional[TextIO] = open(self.path, "a", encoding="utf-8")

    def log_step(self, record: Dict[str, Any]) -> None:
        """Append a single telemetry record to the JSONL file."""
        if self._fp is None:
            return
        line = json.dumps(record, separators=(",", ":"))
        with self._lock:
            self._fp.write(line + "\n")
            self._fp.flush()

    def log_trace(self, commands: str, trace: Sequence[Rover], run_id: int = 0) -> None:
        """Log one record per executed command of a ``Rover.trace`` result."""
        tokens = split_commands(commands)
        if len(trace) != len(tokens) + 1:
            raise ValueError(
                f"Trace has {len(trace)} snapshots for {len(tokens)} commands"
            )
        for step, (token, rover) in enumerate(zip(tokens, trace[1:])):
            self.log_step(
                {
                    "run": run_id,
                    "step": step,
                    "command": command_symbol(parse_command(token)),
                    "rover": rover.to_dict(),
                }
            )

    def close(self) -> None:
        if self._fp is not None:
            self._fp.close()
            self._fp = None

    def __enter__(self) -> TelemetryLogger:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()


def load_records(path: str) -> List[Dict[str, Any]]:
    """Read a telemetry JSONL file, skipping lines that are not valid JSON."""
    records: List[Dict[str, Any]] = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                records.append(json.loads(line))
            except json.JSONDecodeError:
                continue
    return records
