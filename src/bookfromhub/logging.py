from __future__ import annotations

import json
import logging
import threading
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from rich.logging import RichHandler


@dataclass(slots=True)
class StageTimings:
    list_ms: float = 0.0
    fetch_ms: float = 0.0
    assemble_ms: float = 0.0
    convert_ms: float = 0.0

    @property
    def total_ms(self) -> float:
        return self.list_ms + self.fetch_ms + self.assemble_ms + self.convert_ms


@dataclass(slots=True)
class RunLogEntry:
    run_id: str
    repository: str
    status: str
    error_code: str | None
    sources: list[str] = field(default_factory=list)
    timings: StageTimings = field(default_factory=StageTimings)
    size_bytes: int = 0

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["timings"] = asdict(self.timings)
        return payload


class RunLogger:
    """Append-only JSONL log of generation runs; a no-op without a path."""

    def __init__(self, log_file: Path | None) -> None:
        self._log_file = log_file
        self._lock = threading.Lock()

    def append(self, entry: RunLogEntry) -> None:
        if self._log_file is None:
            return
        line = json.dumps(entry.to_dict(), ensure_ascii=False)
        with self._lock:
            self._log_file.parent.mkdir(parents=True, exist_ok=True)
            with self._log_file.open("a", encoding="utf-8") as handle:
                handle.write(line + "\n")


def configure_logging(level: str | int = "INFO") -> None:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


__all__ = [
    "StageTimings",
    "RunLogEntry",
    "RunLogger",
    "configure_logging",
]
