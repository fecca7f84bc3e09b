from __future__ import annotations

import sys
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator

__all__ = [
    "RunStatus",
    "EncodeRun",
    "Reporter",
    "format_values",
    "encode_run",
    "set_reporter",
    "get_reporter",
    "set_verbosity",
    "get_verbosity",
]


class RunStatus(Enum):
    RUNNING = "running"
    DONE = "done"
    FAILED = "failed"


@dataclass(slots=True)
class EncodeRun:
    """Counters for one pass over a list of records."""

    total: int
    lines: int = 0
    line_bytes: int = 0
    bytes_written: int = 0
    status: RunStatus = RunStatus.RUNNING
    started: float = field(default_factory=time.monotonic)
    finished: float | None = None

    @property
    def elapsed(self) -> float:
        end = self.finished if self.finished is not None else time.monotonic()
        return end - self.started

    def record_line(self, size: int) -> None:
        self.lines += 1
        self.line_bytes += size


def format_values(values: dict[str, Any]) -> str:
    return " ".join(f"{k}={v}" for k, v in values.items())


_VERBOSITY: int = 0  # set by the CLI (-v repeats)


def set_verbosity(level: int) -> None:
    global _VERBOSITY
    _VERBOSITY = max(0, level)


def get_verbosity() -> int:
    return _VERBOSITY


class Reporter:
    """Receives encode-run events and free-form messages.

    Run events default to no-ops; message methods must be provided.
    """

    def run_started(self, run: EncodeRun) -> None:
        pass

    def line_encoded(self, run: EncodeRun, index: int, size: int) -> None:
        pass

    def run_finished(self, run: EncodeRun) -> None:
        pass

    def summary(self, kind: str, **values: Any) -> None:
        self.status(f"{kind.capitalize()} summary: {format_values(values)}")

    def status(self, message: str) -> None:
        raise NotImplementedError

    def warning(self, message: str) -> None:
        raise NotImplementedError

    def error(self, message: str) -> None:
        raise NotImplementedError

    def verbose(self, message: str) -> None:
        pass

    def section(self, title: str) -> None:
        pass

    def flush(self) -> None:
        pass


_ACTIVE_REPORTER: Reporter | None = None


def set_reporter(rep: Reporter | None) -> None:
    global _ACTIVE_REPORTER
    _ACTIVE_REPORTER = rep


def get_reporter() -> Reporter:
    global _ACTIVE_REPORTER
    if _ACTIVE_REPORTER is None:
        from .plain import PlainReporter  # local import to avoid cycle

        _ACTIVE_REPORTER = PlainReporter(stream=sys.stderr)
    return _ACTIVE_REPORTER


@contextmanager
def encode_run(total: int) -> Iterator[EncodeRun]:
    rep = get_reporter()
    run = EncodeRun(total)
    rep.run_started(run)
    try:
        yield run
    except Exception:
        run.status = RunStatus.FAILED
        raise
    else:
        run.status = RunStatus.DONE
    finally:
        run.finished = time.monotonic()
        rep.run_finished(run)
