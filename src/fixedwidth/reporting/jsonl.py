from __future__ import annotations

import json
import sys
from typing import Any
from .base import EncodeRun, Reporter, get_verbosity


class JsonLinesReporter(Reporter):
    """One JSON object per event, for tooling that wraps the CLI."""

    def __init__(self, stream=None):
        self.stream = stream or sys.stderr

    def _emit(self, event: str, **data: Any) -> None:
        self.stream.write(json.dumps({"event": event, **data}, sort_keys=True))
        self.stream.write("\n")

    def run_started(self, run: EncodeRun) -> None:
        self._emit("encode_start", total=run.total)

    def line_encoded(self, run: EncodeRun, index: int, size: int) -> None:
        if get_verbosity() >= 2:
            self._emit("line", index=index, bytes=size)

    def run_finished(self, run: EncodeRun) -> None:
        self._emit(
            "encode_end",
            status=run.status.value,
            lines=run.lines,
            total=run.total,
            bytes=run.bytes_written,
            elapsed_seconds=round(run.elapsed, 6),
        )

    def summary(self, kind: str, **values: Any) -> None:
        self._emit("summary", kind=kind, **values)

    def status(self, message: str) -> None:
        self._emit("message", level="info", message=message)

    def warning(self, message: str) -> None:
        self._emit("message", level="warning", message=message)

    def error(self, message: str) -> None:
        self._emit("message", level="error", message=message)

    def verbose(self, message: str) -> None:
        if get_verbosity() >= 1:
            self._emit("message", level="verbose", message=message)

    def section(self, title: str) -> None:
        self._emit("section", title=title)
