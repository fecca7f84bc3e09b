from __future__ import annotations

import sys
from .base import EncodeRun, Reporter, RunStatus, get_verbosity


class PlainReporter(Reporter):
    """Line-oriented text on stderr, optionally colored."""

    def __init__(self, stream=None, use_color: bool | None = None):
        self.stream = stream or sys.stderr
        if use_color is None:
            use_color = getattr(self.stream, "isatty", lambda: False)()
        self.use_color = use_color

    def _write(self, color: str, label: str, message: str) -> None:
        if self.use_color:
            label = f"\x1b[{color}m{label}\x1b[0m"
        self.stream.write(f"{label}: {message}\n")

    def line_encoded(self, run: EncodeRun, index: int, size: int) -> None:
        if get_verbosity() >= 2:
            self.stream.write(
                f"   · line {index + 1}/{run.total}: {size} bytes\n"
            )

    def run_finished(self, run: EncodeRun) -> None:
        if run.status is RunStatus.DONE:
            self.stream.write(
                f" ✔ encoded {run.lines}/{run.total} records"
                f" ({run.elapsed:.2f}s) [{run.bytes_written} bytes]\n"
            )
        else:
            self.stream.write(
                f" ✖ encoding stopped at record {run.lines + 1}/{run.total}"
                f" ({run.elapsed:.2f}s)\n"
            )

    def status(self, message: str) -> None:
        self._write("32", "INFO", message)

    def warning(self, message: str) -> None:
        self._write("33", "WARN", message)

    def error(self, message: str) -> None:
        self._write("31", "ERROR", message)

    def verbose(self, message: str) -> None:
        if get_verbosity() >= 1:
            self._write("36", "VERB", message)

    def section(self, title: str) -> None:
        self.stream.write(f"\n[{title}]\n")
