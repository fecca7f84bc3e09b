from __future__ import annotations

import os
from typing import Any
from .base import EncodeRun, Reporter, RunStatus, format_values, get_verbosity

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

TRANSIENT_ENV = "FIXEDWIDTH_PROGRESS_TRANSIENT"


class RichReporter(Reporter):
    """Progress bar over the records of a run (``-r rich``)."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console(
            stderr=True, highlight=False, soft_wrap=False
        )
        self.transient = os.getenv(TRANSIENT_ENV, "0").lower() in (
            "1",
            "true",
            "yes",
        )
        self.progress: Progress | None = None
        self._bar: Any = None

    def run_started(self, run: EncodeRun) -> None:
        self.progress = Progress(
            SpinnerColumn(spinner_name="dots"),
            TextColumn("Encoding records"),
            BarColumn(bar_width=None),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            transient=self.transient,
            console=self.console,
            expand=True,
        )
        self.progress.start()
        self._bar = self.progress.add_task("encode", total=run.total)

    def line_encoded(self, run: EncodeRun, index: int, size: int) -> None:
        if self.progress is not None:
            self.progress.update(self._bar, completed=run.lines)

    def run_finished(self, run: EncodeRun) -> None:
        self.flush()
        if run.status is RunStatus.DONE:
            self.console.print(
                f"[green]✔[/] encoded {run.lines}/{run.total} records"
                f" ({run.elapsed:.2f}s) {run.bytes_written} bytes"
            )
        else:
            self.console.print(
                f"[red]✖[/] encoding stopped at record"
                f" {run.lines + 1}/{run.total}"
            )

    def summary(self, kind: str, **values: Any) -> None:
        self.console.print(
            f"[green]{escape(kind.capitalize())} summary[/]:"
            f" {escape(format_values(values))}"
        )

    def status(self, message: str) -> None:
        self.console.print(f"[green]INFO[/]: {escape(message)}")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]WARN[/]: {escape(message)}")

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]ERROR[/]: {escape(message)}")

    def verbose(self, message: str) -> None:
        if get_verbosity() >= 1:
            self.console.print(f"[cyan]VERB[/]: {escape(message)}")

    def section(self, title: str) -> None:
        self.console.rule(escape(title))

    def flush(self) -> None:
        if self.progress is not None:
            try:
                self.progress.stop()
            finally:
                self.progress = None
                self._bar = None
