from __future__ import annotations

from .base import Reporter


class SilentReporter(Reporter):
    """Drops every message (``-r silent``)."""

    def status(self, message: str) -> None:
        pass

    def warning(self, message: str) -> None:
        pass

    def error(self, message: str) -> None:
        pass
