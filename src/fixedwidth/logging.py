"""Logging utilities for fixedwidth.

Stdlib logging wired into the active reporter so CLI output stays in one
stream. Library users who never call :func:`configure_logging` get plain
stdlib behaviour: the ``fixedwidth`` logger has no handlers of its own.
"""

from __future__ import annotations

import logging
from .reporting import get_reporter

_LOGGER_NAME = "fixedwidth"

__all__ = [
    "get_logger",
    "configure_logging",
]


def get_logger() -> logging.Logger:
    return logging.getLogger(_LOGGER_NAME)


class _ReporterHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        rep = get_reporter()
        msg = self.format(record)
        lvl = record.levelno
        if lvl >= logging.ERROR:
            rep.error(msg)
        elif lvl >= logging.WARNING:
            rep.warning(msg)
        elif lvl >= logging.INFO:
            rep.status(msg)
        else:
            rep.verbose(msg)


def configure_logging(verbosity: int = 0) -> None:
    logger = get_logger()
    # -vv turns on per-line encoder detail
    logger.setLevel(logging.DEBUG if verbosity >= 2 else logging.INFO)

    for h in list(logger.handlers):
        logger.removeHandler(h)

    handler = _ReporterHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
