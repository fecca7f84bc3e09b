"""Run reporting for ``encode_file`` and the CLI.

The core :class:`~fixedwidth.writer.Encoder` never reports. The file-level API
wraps each encode in :func:`encode_run`, and the active :class:`Reporter`
receives the run's start, every encoded line and the end.
"""

from .base import (
    EncodeRun,
    Reporter,
    RunStatus,
    encode_run,
    get_reporter,
    get_verbosity,
    set_reporter,
    set_verbosity,
)
from .plain import PlainReporter
from .jsonl import JsonLinesReporter
from .silent import SilentReporter
from .rich_reporter import RichReporter

__all__ = [
    "EncodeRun",
    "Reporter",
    "RunStatus",
    "encode_run",
    "get_reporter",
    "set_reporter",
    "get_verbosity",
    "set_verbosity",
    "PlainReporter",
    "JsonLinesReporter",
    "SilentReporter",
    "RichReporter",
]
