"""High-level API: encode a records document using a layout document."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO, Dict, List

from .layout import LayoutSpec, load_layout, load_records
from .logging import get_logger
from .reporting import encode_run, get_reporter
from .writer import DEFAULT_LINE_END, Encoder, marshal

__all__ = [
    "EncodeOptions",
    "EncodeResult",
    "LINE_ENDINGS",
    "encode_file",
    "encode_records",
    "describe_layout",
    "load_layout",
    "load_records",
    "marshal",
]

LINE_ENDINGS: Dict[str, bytes] = {
    "lf": b"\n",
    "crlf": b"\r\n",
    "cr": b"\r",
}


@dataclass(slots=True)
class EncodeOptions:
    layout_path: Path
    records_path: Path
    # None writes to stdout
    output_path: Path | None = None
    line_end: bytes = DEFAULT_LINE_END


@dataclass(slots=True)
class EncodeResult:
    output_file: Path | None
    lines: int
    bytes_written: int


class _CountingSink:
    def __init__(self, sink: BinaryIO):
        self.sink = sink
        self.count = 0

    def write(self, data: bytes) -> int:
        self.sink.write(data)
        self.count += len(data)
        return len(data)

    def flush(self) -> None:
        self.sink.flush()


def describe_layout(layout: LayoutSpec) -> Dict[str, Any]:
    columns = layout.columns()
    return {
        "record": layout.record,
        "line_length": layout.line_length,
        "fields": [c.to_dict() for c in columns],
        "skipped": [c.name for c in columns if c.skipped],
    }


def warn_skipped_fields(layout: LayoutSpec) -> List[str]:
    logger = get_logger()
    skipped = []
    for c in layout.columns():
        if c.skipped:
            skipped.append(c.name)
            logger.warning(
                "field %s has no usable position (pos=%r); it will be omitted",
                c.name,
                c.pos,
            )
    return skipped


def encode_records(
    records: List[Any], sink: BinaryIO, line_end: bytes = DEFAULT_LINE_END
) -> int:
    """Encode ``records`` as lines into ``sink``; returns bytes written."""
    rep = get_reporter()
    counting = _CountingSink(sink)

    with encode_run(len(records)) as run:
        def _on_line(index: int, size: int) -> None:
            run.record_line(size)
            rep.line_encoded(run, index, size)

        try:
            Encoder(counting, line_end, on_line=_on_line).encode(records)
        finally:
            run.bytes_written = counting.count
    return counting.count


def encode_file(options: EncodeOptions) -> EncodeResult:
    rep = get_reporter()
    layout = load_layout(options.layout_path)
    skipped = warn_skipped_fields(layout)
    rep.summary(
        "layout",
        record=layout.record,
        fields=len(layout.fields),
        skipped=len(skipped),
        line_length=layout.line_length,
    )
    records = load_records(options.records_path, layout)
    rep.summary("records", records=len(records))

    if options.output_path is None:
        written = encode_records(records, sys.stdout.buffer, options.line_end)
    else:
        written = _encode_to_path(records, options.output_path, options.line_end)
    extra = {"output": str(options.output_path)} if options.output_path else {}
    rep.summary("encode", lines=len(records), bytes=written, **extra)
    return EncodeResult(
        output_file=options.output_path,
        lines=len(records),
        bytes_written=written,
    )


def _encode_to_path(records: List[Any], path: Path, line_end: bytes) -> int:
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with path.open("wb") as f:
            return encode_records(records, f, line_end)
    except Exception:
        # partial output is never left behind
        path.unlink(missing_ok=True)
        raise
