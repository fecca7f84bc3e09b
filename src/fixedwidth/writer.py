"""Record writer: encodes one or many values as fixed-width lines.

Typical usage::

    @dataclass
    class Person:
        id: int = fixed("1,5")
        first_name: str = fixed("6,15")

    data = marshal([Person(1, "Ian"), Person(2, "Ada")])

A sequence is written one line per element, joined by ``Encoder.line_end``
with no terminator after the last line. Any other value becomes a single line.
``None`` encodes to nothing.
"""

from __future__ import annotations

import io
from typing import Any, BinaryIO, Callable, Optional

from .encoders import new_value_encoder
from .errors import write_error
from .logging import get_logger

__all__ = ["Encoder", "marshal", "DEFAULT_LINE_END", "DEFAULT_BUFFER_SIZE"]

DEFAULT_LINE_END = b"\n"
DEFAULT_BUFFER_SIZE = 4096


def marshal(value: Any) -> bytes:
    """Return the fixed-width encoding of ``value``.

    ``value`` must be an encodable type or a list/tuple of encodable values.
    Dataclass fields are placed at the columns named by their position tags;
    fields without a (valid) tag are ignored and values longer than their
    columns are truncated. See :mod:`fixedwidth.encoders` for supported types.
    """
    buf = io.BytesIO()
    Encoder(buf).encode(value)
    return buf.getvalue()


def _is_lines(value: Any) -> bool:
    return isinstance(value, (list, tuple))


class Encoder:
    """Writes fixed-width formatted data to a binary stream.

    Output is buffered internally and flushed to ``sink`` at the end of each
    :meth:`encode` call. On error, anything already flushed stays in the sink;
    callers should discard it.

    ``on_line``, when given, is called with the line index and encoded length
    after each line is produced.
    """

    def __init__(
        self,
        sink: BinaryIO,
        line_end: bytes = DEFAULT_LINE_END,
        *,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        on_line: Optional[Callable[[int, int], None]] = None,
    ):
        self.sink = sink
        self.line_end = line_end
        self.buffer_size = max(1, buffer_size)
        self.on_line = on_line
        self._buf = bytearray()

    def encode(self, value: Any) -> None:
        if value is None:
            return
        if _is_lines(value):
            self._write_lines(value)
        else:
            self._write_line(value)
        self.flush()

    def flush(self) -> None:
        """Write any buffered bytes to the sink and flush the sink itself."""
        self._drain()
        sink_flush = getattr(self.sink, "flush", None)
        if sink_flush is None:
            return
        try:
            sink_flush()
        except OSError as e:
            raise write_error(f"fixedwidth: flush failed: {e}") from e

    def _drain(self) -> None:
        if not self._buf:
            return
        data = bytes(self._buf)
        self._buf.clear()
        self._write_sink(data)

    def _write_lines(self, values: Any) -> None:
        line_end = self.line_end or DEFAULT_LINE_END
        last = len(values) - 1
        for i, value in enumerate(values):
            self._write_line(value, index=i)
            if i != last:
                self._write(line_end)

    def _write_line(self, value: Any, *, index: int = 0) -> None:
        data = new_value_encoder(type(value))(value)
        get_logger().debug("line %d: %d bytes", index, len(data))
        self._write(data)
        if self.on_line is not None:
            self.on_line(index, len(data))

    def _write(self, data: bytes) -> None:
        self._buf += data
        if len(self._buf) >= self.buffer_size:
            self._drain()

    def _write_sink(self, data: bytes) -> None:
        try:
            self.sink.write(data)
        except OSError as e:
            raise write_error(
                f"fixedwidth: write failed: {e}",
                {"bytes": len(data)},
            ) from e
