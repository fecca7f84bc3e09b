"""Position tags: the per-field ``"start,end[,leftpad]"`` declarations.

A tag fixes the byte range a field occupies within a line. Positions start at
1 and the interval is inclusive, so ``"6,15"`` covers ten columns.
"""

from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass
from typing import Any, Optional

__all__ = ["TAG_KEY", "LEFTPAD", "FieldSpec", "parse_tag", "fixed"]

TAG_KEY = "fixed"
LEFTPAD = "leftpad"

_POSITION = re.compile(r"[+-]?[0-9]+")


@dataclass(slots=True)
class FieldSpec:
    start_pos: int
    end_pos: int
    leftpad: bool = False
    value: bytes = b""

    @property
    def width(self) -> int:
        return self.end_pos - self.start_pos + 1


def parse_tag(tag: Optional[str]) -> Optional[FieldSpec]:
    """Parse a position tag, returning ``None`` when the field should be skipped.

    Absent and malformed tags (wrong token count, non-numeric bounds, a start
    before column 1 or an end before the start) are not errors: the field is
    simply left out of the line.
    """
    if not tag:
        return None
    parts = tag.split(",")
    if len(parts) not in (2, 3):
        return None
    # bounds are bare decimal integers; no surrounding whitespace
    if not all(_POSITION.fullmatch(p) for p in parts[:2]):
        return None
    start_pos = int(parts[0])
    end_pos = int(parts[1])
    if start_pos < 1 or end_pos < start_pos:
        return None
    leftpad = len(parts) == 3 and parts[2] == LEFTPAD
    return FieldSpec(start_pos, end_pos, leftpad)


def fixed(tag: str, **kwargs: Any) -> Any:
    """Declare a dataclass field with a position tag.

    Keyword arguments are forwarded to :func:`dataclasses.field`::

        @dataclass
        class Person:
            id: int = fixed("1,5")
            name: str = fixed("6,15", default="")
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[TAG_KEY] = tag
    return dataclasses.field(metadata=metadata, **kwargs)
