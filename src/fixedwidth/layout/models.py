"""Dataclass models for layout documents.

A layout document is an explicit schema for one record type: an ordered list
of fields, each with a value type and a position tag. :meth:`LayoutSpec.build_record_type`
turns it into a tagged dataclass the encoder handles like any hand-written one.
"""

from __future__ import annotations
import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..tags import TAG_KEY, parse_tag

FIELD_TYPES: Dict[str, Any] = {
    "str": str,
    "int": int,
    "float": float,
    "any": Any,
}

DEFAULT_RECORD_NAME = "Record"


@dataclass(slots=True)
class FieldDef:
    name: str
    type: str = "str"
    pos: Optional[str] = None
    optional: bool = False

    @property
    def annotation(self) -> Any:
        tp = FIELD_TYPES[self.type]
        if self.optional and tp is not Any:
            return Optional[tp]
        return tp

    @property
    def required(self) -> bool:
        return not self.optional and self.type != "any"


@dataclass(slots=True)
class ColumnInfo:
    name: str
    type: str
    pos: Optional[str]
    start: int | None = None
    end: int | None = None
    width: int | None = None
    leftpad: bool = False

    @property
    def skipped(self) -> bool:
        return self.start is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "pos": self.pos,
            "start": self.start,
            "end": self.end,
            "width": self.width,
            "leftpad": self.leftpad,
            "skipped": self.skipped,
        }


@dataclass(slots=True)
class LayoutSpec:
    record: str = DEFAULT_RECORD_NAME
    fields: List[FieldDef] = field(default_factory=list)

    @property
    def line_length(self) -> int:
        return max(
            (c.end for c in self.columns() if c.end is not None), default=0
        )

    def columns(self) -> List[ColumnInfo]:
        out: List[ColumnInfo] = []
        for f in self.fields:
            info = ColumnInfo(f.name, f.type, f.pos)
            spec = parse_tag(f.pos)
            if spec is not None:
                info.start = spec.start_pos
                info.end = spec.end_pos
                info.width = spec.width
                info.leftpad = spec.leftpad
            out.append(info)
        return out

    def build_record_type(self) -> type:
        members = []
        for f in self.fields:
            metadata = {TAG_KEY: f.pos} if f.pos else {}
            members.append(
                (
                    f.name,
                    f.annotation,
                    dataclasses.field(default=None, metadata=metadata),
                )
            )
        return dataclasses.make_dataclass(self.record, members)
