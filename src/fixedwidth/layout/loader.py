"""Layout and records loading (JSON/YAML)."""

from __future__ import annotations
from pathlib import Path
from typing import Any, List
import json
import keyword

import yaml

from ..errors import E_LAYOUT, E_RECORD, layout_error
from .models import FIELD_TYPES, DEFAULT_RECORD_NAME, FieldDef, LayoutSpec

__all__ = [
    "read_document",
    "load_layout",
    "parse_layout",
    "load_records",
    "build_records",
]


def read_document(path: str | Path) -> Any:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(p)
    text = p.read_text(encoding="utf-8")
    if p.suffix.lower() in {".yaml", ".yml"}:
        return yaml.safe_load(text)
    return json.loads(text)


def load_layout(path: str | Path) -> LayoutSpec:
    return parse_layout(read_document(path))


def parse_layout(data: Any) -> LayoutSpec:
    if not isinstance(data, dict):
        raise layout_error(E_LAYOUT, "Root of layout must be an object")
    record = data.get("record", DEFAULT_RECORD_NAME)
    if not isinstance(record, str) or not record.isidentifier():
        raise layout_error(
            E_LAYOUT, f"Invalid record name: {record!r}", {"record": record}
        )
    raw_fields = data.get("fields")
    if not isinstance(raw_fields, list):
        raise layout_error(E_LAYOUT, "Layout 'fields' must be a list")
    fields: List[FieldDef] = []
    seen: set[str] = set()
    for i, raw in enumerate(raw_fields):
        fields.append(_parse_field(i, raw, seen))
    return LayoutSpec(record=record, fields=fields)


def _parse_field(index: int, raw: Any, seen: set[str]) -> FieldDef:
    ctx = {"index": index}
    if not isinstance(raw, dict):
        raise layout_error(E_LAYOUT, f"Field #{index} must be an object", ctx)
    name = raw.get("name")
    if (
        not isinstance(name, str)
        or not name.isidentifier()
        or keyword.iskeyword(name)
    ):
        raise layout_error(E_LAYOUT, f"Invalid field name: {name!r}", ctx)
    if name in seen:
        raise layout_error(E_LAYOUT, f"Duplicate field name: {name}", ctx)
    seen.add(name)
    ftype = raw.get("type", "str")
    if ftype not in FIELD_TYPES:
        raise layout_error(
            E_LAYOUT,
            f"Unknown type {ftype!r} for field {name}"
            f" (expected one of {', '.join(FIELD_TYPES)})",
            ctx,
        )
    # pos is kept verbatim; a malformed tag only drops the field at encode time
    pos = raw.get("pos")
    return FieldDef(
        name=name,
        type=ftype,
        pos=None if pos is None else str(pos),
        optional=bool(raw.get("optional", False)),
    )


def load_records(path: str | Path, layout: LayoutSpec) -> List[Any]:
    return build_records(read_document(path), layout)


def build_records(data: Any, layout: LayoutSpec) -> List[Any]:
    """Instantiate the layout's record type for each mapping in ``data``."""
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise layout_error(
            E_RECORD, "Records must be an object or a list of objects"
        )
    record_type = layout.build_record_type()
    known = {f.name for f in layout.fields}
    required = [f.name for f in layout.fields if f.required]
    out: List[Any] = []
    for i, row in enumerate(data):
        ctx = {"record": i}
        if not isinstance(row, dict):
            raise layout_error(E_RECORD, f"Record #{i} must be an object", ctx)
        unknown = sorted(set(row) - known)
        if unknown:
            raise layout_error(
                E_RECORD,
                f"Record #{i} has unknown fields: {', '.join(map(str, unknown))}",
                ctx,
            )
        missing = [n for n in required if row.get(n) is None]
        if missing:
            raise layout_error(
                E_RECORD,
                f"Record #{i} is missing required fields: {', '.join(missing)}",
                ctx,
            )
        out.append(record_type(**row))
    return out
