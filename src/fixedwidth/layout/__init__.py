from .models import FieldDef, LayoutSpec, ColumnInfo, FIELD_TYPES
from .loader import load_layout, load_records, parse_layout, build_records

__all__ = [
    "FieldDef",
    "LayoutSpec",
    "ColumnInfo",
    "FIELD_TYPES",
    "load_layout",
    "load_records",
    "parse_layout",
    "build_records",
]
