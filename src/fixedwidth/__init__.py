"""fixedwidth: encode Python values as fixed-column-width text records."""

from .errors import (
    FixedWidthError,
    InvalidTypeError,
    WriteIOError,
    LayoutError,
)
from .tags import FieldSpec, fixed, parse_tag
from .encoders import TextMarshaler, new_value_encoder
from .writer import Encoder, marshal

__version__ = "0.1.0"

__all__ = [
    "marshal",
    "Encoder",
    "fixed",
    "parse_tag",
    "FieldSpec",
    "TextMarshaler",
    "new_value_encoder",
    "FixedWidthError",
    "InvalidTypeError",
    "WriteIOError",
    "LayoutError",
    "__version__",
]
