"""Error definitions for fixedwidth."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

E_INVALID_TYPE = "E_INVALID_TYPE"
E_WRITE_IO = "E_WRITE_IO"
E_LAYOUT = "E_LAYOUT"
E_RECORD = "E_RECORD"


@dataclass(eq=False)
class FixedWidthError(Exception):
    code: str
    message: str
    context: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return self.message + (
            f" | ctx={self.context}" if self.context else ""
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context or {},
        }


class InvalidTypeError(FixedWidthError):
    """A value whose type has no fixed-width encoding."""

    def __init__(self, type_name: str):
        super().__init__(
            code=E_INVALID_TYPE,
            message=f"fixedwidth: cannot marshal unknown Type {type_name}",
            context={"type_name": type_name},
        )
        self.type_name = type_name


class WriteIOError(FixedWidthError):
    pass


class LayoutError(FixedWidthError):
    pass


def write_error(
    message: str, context: Optional[Dict[str, Any]] = None
) -> WriteIOError:
    return WriteIOError(code=E_WRITE_IO, message=message, context=context)


def layout_error(
    code: str, message: str, context: Optional[Dict[str, Any]] = None
) -> LayoutError:
    return LayoutError(code=code, message=message, context=context)


__all__ = [
    "FixedWidthError",
    "InvalidTypeError",
    "WriteIOError",
    "LayoutError",
    "write_error",
    "layout_error",
    "E_INVALID_TYPE",
    "E_WRITE_IO",
    "E_LAYOUT",
    "E_RECORD",
]
