"""Value encoders: the type-driven half of the fixed-width engine.

:func:`new_value_encoder` maps a declared type to a function turning a value of
that type into raw bytes. Dataclasses are composites; every field carrying a
position tag is encoded on its own and copied into a single line buffer by
:func:`struct_encoder`.

Supported leaf types are ``str``, ``int`` and ``float``. ``Optional[X]``,
``Union[...]``, ``Any`` and ``object`` behave as holders: a ``None`` value is
omitted (zero bytes) and anything else is dispatched on its runtime type.
Any class providing ``marshal_text()`` takes precedence over all of the above.
"""

from __future__ import annotations

import dataclasses
import math
import sys
import types
import typing
from typing import Any, Callable, Dict, List, Protocol, runtime_checkable

from .errors import InvalidTypeError
from .tags import TAG_KEY, FieldSpec, parse_tag

__all__ = [
    "TextMarshaler",
    "ValueEncoder",
    "new_value_encoder",
    "struct_encoder",
    "leftpad_char",
    "encode_specs",
    "FILL_CHAR",
    "FLOAT_PRECISION",
]

ValueEncoder = Callable[[Any], bytes]

FILL_CHAR = b" "
FLOAT_PRECISION = 2

_NONE_TYPE = type(None)


@runtime_checkable
class TextMarshaler(Protocol):
    def marshal_text(self) -> bytes: ...


def _type_name(tp: Any) -> str:
    return getattr(tp, "__name__", None) or repr(tp)


def _is_text_marshaler(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, TextMarshaler)


def _is_holder(tp: Any) -> bool:
    if tp is Any or tp is object or tp is None or tp is _NONE_TYPE:
        return True
    origin = typing.get_origin(tp)
    return origin is typing.Union or origin is types.UnionType


def _optional_arg(tp: Any) -> Any:
    """Return ``X`` for ``Optional[X]``, ``None`` for any other type."""
    if typing.get_origin(tp) in (typing.Union, types.UnionType):
        args = [a for a in typing.get_args(tp) if a is not _NONE_TYPE]
        if len(args) == 1:
            return args[0]
    return None


def _unwrap_optional(tp: Any) -> Any:
    inner = _optional_arg(tp)
    while inner is not None:
        tp = inner
        inner = _optional_arg(tp)
    return tp


def new_value_encoder(tp: Any) -> ValueEncoder:
    if _is_text_marshaler(tp):
        return text_marshaler_encoder
    inner = _optional_arg(tp)
    if inner is not None:
        return optional_encoder(new_value_encoder(inner))
    if _is_holder(tp):
        return holder_encoder
    if isinstance(tp, type):
        if dataclasses.is_dataclass(tp):
            return struct_encoder
        if issubclass(tp, str):
            return string_encoder
        if issubclass(tp, bool):
            return unknown_type_encoder(tp)
        if issubclass(tp, int):
            return int_encoder
        if issubclass(tp, float):
            return float_encoder(FLOAT_PRECISION)
    return unknown_type_encoder(tp)


def text_marshaler_encoder(value: Any) -> bytes:
    out = value.marshal_text()
    if isinstance(out, str):
        return out.encode("utf-8")
    return bytes(out)


def optional_encoder(encode: ValueEncoder) -> ValueEncoder:
    def encode_optional(value: Any) -> bytes:
        if value is None:
            return nil_encoder(value)
        return encode(value)

    return encode_optional


def holder_encoder(value: Any) -> bytes:
    if value is None:
        return nil_encoder(value)
    return new_value_encoder(type(value))(value)


def string_encoder(value: Any) -> bytes:
    if not isinstance(value, str):
        raise InvalidTypeError(_type_name(type(value)))
    return value.encode("utf-8")


def int_encoder(value: Any) -> bytes:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidTypeError(_type_name(type(value)))
    return str(int(value)).encode("ascii")


def float_encoder(precision: int) -> ValueEncoder:
    def encode(value: Any) -> bytes:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidTypeError(_type_name(type(value)))
        f = float(value)
        if math.isnan(f):
            return b"NaN"
        if math.isinf(f):
            return b"+Inf" if f > 0 else b"-Inf"
        return f"{f:.{precision}f}".encode("ascii")

    return encode


def nil_encoder(value: Any) -> bytes:
    return b""


def unknown_type_encoder(tp: Any) -> ValueEncoder:
    type_name = _type_name(tp)

    def encode(value: Any) -> bytes:
        raise InvalidTypeError(type_name)

    return encode


def struct_encoder(value: Any) -> bytes:
    """Encode a dataclass instance into one fixed-width line."""
    hints = _field_types(type(value))
    specs: List[FieldSpec] = []
    for f in dataclasses.fields(value):
        spec = parse_tag(f.metadata.get(TAG_KEY))
        if spec is None:
            continue
        tp = hints[f.name]
        data = new_value_encoder(tp)(getattr(value, f.name))
        width = spec.width
        if len(data) < width and spec.leftpad:
            spec.value = leftpad_char(tp) * (width - len(data)) + data
        else:
            spec.value = data
        specs.append(spec)
    return encode_specs(specs)


def leftpad_char(tp: Any) -> bytes:
    """Fill character used when left-padding a value of type ``tp``."""
    tp = _unwrap_optional(tp)
    if _is_text_marshaler(tp) or _is_holder(tp) or not isinstance(tp, type):
        return FILL_CHAR
    if issubclass(tp, bool):
        return FILL_CHAR
    if issubclass(tp, (int, float)):
        return b"0"
    return FILL_CHAR


def encode_specs(specs: List[FieldSpec]) -> bytes:
    line_len = max((s.end_pos for s in specs), default=0)
    data = bytearray(FILL_CHAR * line_len)
    for spec in specs:
        # overflow past the declared width is dropped
        value = spec.value[: spec.width]
        data[spec.start_pos - 1 : spec.start_pos - 1 + len(value)] = value
    return bytes(data)


def _field_types(cls: type) -> Dict[str, Any]:
    """Resolved annotation of every dataclass field of ``cls``.

    An annotation that cannot be resolved (a string naming a class local to
    some function, say) is treated as ``Any``, so the field is encoded by the
    runtime type of its value.
    """
    try:
        hints = typing.get_type_hints(cls)
    except NameError:
        hints = {}
    module = sys.modules.get(cls.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    out: Dict[str, Any] = {}
    for f in dataclasses.fields(cls):
        tp = hints.get(f.name, f.type)
        if isinstance(tp, str):
            try:
                tp = eval(tp, globalns, dict(vars(cls)))
            except NameError:
                tp = Any
        out[f.name] = tp
    return out
