from dataclasses import dataclass
from typing import Any, Optional

import pytest

from fixedwidth import InvalidTypeError, fixed, marshal


class EncodableString:
    def __init__(self, data: str, err: Optional[Exception] = None):
        self.data = data
        self.err = err

    def marshal_text(self) -> bytes:
        if self.err is not None:
            raise self.err
        return self.data.encode()


@dataclass
class H:
    f1: Any = fixed("1,5")
    f2: Any = fixed("6,10")


@dataclass
class TagHelper:
    valid: str = fixed("1,5")
    no_tags: str = ""
    invalid_tags: str = fixed("5", default="")


@dataclass
class Narrow:
    text: str = fixed("1,5")


@dataclass
class Person:
    id: int = fixed("1,5")
    first_name: str = fixed("6,15")
    last_name: str = fixed("16,25")
    grade: float = fixed("26,30")


@dataclass
class Untagged:
    a: str = "x"
    b: int = 1


@dataclass
class Padded:
    n: int = fixed("1,5,leftpad")
    s: str = fixed("6,10,leftpad")


@dataclass
class OptionalMiddle:
    a: str = fixed("1,3")
    b: Optional[int] = fixed("4,8", default=None)
    c: str = fixed("9,10", default="zz")


def test_example_person():
    data = marshal([Person(1, "Ian", "Lopshire", 99.5)])
    assert data == b"1    Ian       Lopshire  99.50"
    assert len(data) == 30


@pytest.mark.parametrize(
    "value, expected",
    [
        (H("foo", 1), b"foo  1    "),
        ([H("foo", 1), H("bar", 2)], b"foo  1    \nbar  2    "),
        ([], b""),
        ((H("foo", 1),), b"foo  1    "),
        (None, b""),
        (TagHelper("foo", "foo", "foo"), b"foo  "),
        (["X", "Y"], b"X\nY"),
        ("plain", b"plain"),
    ],
)
def test_marshal(value, expected):
    assert marshal(value) == expected


@pytest.mark.parametrize("value", [True, H("foo", True), [H("a", 1), False]])
def test_marshal_invalid_type(value):
    with pytest.raises(InvalidTypeError):
        marshal(value)


def test_marshal_delegated_error():
    err = ValueError("marshal error")
    with pytest.raises(ValueError) as exc:
        marshal(EncodableString("", err))
    assert exc.value is err


def test_marshal_without_tags_is_empty():
    assert marshal(Untagged()) == b""


def test_marshal_truncates_long_text():
    assert marshal(H("abcdefghi", "")) == b"abcde     "


def test_marshal_keeps_first_width_characters():
    assert marshal(Narrow("abcdefghi")) == b"abcde"


def test_marshal_leftpad():
    assert marshal(Padded(2, "two")) == b"00002  two"


def test_marshal_omits_absent_optional():
    assert marshal(OptionalMiddle("abc")) == b"abc     zz"
    assert marshal(OptionalMiddle("abc", 0)) == b"abc0    zz"


def test_marshal_is_deterministic():
    people = [Person(i, f"n{i}", "x" * i, i / 3) for i in range(20)]
    assert marshal(people) == marshal(people)


def test_field_bytes_never_exceed_width():
    line = marshal(H("x" * 50, 10**12))
    assert len(line) == 10
    assert line == b"xxxxx10000"


def test_none_elements_encode_as_empty_lines():
    assert marshal([H("a", 1), None, H("b", 2)]) == b"a    1    \n\nb    2    "
