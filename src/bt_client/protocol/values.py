"""Typed values carried by response frames."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Union


class Tag(IntEnum):
    """Value tags identifying the variant that follows in a response."""

    NULL = 0x00
    STRING = 0x06
    FLOAT32 = 0x2A


@dataclass(frozen=True)
class StringValue:
    """A text value (tag 0x06)."""

    text: str
    tag = Tag.STRING

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class FloatValue:
    """An IEEE-754 single precision value (tag 0x2A)."""

    value: float
    tag = Tag.FLOAT32

    def __str__(self) -> str:
        # Same rendering as a default C++ ostream: 6 significant digits.
        return f"{self.value:g}"


@dataclass(frozen=True)
class NullValue:
    """The null value (tag 0x00)."""

    tag = Tag.NULL

    def __str__(self) -> str:
        return "NULL"


Value = Union[StringValue, FloatValue, NullValue]


def to_python(value: Value) -> str | float | None:
    """Unwrap a value into the matching plain Python object."""
    if isinstance(value, StringValue):
        return value.text
    if isinstance(value, FloatValue):
        return value.value
    return None
