"""
Runtime values produced by the evaluator.

A value is one of four variants discriminated by ``kind``: nil, boolean,
number (IEEE-754 double) or string. Values are immutable and every
evaluation produces fresh ones.
"""

from __future__ import annotations

import math
from enum import StrEnum
from typing import Annotated
from typing import Literal as TypingLiteral

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class ValueKind(StrEnum):
    """Discriminator for the value variants."""

    NIL = "nil"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"


class NilValue(BaseModel):
    """The absence of a value."""

    kind: TypingLiteral[ValueKind.NIL] = ValueKind.NIL

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return format_value(self)


class BoolValue(BaseModel):
    kind: TypingLiteral[ValueKind.BOOL] = ValueKind.BOOL
    value: bool

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return format_value(self)


class NumberValue(BaseModel):
    kind: TypingLiteral[ValueKind.NUMBER] = ValueKind.NUMBER
    value: float

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return format_value(self)


class StringValue(BaseModel):
    kind: TypingLiteral[ValueKind.STRING] = ValueKind.STRING
    value: str

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return format_value(self)


Value = Annotated[
    NilValue | BoolValue | NumberValue | StringValue,
    Field(discriminator="kind"),
]

value_adapter: TypeAdapter[Value] = TypeAdapter(Value)

NIL = NilValue()
TRUE = BoolValue(value=True)
FALSE = BoolValue(value=False)


def is_truthy(value: Value) -> bool:
    """Only nil and false are falsey; every number and string is truthy."""
    if isinstance(value, NilValue):
        return False
    if isinstance(value, BoolValue):
        return value.value
    return True


def values_equal(left: Value, right: Value) -> bool:
    """
    Same-variant equality.

    Numbers compare with IEEE-754 semantics (NaN is unequal to itself),
    strings by exact text. Values of different variants are never equal.
    """
    if left.kind != right.kind:
        return False
    if isinstance(left, NilValue):
        return True
    return left.value == right.value  # type: ignore[union-attr]


def from_python(obj: float | str | bool | None) -> Value:
    """Wrap a plain Python literal as a value."""
    if obj is None:
        return NIL
    if isinstance(obj, bool):
        return TRUE if obj else FALSE
    if isinstance(obj, str):
        return StringValue(value=obj)
    if isinstance(obj, int | float):
        return NumberValue(value=float(obj))
    raise TypeError(f"Cannot convert {type(obj).__name__} to a Lox value")


def to_python(value: Value) -> float | str | bool | None:
    """Unwrap a value into the matching plain Python object."""
    if isinstance(value, NilValue):
        return None
    return value.value


def format_number(number: float) -> str:
    """
    Render a number the way Lox prints it.

    Integral values drop the fractional part ("3", "-0"); everything else
    uses the shortest round-trip form.
    """
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "inf" if number > 0 else "-inf"
    if number.is_integer():
        text = str(int(number))
        if number == 0 and math.copysign(1.0, number) < 0:
            return "-0"
        return text
    return repr(number)


def format_value(value: Value) -> str:
    """Render a value for display: nil, true/false, numbers, raw strings."""
    if isinstance(value, NilValue):
        return "nil"
    if isinstance(value, BoolValue):
        return "true" if value.value else "false"
    if isinstance(value, NumberValue):
        return format_number(value.value)
    return value.value
