"""Tests for runtime values: formatting, truthiness, equality and conversion."""

from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from loxexpr.core.ir.values import (
    FALSE,
    NIL,
    TRUE,
    BoolValue,
    NilValue,
    NumberValue,
    StringValue,
    ValueKind,
    format_number,
    format_value,
    from_python,
    is_truthy,
    to_python,
    value_adapter,
    values_equal,
)


class TestFormatNumber:
    @pytest.mark.parametrize(
        ("number", "expected"),
        [
            (3.0, "3"),
            (-7.0, "-7"),
            (0.0, "0"),
            (-0.0, "-0"),
            (2.5, "2.5"),
            (0.1, "0.1"),
            (1e21, "1000000000000000000000"),
            (math.inf, "inf"),
            (-math.inf, "-inf"),
            (math.nan, "NaN"),
        ],
    )
    def test_format(self, number: float, expected: str) -> None:
        assert format_number(number) == expected


class TestFormatValue:
    def test_variants(self) -> None:
        assert format_value(NIL) == "nil"
        assert format_value(TRUE) == "true"
        assert format_value(FALSE) == "false"
        assert format_value(NumberValue(value=45.67)) == "45.67"
        assert format_value(StringValue(value="hi there")) == "hi there"

    def test_str_uses_display_form(self) -> None:
        assert str(NumberValue(value=4.0)) == "4"
        assert str(StringValue(value="")) == ""
        assert str(NilValue()) == "nil"


class TestTruthiness:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (NIL, False),
            (FALSE, False),
            (TRUE, True),
            (NumberValue(value=0.0), True),
            (NumberValue(value=math.nan), True),
            (StringValue(value=""), True),
        ],
    )
    def test_is_truthy(self, value, expected: bool) -> None:
        assert is_truthy(value) is expected


class TestValuesEqual:
    def test_same_variant(self) -> None:
        assert values_equal(NIL, NilValue())
        assert values_equal(NumberValue(value=1.0), NumberValue(value=1.0))
        assert values_equal(StringValue(value="a"), StringValue(value="a"))
        assert not values_equal(StringValue(value="a"), StringValue(value="A"))

    def test_different_variants(self) -> None:
        assert not values_equal(NumberValue(value=0.0), NIL)
        assert not values_equal(StringValue(value="1"), NumberValue(value=1.0))

    def test_nan(self) -> None:
        nan = NumberValue(value=math.nan)
        assert not values_equal(nan, nan)

    def test_signed_zeros_equal(self) -> None:
        assert values_equal(NumberValue(value=0.0), NumberValue(value=-0.0))


class TestConversion:
    def test_from_python(self) -> None:
        assert from_python(None) == NIL
        assert from_python(True) == TRUE
        assert from_python(False) == FALSE
        assert from_python(2) == NumberValue(value=2.0)
        assert from_python("x") == StringValue(value="x")

    def test_from_python_rejects_other_types(self) -> None:
        with pytest.raises(TypeError):
            from_python([1, 2])  # type: ignore[arg-type]

    def test_to_python(self) -> None:
        assert to_python(NIL) is None
        assert to_python(TRUE) is True
        assert to_python(NumberValue(value=1.5)) == 1.5
        assert to_python(StringValue(value="s")) == "s"


class TestValueModels:
    def test_discriminated_validation(self) -> None:
        assert value_adapter.validate_python({"kind": "number", "value": 3}) == NumberValue(
            value=3.0
        )
        assert isinstance(value_adapter.validate_python({"kind": "nil"}), NilValue)
        assert value_adapter.validate_python({"kind": "bool", "value": True}) == TRUE

    def test_unknown_kind_rejected(self) -> None:
        with pytest.raises(ValidationError):
            value_adapter.validate_python({"kind": "list", "value": []})

    def test_values_are_frozen(self) -> None:
        value = NumberValue(value=1.0)
        with pytest.raises(ValidationError):
            value.value = 2.0  # type: ignore[misc]

    def test_kind_tags(self) -> None:
        assert NIL.kind == ValueKind.NIL
        assert StringValue(value="").kind == "string"
