"""Tests for running source text through scan, parse and evaluate."""

from __future__ import annotations

import pytest

from loxexpr import run_source
from loxexpr.core.config import InterpreterConfig
from loxexpr.core.errors import NestingDepthError, ParseError, RuntimeTypeError
from loxexpr.core.expression_lang.scanner import scan
from loxexpr.core.ir.expressions import Binary
from loxexpr.core.ir.values import NumberValue, StringValue
from loxexpr.core.pipeline import parse_scanned


class TestRunSource:
    def test_number_result(self) -> None:
        result = run_source("1 + 2 * 3")
        assert result.value == NumberValue(value=7.0)
        assert not result.halted
        assert result.diagnostics == []
        assert isinstance(result.expr, Binary)

    def test_string_result(self) -> None:
        result = run_source('"lox" + "expr"')
        assert result.value == StringValue(value="loxexpr")
        assert str(result.value) == "loxexpr"

    def test_scan_errors_halt_by_default(self) -> None:
        result = run_source("1 + @2")
        assert result.halted
        assert result.value is None
        assert result.expr is None
        assert [str(d) for d in result.diagnostics] == [
            "[line 1] Error: Invalid character: '@'"
        ]

    def test_scan_errors_can_be_ignored(self) -> None:
        result = run_source("1 + @2", InterpreterConfig(halt_on_scan_errors=False))
        assert result.value == NumberValue(value=3.0)
        assert len(result.diagnostics) == 1

    def test_parse_error_propagates(self) -> None:
        with pytest.raises(ParseError):
            run_source("(1 +")

    def test_runtime_error_propagates(self) -> None:
        with pytest.raises(RuntimeTypeError):
            run_source('"a" * 2')

    def test_trailing_tokens_setting(self) -> None:
        with pytest.raises(ParseError):
            run_source("1 2")
        result = run_source("1 2", InterpreterConfig(allow_trailing=True))
        assert result.value == NumberValue(value=1.0)

    def test_max_depth_setting(self) -> None:
        with pytest.raises(NestingDepthError):
            run_source("((((1))))", InterpreterConfig(max_depth=3))


class TestParseScanned:
    def test_parses_tokens_around_scan_errors(self) -> None:
        result = scan("1 # + 2")
        assert len(result.diagnostics) == 1
        assert isinstance(parse_scanned(result), Binary)

    def test_uses_configured_limits(self) -> None:
        with pytest.raises(ParseError):
            parse_scanned(scan("1 2"))
        expr = parse_scanned(scan("1 2"), InterpreterConfig(allow_trailing=True))
        assert expr == parse_scanned(scan("1"))
