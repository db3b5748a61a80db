"""Tests for the Lox recursive descent parser.

Covers precedence and associativity of every level, grouping, literals,
error reporting, the trailing-token contract, and nesting limits.
"""

from __future__ import annotations

import pytest

from loxexpr.core.errors import NestingDepthError, ParseError
from loxexpr.core.expression_lang.parser import (
    DEFAULT_MAX_DEPTH,
    MAX_TREE_HEIGHT,
    TREE_DEPTH_FACTOR,
    parse,
)
from loxexpr.core.expression_lang.scanner import scan
from loxexpr.core.ir.expressions import (
    Binary,
    BinaryOp,
    Grouping,
    Literal,
    Unary,
    UnaryOp,
)
from loxexpr.core.ir.tokens import Token, TokenKind


def _parse(source: str, **kwargs):
    return parse(scan(source).tokens, **kwargs)


class TestParserLiterals:
    """Parser turns primary tokens into literal nodes."""

    def test_number(self) -> None:
        expr = _parse("42")
        assert isinstance(expr, Literal)
        assert expr.value == 42.0

    def test_string(self) -> None:
        expr = _parse('"hello"')
        assert isinstance(expr, Literal)
        assert expr.value == "hello"

    def test_true(self) -> None:
        expr = _parse("true")
        assert isinstance(expr, Literal)
        assert expr.value is True

    def test_false(self) -> None:
        expr = _parse("false")
        assert isinstance(expr, Literal)
        assert expr.value is False

    def test_nil(self) -> None:
        expr = _parse("nil")
        assert isinstance(expr, Literal)
        assert expr.value is None


class TestParserPrecedence:
    """Parser builds trees with the right shape."""

    def test_addition(self) -> None:
        expr = _parse("1 + 2")
        assert expr == Binary(
            op=BinaryOp.ADD, left=Literal(value=1.0), right=Literal(value=2.0)
        )

    def test_mul_before_add(self) -> None:
        # 1 + 2 * 3 should be 1 + (2 * 3)
        expr = _parse("1 + 2 * 3")
        assert isinstance(expr, Binary)
        assert expr.op == BinaryOp.ADD
        assert isinstance(expr.right, Binary)
        assert expr.right.op == BinaryOp.MUL

    def test_comparison_below_term(self) -> None:
        expr = _parse("1 + 2 < 4")
        assert isinstance(expr, Binary)
        assert expr.op == BinaryOp.LESS
        assert isinstance(expr.left, Binary)
        assert expr.left.op == BinaryOp.ADD

    def test_equality_lowest(self) -> None:
        expr = _parse("1 < 2 == 3 > 4")
        assert isinstance(expr, Binary)
        assert expr.op == BinaryOp.EQUAL
        assert expr.left.op == BinaryOp.LESS
        assert expr.right.op == BinaryOp.GREATER

    @pytest.mark.parametrize(
        ("source", "op"),
        [
            ("1 - 2 - 3", BinaryOp.SUB),
            ("8 / 4 / 2", BinaryOp.DIV),
            ("1 == 2 != 3", BinaryOp.NOT_EQUAL),
            ("1 <= 2 >= 3", BinaryOp.GREATER_EQUAL),
        ],
    )
    def test_left_associative(self, source: str, op: BinaryOp) -> None:
        expr = _parse(source)
        assert isinstance(expr, Binary)
        assert expr.op == op
        assert isinstance(expr.left, Binary)
        assert isinstance(expr.right, Literal)

    def test_grouping_overrides_precedence(self) -> None:
        expr = _parse("(1 + 2) * 3")
        assert isinstance(expr, Binary)
        assert expr.op == BinaryOp.MUL
        assert isinstance(expr.left, Grouping)
        assert isinstance(expr.left.expression, Binary)

    def test_unary_stacks_right(self) -> None:
        expr = _parse("!!true")
        assert expr == Unary(
            op=UnaryOp.NOT,
            operand=Unary(op=UnaryOp.NOT, operand=Literal(value=True)),
        )

    def test_unary_binds_tighter_than_factor(self) -> None:
        expr = _parse("-1 * 2")
        assert isinstance(expr, Binary)
        assert isinstance(expr.left, Unary)
        assert expr.left.op == UnaryOp.NEG

    def test_mixed_unary(self) -> None:
        expr = _parse("-!-1")
        assert isinstance(expr, Unary)
        assert expr.op == UnaryOp.NEG
        assert expr.operand.op == UnaryOp.NOT
        assert expr.operand.operand.op == UnaryOp.NEG


class TestParserErrors:
    """The first error aborts the parse."""

    def test_missing_operand(self) -> None:
        with pytest.raises(ParseError, match="expected expression"):
            _parse("1 +")

    def test_unclosed_group(self) -> None:
        with pytest.raises(ParseError, match=r"expected '\)' after expression"):
            _parse("(1 + 2")

    def test_empty_group(self) -> None:
        with pytest.raises(ParseError, match="expected expression"):
            _parse("()")

    def test_empty_input(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _parse("")
        assert exc_info.value.token is not None
        assert exc_info.value.token.is_eof
        assert str(exc_info.value) == "[line 1] Error at end: expected expression"

    def test_identifier_is_not_an_expression(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _parse("foo")
        assert str(exc_info.value) == "[line 1] Error at 'foo': expected expression"

    def test_error_reports_line(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            _parse("1 +\n\n*")
        assert exc_info.value.line == 3

    def test_keyword_is_not_an_expression(self) -> None:
        with pytest.raises(ParseError):
            _parse("var")


class TestParserTrailingTokens:
    """Complete-parse by default; prefix-parse on request."""

    def test_trailing_tokens_rejected(self) -> None:
        with pytest.raises(ParseError, match="expected end of expression"):
            _parse("1 2")

    def test_trailing_tokens_allowed(self) -> None:
        expr = _parse("1 2", allow_trailing=True)
        assert expr == Literal(value=1.0)

    def test_unbalanced_close_paren(self) -> None:
        with pytest.raises(ParseError):
            _parse("(1))")
        assert _parse("(1))", allow_trailing=True) == Grouping(expression=Literal(value=1.0))

    def test_tokens_without_eof(self) -> None:
        tokens = [Token(TokenKind.NUMBER, "7", 7.0, 1, 1)]
        assert parse(tokens) == Literal(value=7.0)


class TestParserNesting:
    """Deep input fails with a dedicated error instead of crashing."""

    def test_nesting_within_limit(self) -> None:
        depth = DEFAULT_MAX_DEPTH
        expr = _parse("(" * depth + "1" + ")" * depth)
        for _ in range(depth):
            assert isinstance(expr, Grouping)
            expr = expr.expression
        assert expr == Literal(value=1.0)

    def test_groups_over_limit(self) -> None:
        depth = DEFAULT_MAX_DEPTH + 1
        with pytest.raises(NestingDepthError, match="too deeply nested"):
            _parse("(" * depth + "1" + ")" * depth)

    def test_unary_chain_over_limit(self) -> None:
        with pytest.raises(NestingDepthError):
            _parse("-" * 10_000 + "1")

    def test_huge_group_nesting(self) -> None:
        with pytest.raises(NestingDepthError):
            _parse("(" * 50_000 + "1" + ")" * 50_000)

    def test_custom_limit(self) -> None:
        with pytest.raises(NestingDepthError) as exc_info:
            _parse("((1))", max_depth=1)
        assert exc_info.value.max_depth == 1
        assert _parse("(1)", max_depth=1) == Grouping(expression=Literal(value=1.0))

    def test_long_flat_chain_is_bounded(self) -> None:
        with pytest.raises(NestingDepthError):
            _parse(" + ".join(["1"] * 5_000))

    def test_moderate_flat_chain(self) -> None:
        expr = _parse(" + ".join(["1"] * 100))
        assert isinstance(expr, Binary)

    def test_flat_chain_at_height_cap(self) -> None:
        expr = _parse(" + ".join(["1"] * MAX_TREE_HEIGHT))
        assert isinstance(expr, Binary)

    def test_flat_chain_past_height_cap(self) -> None:
        with pytest.raises(NestingDepthError) as exc_info:
            _parse(" + ".join(["1"] * (MAX_TREE_HEIGHT + 1)))
        assert exc_info.value.max_depth == MAX_TREE_HEIGHT

    def test_small_limit_scales_tree_height(self) -> None:
        height = 3 * TREE_DEPTH_FACTOR
        _parse(" + ".join(["1"] * height), max_depth=3)
        with pytest.raises(NestingDepthError):
            _parse(" + ".join(["1"] * (height + 1)), max_depth=3)

    @pytest.mark.parametrize("max_depth", [0, DEFAULT_MAX_DEPTH + 1, 1_000])
    def test_limit_out_of_range(self, max_depth: int) -> None:
        with pytest.raises(ValueError, match="max_depth must be between"):
            _parse("1", max_depth=max_depth)
