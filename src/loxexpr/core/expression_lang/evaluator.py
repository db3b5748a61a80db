"""
Expression evaluator for Lox.

Walks an expression AST and produces a runtime value. Pure evaluation: no
I/O, no environment, and no state kept between calls. The first type error
aborts the whole evaluation.
"""

from __future__ import annotations

import logging
import math

from loxexpr.core.errors import NestingDepthError, RuntimeTypeError
from loxexpr.core.expression_lang.parser import MAX_TREE_HEIGHT
from loxexpr.core.ir.expressions import (
    Binary,
    BinaryOp,
    Expr,
    Grouping,
    Literal,
    Unary,
    UnaryOp,
)
from loxexpr.core.ir.values import (
    BoolValue,
    NumberValue,
    StringValue,
    Value,
    from_python,
    is_truthy,
    values_equal,
)

logger = logging.getLogger(__name__)

# Operators that only accept two numbers, with the error raised otherwise
_NUMERIC_ONLY: dict[BinaryOp, str] = {
    BinaryOp.GREATER: "can > only numbers",
    BinaryOp.GREATER_EQUAL: "can >= only numbers",
    BinaryOp.LESS: "can < only numbers",
    BinaryOp.LESS_EQUAL: "can <= only numbers",
    BinaryOp.SUB: "can only subtract numbers",
    BinaryOp.DIV: "can only divide numbers",
    BinaryOp.MUL: "can only multiply numbers",
}


def evaluate(expr: Expr, *, max_depth: int = MAX_TREE_HEIGHT) -> Value:
    """Evaluate an expression tree to a value.

    Args:
        expr: Parsed expression AST.
        max_depth: Limit on tree depth. Parsed trees never exceed the
            default; hand-built ones are checked against it.

    Returns:
        The computed value.

    Raises:
        RuntimeTypeError: If an operator meets operand types it does not support.
        NestingDepthError: If the tree is deeper than ``max_depth``.
    """
    return _interpret(expr, 0, max_depth)


def _interpret(expr: Expr, depth: int, max_depth: int) -> Value:
    """Dispatch evaluation to the appropriate handler."""
    if depth >= max_depth:
        raise NestingDepthError(max_depth)

    if isinstance(expr, Literal):
        return from_python(expr.value)

    if isinstance(expr, Grouping):
        return _interpret(expr.expression, depth + 1, max_depth)

    if isinstance(expr, Unary):
        return _interpret_unary(expr, depth, max_depth)

    if isinstance(expr, Binary):
        return _interpret_binary(expr, depth, max_depth)

    raise TypeError(f"Unknown expression type: {type(expr).__name__}")


def _interpret_unary(expr: Unary, depth: int, max_depth: int) -> Value:
    """Evaluate a prefix operation."""
    operand = _interpret(expr.operand, depth + 1, max_depth)

    if expr.op == UnaryOp.NOT:
        return BoolValue(value=not is_truthy(operand))

    if expr.op == UnaryOp.NEG:
        if isinstance(operand, NumberValue):
            return NumberValue(value=-operand.value)
        raise RuntimeTypeError(f"can't '- {operand.kind}'", expr.op.value, (operand.kind,))

    raise TypeError(f"Unknown unary op: {expr.op}")


def _interpret_binary(expr: Binary, depth: int, max_depth: int) -> Value:
    """Evaluate a binary operation; both sides always run, left first."""
    left = _interpret(expr.left, depth + 1, max_depth)
    right = _interpret(expr.right, depth + 1, max_depth)
    op = expr.op

    if op == BinaryOp.EQUAL:
        return BoolValue(value=_equals(left, right))
    if op == BinaryOp.NOT_EQUAL:
        return BoolValue(value=not _equals(left, right))

    if op == BinaryOp.ADD:
        if isinstance(left, NumberValue) and isinstance(right, NumberValue):
            return NumberValue(value=left.value + right.value)
        if isinstance(left, StringValue) and isinstance(right, StringValue):
            return StringValue(value=left.value + right.value)
        raise _type_error("can only add numbers or strings (for concatenation)", op, left, right)

    if op in _NUMERIC_ONLY:
        if not (isinstance(left, NumberValue) and isinstance(right, NumberValue)):
            raise _type_error(_NUMERIC_ONLY[op], op, left, right)
        return _arithmetic(op, left.value, right.value)

    raise TypeError(f"Unknown binary op: {op}")


def _arithmetic(op: BinaryOp, a: float, b: float) -> Value:
    """Numeric operators under IEEE-754 rules; division by zero is not an error."""
    if op == BinaryOp.GREATER:
        return BoolValue(value=a > b)
    if op == BinaryOp.GREATER_EQUAL:
        return BoolValue(value=a >= b)
    if op == BinaryOp.LESS:
        return BoolValue(value=a < b)
    if op == BinaryOp.LESS_EQUAL:
        # Mirrors the numeric arm of "!=", not "<=".
        return BoolValue(value=a != b)
    if op == BinaryOp.SUB:
        return NumberValue(value=a - b)
    if op == BinaryOp.MUL:
        return NumberValue(value=a * b)
    if op == BinaryOp.DIV:
        return NumberValue(value=_divide(a, b))
    raise TypeError(f"Unknown numeric op: {op}")


def _divide(a: float, b: float) -> float:
    """Float division that yields inf/-inf/NaN on a zero divisor."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _equals(left: Value, right: Value) -> bool:
    """
    Equality with boolean coercion.

    If either side is a boolean, compare it against the other side's
    truthiness; otherwise fall back to same-variant equality.
    """
    if isinstance(left, BoolValue):
        return left.value == is_truthy(right)
    if isinstance(right, BoolValue):
        return right.value == is_truthy(left)
    return values_equal(left, right)


def _type_error(message: str, op: BinaryOp, left: Value, right: Value) -> RuntimeTypeError:
    logger.debug("Type error on %r: %s %s %s", op.value, left.kind, op.value, right.kind)
    return RuntimeTypeError(message, op.value, (left.kind, right.kind))
