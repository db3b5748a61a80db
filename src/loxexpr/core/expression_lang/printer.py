"""
Debug printer for expression trees.

Renders an AST in fully parenthesised prefix form, e.g. ``(* (- 123) (group 45.67))``.
Used for debugging and test fixtures; evaluation never depends on it.
"""

from __future__ import annotations

from loxexpr.core.ir.expressions import Binary, Expr, Grouping, Literal, Unary
from loxexpr.core.ir.values import format_value, from_python


def print_ast(expr: Expr) -> str:
    """Render an expression tree as parenthesised prefix text."""
    parts: list[str] = []
    _write(expr, parts)
    return "".join(parts)


def _write(expr: Expr, out: list[str]) -> None:
    if isinstance(expr, Literal):
        out.append(format_value(from_python(expr.value)))
    elif isinstance(expr, Grouping):
        out.append("(group ")
        _write(expr.expression, out)
        out.append(")")
    elif isinstance(expr, Unary):
        out.append(f"({expr.op.value} ")
        _write(expr.operand, out)
        out.append(")")
    elif isinstance(expr, Binary):
        out.append(f"({expr.op.value} ")
        _write(expr.left, out)
        out.append(" ")
        _write(expr.right, out)
        out.append(")")
    else:
        raise TypeError(f"Unknown expression type: {type(expr).__name__}")
