"""
Lox intermediate representation: tokens, expression nodes, and runtime values.
"""

from loxexpr.core.ir.expressions import Binary, BinaryOp, Expr, Grouping, Literal, Unary, UnaryOp
from loxexpr.core.ir.tokens import KEYWORDS, Token, TokenKind
from loxexpr.core.ir.values import (
    FALSE,
    NIL,
    TRUE,
    BoolValue,
    NilValue,
    NumberValue,
    StringValue,
    Value,
    ValueKind,
    format_value,
    from_python,
    is_truthy,
    to_python,
    values_equal,
)

__all__ = [
    # Tokens
    "KEYWORDS",
    "Token",
    "TokenKind",
    # Expressions
    "Binary",
    "BinaryOp",
    "Expr",
    "Grouping",
    "Literal",
    "Unary",
    "UnaryOp",
    # Values
    "FALSE",
    "NIL",
    "TRUE",
    "BoolValue",
    "NilValue",
    "NumberValue",
    "StringValue",
    "Value",
    "ValueKind",
    "format_value",
    "from_python",
    "is_truthy",
    "to_python",
    "values_equal",
]
