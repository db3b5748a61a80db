"""
Expression AST for Lox.

Grammar (precedence low to high):
    expression → equality
    equality   → comparison (("!=" | "==") comparison)*
    comparison → term ((">" | ">=" | "<" | "<=") term)*
    term       → factor (("-" | "+") factor)*
    factor     → unary (("/" | "*") unary)*
    unary      → ("!" | "-") unary | primary
    primary    → NUMBER | STRING | "true" | "false" | "nil" | "(" expression ")"

Nodes are immutable once built and each child is owned by exactly one parent.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class UnaryOp(StrEnum):
    """Prefix operators."""

    NOT = "!"
    NEG = "-"


class BinaryOp(StrEnum):
    """Infix operators."""

    # Comparison
    GREATER = ">"
    GREATER_EQUAL = ">="
    LESS = "<"
    LESS_EQUAL = "<="
    # Equality
    EQUAL = "=="
    NOT_EQUAL = "!="
    # Arithmetic
    SUB = "-"
    ADD = "+"
    DIV = "/"
    MUL = "*"


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class Literal(BaseModel):
    """A literal value: number, string, boolean, or None (nil)."""

    value: float | str | bool | None = Field(description="The literal value")

    model_config = ConfigDict(frozen=True)


class Grouping(BaseModel):
    """A parenthesised sub-expression."""

    expression: Expr

    model_config = ConfigDict(frozen=True)


class Unary(BaseModel):
    """Prefix operation: op operand."""

    op: UnaryOp
    operand: Expr

    model_config = ConfigDict(frozen=True)


class Binary(BaseModel):
    """Binary operation: left op right."""

    op: BinaryOp
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Literal | Grouping | Unary | Binary

# Rebuild models for recursive forward references
Grouping.model_rebuild()
Unary.model_rebuild()
Binary.model_rebuild()
