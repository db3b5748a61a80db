"""
Error types for Lox expression scanning, parsing, and evaluation.

Scan problems are collected as ``ScanDiagnostic`` records and never raised;
parse and runtime problems abort their stage with a ``LoxError`` subclass.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from loxexpr.core.ir.tokens import Token


@dataclass(frozen=True)
class ErrorContext:
    """
    Source location of an error.

    Attributes:
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional source line to show under the location
    """

    line: int
    column: int = 1
    snippet: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "line 3, column 7" followed by a marked snippet
        """
        location = f"line {self.line}, column {self.column}"
        if self.snippet is None:
            return location

        prefix = f"{self.line:4d} | "
        marker = " " * (len(prefix) + self.column - 1) + "^"
        return f"{location}\n{prefix}{self.snippet}\n{marker}"


class LoxError(Exception):
    """Base exception for errors raised by the expression pipeline."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.context:
            return f"[line {self.context.line}] Error: {self.message}"
        return self.message

    @property
    def line(self) -> int | None:
        return self.context.line if self.context else None


class ParseError(LoxError):
    """
    Raised when a token sequence does not form an expression.

    Examples:
    - A primary position holding an operator or keyword
    - A group that is never closed
    - Tokens left over after a complete expression
    """

    def __init__(self, message: str, token: Token | None = None):
        self.token = token
        context = ErrorContext(line=token.line, column=token.column) if token else None
        super().__init__(message, context)

    def _format_message(self) -> str:
        if self.token is None:
            return self.message
        where = "at end" if self.token.is_eof else f"at '{self.token.lexeme}'"
        return f"[line {self.token.line}] Error {where}: {self.message}"


class NestingDepthError(LoxError):
    """Raised when an expression nests deeper than the configured limit."""

    def __init__(self, max_depth: int, token: Token | None = None):
        self.max_depth = max_depth
        self.token = token
        context = ErrorContext(line=token.line, column=token.column) if token else None
        super().__init__(
            f"expression too deeply nested (limit is {max_depth})",
            context,
        )


class RuntimeTypeError(LoxError):
    """
    Raised when an operator is applied to operand types it does not support.

    Attributes:
        operator: Operator text, e.g. "-" or ">="
        operand_kinds: Value kinds of the operands, left to right
    """

    def __init__(self, message: str, operator: str, operand_kinds: tuple[str, ...]):
        self.operator = operator
        self.operand_kinds = operand_kinds
        super().__init__(message)


class ConfigError(LoxError):
    """Raised when a loxexpr.toml file cannot be read or validated."""


@dataclass(frozen=True)
class ScanDiagnostic:
    """
    A problem found while scanning.

    The scanner records one of these and keeps going; no token is produced
    for the offending span.
    """

    message: str
    line: int
    column: int
    lexeme: str = ""

    def __str__(self) -> str:
        return f"[line {self.line}] Error: {self.message}"
