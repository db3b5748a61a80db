"""
Token types for the Lox expression language.

A token is the smallest lexical unit: a kind, the text it was scanned from,
its decoded literal (numbers, strings, identifiers) and where it started.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto


class TokenKind(StrEnum):
    """Token kinds recognised by the scanner."""

    # Single-character punctuation
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    COMMA = auto()
    DOT = auto()
    MINUS = auto()
    PLUS = auto()
    SEMICOLON = auto()
    SLASH = auto()
    STAR = auto()

    # One or two character operators
    BANG = auto()
    BANG_EQUAL = auto()
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()

    # Literals
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()

    # Reserved words
    AND = auto()
    CLASS = auto()
    ELSE = auto()
    FALSE = auto()
    FUN = auto()
    FOR = auto()
    IF = auto()
    NIL = auto()
    OR = auto()
    PRINT = auto()
    RETURN = auto()
    SUPER = auto()
    THIS = auto()
    TRUE = auto()
    VAR = auto()
    WHILE = auto()

    # End of input
    EOF = auto()


KEYWORDS: dict[str, TokenKind] = {
    "and": TokenKind.AND,
    "class": TokenKind.CLASS,
    "else": TokenKind.ELSE,
    "false": TokenKind.FALSE,
    "for": TokenKind.FOR,
    "fun": TokenKind.FUN,
    "if": TokenKind.IF,
    "nil": TokenKind.NIL,
    "or": TokenKind.OR,
    "print": TokenKind.PRINT,
    "return": TokenKind.RETURN,
    "super": TokenKind.SUPER,
    "this": TokenKind.THIS,
    "true": TokenKind.TRUE,
    "var": TokenKind.VAR,
    "while": TokenKind.WHILE,
}


@dataclass(frozen=True)
class Token:
    """
    A single token from the scanner.

    Attributes:
        kind: Type of token
        lexeme: Source text the token was scanned from
        literal: Decoded value for NUMBER (float), STRING and IDENTIFIER (str)
        line: Line of the token's first character (1-indexed)
        column: Column of the token's first character (1-indexed)
    """

    kind: TokenKind
    lexeme: str = ""
    literal: float | str | None = None
    line: int = 1
    column: int = 1

    @property
    def is_eof(self) -> bool:
        return self.kind == TokenKind.EOF

    def __repr__(self) -> str:
        if self.literal is not None:
            return f"Token({self.kind}, {self.literal!r}, line={self.line})"
        return f"Token({self.kind}, line={self.line})"
