"""
Scanner for the Lox expression language.

Converts source text into a sequence of tokens with line/column tracking.
Invalid input never aborts a scan: each problem is recorded as a
diagnostic, the offending span produces no token, and scanning resumes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from loxexpr.core.errors import ScanDiagnostic
from loxexpr.core.ir.tokens import KEYWORDS, Token, TokenKind

logger = logging.getLogger(__name__)

_SINGLE_CHAR: dict[str, TokenKind] = {
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    "{": TokenKind.LEFT_BRACE,
    "}": TokenKind.RIGHT_BRACE,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    "-": TokenKind.MINUS,
    "+": TokenKind.PLUS,
    ";": TokenKind.SEMICOLON,
    "*": TokenKind.STAR,
}

# First char -> (kind alone, kind when followed by "=")
_ONE_OR_TWO_CHAR: dict[str, tuple[TokenKind, TokenKind]] = {
    "!": (TokenKind.BANG, TokenKind.BANG_EQUAL),
    "=": (TokenKind.EQUAL, TokenKind.EQUAL_EQUAL),
    ">": (TokenKind.GREATER, TokenKind.GREATER_EQUAL),
    "<": (TokenKind.LESS, TokenKind.LESS_EQUAL),
}


def _is_digit(c: str | None) -> bool:
    return c is not None and "0" <= c <= "9"


def _is_word_char(c: str | None) -> bool:
    return c is not None and (c.isalnum() or c == "_")


@dataclass
class ScanResult:
    """Tokens recognised in a source text plus every problem found on the way."""

    tokens: list[Token]
    diagnostics: list[ScanDiagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics


class Scanner:
    """
    Scanner for Lox source text.

    Dispatches on each character, longest match first; the token list always
    ends with exactly one EOF token.
    """

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []
        self.diagnostics: list[ScanDiagnostic] = []

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= len(self.source):
            return None
        return self.source[self.pos]

    def peek_char(self, offset: int = 1) -> str | None:
        """Peek ahead at character."""
        pos = self.pos + offset
        if pos >= len(self.source):
            return None
        return self.source[pos]

    def advance(self) -> str | None:
        """Consume the current character, updating line/column."""
        c = self.current_char()
        if c is not None:
            if c == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1
        return c

    def match(self, expected: str) -> bool:
        """Consume the current character only if it is ``expected``."""
        if self.current_char() != expected:
            return False
        self.advance()
        return True

    def scan_tokens(self) -> ScanResult:
        """
        Scan the entire source text.

        Returns:
            ScanResult with the token list (EOF-terminated) and diagnostics
        """
        while self.current_char() is not None:
            self.scan_token()

        self.tokens.append(Token(TokenKind.EOF, "", None, self.line, self.column))
        logger.debug(
            "Scanned %d tokens with %d diagnostics", len(self.tokens), len(self.diagnostics)
        )
        return ScanResult(tokens=self.tokens, diagnostics=self.diagnostics)

    def scan_token(self) -> None:
        """Scan at most one token starting at the current position (input must remain)."""
        start = self.pos
        start_line = self.line
        start_col = self.column
        c = self.source[start]
        self.advance()

        if c.isspace():
            return

        if c in _SINGLE_CHAR:
            self._add(_SINGLE_CHAR[c], start, start_line, start_col)
            return

        if c in _ONE_OR_TWO_CHAR:
            single, double = _ONE_OR_TWO_CHAR[c]
            kind = double if self.match("=") else single
            self._add(kind, start, start_line, start_col)
            return

        if c == "/":
            if self.match("/"):
                self.skip_comment()
            else:
                self._add(TokenKind.SLASH, start, start_line, start_col)
            return

        if c == '"':
            self.read_string(start, start_line, start_col)
            return

        if _is_digit(c):
            self.read_number(start, start_line, start_col)
            return

        if _is_word_char(c):
            self.read_identifier(start, start_line, start_col)
            return

        self._report(f"Invalid character: '{c}'", start_line, start_col, c)

    def skip_comment(self) -> None:
        """Skip a line comment up to (not including) the newline."""
        while self.current_char() is not None and self.current_char() != "\n":
            self.advance()

    def read_string(self, start: int, start_line: int, start_col: int) -> None:
        """Read a string literal; newlines inside are kept verbatim."""
        while self.current_char() is not None and self.current_char() != '"':
            self.advance()

        if self.current_char() is None:
            self._report("Unterminated string", start_line, start_col, self.source[start:])
            return

        self.advance()  # closing quote
        value = self.source[start + 1 : self.pos - 1]
        self._add(TokenKind.STRING, start, start_line, start_col, value)

    def read_number(self, start: int, start_line: int, start_col: int) -> None:
        """Read digits with an optional fraction; a bare trailing dot is not consumed."""
        while _is_digit(self.current_char()):
            self.advance()

        if self.current_char() == "." and _is_digit(self.peek_char()):
            self.advance()  # the dot
            while _is_digit(self.current_char()):
                self.advance()

        text = self.source[start : self.pos]
        self._add(TokenKind.NUMBER, start, start_line, start_col, float(text))

    def read_identifier(self, start: int, start_line: int, start_col: int) -> None:
        """Read a maximal word and classify it as a keyword or identifier."""
        while _is_word_char(self.current_char()):
            self.advance()

        word = self.source[start : self.pos]
        kind = KEYWORDS.get(word)
        if kind is None:
            self._add(TokenKind.IDENTIFIER, start, start_line, start_col, word)
        else:
            self._add(kind, start, start_line, start_col)

    def _add(
        self,
        kind: TokenKind,
        start: int,
        line: int,
        column: int,
        literal: float | str | None = None,
    ) -> None:
        lexeme = self.source[start : self.pos]
        self.tokens.append(Token(kind, lexeme, literal, line, column))

    def _report(self, message: str, line: int, column: int, lexeme: str) -> None:
        diagnostic = ScanDiagnostic(message=message, line=line, column=column, lexeme=lexeme)
        logger.debug("Scan diagnostic: %s", diagnostic)
        self.diagnostics.append(diagnostic)


def scan(source: str) -> ScanResult:
    """
    Convenience function to scan Lox source text.

    Args:
        source: Source text

    Returns:
        ScanResult with tokens and diagnostics; never raises on bad input
    """
    return Scanner(source).scan_tokens()
