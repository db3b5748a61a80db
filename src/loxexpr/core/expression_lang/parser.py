"""
Recursive descent parser for Lox expressions.

Grammar (precedence low to high):
    expression → equality
    equality   → comparison (("!=" | "==") comparison)*
    comparison → term ((">" | ">=" | "<" | "<=") term)*
    term       → factor (("-" | "+") factor)*
    factor     → unary (("/" | "*") unary)*
    unary      → ("!" | "-") unary | primary
    primary    → NUMBER | STRING | "true" | "false" | "nil" | "(" expression ")"

Every binary level folds left, so ``1 - 2 - 3`` parses as ``(1 - 2) - 3``.
The parser does not recover: the first error aborts the whole parse.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from loxexpr.core.errors import NestingDepthError, ParseError
from loxexpr.core.ir.expressions import (
    Binary,
    BinaryOp,
    Expr,
    Grouping,
    Literal,
    Unary,
    UnaryOp,
)
from loxexpr.core.ir.tokens import Token, TokenKind

logger = logging.getLogger(__name__)

# Nested groups and prefix operators; also the largest accepted limit
DEFAULT_MAX_DEPTH = 64

# Finished trees may be this many times deeper than the nesting limit
TREE_DEPTH_FACTOR = 4

# Hard cap on tree height; evaluation, printing and JSON dumps recurse per level
MAX_TREE_HEIGHT = 200

_EQUALITY_OPS: dict[TokenKind, BinaryOp] = {
    TokenKind.BANG_EQUAL: BinaryOp.NOT_EQUAL,
    TokenKind.EQUAL_EQUAL: BinaryOp.EQUAL,
}

_COMPARISON_OPS: dict[TokenKind, BinaryOp] = {
    TokenKind.GREATER: BinaryOp.GREATER,
    TokenKind.GREATER_EQUAL: BinaryOp.GREATER_EQUAL,
    TokenKind.LESS: BinaryOp.LESS,
    TokenKind.LESS_EQUAL: BinaryOp.LESS_EQUAL,
}

_TERM_OPS: dict[TokenKind, BinaryOp] = {
    TokenKind.MINUS: BinaryOp.SUB,
    TokenKind.PLUS: BinaryOp.ADD,
}

_FACTOR_OPS: dict[TokenKind, BinaryOp] = {
    TokenKind.SLASH: BinaryOp.DIV,
    TokenKind.STAR: BinaryOp.MUL,
}

_UNARY_OPS: dict[TokenKind, UnaryOp] = {
    TokenKind.BANG: UnaryOp.NOT,
    TokenKind.MINUS: UnaryOp.NEG,
}

_KEYWORD_LITERALS: dict[TokenKind, bool | None] = {
    TokenKind.TRUE: True,
    TokenKind.FALSE: False,
    TokenKind.NIL: None,
}


class _Parser:
    """Recursive descent parser over a scanned token list."""

    def __init__(self, tokens: Sequence[Token], max_depth: int) -> None:
        if not tokens or not tokens[-1].is_eof:
            tokens = [*tokens, Token(TokenKind.EOF, line=tokens[-1].line if tokens else 1)]
        self.tokens = tokens
        self.pos = 0
        self.max_depth = max_depth
        self.max_tree_depth = min(max_depth * TREE_DEPTH_FACTOR, MAX_TREE_HEIGHT)
        self.nesting = 0
        # id(node) -> height of the subtree rooted at node
        self._heights: dict[int, int] = {}

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return tok

    def expect(self, kind: TokenKind, message: str) -> Token:
        if self.current.kind != kind:
            raise ParseError(message, self.current)
        return self.advance()

    # -- Depth tracking --

    def _enter(self, tok: Token) -> None:
        self.nesting += 1
        if self.nesting > self.max_depth:
            raise NestingDepthError(self.max_depth, tok)

    def _leave(self) -> None:
        self.nesting -= 1

    def _built(self, node: Expr, tok: Token, *children: Expr) -> Expr:
        height = 1 + max((self._heights.get(id(c), 1) for c in children), default=0)
        if height > self.max_tree_depth:
            raise NestingDepthError(self.max_tree_depth, tok)
        self._heights[id(node)] = height
        return node

    # -- Grammar rules --

    def parse_expression(self) -> Expr:
        """expression → equality"""
        return self.parse_equality()

    def parse_equality(self) -> Expr:
        """comparison (('!=' | '==') comparison)*"""
        return self._binary_level(_EQUALITY_OPS, self.parse_comparison)

    def parse_comparison(self) -> Expr:
        """term (('>' | '>=' | '<' | '<=') term)*"""
        return self._binary_level(_COMPARISON_OPS, self.parse_term)

    def parse_term(self) -> Expr:
        """factor (('-' | '+') factor)*"""
        return self._binary_level(_TERM_OPS, self.parse_factor)

    def parse_factor(self) -> Expr:
        """unary (('/' | '*') unary)*"""
        return self._binary_level(_FACTOR_OPS, self.parse_unary)

    def _binary_level(
        self, ops: dict[TokenKind, BinaryOp], operand: Callable[[], Expr]
    ) -> Expr:
        left = operand()
        while self.current.kind in ops:
            op_tok = self.advance()
            right = operand()
            node = Binary(op=ops[op_tok.kind], left=left, right=right)
            left = self._built(node, op_tok, left, right)
        return left

    def parse_unary(self) -> Expr:
        """('!' | '-') unary | primary"""
        if self.current.kind in _UNARY_OPS:
            op_tok = self.advance()
            self._enter(op_tok)
            operand = self.parse_unary()
            self._leave()
            node = Unary(op=_UNARY_OPS[op_tok.kind], operand=operand)
            return self._built(node, op_tok, operand)
        return self.parse_primary()

    def parse_primary(self) -> Expr:
        """NUMBER | STRING | 'true' | 'false' | 'nil' | '(' expression ')'"""
        tok = self.current

        if tok.kind == TokenKind.LEFT_PAREN:
            self.advance()
            self._enter(tok)
            inner = self.parse_expression()
            self.expect(TokenKind.RIGHT_PAREN, "expected ')' after expression")
            self._leave()
            return self._built(Grouping(expression=inner), tok, inner)

        if tok.kind in (TokenKind.NUMBER, TokenKind.STRING):
            self.advance()
            return self._built(Literal(value=tok.literal), tok)

        if tok.kind in _KEYWORD_LITERALS:
            self.advance()
            return self._built(Literal(value=_KEYWORD_LITERALS[tok.kind]), tok)

        raise ParseError("expected expression", tok)


def parse(
    tokens: Sequence[Token],
    *,
    allow_trailing: bool = False,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Expr:
    """Parse a token sequence into an expression AST.

    Args:
        tokens: Scanned tokens, normally ending with EOF
        allow_trailing: Ignore tokens left after the expression instead of
            rejecting them
        max_depth: Limit on nested groups and prefix operators, at most
            ``DEFAULT_MAX_DEPTH``

    Returns:
        Root of the parsed expression tree.

    Raises:
        ParseError: If the tokens do not form an expression.
        NestingDepthError: If the expression nests deeper than allowed.
        ValueError: If ``max_depth`` is outside 1..DEFAULT_MAX_DEPTH.
    """
    if not 1 <= max_depth <= DEFAULT_MAX_DEPTH:
        raise ValueError(f"max_depth must be between 1 and {DEFAULT_MAX_DEPTH}, got {max_depth}")

    parser = _Parser(tokens, max_depth)
    try:
        expr = parser.parse_expression()
    except RecursionError:
        raise NestingDepthError(max_depth, parser.current) from None

    if not allow_trailing and not parser.current.is_eof:
        raise ParseError("expected end of expression", parser.current)
    if allow_trailing and not parser.current.is_eof:
        logger.debug("Ignoring trailing tokens from %r", parser.current)

    return expr
