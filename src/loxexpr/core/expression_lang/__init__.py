"""
Lox expression language.

Scanner, parser, evaluator, and debug printer for Lox expressions.

Usage:
    from loxexpr.core.expression_lang import evaluate, parse, scan

    result = scan('"foo" + "bar"')
    expr = parse(result.tokens)
    value = evaluate(expr)
    # str(value) == "foobar"
"""

from loxexpr.core.expression_lang.evaluator import evaluate
from loxexpr.core.expression_lang.parser import DEFAULT_MAX_DEPTH, parse
from loxexpr.core.expression_lang.printer import print_ast
from loxexpr.core.expression_lang.scanner import Scanner, ScanResult, scan

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "ScanResult",
    "Scanner",
    "evaluate",
    "parse",
    "print_ast",
    "scan",
]
