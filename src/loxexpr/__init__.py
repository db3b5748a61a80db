"""
loxexpr - the front half of a Lox interpreter.

Turns source text into tokens, parses tokens into an expression tree under
the Lox precedence grammar, and evaluates that tree to a runtime value.
"""

from __future__ import annotations

from loxexpr._version import __version__
from loxexpr.core.errors import (
    ConfigError,
    LoxError,
    NestingDepthError,
    ParseError,
    RuntimeTypeError,
    ScanDiagnostic,
)
from loxexpr.core.expression_lang import ScanResult, evaluate, parse, print_ast, scan
from loxexpr.core.pipeline import RunResult, run_source

__all__ = [
    "__version__",
    # Pipeline
    "scan",
    "parse",
    "evaluate",
    "print_ast",
    "run_source",
    "ScanResult",
    "RunResult",
    # Errors
    "LoxError",
    "ParseError",
    "NestingDepthError",
    "RuntimeTypeError",
    "ConfigError",
    "ScanDiagnostic",
]
