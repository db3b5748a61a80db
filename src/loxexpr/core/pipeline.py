"""
Scan → parse → evaluate in one call.

The driver and tests use this to run a source string with the settings
from ``LoxConfig``. Parse and runtime errors propagate unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from loxexpr.core.config import InterpreterConfig
from loxexpr.core.errors import ScanDiagnostic
from loxexpr.core.expression_lang.evaluator import evaluate
from loxexpr.core.expression_lang.parser import parse
from loxexpr.core.expression_lang.scanner import ScanResult, scan
from loxexpr.core.ir.expressions import Expr
from loxexpr.core.ir.values import Value

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Outcome of running one source string."""

    value: Value | None
    diagnostics: list[ScanDiagnostic] = field(default_factory=list)
    expr: Expr | None = None

    @property
    def halted(self) -> bool:
        """True when scan diagnostics stopped the run before evaluation."""
        return self.value is None


def parse_scanned(result: ScanResult, config: InterpreterConfig | None = None) -> Expr:
    """Parse the tokens of an existing scan result with the configured limits."""
    config = config or InterpreterConfig()
    return parse(
        result.tokens,
        allow_trailing=config.allow_trailing,
        max_depth=config.max_depth,
    )


def run_source(source: str, config: InterpreterConfig | None = None) -> RunResult:
    """
    Run one expression from source text.

    Args:
        source: Lox source holding a single expression
        config: Interpreter settings (defaults when omitted)

    Returns:
        RunResult with the value, or with ``value=None`` when scan
        diagnostics halted the run

    Raises:
        ParseError: If the tokens do not form an expression.
        NestingDepthError: If the expression nests too deeply.
        RuntimeTypeError: If evaluation hits an unsupported operand type.
    """
    return run_scanned(scan(source), config)


def run_scanned(result: ScanResult, config: InterpreterConfig | None = None) -> RunResult:
    """Parse and evaluate an existing scan result; see ``run_source``."""
    config = config or InterpreterConfig()

    if result.diagnostics and config.halt_on_scan_errors:
        logger.info("Not evaluating: %d scan diagnostic(s)", len(result.diagnostics))
        return RunResult(value=None, diagnostics=result.diagnostics)

    expr = parse_scanned(result, config)
    value = evaluate(expr)
    return RunResult(value=value, diagnostics=result.diagnostics, expr=expr)
