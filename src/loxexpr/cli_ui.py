"""
Rich console helpers for the loxexpr CLI.

All terminal output of the driver goes through these functions; the core
never prints.
"""

from __future__ import annotations

from collections.abc import Iterable

from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

from loxexpr.core.errors import ErrorContext, ScanDiagnostic
from loxexpr.core.ir.tokens import Token

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)

# Style definitions
STYLES = {
    "title": Style(color="bright_cyan", bold=True),
    "error": Style(color="red", bold=True),
    "warning": Style(color="yellow"),
    "muted": Style(color="bright_black"),
}


def print_result(text: str) -> None:
    """Print an evaluation result verbatim."""
    console.print(Text(text))


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    err_console.print(Text(message, style=STYLES["error"]))


def print_warning(message: str) -> None:
    """Print a warning message to stderr."""
    err_console.print(Text(message, style=STYLES["warning"]))


def print_location(context: ErrorContext) -> None:
    """Print where an error occurred, with the marked source line if known."""
    err_console.print(Text(context.format(), style=STYLES["muted"]))


def print_diagnostics(diagnostics: Iterable[ScanDiagnostic]) -> None:
    """Print each scan diagnostic on its own line."""
    for diagnostic in diagnostics:
        print_warning(str(diagnostic))


def print_tokens(tokens: list[Token]) -> None:
    """Print a token sequence as a table."""
    table = Table(title="Tokens", title_style=STYLES["title"])
    table.add_column("Line", justify="right", style="bright_black")
    table.add_column("Col", justify="right", style="bright_black")
    table.add_column("Kind", style="cyan")
    table.add_column("Lexeme")
    table.add_column("Literal", style="green")

    for tok in tokens:
        literal = "" if tok.literal is None else repr(tok.literal)
        table.add_row(str(tok.line), str(tok.column), str(tok.kind), tok.lexeme, literal)

    console.print(table)
