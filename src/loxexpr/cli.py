"""
loxexpr command-line driver.

Reads source from a file or an interactive prompt, runs it through
scan → parse → evaluate, and reports results and errors. All I/O of the
project lives here.
"""

import dataclasses
import logging
import platform
import sys
from pathlib import Path

import typer
from pydantic_core import PydanticSerializationError

from loxexpr import cli_ui
from loxexpr._version import __version__
from loxexpr.core.config import LogLevel, LoxConfig, load_config
from loxexpr.core.errors import ConfigError, LoxError, RuntimeTypeError
from loxexpr.core.expression_lang import print_ast, scan
from loxexpr.core.pipeline import parse_scanned, run_scanned

logger = logging.getLogger(__name__)

# sysexits.h codes
EXIT_DATAERR = 65
EXIT_NOINPUT = 66
EXIT_SOFTWARE = 70


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        python_version = platform.python_version()
        python_impl = platform.python_implementation()
        typer.echo(f"loxexpr {__version__}")
        typer.echo(f"Python {python_version} ({python_impl})")
        raise typer.Exit()


def _configure_logging(level: LogLevel) -> None:
    logging.basicConfig(
        level=getattr(logging, level.value),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        force=True,
    )


def _config(ctx: typer.Context) -> LoxConfig:
    if isinstance(ctx.obj, LoxConfig):
        return ctx.obj
    return LoxConfig()


app = typer.Typer(
    help="""loxexpr – scan, parse and evaluate Lox expressions

Commands:
  • run SCRIPT      evaluate the expression in a file
  • repl            interactive prompt, one expression per line
  • tokens SOURCE   show the token sequence
  • ast SOURCE      show the parsed tree
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to loxexpr.toml (default: ./loxexpr.toml if present)",
    ),
    log_level: LogLevel | None = typer.Option(
        None,
        "--log-level",
        case_sensitive=False,
        help="Override the configured log level",
    ),
) -> None:
    """Load configuration and set up logging for every command."""
    try:
        config = load_config(config_path)
    except ConfigError as e:
        cli_ui.print_error(str(e))
        raise typer.Exit(code=2)

    if log_level is not None:
        config = config.model_copy(update={"log_level": log_level})

    _configure_logging(config.log_level)
    ctx.obj = config


def _report_error(error: LoxError, source: str) -> None:
    """Print a pipeline error and, when it has a location, the offending source line."""
    cli_ui.print_error(str(error))
    if error.context is None:
        return

    lines = source.splitlines()
    line = error.context.line
    snippet = lines[line - 1] if 1 <= line <= len(lines) else None
    cli_ui.print_location(dataclasses.replace(error.context, snippet=snippet))


def _run(source: str, config: LoxConfig, interactive: bool = False) -> int:
    """Run one source string and report the outcome. Returns an exit code."""
    scanned = scan(source)
    cli_ui.print_diagnostics(scanned.diagnostics)
    if config.repl.show_tokens and interactive:
        cli_ui.print_tokens(scanned.tokens)

    try:
        result = run_scanned(scanned, config.interpreter)
    except RuntimeTypeError as e:
        cli_ui.print_error(f"Runtime error: {e}")
        return EXIT_SOFTWARE
    except LoxError as e:
        _report_error(e, source)
        return EXIT_DATAERR

    if result.value is None:
        return EXIT_DATAERR

    cli_ui.print_result(str(result.value))
    return 0


@app.command("run")
def run_command(
    ctx: typer.Context,
    script: Path = typer.Argument(..., help="File holding one Lox expression"),
) -> None:
    """
    Evaluate the expression in SCRIPT and print its value.

    Exits with 65 on scan/parse errors and 70 on runtime type errors.
    """
    config = _config(ctx)
    try:
        source = script.read_text(encoding="utf-8")
    except OSError as e:
        cli_ui.print_error(f"Failed to read source file {script}: {e}")
        raise typer.Exit(code=EXIT_NOINPUT)

    logger.info("Running script %s", script)
    code = _run(source, config)
    if code:
        raise typer.Exit(code=code)


@app.command("repl")
def repl_command(ctx: typer.Context) -> None:
    """
    Start an interactive prompt.

    Each line is evaluated on its own; errors are reported and the loop
    continues. End with Ctrl-D or Ctrl-C.
    """
    config = _config(ctx)

    while True:
        try:
            line = cli_ui.console.input(config.repl.prompt, markup=False)
        except (EOFError, KeyboardInterrupt):
            cli_ui.console.print()
            break

        if not line.strip():
            continue

        _run(line, config, interactive=True)


@app.command("tokens")
def tokens_command(
    source: str = typer.Argument(..., help="Lox source text"),
) -> None:
    """Scan SOURCE and print its tokens and any scan diagnostics."""
    result = scan(source)
    cli_ui.print_tokens(result.tokens)
    cli_ui.print_diagnostics(result.diagnostics)
    if not result.ok:
        raise typer.Exit(code=EXIT_DATAERR)


@app.command("ast")
def ast_command(
    ctx: typer.Context,
    source: str = typer.Argument(..., help="Lox source text"),
    json_output: bool = typer.Option(False, "--json", help="Print the tree as JSON"),
) -> None:
    """Parse SOURCE and print its tree in parenthesised prefix form."""
    config = _config(ctx)
    scanned = scan(source)
    cli_ui.print_diagnostics(scanned.diagnostics)
    try:
        expr = parse_scanned(scanned, config.interpreter)
    except LoxError as e:
        _report_error(e, source)
        raise typer.Exit(code=EXIT_DATAERR)

    if json_output:
        try:
            typer.echo(expr.model_dump_json(indent=2))
        except PydanticSerializationError as e:
            cli_ui.print_error(f"Cannot serialise tree as JSON: {e}")
            raise typer.Exit(code=EXIT_DATAERR)
    else:
        cli_ui.print_result(print_ast(expr))


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


if __name__ == "__main__":
    main(sys.argv[1:])
