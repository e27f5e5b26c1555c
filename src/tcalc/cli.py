"""
tcalc CLI - Entry point.

All arguments are joined with single spaces into one expression, so
quoting is optional:

    tcalc 2025/09/27 + 2d        -> 2025-09-29
    tcalc "2am - 30m"            -> 01:30
    tcalc --type now - 90m       -> DateTime

Exit status is 0 on success and 1 on any error, including a missing
expression.
"""

from __future__ import annotations

import logging
import platform
import sys

import typer
from rich.console import Console
from rich.markup import escape

from tcalc._version import get_version
from tcalc.core.environment import get_log_level
from tcalc.core.errors import TcalcError
from tcalc.core.runner import check, run

err_console = Console(stderr=True)

USAGE = "Usage: tcalc <expression>"


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"tcalc version {get_version()}")
        typer.echo(f"Python {platform.python_implementation()} {platform.python_version()}")
        raise typer.Exit()


app = typer.Typer(
    help="tcalc: date and time arithmetic",
    add_completion=False,
)


# Expressions like "-2d" must reach the argument list, not the option parser.
# Only long options are defined, so no short-flag cluster can swallow a
# character of an expression such as "-2months".
@app.command(context_settings={"ignore_unknown_options": True})
def calculate(
    expression: list[str] | None = typer.Argument(  # noqa: B008
        None,
        help="Expression to evaluate, e.g. 'today + 2d' or '2am - 30m'",
        show_default=False,
    ),
    show_type: bool = typer.Option(
        False,
        "--type",
        help="Print the kind of value the expression produces instead of evaluating it",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable debug logging and show where a parse error occurred",
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version information",
    ),
) -> None:
    """Evaluate a date/time arithmetic expression."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else get_log_level(),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    source = " ".join(expression or [])
    if not source:
        err_console.print(USAGE, highlight=False)
        raise typer.Exit(1)

    try:
        result = str(check(source)) if show_type else run(source)
    except TcalcError as e:
        text = e.describe() if verbose else e.message
        err_console.print(f"[red]error:[/red] {escape(text)}", highlight=False, soft_wrap=True)
        raise typer.Exit(1) from None

    typer.echo(result)


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
