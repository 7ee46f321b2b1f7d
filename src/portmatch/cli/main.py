"""CLI commands for portmatch."""

from __future__ import annotations

import re
from typing import NoReturn

import typer

from portmatch.core import shell
from portmatch.core.exceptions import PortmatchError
from portmatch.logging_config import configure_logging


app = typer.Typer(
    name="portmatch",
    help="Query installed packages and the ports INDEX.",
    no_args_is_help=True,
)


@app.callback()
def _configure(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log debug events (pkg commands, index loading) to stderr.",
    ),
) -> None:
    """Query installed packages and the ports INDEX."""
    configure_logging(verbose=verbose)


def pattern_from_arg(arg: str) -> str | re.Pattern[str]:
    """Convert a command-line pattern.

    ``/regex/`` becomes a compiled regular expression; anything else is a
    glob, a name or a date relation and is passed through unchanged.

    Raises:
        typer.BadParameter: If a /regex/ does not compile.
    """
    if len(arg) >= 2 and arg.startswith("/") and arg.endswith("/"):
        try:
            return re.compile(arg[1:-1])
        except re.error as e:
            raise typer.BadParameter(f"Invalid regular expression {arg}: {e}") from e
    return arg


def fail(error: PortmatchError) -> NoReturn:
    """Report a library error on stderr and exit with status 1."""
    typer.echo(f"Error: {error}", err=True)
    if error.recovery_hint:
        typer.echo(f"Hint: {error.recovery_hint}", err=True)
    raise typer.Exit(1) from None


@app.command()
def compare(
    left: str = typer.Argument(..., help="Package name or version."),
    right: str = typer.Argument(..., help="Package name or version."),
) -> None:
    """Print <, = or > for two packages or versions."""
    from portmatch.core.models import PackageIdentifier
    from portmatch.core.version import PkgVersion

    try:
        lhs = PackageIdentifier.parse(left) if "-" in left else PkgVersion(left)
        cmp = lhs.compare(right)
    except PortmatchError as e:
        fail(e)

    typer.echo({-1: "<", 0: "=", 1: ">"}[cmp])


@app.command()
def split(
    line: str = typer.Argument(..., help="Command line to split."),
) -> None:
    """Split a command line into words, one per output line."""
    try:
        words = shell.tokenize(line)
    except PortmatchError as e:
        fail(e)

    for word in words:
        typer.echo(word)


@app.command()
def join(
    args: list[str] = typer.Argument(..., help="Arguments to join."),
) -> None:
    """Join arguments into a shell-safe command line."""
    typer.echo(shell.join(args))


def main() -> None:
    """Entry point for the CLI."""
    app()
