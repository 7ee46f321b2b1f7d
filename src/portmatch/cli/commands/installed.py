"""Installed packages command for CLI."""

from __future__ import annotations

import typer

from portmatch.cli.main import app, fail, pattern_from_arg
from portmatch.core.exceptions import PortmatchError


@app.command()
def installed(
    patterns: list[str] = typer.Argument(
        ...,
        help="Package names, globs, /regexes/ or date relations such as '>=2024-01-01'.",
    ),
) -> None:
    """List installed packages matching any of the patterns."""
    from portmatch.adapters.pkgng import PkgngDatabase
    from portmatch.config import Settings
    from portmatch.core.matching import QueryMatcher

    database = PkgngDatabase(Settings.from_env())
    matcher = QueryMatcher(database)
    compiled = [pattern_from_arg(p) for p in patterns]

    try:
        packages = database.installed()
    except PortmatchError as e:
        fail(e)

    matched = [
        pkg for pkg in packages if any(matcher.matches(pkg, p) for p in compiled)
    ]
    if not matched:
        typer.echo("No installed packages matched.")
        raise typer.Exit(1)

    for pkg in matched:
        typer.echo(str(pkg))
