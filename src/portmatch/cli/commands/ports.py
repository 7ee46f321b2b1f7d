"""Ports INDEX commands for CLI."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import typer
from rich.console import Console

from portmatch.cli.formatting import _ports_table
from portmatch.cli.main import app, fail, pattern_from_arg
from portmatch.core.exceptions import PortmatchError


if TYPE_CHECKING:
    from portmatch.adapters.index import PortsIndex
    from portmatch.core.matching import QueryMatcher
    from portmatch.core.records import PortRecord


_INDEX_OPTION_HELP = "INDEX file to read. Defaults to $PORTS_INDEX or $PORTSDIR/INDEX."


def _load_index(index: Path | None, matcher: QueryMatcher | None = None) -> PortsIndex:
    """Load the INDEX file, reporting failures the CLI way."""
    from portmatch.adapters.index import PortsIndex
    from portmatch.config import Settings

    path = index or Settings.from_env().index_file
    try:
        return PortsIndex.load(path, matcher=matcher)
    except OSError as e:
        typer.echo(f"Error: Could not read {path}: {e.strerror}", err=True)
        raise typer.Exit(1) from None
    except PortmatchError as e:
        fail(e)


@app.command()
def ports(
    patterns: list[str] = typer.Argument(
        ...,
        help="Origins, package names, globs, /regexes/ or date relations.",
    ),
    index: Path | None = typer.Option(None, "--index", "-i", help=_INDEX_OPTION_HELP),
) -> None:
    """List ports matching any of the patterns."""
    from portmatch.adapters.pkgng import PkgngDatabase
    from portmatch.config import Settings
    from portmatch.core.glob_utils import is_glob_pattern
    from portmatch.core.matching import QueryMatcher

    matcher = QueryMatcher(PkgngDatabase(Settings.from_env()))
    ports_index = _load_index(index, matcher)
    compiled = [pattern_from_arg(p) for p in patterns]

    selected: dict[str, PortRecord] = {}
    for pattern in compiled:
        for record in ports_index.select(pattern):
            selected.setdefault(record.origin, record)
    matched = sorted(selected.values())

    if not matched:
        typer.echo("No ports matched.")
        if not any(isinstance(p, str) and is_glob_pattern(p) for p in compiled):
            typer.echo("Hint: use a glob such as 'www/*' or 'nginx*' for partial matches.")
        raise typer.Exit(1)

    console = Console(force_terminal=True)
    console.print(_ports_table(matched))


@app.command()
def deps(
    origin: str = typer.Argument(..., help="Port origin, e.g. www/nginx."),
    all_depends: bool = typer.Option(
        False,
        "--all",
        "-a",
        help="Include extract, patch and fetch dependencies.",
    ),
    index: Path | None = typer.Option(None, "--index", "-i", help=_INDEX_OPTION_HELP),
) -> None:
    """Show the dependencies of a port."""
    ports_index = _load_index(index)

    record = ports_index.get(origin)
    if record is None:
        typer.echo(f"Port '{origin}' not found in the INDEX.")
        raise typer.Exit(1)

    depends = record.all_depends() if all_depends else record.required_depends()
    for dependency in depends:
        typer.echo(dependency)
