"""Shared formatting helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.table import Table
from rich.text import Text


if TYPE_CHECKING:
    from collections.abc import Iterable

    from portmatch.core.records import PortRecord


def _format_optional(value: str | None) -> Text:
    """Render a missing scalar field as a dim dash."""
    return Text(value) if value else Text("-", style="dim")


def _ports_table(records: Iterable[PortRecord]) -> Table:
    """Build a table of origin, package and comment for port records."""
    table = Table()
    table.add_column("Origin")
    table.add_column("Package")
    table.add_column("Comment")

    for record in records:
        table.add_row(record.origin, str(record.pkgname), _format_optional(record.comment))

    return table
