"""
CLI utility helpers — adapter creation and output formatting.
"""

from __future__ import annotations

import json
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.table import Table

from projectdb.core.adapters import DatabaseAdapter
from projectdb.core.connection import ConnectionInfo, create_adapter
from projectdb.core.errors import ProjectDbError

console = Console()
err_console = Console(stderr=True)


# ── Adapter helper ───────────────────────────────────────────────────────


def open_adapter(database: str | None = None) -> tuple[DatabaseAdapter, ConnectionInfo]:
    """Create an adapter for ``database`` (defaults to ``PROJECTDB_DATABASE_URL``)."""
    try:
        return create_adapter(database)
    except ProjectDbError as e:
        fail(e)


# ── Output helpers ───────────────────────────────────────────────────────


def fail(error: ProjectDbError) -> NoReturn:
    """Print a structured error and exit with status 1."""
    err_console.print(f"[bold red]Error[/bold red] ({error.category.value}): {error.message}")
    raise typer.Exit(code=1)


def output_dict(data: dict[str, Any], *, as_json: bool = False, title: str = "") -> None:
    """Render a flat dict as JSON or a two-column Rich table."""
    if as_json:
        typer.echo(json.dumps(data, indent=2, default=str))
        return

    table = Table(title=title or None, show_header=False, pad_edge=False)
    table.add_column("key", style="bold")
    table.add_column("value", overflow="fold")
    for key, value in data.items():
        table.add_row(key, _format_value(value))
    console.print(table)


def _format_value(value: Any) -> str:
    if value is None:
        return "[dim]-[/dim]"
    if isinstance(value, bool):
        return "[green]yes[/green]" if value else "[red]no[/red]"
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value) or "[dim]none[/dim]"
    return str(value)
