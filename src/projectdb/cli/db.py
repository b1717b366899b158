"""
CLI: ``projectdb db`` — database management commands.
"""

from __future__ import annotations

import typer

from projectdb.cli.utils import fail, open_adapter, output_dict
from projectdb.core.errors import ProjectDbError
from projectdb.core.schema import TABLES, apply_schema, missing_tables

app = typer.Typer(no_args_is_help=True)


@app.command()
def init(
    database: str | None = typer.Option(None, "--database", "-d", help="Database URL or path"),
    drop: bool = typer.Option(False, "--drop", help="Drop existing tables first"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """Initialise database schema (create tables)."""
    adapter, info = open_adapter(database)
    with adapter:
        try:
            statements = apply_schema(adapter, drop_existing=drop)
        except ProjectDbError as e:
            fail(e)

    output_dict(
        {
            "backend": info.backend,
            "url": info.url,
            "tables": list(TABLES),
            "statements": len(statements),
            "dropped": drop,
        },
        as_json=json_out,
        title="Database Init",
    )


@app.command()
def health(
    database: str | None = typer.Option(None, "--database", "-d"),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Check database connectivity and that every table exists."""
    adapter, info = open_adapter(database)
    with adapter:
        try:
            missing = missing_tables(adapter)
        except ProjectDbError as e:
            fail(e)

    output_dict(
        {
            "backend": info.backend,
            "url": info.url,
            "connected": True,
            "missing_tables": missing,
            "healthy": not missing,
        },
        as_json=json_out,
        title="Database Health",
    )
    if missing:
        raise typer.Exit(code=1)
