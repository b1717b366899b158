"""
Root Typer application for the projectdb CLI.
"""

from __future__ import annotations

import typer
from typer import Typer

from projectdb.core.logging import configure_logging
from projectdb.core.settings import get_settings

app = Typer(
    name="projectdb",
    help="projectdb — data access layer for the DIY projects database.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from projectdb import __version__

        typer.echo(f"projectdb {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """projectdb CLI — create and check the projects database."""
    settings = get_settings()
    configure_logging(level=settings.log_level, json_format=settings.json_logs)


# ── Sub-command registration ─────────────────────────────────────────────

from projectdb.cli.db import app as db_app  # noqa: E402

app.add_typer(db_app, name="db", help="Database operations.")
