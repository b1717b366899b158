"""
CLI layer for projectdb.

Provides a Typer application whose sub-commands create and check the
projects schema. Persistence logic lives in ``projectdb.core`` and
``projectdb.dao``; this package only parses arguments and renders output.

Entry point::

    projectdb --help
"""

from projectdb.cli.app import app

__all__ = ["app"]
