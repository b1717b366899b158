"""
Canonical protocol definitions for projectdb.

The DAO never imports a database driver. It talks to whatever the
connection-provisioning adapters hand it through the two structural
protocols below, which describe the DB-API 2.0 subset the DAO actually
uses plus a read/write ``autocommit`` switch for transaction control.

Architecture:
    ::

        protocols.py (YOU ARE HERE)
        ├── Cursor      — execute, fetchone, fetchall, description, rowcount
        └── Connection  — cursor, commit, rollback, close, autocommit

        Implementations:
        ┌────────────────────────────────────────────────────────┐
        │ SQLite → SqliteConnection (core.adapters.sqlite)       │
        │ MySQL  → MySQLConnection  (core.adapters.mysql)        │
        │ Tests  → any object with the same shape                │
        └────────────────────────────────────────────────────────┘

Guardrails:
    ❌ DON'T: Redefine these protocols in other modules
    ✅ DO: Import from projectdb.core.protocols

    ❌ DON'T: Add implementation logic to protocol classes
    ✅ DO: Keep protocols pure contracts — implementations go in adapters

Tags:
    protocol, connection, cursor, db-api, projectdb
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Cursor(Protocol):
    """DB-API cursor subset used by the DAO."""

    @property
    def description(self) -> Sequence[Sequence[Any]] | None:
        """Column metadata of the last query; ``description[i][0]`` is the name."""
        ...

    @property
    def rowcount(self) -> int:
        """Rows affected by the last INSERT/UPDATE/DELETE."""
        ...

    def execute(self, sql: str, params: Sequence[Any] = ()) -> Any:
        ...

    def fetchone(self) -> Sequence[Any] | None:
        ...

    def fetchall(self) -> list[Sequence[Any]]:
        ...

    def close(self) -> None:
        ...


@runtime_checkable
class Connection(Protocol):
    """
    Minimal SYNCHRONOUS connection interface for the DAO.

    ``autocommit`` follows JDBC semantics: while it is ``True`` every
    statement commits on its own; setting it to ``False`` opens an explicit
    transaction that lasts until :meth:`commit` or :meth:`rollback`.

    Examples:
        >>> conn.autocommit = False
        >>> cur = conn.cursor()
        >>> cur.execute("UPDATE project SET notes = ? WHERE project_id = ?", ("x", 1))
        >>> conn.commit()
        >>> conn.autocommit = True
    """

    @property
    def autocommit(self) -> bool:
        ...

    @autocommit.setter
    def autocommit(self, value: bool) -> None:
        ...

    def cursor(self) -> Cursor:
        ...

    def commit(self) -> None:
        ...

    def rollback(self) -> None:
        ...

    def close(self) -> None:
        ...


@runtime_checkable
class ConnectionProvider(Protocol):
    """Anything that hands out a fresh :class:`Connection` per call."""

    def get_connection(self) -> Connection:
        ...


__all__ = [
    "Cursor",
    "Connection",
    "ConnectionProvider",
]
