"""SQLite database adapter.

Uses the built-in ``sqlite3`` module.  Each :meth:`SQLiteAdapter.get_connection`
call opens a new ``sqlite3.Connection`` in driver-level autocommit mode
(``isolation_level=None``) and wraps it in :class:`SqliteConnection`, which
adds the JDBC-style ``autocommit`` switch the transaction coordinator uses.

An in-memory database is shared between the connections of one adapter
through a named shared-cache URI, kept alive by an anchor connection until
:meth:`SQLiteAdapter.close`.
"""

from __future__ import annotations

import itertools
import sqlite3
from typing import Any

from projectdb.core.errors import ConnectivityError
from projectdb.core.logging import get_logger

from .base import DatabaseAdapter
from .types import DatabaseConfig, DatabaseType

logger = get_logger(__name__)

_memory_ids = itertools.count(1)


class SqliteConnection:
    """Adapter: ``sqlite3.Connection`` → ``Connection`` protocol.

    ``autocommit = False`` issues ``BEGIN``; ``commit()``/``rollback()``
    end the transaction; ``autocommit = True`` commits anything still open.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    # -- Connection protocol -----------------------------------------------

    @property
    def autocommit(self) -> bool:
        return not self._conn.in_transaction

    @autocommit.setter
    def autocommit(self, value: bool) -> None:
        if value:
            if self._conn.in_transaction:
                self._conn.commit()
        elif not self._conn.in_transaction:
            self._conn.execute("BEGIN")

    def cursor(self) -> sqlite3.Cursor:
        return self._conn.cursor()

    def commit(self) -> None:
        self._conn.commit()

    def rollback(self) -> None:
        self._conn.rollback()

    def close(self) -> None:
        self._conn.close()

    # -- convenience -------------------------------------------------------

    @property
    def raw(self) -> sqlite3.Connection:
        """Access the underlying ``sqlite3.Connection`` (e.g. for pragmas)."""
        return self._conn

    def __repr__(self) -> str:
        return f"SqliteConnection({self._conn!r})"


class SQLiteAdapter(DatabaseAdapter):
    """
    SQLite database adapter.

    Suitable for:
    - Development and testing
    - Single-process applications
    """

    def __init__(
        self,
        path: str = ":memory:",
        *,
        timeout: float = 5.0,
        **kwargs: Any,
    ):
        config = DatabaseConfig(
            db_type=DatabaseType.SQLITE,
            path=path,
            options=kwargs,
        )
        super().__init__(config)
        self._timeout = timeout
        self._anchor: sqlite3.Connection | None = None

        if path in ("", ":memory:"):
            self._target = f"file:projectdb-mem-{next(_memory_ids)}?mode=memory&cache=shared"
            self._uri = True
            self._anchor = self._open()
        else:
            self._target = path
            self._uri = path.startswith("file:")

    @property
    def is_memory(self) -> bool:
        return self._anchor is not None

    def _open(self) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(
                self._target,
                timeout=self._timeout,
                isolation_level=None,
                check_same_thread=False,
                uri=self._uri,
            )
            conn.execute("PRAGMA foreign_keys = ON")
        except sqlite3.Error as e:
            raise ConnectivityError(
                f"Failed to connect to SQLite: {e}",
                cause=e,
            ).with_context(path=self._config.path) from e
        return conn

    def get_connection(self) -> SqliteConnection:
        """Open a new SQLite connection."""
        conn = SqliteConnection(self._open())
        logger.debug("connection_opened", backend="sqlite", path=self._config.path)
        return conn

    def close(self) -> None:
        """Close the in-memory anchor, discarding an in-memory database."""
        if self._anchor is not None:
            self._anchor.close()
            self._anchor = None


__all__ = [
    "SqliteConnection",
    "SQLiteAdapter",
]
