"""Database adapter base class.

Manifesto:
    The DAO asks for one connection per operation and closes it when the
    operation ends.  Adapters own everything about *how* that connection
    is produced (file path, pool, credentials, pragmas) so the DAO never
    depends on a specific database vendor.

Features:
    - Abstract ``get_connection()`` returning a fresh ``Connection``
    - Property-based dialect and db-type introspection
    - Context-manager protocol releasing adapter-level resources (pools)
    - Config-driven construction from ``DatabaseConfig``

Tags:
    projectdb, database, abstract-base, adapter-pattern
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from projectdb.core.dialect import Dialect, get_dialect
from projectdb.core.protocols import Connection

from .types import DatabaseConfig, DatabaseType


class DatabaseAdapter(ABC):
    """
    Abstract base class for database adapters.

    Implementations satisfy :class:`~projectdb.core.protocols.ConnectionProvider`.
    Every :meth:`get_connection` call returns a connection the caller owns
    and must close; closing a pooled connection returns it to the pool.
    """

    def __init__(self, config: DatabaseConfig):
        self._config = config
        self._dialect: Dialect = get_dialect(config.db_type.value)

    @property
    def config(self) -> DatabaseConfig:
        return self._config

    @property
    def dialect(self) -> Dialect:
        """SQL dialect for this adapter's database type."""
        return self._dialect

    @property
    def db_type(self) -> DatabaseType:
        """Database type."""
        return self._config.db_type

    @abstractmethod
    def get_connection(self) -> Connection:
        """Open (or borrow) a connection. Raises ``ConnectivityError`` on failure."""
        ...

    def close(self) -> None:
        """Release adapter-level resources. Connections already handed out stay open."""

    def __enter__(self) -> DatabaseAdapter:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._config.to_connection_string()!r})"


__all__ = [
    "DatabaseAdapter",
]
