"""Database adapters -- connection provisioning for the DAO.

Manifesto:
    The DAO runs identically on SQLite (tests, local use) and MySQL
    (production).  Adapters are the only place that knows how to open a
    connection; the DAO just asks for one per operation and closes it.

    Each adapter is **import-guarded**: the MySQL driver is only required
    when the first connection is requested.  Install the extra::

        pip install projectdb[mysql]        # mysql-connector-python

Architecture::

    DatabaseAdapter (base.py)        Abstract base: get_connection/close
        |-- SQLiteAdapter            stdlib sqlite3 (always available)
        |-- MySQLAdapter             mysql.connector (optional)

    AdapterRegistry (registry.py)    Singleton: DatabaseType -> adapter class
    DatabaseConfig (types.py)        Config for connection parameters
    DatabaseType (types.py)          Enum of supported backends

Tags:
    projectdb, database, adapters, multi-backend, import-guarded,
    registry-pattern, sqlite, mysql
"""

from projectdb.core.dialect import Dialect, get_dialect
from projectdb.core.protocols import Connection

from .base import DatabaseAdapter
from .mysql import MySQLAdapter, MySQLConnection
from .registry import AdapterRegistry, adapter_registry, get_adapter
from .sqlite import SQLiteAdapter, SqliteConnection
from .types import DatabaseConfig, DatabaseType

__all__ = [
    # Types
    "DatabaseType",
    "DatabaseConfig",
    # Protocols / Abstractions
    "Connection",
    "Dialect",
    "get_dialect",
    # Base class
    "DatabaseAdapter",
    # Implementations
    "SQLiteAdapter",
    "SqliteConnection",
    "MySQLAdapter",
    "MySQLConnection",
    # Registry
    "AdapterRegistry",
    "adapter_registry",
    "get_adapter",
]
