"""projectdb core -- errors, dialects, adapters and ambient plumbing.

Manifesto:
    The DAO layer needs a small set of foundations that know nothing about
    projects: a structured error hierarchy, an explicit found/not-found
    result, the DB-API protocols it talks to, per-backend SQL dialects,
    connection adapters, and the logging/settings stack.  They live here
    so ``projectdb.dao`` only contains persistence logic.

Architecture::

    Layer 1 -- Type System & Errors
        errors.py          Structured error hierarchy (ProjectDbError, DataAccessError)
        lookup.py          Lookup[T] result (Found / NotFound)
        enums.py           SqlType, TransactionState
        protocols.py       Cursor, Connection, ConnectionProvider

    Layer 2 -- Database
        dialect.py         SQL dialect abstraction (SQLite, MySQL)
        adapters/          Database adapters (SQLite, MySQL)
        connection.py      Adapter factory from a URL (create_adapter)
        schema.py          DDL per backend + apply_schema()

    Layer 3 -- Ambient
        settings.py        pydantic-settings configuration (PROJECTDB_*)
        logging.py         structlog configuration and helpers

Tags:
    projectdb, core, errors, dialect, adapters, settings, logging
"""

from projectdb.core.adapters import DatabaseAdapter, MySQLAdapter, SQLiteAdapter, get_adapter
from projectdb.core.connection import ConnectionInfo, create_adapter
from projectdb.core.dialect import Dialect, get_dialect
from projectdb.core.enums import SqlType, TransactionState
from projectdb.core.errors import (
    BindingError,
    ConfigError,
    ConnectivityError,
    DataAccessError,
    ErrorCategory,
    MappingError,
    ProjectDbError,
    TransactionError,
)
from projectdb.core.logging import configure_logging, get_logger
from projectdb.core.lookup import Found, Lookup, NotFound
from projectdb.core.protocols import Connection, ConnectionProvider, Cursor
from projectdb.core.schema import apply_schema, missing_tables
from projectdb.core.settings import ProjectDbSettings, get_settings

__all__ = [
    # Errors
    "ErrorCategory",
    "ProjectDbError",
    "MappingError",
    "BindingError",
    "TransactionError",
    "ConnectivityError",
    "ConfigError",
    "DataAccessError",
    # Results
    "Found",
    "NotFound",
    "Lookup",
    # Types / protocols
    "SqlType",
    "TransactionState",
    "Cursor",
    "Connection",
    "ConnectionProvider",
    # Database
    "Dialect",
    "get_dialect",
    "DatabaseAdapter",
    "SQLiteAdapter",
    "MySQLAdapter",
    "get_adapter",
    "ConnectionInfo",
    "create_adapter",
    "apply_schema",
    "missing_tables",
    # Ambient
    "ProjectDbSettings",
    "get_settings",
    "configure_logging",
    "get_logger",
]
