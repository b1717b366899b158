"""SQL dialect abstraction for database-agnostic DAO code.

Provides a ``Dialect`` protocol and concrete implementations for the
supported backends.  The DAO uses ``Dialect`` methods to generate SQL
fragments (placeholders, last-insert-id queries) and to adapt bound
values to what each driver accepts, without importing any driver.

Manifesto:
    The same DAO must run against SQLite in tests and MySQL in production.
    Without a dialect layer, placeholder syntax and value adaptation leak
    into every statement.

    - **One interface:** Dialect protocol for all backend differences
    - **Zero coupling:** DAO code never imports database drivers
    - **Testable:** SQLiteDialect for tests, MySQLDialect for prod

Architecture::

    DAO Code:
    ┌────────────────────────────────────────────────────────────────┐
    │  sql = f"UPDATE project SET notes = {d.placeholder(0)} ..."    │
    │  value = d.adapt(SqlType.DECIMAL, Decimal("10.50"))            │
    │  cursor.execute(sql, params)                                   │
    └────────────────────────────────────────────────────────────────┘
                              │
                              ▼
    ┌──────────────────────────────┐ ┌──────────────────────────────┐
    │ SQLite                       │ │ MySQL                        │
    │ ?, ?, ?                      │ │ %s, %s, %s                   │
    │ SELECT last_insert_rowid()   │ │ SELECT LAST_INSERT_ID()      │
    │ Decimal → str, date → ISO    │ │ native Decimal / date        │
    └──────────────────────────────┘ └──────────────────────────────┘

Examples:
    >>> from projectdb.core.dialect import get_dialect
    >>> d = get_dialect("sqlite")
    >>> d.placeholders(3)
    '?, ?, ?'
    >>> get_dialect("mysql").last_insert_id_query("project")
    'SELECT LAST_INSERT_ID()'

Guardrails:
    ❌ DON'T: Write backend-specific SQL in the DAO
    ✅ DO: Use Dialect methods for placeholders and identity retrieval

    ❌ DON'T: Call ``adapt()`` with unchecked values
    ✅ DO: Let the ParameterBinder validate against the declared type first

Tags:
    dialect, sql, abstraction, portability, database, projectdb
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from projectdb.core.enums import SqlType


@runtime_checkable
class Dialect(Protocol):
    """SQL dialect contract.

    Fragment methods return SQL strings valid for the target database;
    :meth:`adapt` returns a Python value the target driver can bind.
    """

    @property
    def name(self) -> str:
        """Human-readable dialect name (e.g. ``'sqlite'``)."""
        ...

    # -- Placeholder generation --------------------------------------------

    def placeholder(self, index: int) -> str:
        """Single positional placeholder (0-based index).

        ``index`` is ignored by dialects that use anonymous placeholders
        (SQLite ``?``, MySQL ``%s``).
        """
        ...

    def placeholders(self, count: int) -> str:
        """Comma-separated placeholder list.

        >>> dialect.placeholders(3)
        '?, ?, ?'          # SQLite
        '%s, %s, %s'       # MySQL
        """
        ...

    # -- Identity ----------------------------------------------------------

    def last_insert_id_query(self, table: str) -> str:
        """Query returning the identifier generated by the last INSERT.

        Must run on the same connection, inside the same transaction, as
        the INSERT it refers to.
        """
        ...

    # -- Value adaptation --------------------------------------------------

    def adapt(self, sql_type: SqlType, value: Any) -> Any:
        """Convert a non-None value of the declared type for the driver."""
        ...

    # -- DDL helpers -------------------------------------------------------

    def auto_increment(self) -> str:
        """DDL fragment for an auto-incrementing integer primary key."""
        ...

    def table_exists_query(self) -> str:
        """Query taking one table-name placeholder; returns rows if it exists."""
        ...


# =========================================================================
# Concrete Dialect Implementations
# =========================================================================


class SQLiteDialect:
    """SQLite dialect — ``?`` placeholders, ``last_insert_rowid()``.

    The stdlib ``sqlite3`` module cannot bind :class:`~decimal.Decimal`
    and its default date adapters are deprecated, so both are sent as text.
    """

    @property
    def name(self) -> str:
        return "sqlite"

    def placeholder(self, index: int) -> str:  # noqa: ARG002
        return "?"

    def placeholders(self, count: int) -> str:
        return ", ".join("?" for _ in range(count))

    def last_insert_id_query(self, table: str) -> str:  # noqa: ARG002
        return "SELECT last_insert_rowid()"

    def adapt(self, sql_type: SqlType, value: Any) -> Any:
        if sql_type is SqlType.DECIMAL:
            return str(value)
        if sql_type is SqlType.BOOLEAN:
            return 1 if value else 0
        if sql_type in (SqlType.DATE, SqlType.TIME, SqlType.DATETIME):
            return value.isoformat()
        if sql_type is SqlType.BLOB:
            return bytes(value)
        return value

    def auto_increment(self) -> str:
        return "INTEGER PRIMARY KEY AUTOINCREMENT"

    def table_exists_query(self) -> str:
        return "SELECT name FROM sqlite_master WHERE type='table' AND name = ?"


class MySQLDialect:
    """MySQL dialect — ``%s`` placeholders, ``LAST_INSERT_ID()``.

    Compatible with ``mysql.connector`` (``%s`` format paramstyle), which
    binds Decimal, date/time and bytes natively.
    """

    @property
    def name(self) -> str:
        return "mysql"

    def placeholder(self, index: int) -> str:  # noqa: ARG002
        return "%s"

    def placeholders(self, count: int) -> str:
        return ", ".join("%s" for _ in range(count))

    def last_insert_id_query(self, table: str) -> str:  # noqa: ARG002
        # LAST_INSERT_ID() is per-connection, so the table name is not needed
        return "SELECT LAST_INSERT_ID()"

    def adapt(self, sql_type: SqlType, value: Any) -> Any:
        if sql_type is SqlType.BOOLEAN:
            return bool(value)
        if sql_type is SqlType.BLOB:
            return bytes(value)
        return value

    def auto_increment(self) -> str:
        return "INT AUTO_INCREMENT NOT NULL"

    def table_exists_query(self) -> str:
        return (
            "SELECT table_name FROM information_schema.tables "
            "WHERE table_schema = DATABASE() AND table_name = %s"
        )


# =========================================================================
# Registry
# =========================================================================

_DIALECTS: dict[str, Dialect] = {
    "sqlite": SQLiteDialect(),
    "mysql": MySQLDialect(),
    "mariadb": MySQLDialect(),
}


def get_dialect(db_type: str) -> Dialect:
    """Get a dialect by database type name.

    Args:
        db_type: One of ``'sqlite'``, ``'mysql'``, ``'mariadb'`` (or a
                 ``DatabaseType`` enum member).

    Raises:
        ValueError: If ``db_type`` is not recognised.
    """
    key = db_type.lower() if isinstance(db_type, str) else db_type.value
    if key not in _DIALECTS:
        raise ValueError(
            f"Unknown dialect '{db_type}'. "
            f"Supported: {sorted(_DIALECTS)}"
        )
    return _DIALECTS[key]


def register_dialect(name: str, dialect: Dialect) -> None:
    """Register a custom dialect implementation (third-party drivers, test doubles)."""
    _DIALECTS[name.lower()] = dialect


__all__ = [
    "Dialect",
    "SQLiteDialect",
    "MySQLDialect",
    "get_dialect",
    "register_dialect",
]
