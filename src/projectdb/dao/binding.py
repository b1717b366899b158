"""
Typed parameter binder — declared-type dispatch for statement placeholders.

Values are bound by the type the *caller declares*, never by the runtime
type of the value. A Python ``None`` carries no type, so a nullable
DECIMAL column and a nullable TEXT column look the same at runtime; only
the declared :class:`SqlType` says how the placeholder is meant to be
typed. The binder checks the value against that declaration, then lets
the :class:`~projectdb.core.dialect.Dialect` adapt it for the driver.

Architecture::

    stmt = Statement("INSERT INTO project (...) VALUES (?, ?, ?)", dialect)
    stmt.set_parameter(1, "Build shed", SqlType.TEXT)
    stmt.set_parameter(2, Decimal("10.5"), SqlType.DECIMAL)
    stmt.set_parameter(3, None, SqlType.DECIMAL)      # typed NULL
            │
            ▼
    ParameterBinder.bind(index, value, sql_type)
        ├── None             → NULL
        ├── type check       → BindingError on mismatch
        └── dialect.adapt()  → driver-ready value
            │
            ▼
    cursor.execute(stmt.sql, stmt.parameters())

Guardrails:
    ❌ DON'T: Pass a float for a DECIMAL column
    ✅ DO: Pass ``Decimal("10.50")`` so effort hours keep their precision

    ❌ DON'T: Build parameter tuples by hand in DAO methods
    ✅ DO: Use ``Statement.set_parameter`` with an explicit SqlType

Tags:
    binding, parameters, prepared-statement, sql-type, projectdb
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from projectdb.core.dialect import Dialect
from projectdb.core.enums import SqlType
from projectdb.core.errors import BindingError
from projectdb.core.logging import get_logger
from projectdb.core.protocols import Connection, Cursor

logger = get_logger(__name__)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_decimal(value: Any) -> bool:
    return isinstance(value, Decimal) or _is_integer(value)


def _is_float(value: Any) -> bool:
    return isinstance(value, float) or _is_integer(value)


def _is_date(value: Any) -> bool:
    return isinstance(value, date) and not isinstance(value, datetime)


# Declared type → accepted runtime values
_ACCEPTS: dict[SqlType, Callable[[Any], bool]] = {
    SqlType.TEXT: lambda v: isinstance(v, str),
    SqlType.INTEGER: _is_integer,
    SqlType.DECIMAL: _is_decimal,
    SqlType.FLOAT: _is_float,
    SqlType.BOOLEAN: lambda v: isinstance(v, bool),
    SqlType.DATE: _is_date,
    SqlType.TIME: lambda v: isinstance(v, time),
    SqlType.DATETIME: lambda v: isinstance(v, datetime),
    SqlType.BLOB: lambda v: isinstance(v, (bytes, bytearray, memoryview)),
}


class ParameterBinder:
    """Validates and adapts values for one dialect."""

    def __init__(self, dialect: Dialect):
        self._dialect = dialect

    @property
    def dialect(self) -> Dialect:
        return self._dialect

    def bind(self, index: int, value: Any, sql_type: SqlType) -> Any:
        """
        Return the driver value for placeholder ``index``.

        Raises:
            BindingError: ``sql_type`` has no binding rule, or ``value``
                does not match it.
        """
        try:
            declared = SqlType(sql_type)
        except ValueError as e:
            raise BindingError(
                f"Unsupported SQL type {sql_type!r} for parameter {index}",
                sql_type=sql_type,
                index=index,
                cause=e,
            ) from e

        if value is None:
            return None

        if not _ACCEPTS[declared](value):
            raise BindingError(
                f"Parameter {index} declared {declared.value} but got "
                f"{type(value).__name__} ({value!r})",
                sql_type=declared,
                index=index,
            )
        return self._dialect.adapt(declared, value)


class Statement:
    """
    A SQL statement plus its positionally bound parameters.

    Placeholders are numbered from 1. Every placeholder must be bound
    before the statement runs.
    """

    def __init__(self, sql: str, dialect: Dialect, *, param_count: int | None = None):
        self.sql = sql
        self._binder = ParameterBinder(dialect)
        if param_count is None:
            param_count = sql.count(dialect.placeholder(0))
        self._values: list[Any] = [None] * param_count
        self._bound: list[bool] = [False] * param_count

    @property
    def param_count(self) -> int:
        return len(self._values)

    def set_parameter(self, index: int, value: Any, sql_type: SqlType) -> Statement:
        """Bind ``value`` as ``sql_type`` at 1-based position ``index``."""
        if not 1 <= index <= self.param_count:
            raise BindingError(
                f"Parameter index {index} out of range 1..{self.param_count}",
                sql_type=sql_type,
                index=index,
            )
        self._values[index - 1] = self._binder.bind(index, value, sql_type)
        self._bound[index - 1] = True
        return self

    def parameters(self) -> tuple[Any, ...]:
        unbound = [i + 1 for i, bound in enumerate(self._bound) if not bound]
        if unbound:
            raise BindingError(f"Unbound parameters {unbound} in: {self.sql}")
        return tuple(self._values)

    def execute(self, cursor: Cursor) -> Cursor:
        params = self.parameters()
        logger.debug("statement_executing", sql=self.sql, params=len(params))
        cursor.execute(self.sql, params)
        return cursor

    def execute_update(self, conn: Connection) -> int:
        """Run an INSERT/UPDATE/DELETE and return the affected-row count."""
        cursor = conn.cursor()
        try:
            self.execute(cursor)
            return cursor.rowcount
        finally:
            cursor.close()

    def execute_query(self, conn: Connection) -> Cursor:
        """Run a query and return its open cursor. The caller closes it."""
        cursor = conn.cursor()
        try:
            return self.execute(cursor)
        except BaseException:
            cursor.close()
            raise

    def __repr__(self) -> str:
        return f"Statement({self.sql!r}, bound={sum(self._bound)}/{self.param_count})"


__all__ = [
    "ParameterBinder",
    "Statement",
]
