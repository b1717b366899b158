"""Shared plumbing for DAO classes."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import closing, contextmanager
from typing import Any, TypeVar

from projectdb.core.adapters.base import DatabaseAdapter
from projectdb.core.dialect import Dialect
from projectdb.core.enums import SqlType
from projectdb.core.errors import DataAccessError
from projectdb.core.logging import LogContext
from projectdb.core.protocols import Connection, Cursor
from projectdb.dao import mapping
from projectdb.dao.binding import Statement
from projectdb.dao.transaction import UnitOfWork, unit_of_work

E = TypeVar("E")


class DaoBase:
    """
    Base class for DAOs.

    Holds the adapter every operation borrows its connection from, and
    wraps the binder, mapper and transaction coordinator behind short
    helpers so DAO methods read as SQL plus bindings.
    """

    def __init__(self, adapter: DatabaseAdapter):
        self._adapter = adapter

    @property
    def adapter(self) -> DatabaseAdapter:
        return self._adapter

    @property
    def dialect(self) -> Dialect:
        return self._adapter.dialect

    def statement(self, sql: str) -> Statement:
        """Prepare ``sql`` written with ``?`` placeholders for this dialect."""
        return Statement(sql.replace("?", self.dialect.placeholder(0)), self.dialect)

    @staticmethod
    def set_parameter(stmt: Statement, index: int, value: Any, sql_type: SqlType) -> None:
        stmt.set_parameter(index, value, sql_type)

    @staticmethod
    def extract(cursor: Cursor, entity_type: type[E]) -> list[E]:
        """Map every row of ``cursor`` to ``entity_type`` and close it."""
        with closing(cursor):
            return mapping.extract_all(cursor, entity_type)

    def get_last_insert_id(self, conn: Connection, table: str) -> int:
        """Identifier generated by the last INSERT on ``conn``; call before commit."""
        with closing(conn.cursor()) as cursor:
            cursor.execute(self.dialect.last_insert_id_query(table))
            row = cursor.fetchone()
        if row is None or row[0] is None:
            raise DataAccessError(f"Unable to obtain generated id for {table}", operation="insert")
        return int(row[0])

    @contextmanager
    def unit_of_work(self, operation: str) -> Iterator[UnitOfWork]:
        with LogContext(operation=operation), unit_of_work(self._adapter, operation) as uow:
            yield uow
