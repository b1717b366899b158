"""Tests for ``projectdb.dao.transaction`` — the transaction coordinator.

Connections are ``MagicMock`` fakes so every failure point (begin,
statement, commit, rollback, close) can be forced.
"""

from __future__ import annotations

from unittest.mock import MagicMock, PropertyMock

import pytest

from projectdb.core.dialect import SQLiteDialect
from projectdb.core.enums import SqlType, TransactionState
from projectdb.core.errors import ConnectivityError, DataAccessError, TransactionError
from projectdb.dao.binding import Statement
from projectdb.dao.transaction import (
    UnitOfWork,
    commit_transaction,
    rollback_transaction,
    start_transaction,
    unit_of_work,
)


class FakeConnection:
    """Records autocommit changes; driver calls go to a MagicMock."""

    def __init__(self):
        self.driver = MagicMock()
        self.autocommit_history: list[bool] = []
        self._autocommit = True

    @property
    def autocommit(self) -> bool:
        return self._autocommit

    @autocommit.setter
    def autocommit(self, value: bool) -> None:
        self.autocommit_history.append(value)
        self._autocommit = value

    def cursor(self):
        return self.driver.cursor()

    def commit(self):
        self.driver.commit()

    def rollback(self):
        self.driver.rollback()

    def close(self):
        self.driver.close()


@pytest.fixture
def conn() -> FakeConnection:
    return FakeConnection()


@pytest.fixture
def provider(conn) -> MagicMock:
    provider = MagicMock()
    provider.get_connection.return_value = conn
    return provider


def _stmt() -> Statement:
    return Statement("DELETE FROM project WHERE project_id = ?", SQLiteDialect()).set_parameter(
        1, 1, SqlType.INTEGER
    )


# =========================================================================
# Primitives
# =========================================================================


class TestPrimitives:
    def test_start_disables_autocommit(self, conn):
        start_transaction(conn)
        assert conn.autocommit is False

    def test_commit_restores_autocommit(self, conn):
        start_transaction(conn)
        commit_transaction(conn)
        conn.driver.commit.assert_called_once()
        assert conn.autocommit is True

    def test_rollback_restores_autocommit(self, conn):
        start_transaction(conn)
        rollback_transaction(conn)
        conn.driver.rollback.assert_called_once()
        assert conn.autocommit is True

    def test_start_failure_wrapped(self):
        conn = MagicMock()
        type(conn).autocommit = PropertyMock(side_effect=RuntimeError("read-only"))
        with pytest.raises(TransactionError, match="start") as exc:
            start_transaction(conn)
        assert exc.value.phase == "begin"

    def test_commit_failure_still_restores_autocommit(self, conn):
        conn.driver.commit.side_effect = RuntimeError("disk full")
        start_transaction(conn)
        with pytest.raises(TransactionError) as exc:
            commit_transaction(conn)
        assert exc.value.phase == "commit"
        assert conn.autocommit is True

    def test_rollback_failure_still_restores_autocommit(self, conn):
        conn.driver.rollback.side_effect = RuntimeError("gone")
        start_transaction(conn)
        with pytest.raises(TransactionError) as exc:
            rollback_transaction(conn)
        assert exc.value.phase == "rollback"
        assert conn.autocommit is True

    def test_restore_failure_does_not_mask_commit_success(self):
        conn = MagicMock()
        type(conn).autocommit = PropertyMock(side_effect=[None, RuntimeError("closed")])
        start_transaction(conn)
        commit_transaction(conn)
        conn.commit.assert_called_once()


# =========================================================================
# Unit of work
# =========================================================================


class TestUnitOfWorkSuccess:
    def test_commits_and_closes(self, provider, conn):
        with unit_of_work(provider, "delete_project") as uow:
            uow.execute_update(_stmt())

        conn.driver.commit.assert_called_once()
        conn.driver.rollback.assert_not_called()
        conn.driver.close.assert_called_once()
        assert conn.autocommit_history == [False, True]

    def test_state_machine(self, provider):
        with unit_of_work(provider, "delete_project") as uow:
            assert uow.state is TransactionState.TRANSACTION_OPEN
            uow.execute_update(_stmt())
            uow.execute_update(_stmt())
            assert uow.state is TransactionState.EXECUTING

        assert uow.history == [
            TransactionState.IDLE,
            TransactionState.TRANSACTION_OPEN,
            TransactionState.EXECUTING,
            TransactionState.COMMITTED,
            TransactionState.CONNECTION_CLOSED,
        ]
        assert uow.statements == 2

    def test_transaction_open_even_without_statements(self, provider):
        with unit_of_work(provider, "noop") as uow:
            pass
        assert TransactionState.TRANSACTION_OPEN in uow.history
        assert uow.state is TransactionState.CONNECTION_CLOSED

    def test_execute_query_returns_cursor(self, provider, conn):
        with unit_of_work(provider, "fetch") as uow:
            cursor = uow.execute_query(_stmt())
        assert cursor is conn.driver.cursor.return_value


class TestUnitOfWorkFailure:
    def test_exception_rolls_back_once_and_wraps(self, provider, conn):
        original = RuntimeError("constraint violated")
        with pytest.raises(DataAccessError) as exc:
            with unit_of_work(provider, "insert_project"):
                raise original

        assert exc.value.cause is original
        assert exc.value.__cause__ is original
        assert exc.value.operation == "insert_project"
        assert exc.value.rollback_error is None
        conn.driver.rollback.assert_called_once()
        conn.driver.commit.assert_not_called()
        conn.driver.close.assert_called_once()
        assert conn.autocommit_history == [False, True]

    def test_failed_statement_state_machine(self, provider, conn):
        conn.driver.cursor.return_value.execute.side_effect = RuntimeError("locked")
        with pytest.raises(DataAccessError):
            with unit_of_work(provider, "delete_project") as uow:
                uow.execute_update(_stmt())

        assert uow.history == [
            TransactionState.IDLE,
            TransactionState.TRANSACTION_OPEN,
            TransactionState.EXECUTING,
            TransactionState.ROLLED_BACK,
            TransactionState.CONNECTION_CLOSED,
        ]

    def test_rollback_failure_does_not_mask_original(self, provider, conn):
        conn.driver.rollback.side_effect = RuntimeError("connection lost")
        original = ValueError("bad row")

        with pytest.raises(DataAccessError) as exc:
            with unit_of_work(provider, "fetch_project_by_id") as uow:
                raise original

        assert exc.value.cause is original
        assert isinstance(exc.value.rollback_error, TransactionError)
        assert "connection lost" in str(exc.value.rollback_error)
        assert exc.value.to_dict()["rollback_error"]
        assert uow.rollback_error is exc.value.rollback_error
        assert TransactionState.ROLLED_BACK not in uow.history
        conn.driver.close.assert_called_once()

    def test_commit_failure_rolls_back(self, provider, conn):
        conn.driver.commit.side_effect = RuntimeError("disk full")

        with pytest.raises(DataAccessError) as exc:
            with unit_of_work(provider, "modify_project_details"):
                pass

        assert isinstance(exc.value.cause, TransactionError)
        conn.driver.rollback.assert_called_once()
        conn.driver.close.assert_called_once()

    def test_connection_failure(self):
        provider = MagicMock()
        provider.get_connection.side_effect = ConnectivityError("refused")

        with pytest.raises(DataAccessError) as exc:
            with unit_of_work(provider, "fetch_all_projects"):
                pytest.fail("body must not run")

        assert isinstance(exc.value.cause, ConnectivityError)

    def test_data_access_error_not_double_wrapped(self, provider, conn):
        inner = DataAccessError("affected 0 rows", operation="insert_project")
        with pytest.raises(DataAccessError) as exc:
            with unit_of_work(provider, "insert_project"):
                raise inner
        assert exc.value is inner
        conn.driver.rollback.assert_called_once()

    def test_data_access_error_gets_rollback_failure(self, provider, conn):
        conn.driver.rollback.side_effect = RuntimeError("connection lost")
        inner = DataAccessError("affected 0 rows", operation="insert_project")
        with pytest.raises(DataAccessError) as exc:
            with unit_of_work(provider, "insert_project"):
                raise inner
        assert exc.value is inner
        assert isinstance(inner.rollback_error, TransactionError)
        assert "connection lost" in str(inner.rollback_error)

    def test_keyboard_interrupt_rolls_back_and_propagates(self, provider, conn):
        with pytest.raises(KeyboardInterrupt):
            with unit_of_work(provider, "fetch_all_projects"):
                raise KeyboardInterrupt
        conn.driver.rollback.assert_called_once()
        conn.driver.close.assert_called_once()

    def test_close_failure_does_not_replace_result(self, provider, conn):
        conn.driver.close.side_effect = RuntimeError("already closed")
        with unit_of_work(provider, "delete_project") as uow:
            uow.execute_update(_stmt())
        assert TransactionState.COMMITTED in uow.history


class TestUnitOfWorkGuards:
    def test_execute_after_close_rejected(self, provider):
        with unit_of_work(provider, "delete_project") as uow:
            pass
        with pytest.raises(TransactionError, match="connection_closed"):
            uow.execute_update(_stmt())

    def test_execute_before_start_rejected(self, conn):
        uow = UnitOfWork(conn, "manual")
        with pytest.raises(TransactionError, match="idle"):
            uow.execute_update(_stmt())

    def test_repr(self, conn):
        assert "manual" in repr(UnitOfWork(conn, "manual"))
