"""
Transaction coordinator — begin/commit/rollback around one unit of work.

Manifesto:
    Every DAO operation runs inside an explicit transaction, even a single
    SELECT. A connection is acquired for the operation, the transaction is
    opened, statements run, and exactly one of commit or rollback happens
    before the connection is released. Callers see one failure kind,
    :class:`~projectdb.core.errors.DataAccessError`, whichever layer failed.

    - **Rollback exactly once:** any exception after acquisition rolls back
    - **Original error wins:** a failed rollback is logged and attached,
      never raised in place of the error that caused it
    - **No leaked state:** auto-commit is restored after commit or rollback,
      so a pooled connection goes back clean

State machine::

    IDLE ──start──▶ TRANSACTION_OPEN ──stmt──▶ EXECUTING ──stmt──▶ EXECUTING
                          │                        │
                          ├────────commit──────────┴──▶ COMMITTED ──┐
                          └───any exception────────────▶ ROLLED_BACK ┤
                                                                     ▼
                                                         CONNECTION_CLOSED

Examples:
    >>> with unit_of_work(adapter, "delete_project") as uow:
    ...     rows = uow.execute_update(stmt)
    >>> uow.state
    <TransactionState.CONNECTION_CLOSED: 'connection_closed'>

Guardrails:
    ❌ DON'T: Call ``conn.commit()`` directly from DAO methods
    ✅ DO: Let ``unit_of_work`` commit when the block exits normally

    ❌ DON'T: Catch exceptions inside the block to "continue" the transaction
    ✅ DO: Let them escape; the coordinator rolls back and wraps them

Tags:
    transaction, unit-of-work, rollback, autocommit, projectdb
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from projectdb.core.enums import TransactionState
from projectdb.core.errors import DataAccessError, TransactionError
from projectdb.core.logging import get_logger
from projectdb.core.protocols import Connection, ConnectionProvider, Cursor
from projectdb.dao.binding import Statement

logger = get_logger(__name__)


# =============================================================================
# PRIMITIVES
# =============================================================================


def _restore_autocommit(conn: Connection) -> None:
    try:
        conn.autocommit = True
    except Exception as e:  # noqa: BLE001 - connection is closed right after
        logger.warning("autocommit_restore_failed", error=str(e))


def start_transaction(conn: Connection) -> None:
    """Disable auto-commit, opening an explicit transaction."""
    try:
        conn.autocommit = False
    except Exception as e:
        raise TransactionError(f"Failed to start transaction: {e}", phase="begin", cause=e) from e


def commit_transaction(conn: Connection) -> None:
    """Commit, then restore auto-commit whatever the outcome."""
    try:
        conn.commit()
    except Exception as e:
        raise TransactionError(f"Failed to commit transaction: {e}", phase="commit", cause=e) from e
    finally:
        _restore_autocommit(conn)


def rollback_transaction(conn: Connection) -> None:
    """Roll back, then restore auto-commit whatever the outcome."""
    try:
        conn.rollback()
    except Exception as e:
        raise TransactionError(f"Failed to roll back transaction: {e}", phase="rollback", cause=e) from e
    finally:
        _restore_autocommit(conn)


# =============================================================================
# UNIT OF WORK
# =============================================================================


class UnitOfWork:
    """
    One operation's connection and transaction.

    Statements go through :meth:`execute_update` and :meth:`execute_query`
    so the state machine reflects what has run. ``history`` records every
    state the unit passed through.
    """

    def __init__(self, connection: Connection, operation: str):
        self.connection = connection
        self.operation = operation
        self.state = TransactionState.IDLE
        self.history: list[TransactionState] = [TransactionState.IDLE]
        self.statements = 0
        self.rollback_error: BaseException | None = None

    def _transition(self, state: TransactionState) -> None:
        self.state = state
        self.history.append(state)

    def _executing(self) -> None:
        if self.state not in (TransactionState.TRANSACTION_OPEN, TransactionState.EXECUTING):
            raise TransactionError(
                f"Cannot execute in state {self.state.value}", phase="execute"
            ).with_context(operation=self.operation)
        self.statements += 1
        if self.state is not TransactionState.EXECUTING:
            self._transition(TransactionState.EXECUTING)

    def execute_update(self, statement: Statement) -> int:
        self._executing()
        return statement.execute_update(self.connection)

    def execute_query(self, statement: Statement) -> Cursor:
        self._executing()
        return statement.execute_query(self.connection)

    def _rollback(self) -> None:
        try:
            rollback_transaction(self.connection)
        except TransactionError as e:
            self.rollback_error = e
            logger.error("rollback_failed", operation=self.operation, error=str(e))
            return
        self._transition(TransactionState.ROLLED_BACK)

    def __repr__(self) -> str:
        return f"UnitOfWork({self.operation!r}, state={self.state.value}, statements={self.statements})"


@contextmanager
def unit_of_work(provider: ConnectionProvider, operation: str) -> Iterator[UnitOfWork]:
    """
    Acquire a connection, run the block in a transaction, always release.

    Raises:
        DataAccessError: anything failed, from connection acquisition to
            commit. ``cause`` is the original exception and
            ``rollback_error`` the rollback failure, if any.
    """
    try:
        conn = provider.get_connection()
    except Exception as e:
        raise DataAccessError(
            f"{operation}: could not acquire connection: {e}", operation=operation, cause=e
        ) from e

    uow = UnitOfWork(conn, operation)
    try:
        try:
            start_transaction(conn)
            uow._transition(TransactionState.TRANSACTION_OPEN)
            yield uow
            commit_transaction(conn)
            uow._transition(TransactionState.COMMITTED)
            logger.debug("transaction_committed", operation=operation, statements=uow.statements)
        except Exception as e:
            uow._rollback()
            logger.warning("transaction_rolled_back", operation=operation, error=str(e))
            if isinstance(e, DataAccessError):
                e.rollback_error = e.rollback_error or uow.rollback_error
                raise
            raise DataAccessError(
                f"{operation} failed: {e}",
                operation=operation,
                cause=e,
                rollback_error=uow.rollback_error,
            ) from e
        except BaseException:
            # KeyboardInterrupt and friends propagate unwrapped
            uow._rollback()
            raise
    finally:
        try:
            conn.close()
        except Exception as e:  # noqa: BLE001 - outcome already decided
            logger.warning("connection_close_failed", operation=operation, error=str(e))
        uow._transition(TransactionState.CONNECTION_CLOSED)


__all__ = [
    "start_transaction",
    "commit_transaction",
    "rollback_transaction",
    "UnitOfWork",
    "unit_of_work",
]
