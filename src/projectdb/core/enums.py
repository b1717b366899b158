"""
Shared enums for projectdb.

Enums in this module are used by the mapper, the binder and the dialects
alike. Import from here to avoid cross-module coupling.

STDLIB ONLY - NO PYDANTIC.
"""

from enum import Enum


class SqlType(str, Enum):
    """
    Declared SQL type of a column or statement parameter.

    The binder dispatches on the declared type rather than on the runtime
    type of the value, because ``None`` carries no type of its own.
    The mapper uses the same enum to convert column values back into
    field values.
    """

    TEXT = "text"
    INTEGER = "integer"
    DECIMAL = "decimal"
    FLOAT = "float"
    BOOLEAN = "boolean"

    # Date/time variants
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"

    BLOB = "blob"


class TransactionState(str, Enum):
    """
    Lifecycle of a single DAO operation.

    Idle → TransactionOpen → Executing → Committed | RolledBack → ConnectionClosed
    """

    IDLE = "idle"
    TRANSACTION_OPEN = "transaction_open"
    EXECUTING = "executing"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"
    CONNECTION_CLOSED = "connection_closed"


__all__ = [
    "SqlType",
    "TransactionState",
]
