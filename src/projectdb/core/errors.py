"""
Structured error types for projectdb.

Provides a small hierarchy of typed errors for the data-access layer. Each
layer raises its own error kind (mapping, binding, transaction,
connectivity) and every DAO operation surfaces exactly one kind to its
caller: :class:`DataAccessError`, chained to the layer error that caused it.

Manifesto:
    - **Typed Error Hierarchy:** Each layer of the DAO has its own error type
    - **One Error at the Boundary:** Callers above the DAO catch one class
    - **Rich Context:** Errors carry table, column, field and SQL type
    - **Error Chaining:** The original exception is always preserved

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────────┐
        │                       ProjectDbError                            │
        │  (category, retryable, context, cause)                          │
        ├─────────────────────────────────────────────────────────────────┤
        │                                                                 │
        │  MappingError      BindingError      TransactionError           │
        │  (MAPPING)         (BINDING)         (TRANSACTION)              │
        │                                                                 │
        │  ConnectivityError ConfigError       DataAccessError            │
        │  (CONNECTIVITY,    (CONFIG)          (DATABASE, wraps any of    │
        │   retryable)                          the above at the DAO      │
        │                                       operation boundary)       │
        └─────────────────────────────────────────────────────────────────┘

Examples:
    Wrapping a driver failure:

    >>> try:
    ...     raise OSError("connection refused")
    ... except OSError as e:
    ...     err = ConnectivityError("Cannot reach MySQL", cause=e)
    >>> err.retryable
    True
    >>> err.__cause__
    OSError('connection refused')

    Adding context:

    >>> err = MappingError("bad value", field="difficulty", column="difficulty")
    >>> err.to_dict()["field"]
    'difficulty'

Guardrails:
    ❌ DON'T: Let driver exceptions escape a DAO operation
    ✅ DO: Wrap them in DataAccessError with cause=

    ❌ DON'T: Replace the original failure with a rollback failure
    ✅ DO: Attach the rollback failure as rollback_error

Tags:
    error-handling, exception-hierarchy, error-context, dao, projectdb
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and logging.

    Attributes:
        MAPPING: Row-to-entity conversion failures
        BINDING: Unsupported or mismatched parameter types
        TRANSACTION: Begin/commit/rollback failures
        CONNECTIVITY: Connection acquisition failures
        DATABASE: Statement execution failures reported by the driver
        CONFIG: Missing or invalid settings, missing drivers
        INTERNAL: Bugs, unexpected state
        UNKNOWN: Uncategorized errors
    """

    MAPPING = "MAPPING"
    BINDING = "BINDING"
    TRANSACTION = "TRANSACTION"
    CONNECTIVITY = "CONNECTIVITY"
    DATABASE = "DATABASE"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Only non-None fields are emitted by :meth:`to_dict`, so the context can
    be passed straight into a structured log call.

    Attributes:
        operation: DAO operation name (e.g. ``"insert_project"``)
        table: Table being read or written
        column: Source column of a mapping failure
        field: Entity field of a mapping failure
        sql_type: Declared SQL type of a binding or mapping failure
        metadata: Additional key-value pairs
    """

    operation: str | None = None
    table: str | None = None
    column: str | None = None
    field: str | None = None
    sql_type: str | None = None

    metadata: dict[str, Any] = dataclasses.field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["operation", "table", "column", "field", "sql_type"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class ProjectDbError(Exception):
    """
    Base exception for all projectdb errors.

    Every instance carries a category, a retryable flag, an
    :class:`ErrorContext` and an optional cause. Subclasses set
    ``default_category`` and ``default_retryable``.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> ProjectDbError:
        """
        Add context to this error (fluent API).

        Usage:
            raise BindingError("Unsupported type").with_context(table="project")
        """
        for key, value in kwargs.items():
            if key != "metadata" and hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Serialize for structured logging."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result.update(context_dict)
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# LAYER ERRORS
# =============================================================================


class MappingError(ProjectDbError):
    """A result row could not be converted into an entity."""

    default_category = ErrorCategory.MAPPING

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        column: str | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.field = field
        self.column = column
        if field is not None:
            self.context.field = field
        if column is not None:
            self.context.column = column


class BindingError(ProjectDbError):
    """A value could not be bound to a statement placeholder."""

    default_category = ErrorCategory.BINDING

    def __init__(
        self,
        message: str,
        *,
        sql_type: Any = None,
        index: int | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.sql_type = sql_type
        self.index = index
        if sql_type is not None:
            self.context.sql_type = str(getattr(sql_type, "value", sql_type))
        if index is not None:
            self.context.metadata["index"] = index


class TransactionError(ProjectDbError):
    """Begin, commit or rollback failed."""

    default_category = ErrorCategory.TRANSACTION

    def __init__(self, message: str, *, phase: str | None = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.phase = phase
        if phase is not None:
            self.context.metadata["phase"] = phase


class ConnectivityError(ProjectDbError):
    """A connection to the store could not be acquired."""

    default_category = ErrorCategory.CONNECTIVITY
    default_retryable = True


class ConfigError(ProjectDbError):
    """Missing or invalid configuration."""

    default_category = ErrorCategory.CONFIG


class DataAccessError(ProjectDbError):
    """
    The one failure every DAO operation raises.

    Whatever layer failed (connection, binding, execution, mapping, commit),
    the DAO rolls back and raises a DataAccessError chained to the original
    exception. If the rollback itself failed, that secondary failure is kept
    in :attr:`rollback_error` instead of replacing the original.
    """

    default_category = ErrorCategory.DATABASE

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        rollback_error: BaseException | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.rollback_error = rollback_error
        if operation is not None:
            self.context.operation = operation

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.rollback_error is not None:
            result["rollback_error"] = str(self.rollback_error)
        return result


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def is_retryable(error: BaseException) -> bool:
    """Check if an error is retryable."""
    if isinstance(error, DataAccessError) and isinstance(error.cause, ProjectDbError):
        return error.cause.retryable
    if isinstance(error, ProjectDbError):
        return error.retryable
    return isinstance(error, (ConnectionError, TimeoutError))


def categorize_error(error: BaseException) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, ProjectDbError):
        return error.category
    if isinstance(error, (ConnectionError, OSError)):
        return ErrorCategory.CONNECTIVITY
    if isinstance(error, (TypeError, ValueError)):
        return ErrorCategory.MAPPING
    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "ProjectDbError",
    "MappingError",
    "BindingError",
    "TransactionError",
    "ConnectivityError",
    "ConfigError",
    "DataAccessError",
    "is_retryable",
    "categorize_error",
]
