"""Tests for projectdb.core.errors module."""

from projectdb.core.errors import (
    BindingError,
    ConfigError,
    ConnectivityError,
    DataAccessError,
    ErrorCategory,
    ErrorContext,
    MappingError,
    ProjectDbError,
    TransactionError,
    categorize_error,
    is_retryable,
)


class TestErrorContext:
    """Test ErrorContext dataclass."""

    def test_empty_context(self):
        assert ErrorContext().to_dict() == {}

    def test_only_set_fields_emitted(self):
        ctx = ErrorContext(operation="insert_project", table="project")
        assert ctx.to_dict() == {"operation": "insert_project", "table": "project"}

    def test_metadata_merged(self):
        ctx = ErrorContext(field="cost", metadata={"index": 3})
        assert ctx.to_dict() == {"field": "cost", "index": 3}

    def test_metadata_default_not_shared(self):
        first, second = ErrorContext(field="cost"), ErrorContext()
        first.metadata["index"] = 1
        assert second.metadata == {}
        assert first.field == "cost"


class TestProjectDbError:
    """Test the base error."""

    def test_defaults(self):
        err = ProjectDbError("boom")
        assert err.message == "boom"
        assert err.category == ErrorCategory.INTERNAL
        assert err.retryable is False
        assert err.cause is None
        assert str(err) == "boom"

    def test_cause_is_chained(self):
        original = ValueError("bad")
        err = ProjectDbError("wrapped", cause=original)
        assert err.cause is original
        assert err.__cause__ is original

    def test_with_context_known_and_extra_keys(self):
        err = ProjectDbError("x").with_context(table="step", attempt=2)
        assert err.context.table == "step"
        assert err.context.metadata == {"attempt": 2}

    def test_with_context_returns_self(self):
        err = ProjectDbError("x")
        assert err.with_context(operation="op") is err

    def test_to_dict(self):
        err = ProjectDbError("x", cause=KeyError("k")).with_context(operation="op")
        d = err.to_dict()
        assert d["error_type"] == "ProjectDbError"
        assert d["category"] == "INTERNAL"
        assert d["operation"] == "op"
        assert "k" in d["cause"]

    def test_repr(self):
        assert repr(ConfigError("nope")) == "ConfigError('nope', category=CONFIG)"


class TestLayerErrors:
    """Each layer error carries its own category and context."""

    def test_mapping_error(self):
        err = MappingError("cannot convert", field="cost", column="COST")
        assert err.category == ErrorCategory.MAPPING
        assert err.field == "cost"
        assert err.column == "COST"
        assert err.context.to_dict() == {"column": "COST", "field": "cost"}

    def test_binding_error_records_type_and_index(self):
        from projectdb.core.enums import SqlType

        err = BindingError("mismatch", sql_type=SqlType.DECIMAL, index=2)
        assert err.category == ErrorCategory.BINDING
        assert err.context.sql_type == "decimal"
        assert err.context.metadata["index"] == 2

    def test_transaction_error_phase(self):
        err = TransactionError("commit failed", phase="commit")
        assert err.phase == "commit"
        assert err.to_dict()["phase"] == "commit"

    def test_connectivity_error_is_retryable(self):
        assert ConnectivityError("down").retryable is True

    def test_all_subclass_base(self):
        for cls in (MappingError, BindingError, TransactionError, ConnectivityError, ConfigError, DataAccessError):
            assert issubclass(cls, ProjectDbError)


class TestDataAccessError:
    """Test the uniform DAO failure."""

    def test_operation_and_rollback_error(self):
        rb = TransactionError("rollback failed", phase="rollback")
        err = DataAccessError("insert failed", operation="insert_project", rollback_error=rb)
        assert err.category == ErrorCategory.DATABASE
        assert err.context.operation == "insert_project"
        assert err.rollback_error is rb
        assert err.to_dict()["rollback_error"] == "rollback failed"

    def test_to_dict_without_rollback_error(self):
        assert "rollback_error" not in DataAccessError("x").to_dict()


class TestUtilities:
    """Test is_retryable and categorize_error."""

    def test_retryable_from_wrapped_cause(self):
        err = DataAccessError("x", cause=ConnectivityError("down"))
        assert is_retryable(err) is True

    def test_not_retryable_from_mapping_cause(self):
        err = DataAccessError("x", cause=MappingError("bad"))
        assert is_retryable(err) is False

    def test_stdlib_connection_error_retryable(self):
        assert is_retryable(ConnectionError()) is True
        assert is_retryable(ValueError()) is False

    def test_categorize(self):
        assert categorize_error(BindingError("x")) == ErrorCategory.BINDING
        assert categorize_error(OSError()) == ErrorCategory.CONNECTIVITY
        assert categorize_error(TypeError()) == ErrorCategory.MAPPING
        assert categorize_error(RuntimeError()) == ErrorCategory.UNKNOWN
