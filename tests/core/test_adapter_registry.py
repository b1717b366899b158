"""Tests for the adapter registry, factory and configuration types."""

from __future__ import annotations

import pytest

from projectdb.core.adapters import (
    AdapterRegistry,
    DatabaseConfig,
    DatabaseType,
    MySQLAdapter,
    SQLiteAdapter,
    adapter_registry,
    get_adapter,
)
from projectdb.core.errors import ConfigError


class TestAdapterRegistry:
    def test_defaults_registered(self):
        assert AdapterRegistry().list_adapters() == ["mariadb", "mysql", "sqlite"]

    def test_create_sqlite(self, tmp_path):
        adapter = adapter_registry.create("sqlite", path=str(tmp_path / "r.db"))
        assert isinstance(adapter, SQLiteAdapter)

    def test_create_is_case_insensitive(self):
        assert isinstance(adapter_registry.create("MariaDB", database="p"), MySQLAdapter)

    def test_unknown_adapter(self):
        with pytest.raises(ConfigError, match="Unknown database adapter"):
            adapter_registry.create("oracle")

    def test_register_custom(self):
        registry = AdapterRegistry()
        registry.register("Lite", SQLiteAdapter)
        assert "lite" in registry.list_adapters()


class TestGetAdapter:
    def test_by_enum(self, tmp_path):
        adapter = get_adapter(DatabaseType.SQLITE, path=str(tmp_path / "g.db"))
        assert adapter.db_type is DatabaseType.SQLITE

    def test_by_name(self):
        adapter = get_adapter("mysql", host="db", database="projects")
        assert adapter.config.host == "db"


class TestDatabaseConfig:
    def test_sqlite_connection_string(self):
        assert DatabaseConfig(path="/tmp/x.db").to_connection_string() == "sqlite:////tmp/x.db"

    def test_sqlite_memory_connection_string(self):
        assert DatabaseConfig().to_connection_string() == "sqlite:///:memory:"

    def test_mysql_connection_string_without_user(self):
        cfg = DatabaseConfig(db_type=DatabaseType.MYSQL, host="db", database="p")
        assert cfg.to_connection_string() == "mysql://db:3306/p"
