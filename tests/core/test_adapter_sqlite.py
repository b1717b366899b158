"""Tests for ``projectdb.core.adapters.sqlite`` — SQLite adapter."""

from __future__ import annotations

import sqlite3
from unittest.mock import patch

import pytest

from projectdb.core.adapters.sqlite import SQLiteAdapter, SqliteConnection
from projectdb.core.dialect import SQLiteDialect
from projectdb.core.errors import ConnectivityError
from projectdb.core.protocols import Connection, ConnectionProvider


class TestSQLiteAdapterInit:
    def test_default_memory(self):
        adapter = SQLiteAdapter()
        assert adapter.db_type.value == "sqlite"
        assert adapter.is_memory is True
        assert isinstance(adapter.dialect, SQLiteDialect)
        adapter.close()

    def test_custom_path(self, tmp_path):
        adapter = SQLiteAdapter(path=str(tmp_path / "p.db"))
        assert adapter.is_memory is False
        assert adapter.config.path.endswith("p.db")

    def test_satisfies_provider_protocol(self):
        with SQLiteAdapter() as adapter:
            assert isinstance(adapter, ConnectionProvider)

    def test_repr_shows_url(self, tmp_path):
        adapter = SQLiteAdapter(path=str(tmp_path / "p.db"))
        assert "sqlite:///" in repr(adapter)


class TestSQLiteAdapterGetConnection:
    def test_returns_wrapped_connection(self, tmp_path):
        adapter = SQLiteAdapter(path=str(tmp_path / "p.db"))
        conn = adapter.get_connection()
        assert isinstance(conn, SqliteConnection)
        assert isinstance(conn, Connection)
        conn.close()

    def test_foreign_keys_enabled(self, tmp_path):
        adapter = SQLiteAdapter(path=str(tmp_path / "p.db"))
        conn = adapter.get_connection()
        assert conn.raw.execute("PRAGMA foreign_keys").fetchone()[0] == 1
        conn.close()

    def test_memory_database_shared_between_connections(self):
        adapter = SQLiteAdapter()
        first = adapter.get_connection()
        first.raw.execute("CREATE TABLE t (x INT)")
        first.raw.execute("INSERT INTO t VALUES (1)")
        first.close()

        second = adapter.get_connection()
        assert second.raw.execute("SELECT x FROM t").fetchall() == [(1,)]
        second.close()
        adapter.close()

    def test_separate_memory_adapters_are_isolated(self):
        a, b = SQLiteAdapter(), SQLiteAdapter()
        conn = a.get_connection()
        conn.raw.execute("CREATE TABLE only_in_a (x INT)")
        conn.close()

        other = b.get_connection()
        rows = other.raw.execute(
            "SELECT name FROM sqlite_master WHERE name = 'only_in_a'"
        ).fetchall()
        assert rows == []
        other.close()
        a.close()
        b.close()

    @patch("sqlite3.connect", side_effect=sqlite3.OperationalError("unable to open database"))
    def test_connect_failure_raises(self, mock_connect):
        adapter = SQLiteAdapter(path="/nonexistent/path.db")
        with pytest.raises(ConnectivityError, match="Failed to connect to SQLite"):
            adapter.get_connection()


class TestSqliteConnectionAutocommit:
    """The JDBC-style autocommit switch the transaction coordinator relies on."""

    @pytest.fixture
    def conn(self, tmp_path):
        adapter = SQLiteAdapter(path=str(tmp_path / "p.db"))
        conn = adapter.get_connection()
        conn.raw.execute("CREATE TABLE t (x INT)")
        yield conn
        conn.close()

    def test_starts_in_autocommit(self, conn):
        assert conn.autocommit is True

    def test_disable_opens_transaction(self, conn):
        conn.autocommit = False
        assert conn.raw.in_transaction is True
        assert conn.autocommit is False
        conn.rollback()

    def test_rollback_discards(self, conn):
        conn.autocommit = False
        conn.cursor().execute("INSERT INTO t VALUES (1)")
        conn.rollback()
        conn.autocommit = True
        assert conn.raw.execute("SELECT COUNT(*) FROM t").fetchone()[0] == 0

    def test_commit_keeps(self, conn):
        conn.autocommit = False
        conn.cursor().execute("INSERT INTO t VALUES (1)")
        conn.commit()
        conn.autocommit = True
        assert conn.raw.execute("SELECT COUNT(*) FROM t").fetchone()[0] == 1

    def test_enabling_commits_open_transaction(self, conn):
        conn.autocommit = False
        conn.cursor().execute("INSERT INTO t VALUES (2)")
        conn.autocommit = True
        assert conn.raw.in_transaction is False
        assert conn.raw.execute("SELECT COUNT(*) FROM t").fetchone()[0] == 1

    def test_disable_twice_is_harmless(self, conn):
        conn.autocommit = False
        conn.autocommit = False
        assert conn.raw.in_transaction is True
        conn.rollback()
