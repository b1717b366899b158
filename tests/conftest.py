"""
Shared pytest fixtures and configuration for projectdb tests.

This module provides:
- A file-backed SQLite adapter with the schema applied (``adapter``)
- A ``ProjectDao`` bound to it (``dao``)
- ``run_sql`` for seeding child rows the DAO itself never writes
- Settings cache isolation between tests
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest

from projectdb.core.adapters import SQLiteAdapter
from projectdb.core.schema import apply_schema
from projectdb.core.settings import reset_settings
from projectdb.dao import ProjectDao


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Tests touching a real database are integration tests, the rest unit."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if markers.intersection({"unit", "integration", "slow"}):
            continue
        if "adapter" in getattr(item, "fixturenames", ()):
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Fresh settings per test, unaffected by the developer's environment."""
    monkeypatch.delenv("PROJECTDB_DATABASE_URL", raising=False)
    monkeypatch.delenv("PROJECTDB_LOG_LEVEL", raising=False)
    reset_settings()
    yield
    reset_settings()


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "projects.db"


@pytest.fixture
def adapter(db_path: Path) -> Iterator[SQLiteAdapter]:
    """SQLite adapter on a temporary file with all five tables created."""
    adapter = SQLiteAdapter(str(db_path))
    apply_schema(adapter)
    yield adapter
    adapter.close()


@pytest.fixture
def dao(adapter: SQLiteAdapter) -> ProjectDao:
    return ProjectDao(adapter)


@pytest.fixture
def run_sql(adapter: SQLiteAdapter) -> Callable[..., int]:
    """Execute one statement in its own connection; returns ``lastrowid``."""

    def _run(sql: str, params: tuple[Any, ...] = ()) -> int:
        conn = adapter.get_connection()
        try:
            cursor = conn.raw.execute(sql, params)
            return cursor.lastrowid
        finally:
            conn.close()

    return _run
