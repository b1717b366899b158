"""Schema for the projects database.

The DAO assumes these five tables already exist.  This module holds the
DDL for each supported backend so tests, the CLI and fresh installs can
create them.

Tables (in creation order)::

    project ──┬── material          (project_id FK, ON DELETE CASCADE)
              ├── step              (project_id FK, ON DELETE CASCADE)
              └── project_category ─── category
                                    (both FKs ON DELETE CASCADE)
"""

from __future__ import annotations

from projectdb.core.adapters import DatabaseAdapter
from projectdb.core.errors import ConfigError
from projectdb.core.logging import get_logger

logger = get_logger(__name__)

TABLES: tuple[str, ...] = ("project", "category", "material", "step", "project_category")

_SQLITE_DDL = """
CREATE TABLE IF NOT EXISTS project (
    project_id INTEGER PRIMARY KEY AUTOINCREMENT,
    project_name VARCHAR(128) NOT NULL,
    estimated_hours DECIMAL(7,2),
    actual_hours DECIMAL(7,2),
    difficulty INT,
    notes TEXT
);

CREATE TABLE IF NOT EXISTS category (
    category_id INTEGER PRIMARY KEY AUTOINCREMENT,
    category_name VARCHAR(128) NOT NULL
);

CREATE TABLE IF NOT EXISTS material (
    material_id INTEGER PRIMARY KEY AUTOINCREMENT,
    project_id INT NOT NULL,
    material_name VARCHAR(128) NOT NULL,
    num_required INT,
    cost DECIMAL(7,2),
    FOREIGN KEY (project_id) REFERENCES project (project_id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS step (
    step_id INTEGER PRIMARY KEY AUTOINCREMENT,
    project_id INT NOT NULL,
    step_text TEXT NOT NULL,
    step_order INT NOT NULL,
    FOREIGN KEY (project_id) REFERENCES project (project_id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS project_category (
    project_id INT NOT NULL,
    category_id INT NOT NULL,
    FOREIGN KEY (project_id) REFERENCES project (project_id) ON DELETE CASCADE,
    FOREIGN KEY (category_id) REFERENCES category (category_id) ON DELETE CASCADE,
    UNIQUE (project_id, category_id)
);
"""

_MYSQL_DDL = """
CREATE TABLE IF NOT EXISTS project (
    project_id INT AUTO_INCREMENT NOT NULL,
    project_name VARCHAR(128) NOT NULL,
    estimated_hours DECIMAL(7,2),
    actual_hours DECIMAL(7,2),
    difficulty INT,
    notes TEXT,
    PRIMARY KEY (project_id)
);

CREATE TABLE IF NOT EXISTS category (
    category_id INT AUTO_INCREMENT NOT NULL,
    category_name VARCHAR(128) NOT NULL,
    PRIMARY KEY (category_id)
);

CREATE TABLE IF NOT EXISTS material (
    material_id INT AUTO_INCREMENT NOT NULL,
    project_id INT NOT NULL,
    material_name VARCHAR(128) NOT NULL,
    num_required INT,
    cost DECIMAL(7,2),
    PRIMARY KEY (material_id),
    FOREIGN KEY (project_id) REFERENCES project (project_id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS step (
    step_id INT AUTO_INCREMENT NOT NULL,
    project_id INT NOT NULL,
    step_text TEXT NOT NULL,
    step_order INT NOT NULL,
    PRIMARY KEY (step_id),
    FOREIGN KEY (project_id) REFERENCES project (project_id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS project_category (
    project_id INT NOT NULL,
    category_id INT NOT NULL,
    FOREIGN KEY (project_id) REFERENCES project (project_id) ON DELETE CASCADE,
    FOREIGN KEY (category_id) REFERENCES category (category_id) ON DELETE CASCADE,
    UNIQUE KEY (project_id, category_id)
);
"""

_DDL = {
    "sqlite": _SQLITE_DDL,
    "mysql": _MYSQL_DDL,
}


def _split_sql(sql: str) -> list[str]:
    """Split a SQL script into individual semicolon-terminated statements."""
    statements = []
    current: list[str] = []
    for line in sql.splitlines():
        stripped = line.strip()
        if stripped.startswith("--") or not stripped:
            continue
        current.append(line)
        if stripped.endswith(";"):
            stmt = "\n".join(current).strip().rstrip(";")
            if stmt:
                statements.append(stmt)
            current = []
    if current:
        stmt = "\n".join(current).strip()
        if stmt:
            statements.append(stmt)
    return statements


def schema_statements(dialect_name: str, *, drop_existing: bool = False) -> list[str]:
    """DDL statements for a backend, optionally preceded by DROPs (children first)."""
    if dialect_name not in _DDL:
        raise ConfigError(f"No schema defined for dialect {dialect_name!r}")
    statements = []
    if drop_existing:
        statements.extend(f"DROP TABLE IF EXISTS {table}" for table in reversed(TABLES))
    statements.extend(_split_sql(_DDL[dialect_name]))
    return statements


def apply_schema(adapter: DatabaseAdapter, *, drop_existing: bool = False) -> list[str]:
    """Create the five tables (idempotent unless ``drop_existing``).

    Returns the executed statements.
    """
    statements = schema_statements(adapter.dialect.name, drop_existing=drop_existing)
    conn = adapter.get_connection()
    try:
        cursor = conn.cursor()
        try:
            for stmt in statements:
                cursor.execute(stmt)
        finally:
            cursor.close()
    finally:
        conn.close()
    logger.info("schema_applied", backend=adapter.dialect.name, statements=len(statements))
    return statements


def missing_tables(adapter: DatabaseAdapter) -> list[str]:
    """Names of the expected tables that do not exist yet."""
    query = adapter.dialect.table_exists_query()
    missing = []
    conn = adapter.get_connection()
    try:
        cursor = conn.cursor()
        try:
            for table in TABLES:
                cursor.execute(query, (table,))
                if not cursor.fetchall():
                    missing.append(table)
        finally:
            cursor.close()
    finally:
        conn.close()
    return missing


__all__ = [
    "TABLES",
    "schema_statements",
    "apply_schema",
    "missing_tables",
]
