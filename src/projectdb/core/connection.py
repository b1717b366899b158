"""Connection factory — create database adapters from URL strings.

This is the **single entry point** for turning configuration into a
connection provider.  The DAO takes the returned adapter and asks it for
one connection per operation.

Supported URL schemes
---------------------
=======================  ==========================================  ============
Scheme                   Example                                     Backend
=======================  ==========================================  ============
``memory``               ``memory`` or ``:memory:`` or ``None``       SQLite RAM
``sqlite``               ``sqlite:///path/to/file.db``                SQLite file
``(file path)``          ``./data/projects.db``                       SQLite file
``mysql``                ``mysql://user:pw@host:3306/projects``       MySQL
``mysql+mysqlconnector`` ``mysql+mysqlconnector://user:pw@host/db``   MySQL
=======================  ==========================================  ============

Usage
-----
::

    from projectdb.core.connection import create_adapter

    adapter, info = create_adapter("sqlite:///projects.db")
    print(info)
    # ConnectionInfo(backend='sqlite', persistent=True, path='/abs/projects.db')
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote, urlsplit

from projectdb.core.adapters import DatabaseAdapter, DatabaseType, get_adapter
from projectdb.core.errors import ConfigError
from projectdb.core.logging import get_logger
from projectdb.core.settings import ProjectDbSettings, get_settings

logger = get_logger(__name__)


# ── ConnectionInfo ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class ConnectionInfo:
    """Metadata about a configured adapter."""

    backend: str
    """Backend identifier: ``"sqlite"`` or ``"mysql"``."""

    persistent: bool
    """Whether data survives process exit."""

    url: str
    """The original URL or path, with any password removed."""

    resolved_path: str | None = None
    """For file-based SQLite, the resolved absolute path."""

    def __repr__(self) -> str:
        parts = [f"backend={self.backend!r}", f"persistent={self.persistent}"]
        if self.resolved_path:
            parts.append(f"path={self.resolved_path!r}")
        else:
            parts.append(f"url={self.url!r}")
        return f"ConnectionInfo({', '.join(parts)})"

    @property
    def is_sqlite(self) -> bool:
        return self.backend == "sqlite"

    @property
    def is_mysql(self) -> bool:
        return self.backend == "mysql"


# ── URL parsing ──────────────────────────────────────────────────────────


def _parse_url(db: str | None) -> tuple[str, str]:
    """Parse a database URL into (scheme, target).

    ``scheme`` is one of ``"memory"``, ``"sqlite"``, ``"mysql"``, ``"file"``.
    """
    if db is None or db in ("", "memory", ":memory:"):
        return "memory", ":memory:"

    if db.startswith("sqlite://"):
        path = db[len("sqlite:///"):] if db.startswith("sqlite:///") else db[len("sqlite://"):]
        if not path or path == ":memory:":
            return "memory", ":memory:"
        return "sqlite", path

    if db.startswith(("mysql://", "mariadb://", "mysql+")):
        return "mysql", db

    if "://" in db:
        raise ConfigError(f"Unsupported database URL scheme: {db.split('://', 1)[0]!r}")

    # Bare file path: treat as SQLite file
    return "file", db


def _create_sqlite(path_str: str, data_dir: str | None) -> tuple[DatabaseAdapter, ConnectionInfo]:
    path = Path(path_str)
    if data_dir and not path.is_absolute():
        path = Path(data_dir) / path
    path.parent.mkdir(parents=True, exist_ok=True)
    resolved = str(path.resolve())

    adapter = get_adapter(DatabaseType.SQLITE, path=resolved)
    info = ConnectionInfo(
        backend="sqlite",
        persistent=True,
        url=path_str,
        resolved_path=resolved,
    )
    return adapter, info


def _create_mysql(url: str, settings: ProjectDbSettings) -> tuple[DatabaseAdapter, ConnectionInfo]:
    parts = urlsplit(url)
    database = parts.path.lstrip("/")
    if not database:
        raise ConfigError(f"MySQL URL is missing a database name: {url!r}")

    adapter = get_adapter(
        DatabaseType.MYSQL,
        host=parts.hostname or "localhost",
        port=parts.port or 3306,
        database=database,
        username=unquote(parts.username) if parts.username else None,
        password=unquote(parts.password) if parts.password else None,
        pool_size=settings.pool_size,
        connect_timeout=settings.connect_timeout,
    )
    info = ConnectionInfo(
        backend="mysql",
        persistent=True,
        url=adapter.config.to_connection_string(),
    )
    return adapter, info


# ── Main factory ─────────────────────────────────────────────────────────


def create_adapter(
    db: str | None = None,
    *,
    data_dir: str | None = None,
    settings: ProjectDbSettings | None = None,
) -> tuple[DatabaseAdapter, ConnectionInfo]:
    """Create a database adapter from a URL, path, or keyword.

    The adapter class comes from
    :data:`~projectdb.core.adapters.adapter_registry`, so a backend
    registered under ``"sqlite"`` or ``"mysql"`` replaces the default.

    Parameters
    ----------
    db:
        Database URL, file path, or keyword.  When ``None`` the
        ``database_url`` setting is used.
    data_dir:
        For SQLite paths, resolve relative paths within this directory.
    settings:
        Settings supplying pool size and timeouts; defaults to
        :func:`~projectdb.core.settings.get_settings`.

    Returns
    -------
    tuple[DatabaseAdapter, ConnectionInfo]

    Raises
    ------
    ConfigError
        If the URL scheme is not supported or a MySQL URL lacks a database.
    """
    settings = settings or get_settings()
    if db is None:
        db = settings.database_url

    scheme, target = _parse_url(db)

    if scheme == "memory":
        adapter: DatabaseAdapter = get_adapter(DatabaseType.SQLITE, path=":memory:")
        info = ConnectionInfo(backend="sqlite", persistent=False, url=":memory:")
    elif scheme in ("sqlite", "file"):
        adapter, info = _create_sqlite(target, data_dir)
    else:
        adapter, info = _create_mysql(target, settings)

    logger.debug("adapter_created", backend=info.backend, url=info.url)
    return adapter, info


__all__ = [
    "ConnectionInfo",
    "create_adapter",
]
