"""MySQL database adapter.

Uses ``mysql.connector`` from the ``mysql-connector-python`` package.
MySQL uses **format** (``%s``) placeholder style.

Install the driver::

    pip install mysql-connector-python
    # or:  pip install projectdb[mysql]

This adapter is import-guarded: if ``mysql.connector`` is not installed
a clear :class:`~projectdb.core.errors.ConfigError` is raised the first
time a connection is requested.
"""

from __future__ import annotations

from typing import Any

from projectdb.core.errors import ConfigError, ConnectivityError
from projectdb.core.logging import get_logger

from .base import DatabaseAdapter
from .types import DatabaseConfig, DatabaseType

logger = get_logger(__name__)


class MySQLConnection:
    """Adapter: pooled ``mysql.connector`` connection → ``Connection`` protocol.

    Pooled connections forward attribute reads to the real connection but
    not writes, so transactions are driven through ``start_transaction()``
    rather than by assigning ``autocommit``. :meth:`close` hands the
    connection back to its pool.
    """

    def __init__(self, conn: Any) -> None:
        self._conn = conn

    @property
    def autocommit(self) -> bool:
        return bool(self._conn.autocommit) and not self._conn.in_transaction

    @autocommit.setter
    def autocommit(self, value: bool) -> None:
        if not value:
            self._conn.start_transaction()
        elif self._conn.in_transaction:
            self._conn.commit()

    def cursor(self) -> Any:
        return self._conn.cursor()

    def commit(self) -> None:
        self._conn.commit()

    def rollback(self) -> None:
        self._conn.rollback()

    def close(self) -> None:
        self._conn.close()

    @property
    def raw(self) -> Any:
        return self._conn

    def __repr__(self) -> str:
        return f"MySQLConnection({self._conn!r})"


class MySQLAdapter(DatabaseAdapter):
    """MySQL / MariaDB database adapter.

    Builds a ``mysql.connector`` connection pool on first use. Pooled
    connections are reset when returned, so a transaction left open by a
    failed operation never leaks into the next borrower.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 3306,
        database: str = "",
        username: str | None = None,
        password: str | None = None,
        *,
        pool_size: int = 5,
        connect_timeout: int = 10,
        charset: str = "utf8mb4",
        **kwargs: Any,
    ):
        config = DatabaseConfig(
            db_type=DatabaseType.MYSQL,
            host=host,
            port=port,
            database=database,
            username=username,
            password=password,
            pool_size=pool_size,
            connect_timeout=connect_timeout,
            options={**(kwargs or {}), "charset": charset},
        )
        super().__init__(config)
        self._pool: Any = None

    def _create_pool(self) -> Any:
        try:
            from mysql.connector import pooling
            from mysql.connector.constants import ClientFlag
        except ImportError:
            raise ConfigError(
                "mysql-connector-python is required for MySQL. "
                "Install with: pip install mysql-connector-python"
            ) from None

        try:
            pool = pooling.MySQLConnectionPool(
                pool_name=f"projectdb_{self._config.database or 'default'}",
                pool_size=self._config.pool_size,
                pool_reset_session=True,
                host=self._config.host,
                port=self._config.port,
                database=self._config.database,
                user=self._config.username,
                password=self._config.password,
                charset=self._config.options.get("charset", "utf8mb4"),
                connection_timeout=self._config.connect_timeout,
                autocommit=True,
                # rowcount reports matched rows, as SQLite does
                client_flags=[ClientFlag.FOUND_ROWS],
            )
        except Exception as e:
            raise ConnectivityError(
                f"Failed to connect to MySQL: {e}",
                cause=e,
            ).with_context(host=self._config.host, database=self._config.database) from e
        logger.info(
            "mysql_pool_created",
            host=self._config.host,
            database=self._config.database,
            pool_size=self._config.pool_size,
        )
        return pool

    def get_connection(self) -> MySQLConnection:
        """Borrow a connection from the pool."""
        if self._pool is None:
            self._pool = self._create_pool()
        try:
            conn = self._pool.get_connection()
        except Exception as e:
            raise ConnectivityError(
                f"Failed to acquire MySQL connection: {e}",
                cause=e,
            ).with_context(host=self._config.host, database=self._config.database) from e
        return MySQLConnection(conn)

    def close(self) -> None:
        """Forget the pool; borrowed connections close on their own."""
        self._pool = None


__all__ = [
    "MySQLConnection",
    "MySQLAdapter",
]
