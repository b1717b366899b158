"""Settings for projectdb.

Connection and logging configuration, read from ``PROJECTDB_*``
environment variables and an optional ``.env`` file.

Fields
──────
database_url     : ``sqlite:///path``, a bare file path, ``memory`` or
                   ``mysql://user:pw@host:port/db``
pool_size        : MySQL connection pool size
connect_timeout  : Seconds to wait when opening a connection
log_level        : Structlog log level
json_logs        : True/False to force JSON/console logs, unset = auto

Examples:
    >>> import os
    >>> os.environ["PROJECTDB_DATABASE_URL"] = "sqlite:///tmp/projects.db"
    >>> get_settings().database_url
    'sqlite:///tmp/projects.db'

Tags:
    settings, configuration, pydantic, environment, projectdb
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProjectDbSettings(BaseSettings):
    """Runtime configuration for the data-access layer."""

    model_config = SettingsConfigDict(
        env_prefix="PROJECTDB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Storage ──────────────────────────────────────────────────
    database_url: str = "sqlite:///projects.db"
    pool_size: int = Field(default=5, ge=1, le=32)
    connect_timeout: int = Field(default=10, ge=1)

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    json_logs: bool | None = None

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value!r}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> ProjectDbSettings:
    """Return the process-wide settings, loading them on first use."""
    return ProjectDbSettings()


def reset_settings() -> None:
    """Drop the cached settings (tests and CLI overrides)."""
    get_settings.cache_clear()


__all__ = [
    "ProjectDbSettings",
    "get_settings",
    "reset_settings",
]
