"""Database adapter registry and factory.

Manifesto:
    Consumers should never hard-code adapter class names.  The registry
    maps ``DatabaseType`` strings to adapter classes and the ``get_adapter()``
    factory creates a configured instance.

Features:
    - ``AdapterRegistry`` singleton with pre-registered defaults
    - ``register()`` for custom / third-party adapters
    - ``get_adapter()`` factory: type + kwargs → adapter

Tags:
    projectdb, database, registry, factory, singleton
"""

from __future__ import annotations

from typing import Any

from projectdb.core.errors import ConfigError

from .base import DatabaseAdapter
from .mysql import MySQLAdapter
from .sqlite import SQLiteAdapter
from .types import DatabaseType


class AdapterRegistry:
    """
    Registry for database adapter factories.

    Pre-registered adapters:
    - ``sqlite`` — :class:`SQLiteAdapter`
    - ``mysql`` / ``mariadb`` — :class:`MySQLAdapter`
    """

    def __init__(self):
        self._factories: dict[str, type[DatabaseAdapter]] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        self._factories["sqlite"] = SQLiteAdapter
        self._factories["mysql"] = MySQLAdapter
        self._factories["mariadb"] = MySQLAdapter  # Alias

    def register(self, name: str, adapter_class: type[DatabaseAdapter]) -> None:
        """Register an adapter factory."""
        self._factories[name.lower()] = adapter_class

    def create(self, name: str, **kwargs: Any) -> DatabaseAdapter:
        """Create an adapter by name."""
        name = name.lower()
        if name not in self._factories:
            raise ConfigError(f"Unknown database adapter: {name}")
        return self._factories[name](**kwargs)

    def list_adapters(self) -> list[str]:
        """List registered adapter names."""
        return sorted(self._factories.keys())


# Global registry
adapter_registry = AdapterRegistry()


def get_adapter(db_type: DatabaseType | str, **kwargs: Any) -> DatabaseAdapter:
    """
    Create an adapter for the given database type.

    Example:
        adapter = get_adapter(DatabaseType.SQLITE, path="projects.db")
        adapter = get_adapter("mysql", host="db", database="projects")
    """
    name = db_type.value if isinstance(db_type, DatabaseType) else db_type
    return adapter_registry.create(name, **kwargs)


__all__ = [
    "AdapterRegistry",
    "adapter_registry",
    "get_adapter",
]
