"""
Lookup envelope for "found or not found" results.

A lookup by identity has two expected outcomes: the row exists, or it does
not. Neither is an error, so neither should be an exception and neither
should be a bare ``None`` that a caller can forget to check. ``Found[T]``
and ``NotFound`` make the absent case explicit in the type.

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                     Lookup[T]                                │
        │                    (Type Alias)                              │
        ├─────────────────────────────┬───────────────────────────────┤
        │         Found[T]            │          NotFound             │
        ├─────────────────────────────┼───────────────────────────────┤
        │ • value: T                  │ • (no payload)                │
        │ • unwrap() -> T             │ • unwrap() raises LookupError │
        │ • map(f) -> Found[U]        │ • map(f) -> NotFound          │
        │ • to_optional() -> T        │ • to_optional() -> None       │
        └─────────────────────────────┴───────────────────────────────┘

Examples:
    >>> from projectdb.core.lookup import Found, NotFound
    >>> def describe(result):
    ...     match result:
    ...         case Found(project):
    ...             return f"found {project}"
    ...         case NotFound():
    ...             return "missing"
    >>> describe(Found("shed"))
    'found shed'
    >>> describe(NotFound())
    'missing'

Guardrails:
    ❌ DON'T: Raise to signal "no such row"
    ✅ DO: Return NotFound() and let the caller branch on it

Tags:
    lookup, optional, sum-type, not-found, projectdb
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Found(Generic[T]):
    """
    A lookup that matched a row.

    Examples:
        >>> Found(42).unwrap()
        42
        >>> Found(10).map(lambda x: x * 2).unwrap()
        20
        >>> Found("x").is_found()
        True
    """

    value: T

    def is_found(self) -> bool:
        return True

    def is_not_found(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Get the value. Safe for Found."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        """Get value or default (always returns value for Found)."""
        return self.value

    def map(self, f: Callable[[T], U]) -> Lookup[U]:
        """Transform the value if Found."""
        return Found(f(self.value))

    def to_optional(self) -> T | None:
        return self.value

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"found": True, "value": self.value}

    def __bool__(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Found({self.value!r})"


@dataclass(frozen=True, slots=True)
class NotFound:
    """
    A lookup that matched nothing.

    All NotFound instances compare equal, so ``result == NotFound()`` is a
    valid check.

    Examples:
        >>> NotFound().is_found()
        False
        >>> NotFound().unwrap_or("default")
        'default'
        >>> NotFound().to_optional() is None
        True
    """

    def is_found(self) -> bool:
        return False

    def is_not_found(self) -> bool:
        return True

    def unwrap(self) -> Any:
        """Raises LookupError; check is_found() first or use unwrap_or()."""
        raise LookupError("unwrap() called on NotFound")

    def unwrap_or(self, default: T) -> T:
        return default

    def map(self, f: Callable[[Any], U]) -> Lookup[U]:
        return self

    def to_optional(self) -> None:
        return None

    def to_dict(self) -> dict[str, Any]:
        return {"found": False}

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NotFound()"


Lookup = Found[T] | NotFound


def from_optional(value: T | None) -> Lookup[T]:
    """
    Convert an optional value to a Lookup.

    >>> from_optional(None)
    NotFound()
    >>> from_optional(0)
    Found(0)
    """
    if value is None:
        return NotFound()
    return Found(value)


__all__ = [
    "Lookup",
    "Found",
    "NotFound",
    "from_optional",
]
