"""
Generic row mapper — result rows to typed entity instances.

Each entity class gets an :class:`EntityMapping` built once from its
dataclass fields and type hints: one :class:`FieldMapping` per mapped field
holding the normalized column key, the declared :class:`SqlType`, whether
the field accepts NULL, and the decimal scale.  Mapping a row is then a
lookup-and-convert pass over those descriptors, with no per-row
introspection of the entity.

Matching rule:
    A field matches the column whose name equals the field name with
    underscores removed, compared case-insensitively.  ``project_name``
    matches ``project_name``, ``PROJECT_NAME`` and ``projectName``.

Conversion table:
    ============  ==========================================================
    Declared      Column value → field value
    ============  ==========================================================
    TEXT          str (bytes decoded as UTF-8)
    INTEGER       int; integral Decimal/float/str accepted, fractions rejected
    DECIMAL       Decimal, never through binary float arithmetic; quantized
                  to the field's ``scale`` when one is declared
    FLOAT         float
    BOOLEAN       bool from 0/1 or ``"true"``/``"false"``
    DATE/TIME/    native value or ISO-8601 text; MySQL TIME (timedelta)
    DATETIME      converted to ``time``
    BLOB          bytes, otherwise opaque
    ============  ==========================================================

Failure modes (all :class:`~projectdb.core.errors.MappingError`):
    - no column matches a mapped field
    - more than one column matches a mapped field
    - NULL in a field that is not ``X | None``
    - a value that cannot be converted to the declared type

Examples:
    >>> from projectdb.entity import Category
    >>> extract(["category_id", "category_name"], (3, "Garden"), Category)
    Category(category_id=3, category_name='Garden')
"""

from __future__ import annotations

import dataclasses
import types
import typing
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from functools import lru_cache
from typing import Any, TypeVar

from projectdb.core.enums import SqlType
from projectdb.core.errors import MappingError
from projectdb.core.protocols import Cursor

E = TypeVar("E")

# Python type → declared SQL type
PYTHON_TO_SQL: dict[type, SqlType] = {
    str: SqlType.TEXT,
    int: SqlType.INTEGER,
    Decimal: SqlType.DECIMAL,
    float: SqlType.FLOAT,
    bool: SqlType.BOOLEAN,
    date: SqlType.DATE,
    time: SqlType.TIME,
    datetime: SqlType.DATETIME,
    bytes: SqlType.BLOB,
}


def normalize_name(name: str) -> str:
    """Column/field match key: underscores removed, case-folded."""
    return name.replace("_", "").casefold()


# =============================================================================
# CONVERTERS (value is never None here)
# =============================================================================


def _to_text(value: Any) -> str:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8")
    return value if isinstance(value, str) else str(value)


def _to_integer(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = Decimal(value.strip())
    if isinstance(value, (Decimal, float)):
        if value != int(value):
            raise ValueError(f"{value!r} is not integral")
        return int(value)
    raise TypeError(f"cannot convert {type(value).__name__} to int")


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("cannot convert bool to Decimal")
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, (float, str)):
        # str(float) is the shortest repr, so 10.5 becomes Decimal("10.5")
        return Decimal(str(value).strip())
    raise TypeError(f"cannot convert {type(value).__name__} to Decimal")


def _to_float(value: Any) -> float:
    if isinstance(value, (int, float, Decimal, str)) and not isinstance(value, bool):
        return float(value)
    raise TypeError(f"cannot convert {type(value).__name__} to float")


def _to_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, Decimal)) and value in (0, 1):
        return bool(value)
    if isinstance(value, str) and value.strip().lower() in ("0", "1", "true", "false"):
        return value.strip().lower() in ("1", "true")
    raise ValueError(f"{value!r} is not a boolean")


def _to_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value)
    raise TypeError(f"cannot convert {type(value).__name__} to date")


def _to_time(value: Any) -> time:
    if isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        # mysql.connector returns TIME columns as timedelta
        return (datetime.min + value).time()
    if isinstance(value, str):
        return time.fromisoformat(value)
    raise TypeError(f"cannot convert {type(value).__name__} to time")


def _to_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    raise TypeError(f"cannot convert {type(value).__name__} to datetime")


def _to_blob(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    # LOB wrappers some drivers return are passed through untouched
    return value


_CONVERTERS: dict[SqlType, Callable[[Any], Any]] = {
    SqlType.TEXT: _to_text,
    SqlType.INTEGER: _to_integer,
    SqlType.DECIMAL: _to_decimal,
    SqlType.FLOAT: _to_float,
    SqlType.BOOLEAN: _to_boolean,
    SqlType.DATE: _to_date,
    SqlType.TIME: _to_time,
    SqlType.DATETIME: _to_datetime,
    SqlType.BLOB: _to_blob,
}


# =============================================================================
# DESCRIPTORS
# =============================================================================


@dataclass(frozen=True)
class FieldMapping:
    """How one entity field is read from a result row."""

    field_name: str
    column_key: str
    sql_type: SqlType
    nullable: bool
    scale: int | None = None

    def convert(self, value: Any, column: str) -> Any:
        """Convert a raw column value to the field's declared type."""
        if value is None:
            if not self.nullable:
                raise MappingError(
                    f"Column {column!r} is NULL but field {self.field_name!r} is not optional",
                    field=self.field_name,
                    column=column,
                ).with_context(sql_type=self.sql_type.value)
            return None
        try:
            converted = _CONVERTERS[self.sql_type](value)
            if self.scale is not None and self.sql_type is SqlType.DECIMAL:
                converted = converted.quantize(Decimal(1).scaleb(-self.scale))
        except (TypeError, ValueError, ArithmeticError) as e:
            # InvalidOperation is an ArithmeticError
            raise MappingError(
                f"Cannot convert column {column!r} value {value!r} "
                f"to {self.sql_type.value} for field {self.field_name!r}: {e}",
                field=self.field_name,
                column=column,
                cause=e,
            ).with_context(sql_type=self.sql_type.value) from e
        return converted


@dataclass(frozen=True)
class EntityMapping:
    """All field mappings of one entity class, built once per class."""

    entity_type: type
    fields: tuple[FieldMapping, ...]

    def resolve(self, columns: Sequence[str]) -> list[tuple[FieldMapping, int, str]]:
        """Pair every field with the position of its single matching column."""
        positions: dict[str, list[int]] = {}
        for i, name in enumerate(columns):
            positions.setdefault(normalize_name(name), []).append(i)

        resolved = []
        for fm in self.fields:
            matches = positions.get(fm.column_key, [])
            if not matches:
                raise MappingError(
                    f"No column matches field {fm.field_name!r} of "
                    f"{self.entity_type.__name__} (columns: {list(columns)})",
                    field=fm.field_name,
                )
            if len(matches) > 1:
                names = [columns[i] for i in matches]
                raise MappingError(
                    f"Ambiguous columns {names} for field {fm.field_name!r} "
                    f"of {self.entity_type.__name__}",
                    field=fm.field_name,
                    column=names[0],
                )
            resolved.append((fm, matches[0], columns[matches[0]]))
        return resolved

    def build(self, resolved: list[tuple[FieldMapping, int, str]], row: Sequence[Any]) -> Any:
        values = {fm.field_name: fm.convert(row[pos], column) for fm, pos, column in resolved}
        return self.entity_type(**values)


def _unwrap_optional(hint: Any) -> tuple[Any, bool]:
    """``X | None`` → (X, True); anything else → (hint, False)."""
    origin = typing.get_origin(hint)
    if origin in (typing.Union, types.UnionType):
        args = [a for a in typing.get_args(hint) if a is not type(None)]
        if len(args) == 1:
            return args[0], True
    return hint, False


@lru_cache(maxsize=None)
def mapping_for(entity_type: type) -> EntityMapping:
    """Build (once) and return the mapping descriptors for an entity class."""
    if not dataclasses.is_dataclass(entity_type):
        raise MappingError(f"{entity_type!r} is not a dataclass entity")

    hints = typing.get_type_hints(entity_type)
    fields = []
    for f in dataclasses.fields(entity_type):
        if not f.metadata.get("mapped", True):
            continue
        python_type, nullable = _unwrap_optional(hints[f.name])
        sql_type = f.metadata.get("sql_type") or PYTHON_TO_SQL.get(python_type)
        if sql_type is None:
            raise MappingError(
                f"Field {f.name!r} of {entity_type.__name__} has unmappable type "
                f"{python_type!r}; declare metadata sql_type= or mapped=False",
                field=f.name,
            )
        fields.append(
            FieldMapping(
                field_name=f.name,
                column_key=normalize_name(f.metadata.get("column", f.name)),
                sql_type=SqlType(sql_type),
                nullable=nullable,
                scale=f.metadata.get("scale"),
            )
        )
    return EntityMapping(entity_type=entity_type, fields=tuple(fields))


# =============================================================================
# PUBLIC API
# =============================================================================


def column_names(cursor: Cursor) -> list[str]:
    """Column names of the cursor's current result set."""
    if not cursor.description:
        raise MappingError("Cursor has no result set to map")
    return [desc[0] for desc in cursor.description]


def extract(columns: Sequence[str], row: Sequence[Any], entity_type: type[E]) -> E:
    """Map a single row to a new ``entity_type`` instance."""
    mapping = mapping_for(entity_type)
    return mapping.build(mapping.resolve(columns), row)


def extract_all(cursor: Cursor, entity_type: type[E]) -> list[E]:
    """Map every remaining row of ``cursor``; columns are resolved once."""
    rows = cursor.fetchall()
    if not rows:
        return []
    mapping = mapping_for(entity_type)
    resolved = mapping.resolve(column_names(cursor))
    return [mapping.build(resolved, row) for row in rows]


__all__ = [
    "PYTHON_TO_SQL",
    "FieldMapping",
    "EntityMapping",
    "normalize_name",
    "mapping_for",
    "column_names",
    "extract",
    "extract_all",
]
