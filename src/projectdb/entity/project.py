"""Project entity."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from projectdb.entity.category import Category
from projectdb.entity.material import Material
from projectdb.entity.step import Step


@dataclass
class Project:
    """
    A project and, after a full fetch by id, its child records.

    ``project_id`` is None until the store assigns one on insert. The three
    collections are only populated by ``ProjectDao.fetch_project_by_id``
    and are populated together or not at all.
    """

    project_id: int | None = None
    project_name: str | None = None
    estimated_hours: Decimal | None = field(default=None, metadata={"scale": 2})
    actual_hours: Decimal | None = field(default=None, metadata={"scale": 2})
    difficulty: int | None = None
    notes: str | None = None

    materials: list[Material] = field(default_factory=list, metadata={"mapped": False})
    steps: list[Step] = field(default_factory=list, metadata={"mapped": False})
    categories: list[Category] = field(default_factory=list, metadata={"mapped": False})
