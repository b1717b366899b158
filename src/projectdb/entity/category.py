"""Category entity."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Category:
    """A category, linked to projects through ``project_category``."""

    category_id: int | None = None
    category_name: str = ""
