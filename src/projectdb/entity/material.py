"""Material entity."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass
class Material:
    material_id: int | None = None
    project_id: int | None = None
    material_name: str = ""
    num_required: int | None = None
    cost: Decimal | None = field(default=None, metadata={"scale": 2})
