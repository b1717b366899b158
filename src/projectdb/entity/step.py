"""Step entity."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Step:
    step_id: int | None = None
    project_id: int | None = None
    step_text: str = ""
    step_order: int = 0
