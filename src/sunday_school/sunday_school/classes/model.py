from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class SchoolClass:
    """Domain entity: a Sunday-school class and the Khadem (teachers) assigned to it."""

    class_id: str
    name: str
    description: Optional[str] = None
    schedule_day: Optional[str] = None
    schedule_time: Optional[str] = None
    location: Optional[str] = None
    khadem_ids: tuple[str, ...] = field(default_factory=tuple)
    age_group: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def schedule(self) -> str:
        parts = [p for p in (self.schedule_day, self.schedule_time) if p]
        return " ".join(parts) or "-"
