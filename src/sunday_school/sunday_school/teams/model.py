from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Team:
    """Domain entity: a competitive grouping of classes.

    A class id appears in at most one team's ``class_ids``.
    """

    team_id: str
    name: str
    motto: Optional[str] = None
    icon: str = ""
    primary_color: str = "#3B82F6"
    class_ids: tuple[str, ...] = field(default_factory=tuple)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def icon_is_image(self) -> bool:
        return self.icon.startswith(("data:image", "http://", "https://"))
