from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import EventStatus, EventType


@dataclass(frozen=True)
class Event:
    """Domain entity: a service, camp or activity that scores are recorded against."""

    event_id: str
    name: str
    event_type: EventType
    status: EventStatus
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    location: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
