from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Sequence

from ..common.datetime_utils import now_local, parse_optional_date
from ..common.ids import new_id, normalize_id
from ..common.validators import optional_text, require_non_empty
from ..core.enums import STAFF_ROLES, EventStatus, EventType, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import Event
from .repository import EventRepository

# Events that can still receive scores from the scanner.
SCORABLE_STATUSES = frozenset({EventStatus.UPCOMING, EventStatus.ONGOING})
# Events hidden from the leaderboard selector.
HIDDEN_FROM_LEADERBOARD = frozenset({EventStatus.DRAFT, EventStatus.CANCELLED})


@dataclass(frozen=True)
class EventForm:
    name: str
    event_type: str = EventType.SERVICE.value
    description: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    location: Optional[str] = None
    status: Optional[str] = None


def leaderboard_events(events: Sequence[Event]) -> list[Event]:
    return [e for e in events if e.status not in HIDDEN_FROM_LEADERBOARD]


def default_event(events: Sequence[Event]) -> Optional[Event]:
    """First ongoing event, else first upcoming, else the first one listed."""

    for status in (EventStatus.ONGOING, EventStatus.UPCOMING):
        for e in events:
            if e.status == status:
                return e
    return events[0] if events else None


class EventService:
    def __init__(self, events: EventRepository):
        self._events = events

    @staticmethod
    def _require_staff(current_role: Role) -> None:
        if current_role not in STAFF_ROLES:
            raise AuthorizationError("You do not have permission")

    @staticmethod
    def _parse_type(value: Optional[str]) -> EventType:
        try:
            return EventType((value or EventType.SERVICE.value).strip().lower())
        except ValueError:
            raise ValidationError("Invalid event type")

    @staticmethod
    def _parse_status(value: Optional[str], default: EventStatus) -> EventStatus:
        if not value:
            return default
        try:
            return EventStatus(value.strip().lower())
        except ValueError:
            raise ValidationError("Invalid event status")

    def list_events(self) -> list[Event]:
        return list(self._events.list_all())

    def get(self, event_id: str) -> Event:
        event = self.find(event_id)
        if not event:
            raise NotFoundError("Event not found")
        return event

    def find(self, event_id: Optional[str]) -> Optional[Event]:
        eid = normalize_id(event_id)
        return self._events.get_by_id(eid) if eid else None

    def scorable_events(self) -> list[Event]:
        return [e for e in self._events.list_all() if e.status in SCORABLE_STATUSES]

    def leaderboard_events(self) -> list[Event]:
        return leaderboard_events(self._events.list_all())

    def upcoming(self, limit: int) -> list[Event]:
        return [e for e in self._events.list_all() if e.status == EventStatus.UPCOMING][:limit]

    def _build(self, form: EventForm, base: Event) -> Event:
        start = parse_optional_date(form.start_date, "Start date")
        end = parse_optional_date(form.end_date, "End date")
        if start and end and end < start:
            raise ValidationError("End date cannot be before start date")

        return replace(
            base,
            name=require_non_empty(form.name, "Event name"),
            event_type=self._parse_type(form.event_type),
            status=self._parse_status(form.status, base.status),
            description=optional_text(form.description),
            start_date=start,
            end_date=end,
            start_time=optional_text(form.start_time),
            end_time=optional_text(form.end_time),
            location=optional_text(form.location),
        )

    def create(self, *, current_role: Role, form: EventForm) -> str:
        """New events start as upcoming unless a status is given."""

        self._require_staff(current_role)
        blank = Event(
            event_id=new_id(),
            name="",
            event_type=EventType.SERVICE,
            status=EventStatus.UPCOMING,
            created_at=now_local(),
        )
        return self._events.create(self._build(form, blank))

    def update(self, *, current_role: Role, event_id: str, form: EventForm) -> None:
        self._require_staff(current_role)
        existing = self.get(event_id)
        updated = replace(self._build(form, existing), updated_at=now_local())
        if not self._events.update(updated):
            raise ValidationError("Updating the event failed")

    def delete(self, *, current_role: Role, event_id: str) -> None:
        self._require_staff(current_role)
        event = self.get(event_id)
        if not self._events.delete(event.event_id):
            raise ValidationError("Deleting the event failed")
