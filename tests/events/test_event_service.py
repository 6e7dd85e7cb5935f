from __future__ import annotations

import pytest

from src.sunday_school.sunday_school.core.enums import EventStatus, EventType, Role
from src.sunday_school.sunday_school.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.sunday_school.sunday_school.events.service import EventForm, default_event, leaderboard_events
from tests.fakes import make_event


def test_new_event_defaults_to_upcoming(container):
    event_id = container.event_service.create(current_role=Role.AMIN, form=EventForm(name="Trip", event_type="activity"))

    event = container.event_service.get(event_id)
    assert event.status == EventStatus.UPCOMING
    assert event.event_type == EventType.ACTIVITY


def test_event_validation(container):
    service = container.event_service
    with pytest.raises(ValidationError):
        service.create(current_role=Role.ADMIN, form=EventForm(name=""))
    with pytest.raises(ValidationError):
        service.create(current_role=Role.ADMIN, form=EventForm(name="X", event_type="party"))
    with pytest.raises(ValidationError):
        service.create(current_role=Role.ADMIN, form=EventForm(name="X", start_date="2026-05-02", end_date="2026-05-01"))


def test_khadem_cannot_edit_events(container):
    with pytest.raises(AuthorizationError):
        container.event_service.create(current_role=Role.KHADEM, form=EventForm(name="X"))


def test_update_and_delete(container):
    service = container.event_service
    service.update(current_role=Role.ADMIN, event_id="e2", form=EventForm(name="Friday", status="ongoing"))
    assert service.get("e2").status == EventStatus.ONGOING

    service.delete(current_role=Role.ADMIN, event_id="e2")
    with pytest.raises(NotFoundError):
        service.get("e2")


def test_scorable_events(container):
    assert [e.event_id for e in container.event_service.scorable_events()] == ["e1", "e2"]


def test_default_event_order():
    upcoming = make_event("u", EventStatus.UPCOMING)
    ongoing = make_event("o", EventStatus.ONGOING)
    completed = make_event("c", EventStatus.COMPLETED)

    assert default_event([upcoming, ongoing]) is ongoing
    assert default_event([completed, upcoming]) is upcoming
    assert default_event([completed]) is completed
    assert default_event([]) is None


def test_leaderboard_events_exclude_draft_and_cancelled():
    events = [
        make_event("d", EventStatus.DRAFT),
        make_event("x", EventStatus.CANCELLED),
        make_event("c", EventStatus.COMPLETED),
    ]

    assert [e.event_id for e in leaderboard_events(events)] == ["c"]
