from __future__ import annotations

import pytest

from src.sunday_school.sunday_school.core.enums import EventStatus, Role
from src.sunday_school.sunday_school.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.sunday_school.sunday_school.scores.service import LeaderboardService, parse_score
from src.sunday_school.sunday_school.users.model import SessionUser
from tests.fakes import make_event


def test_record_appends_a_score(container, repos, khadem):
    record = container.score_service.record(user=khadem, event_id="e1", child_id="1", score="15")

    assert record.score == 15
    assert record.entered_by == "u-khadem"
    assert repos["scores"].list_all() == [record]


def test_second_scan_appends_instead_of_replacing(container, repos, khadem):
    container.score_service.record(user=khadem, event_id="e1", child_id="1", score=5)
    container.score_service.record(user=khadem, event_id="e1", child_id="1", score=7)

    assert [r.score for r in repos["scores"].list_all()] == [5, 7]
    standings = container.leaderboard_service.standings("e1")
    assert standings.individuals[0].total_score == 12


def test_record_rejects_closed_events(container, repos, admin):
    repos["events"].create(make_event("done", EventStatus.COMPLETED))

    with pytest.raises(ValidationError):
        container.score_service.record(user=admin, event_id="done", child_id="1", score=5)


def test_record_requires_known_event_and_child(container, admin):
    with pytest.raises(NotFoundError):
        container.score_service.record(user=admin, event_id="nope", child_id="1", score=5)
    with pytest.raises(NotFoundError):
        container.score_service.record(user=admin, event_id="e1", child_id="nope", score=5)
    with pytest.raises(ValidationError):
        container.score_service.record(user=admin, event_id="", child_id="1", score=5)


def test_record_requires_scanner_role(container):
    guest = SessionUser(user_id="g", username="g", full_name="G", role=Role.PENDING)

    with pytest.raises(AuthorizationError):
        container.score_service.record(user=guest, event_id="e1", child_id="1", score=5)


@pytest.mark.parametrize("raw", ["", None, "abc", "2.5"])
def test_parse_score_rejects_non_integers(raw):
    with pytest.raises(ValidationError):
        parse_score(raw)


def test_default_event_prefers_ongoing(container):
    assert container.leaderboard_service.resolve_event_id(None) == "e1"
    assert container.leaderboard_service.resolve_event_id("e2") == "e2"


def test_selectable_events_hide_drafts(container):
    ids = [e.event_id for e in container.leaderboard_service.selectable_events()]
    assert ids == ["e1", "e2"]


class _BrokenScores:
    def list_for_event(self, event_id):
        raise RuntimeError("database unavailable")


def test_store_failure_yields_empty_standings(repos, caplog):
    service = LeaderboardService(
        _BrokenScores(), repos["children"], repos["teams"], repos["classes"], repos["events"]
    )

    standings = service.standings("e1")

    assert standings.is_empty
    assert standings.failed
    assert "Error calculating scores" in caplog.text


def test_standings_span_the_whole_school(container, khadem, admin):
    container.score_service.record(user=khadem, event_id="e1", child_id="1", score=10)
    container.score_service.record(user=admin, event_id="e1", child_id="3", score=25)
    container.score_service.record(user=admin, event_id="e1", child_id="2", score=5)

    standings = container.leaderboard_service.standings("e1")

    assert [(t.name, t.total_score) for t in standings.teams] == [("Eagles", 25), ("Lions", 15)]
    assert [c.child_id for c in standings.individuals] == ["3", "1", "2"]
