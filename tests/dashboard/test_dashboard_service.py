from __future__ import annotations


def test_admin_dashboard_counts(container, admin):
    stats = container.dashboard_service.stats_for(admin)

    assert stats.total_users == 4
    assert (stats.admins, stats.amins, stats.khadems) == (1, 1, 1)
    assert stats.total_classes == 3
    assert stats.total_children == 3
    assert stats.total_events == 3
    assert stats.upcoming_events_count == 1
    assert [e.event_id for e in stats.upcoming_events] == ["e2"]
    assert stats.my_classes is None


def test_khadem_dashboard_has_own_counts(container, khadem):
    stats = container.dashboard_service.stats_for(khadem)

    assert (stats.my_classes, stats.my_children) == (1, 1)


def test_dashboard_shows_default_event_standings(container, admin):
    container.score_service.record(user=admin, event_id="e1", child_id="3", score=4)

    stats = container.dashboard_service.stats_for(admin)

    assert stats.standings_event.event_id == "e1"
    assert [(t.name, t.total_score) for t in stats.team_standings] == [("Eagles", 4), ("Lions", 0)]
