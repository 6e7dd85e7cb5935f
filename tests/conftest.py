from __future__ import annotations

from datetime import datetime

import pytest
from werkzeug.security import generate_password_hash

from src.sunday_school.sunday_school.container import assemble_container
from src.sunday_school.sunday_school.core.enums import EventStatus, Role
from src.sunday_school.sunday_school.users.model import SessionUser, User
from tests.fakes import (
    FakeChildrenRepo,
    FakeClassesRepo,
    FakeEventsRepo,
    FakeScoresRepo,
    FakeTeamsRepo,
    FakeUsersRepo,
    make_child,
    make_class,
    make_event,
    make_team,
)


@pytest.fixture
def fixed_now():
    return datetime(2026, 3, 1, 9, 30, 0)


@pytest.fixture
def admin():
    return SessionUser(user_id="u-admin", username="admin", full_name="Admin", role=Role.ADMIN)


@pytest.fixture
def amin():
    return SessionUser(user_id="u-amin", username="amin", full_name="Amin", role=Role.AMIN)


@pytest.fixture
def khadem():
    return SessionUser(user_id="u-khadem", username="khadem", full_name="Khadem", role=Role.KHADEM, class_id="c1")


@pytest.fixture
def repos(fixed_now):
    """A small school: two teams, three classes, three children, two events."""

    users = FakeUsersRepo([
        User("u-admin", "admin", "Admin", generate_password_hash("admin123"), Role.ADMIN, created_at=fixed_now),
        User("u-amin", "amin", "Amin", generate_password_hash("amin123"), Role.AMIN, created_at=fixed_now),
        User("u-khadem", "khadem", "Khadem", generate_password_hash("khadem123"), Role.KHADEM,
             class_id="c1", created_at=fixed_now),
        User("u-pending", "newbie", "Newbie", generate_password_hash("newbie123"), Role.PENDING, created_at=fixed_now),
    ])
    classes = FakeClassesRepo([
        make_class("c1", "Grade 1", khadem_ids=("u-khadem",)),
        make_class("c2", "Grade 2"),
        make_class("c3", "Grade 3"),
    ])
    children = FakeChildrenRepo([
        make_child("1", "c1", name="Mina"),
        make_child("2", "c2", name="Mariam"),
        make_child("3", "c3", name="Youssef"),
    ])
    events = FakeEventsRepo([
        make_event("e1", EventStatus.ONGOING, name="Summer Camp"),
        make_event("e2", EventStatus.UPCOMING, name="Friday Service"),
        make_event("e3", EventStatus.DRAFT, name="Draft"),
    ])
    teams = FakeTeamsRepo([
        make_team("t1", ["c1", "c2"], name="Lions"),
        make_team("t2", ["c3"], name="Eagles"),
    ])
    return {
        "users": users,
        "classes": classes,
        "children": children,
        "events": events,
        "teams": teams,
        "scores": FakeScoresRepo(),
    }


@pytest.fixture
def container(repos):
    return assemble_container(
        conn=None,
        users_repo=repos["users"],
        classes_repo=repos["classes"],
        children_repo=repos["children"],
        events_repo=repos["events"],
        teams_repo=repos["teams"],
        scores_repo=repos["scores"],
    )


@pytest.fixture
def app(container):
    from src.sunday_school.sunday_school.main import create_app

    flask_app = create_app(container, settings_module="config.testing")
    flask_app.config.update(TESTING=True)
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()
