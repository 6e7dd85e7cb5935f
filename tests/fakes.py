"""In-memory repositories used across the test suite."""
from __future__ import annotations

from dataclasses import replace

from src.sunday_school.sunday_school.children.model import Child
from src.sunday_school.sunday_school.classes.model import SchoolClass
from src.sunday_school.sunday_school.core.enums import EventType
from src.sunday_school.sunday_school.events.model import Event
from src.sunday_school.sunday_school.scores.model import ScoreRecord
from src.sunday_school.sunday_school.teams.model import Team
from src.sunday_school.sunday_school.users.model import User


class FakeUsersRepo:
    def __init__(self, users=()):
        self._users: dict[str, User] = {u.user_id: u for u in users}

    def get_by_id(self, user_id):
        return self._users.get(user_id)

    def get_by_username(self, username):
        return next((u for u in self._users.values() if u.username == username), None)

    def list_all(self):
        return list(self._users.values())

    def create_user(self, *, user_id, username, full_name, password_hash, role, email=None, phone=None,
                    class_id=None, created_at):
        self._users[user_id] = User(
            user_id=user_id,
            username=username,
            full_name=full_name,
            password_hash=password_hash,
            role=role,
            email=email,
            phone=phone,
            class_id=class_id,
            created_at=created_at,
        )
        return user_id

    def update_fields(self, user_id, *, updated_at, **fields):
        if user_id not in self._users:
            return False
        self._users[user_id] = replace(self._users[user_id], updated_at=updated_at, **fields)
        return True

    def touch_last_login(self, user_id, *, at):
        self._users[user_id] = replace(self._users[user_id], last_login=at)

    def delete_by_id(self, user_id):
        return self._users.pop(user_id, None) is not None


class _KeyedRepo:
    """Dict-backed store keyed by one id attribute, keeping insertion order."""

    key = ""

    def __init__(self, items=()):
        self._items = {getattr(i, self.key): i for i in items}

    def get_by_id(self, item_id):
        return self._items.get(item_id)

    def list_all(self):
        return list(self._items.values())

    def create(self, item):
        self._items[getattr(item, self.key)] = item
        return getattr(item, self.key)

    def update(self, item):
        item_id = getattr(item, self.key)
        if item_id not in self._items:
            return False
        self._items[item_id] = item
        return True

    def delete(self, item_id):
        return self._items.pop(item_id, None) is not None


class FakeClassesRepo(_KeyedRepo):
    key = "class_id"


class FakeChildrenRepo(_KeyedRepo):
    key = "child_id"

    def list_codes(self):
        return [c.code for c in self._items.values()]


class FakeEventsRepo(_KeyedRepo):
    key = "event_id"


class FakeTeamsRepo(_KeyedRepo):
    key = "team_id"

    def __init__(self, items=()):
        super().__init__(items)
        self.membership_writes = 0

    def save_memberships(self, changes, *, updated_at):
        self.membership_writes += 1
        for team_id, class_ids in changes.items():
            self._items[team_id] = replace(self._items[team_id], class_ids=tuple(class_ids), updated_at=updated_at)


class FakeScoresRepo:
    def __init__(self, records=()):
        self._records: list[ScoreRecord] = list(records)

    def add(self, record):
        self._records.append(record)
        return record.score_id

    def list_all(self):
        return list(self._records)

    def list_for_event(self, event_id):
        return [r for r in self._records if r.event_id == event_id]


def make_class(class_id, name=None, **kw) -> SchoolClass:
    return SchoolClass(class_id=class_id, name=name or f"Class {class_id}", **kw)


def make_child(child_id, class_id, code=None, name=None, **kw) -> Child:
    return Child(
        child_id=child_id,
        code=code or f"MKD-{child_id:0>6}",
        full_name=name or f"Child {child_id}",
        class_id=class_id,
        **kw,
    )


def make_team(team_id, class_ids=(), name=None, **kw) -> Team:
    return Team(team_id=team_id, name=name or f"Team {team_id}", class_ids=tuple(class_ids), **kw)


def make_event(event_id, status, name=None, **kw) -> Event:
    return Event(event_id=event_id, name=name or f"Event {event_id}", event_type=EventType.SERVICE, status=status, **kw)


_seq = 0


def make_score(event_id, child_id, score) -> ScoreRecord:
    global _seq
    _seq += 1
    return ScoreRecord(score_id=f"s{_seq}", event_id=event_id, child_id=child_id, score=score)


def login_as(client, user) -> None:
    """Put a SessionUser into the Flask test client's session."""

    with client.session_transaction() as sess:
        sess.update(user.to_session())
