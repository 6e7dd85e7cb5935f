"""Import a JSON export of the old browser-local data.

Earlier revisions kept everything as JSON arrays in local storage under the
keys ``users``, ``classes``, ``makhdoumeen``, ``events``, ``teams`` and
``scores``, with camelCase fields and numeric ids. Each record is converted to
the typed entity (string ids) and written through the repositories. Records
whose id already exists are left untouched, so the import can be re-run.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional

from werkzeug.security import generate_password_hash

from ..children.model import Child
from ..children.repository import ChildRepository
from ..classes.model import SchoolClass
from ..classes.repository import ClassRepository
from ..common.datetime_utils import now_local
from ..common.ids import new_id, normalize_id, normalize_ids
from ..core.enums import EventStatus, EventType, Role
from ..events.model import Event
from ..events.repository import EventRepository
from ..scores.leaderboard import coerce_score
from ..scores.model import ScoreRecord
from ..scores.repository import ScoreRepository
from ..teams.model import Team
from ..teams.repository import TeamRepository
from ..users.repository import UserRepository

logger = logging.getLogger(__name__)


def _text(raw: Mapping[str, Any], key: str) -> Optional[str]:
    value = raw.get(key)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _timestamp(value: Any) -> Optional[datetime]:
    if not value:
        return None
    text = str(value).strip().replace("Z", "+00:00")
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return parsed.replace(tzinfo=None, microsecond=0)


def _date(value: Any) -> Optional[date]:
    if not value:
        return None
    try:
        return datetime.strptime(str(value).strip()[:10], "%Y-%m-%d").date()
    except ValueError:
        return None


def _enum(enum_cls, value: Any, default):
    try:
        return enum_cls(str(value).strip())
    except ValueError:
        try:
            return enum_cls(str(value).strip().lower())
        except ValueError:
            return default


def convert_class(raw: Mapping[str, Any]) -> SchoolClass:
    return SchoolClass(
        class_id=normalize_id(raw.get("classId")),
        name=_text(raw, "className") or _text(raw, "name") or "Unnamed class",
        description=_text(raw, "description"),
        schedule_day=_text(raw, "scheduleDay"),
        schedule_time=_text(raw, "scheduleTime"),
        location=_text(raw, "location"),
        khadem_ids=tuple(normalize_ids(raw.get("khadems") or raw.get("khademIds") or ())),
        age_group=_text(raw, "ageGroup"),
        is_active=bool(raw.get("isActive", True)),
        created_at=_timestamp(raw.get("createdAt")),
        updated_at=_timestamp(raw.get("updatedAt")),
    )


def convert_child(raw: Mapping[str, Any]) -> Child:
    return Child(
        child_id=normalize_id(raw.get("makhdoumId")),
        code=_text(raw, "makhdoumCode") or "",
        full_name=_text(raw, "fullName") or "",
        class_id=normalize_id(raw.get("classId")) or None,
        date_of_birth=_date(raw.get("dateOfBirth")),
        mother_name=_text(raw, "motherName"),
        mother_phone=_text(raw, "motherPhone"),
        father_name=_text(raw, "fatherName"),
        father_phone=_text(raw, "fatherPhone"),
        emergency_contact=_text(raw, "emergencyContact"),
        address=_text(raw, "address"),
        area=_text(raw, "area"),
        diseases_allergies=_text(raw, "diseasesAllergies"),
        medications=_text(raw, "medications"),
        special_needs=_text(raw, "specialNeeds"),
        notes=_text(raw, "notes"),
        is_active=bool(raw.get("isActive", True)),
        created_at=_timestamp(raw.get("createdAt")),
        updated_at=_timestamp(raw.get("updatedAt")),
    )


def convert_event(raw: Mapping[str, Any]) -> Event:
    return Event(
        event_id=normalize_id(raw.get("eventId")),
        name=_text(raw, "eventName") or _text(raw, "name") or "Unnamed event",
        event_type=_enum(EventType, raw.get("eventType", ""), EventType.SERVICE),
        status=_enum(EventStatus, raw.get("status", ""), EventStatus.UPCOMING),
        description=_text(raw, "description"),
        start_date=_date(raw.get("startDate")),
        end_date=_date(raw.get("endDate")),
        start_time=_text(raw, "startTime"),
        end_time=_text(raw, "endTime"),
        location=_text(raw, "location"),
        created_at=_timestamp(raw.get("createdAt")),
        updated_at=_timestamp(raw.get("updatedAt")),
    )


def convert_team(raw: Mapping[str, Any]) -> Team:
    return Team(
        team_id=normalize_id(raw.get("teamId")),
        name=_text(raw, "teamName") or _text(raw, "name") or "Unnamed team",
        motto=_text(raw, "motto"),
        icon=_text(raw, "icon") or "",
        primary_color=_text(raw, "primaryColor") or "#3B82F6",
        class_ids=tuple(normalize_ids(raw.get("classIds") or ())),
        created_at=_timestamp(raw.get("createdAt")),
        updated_at=_timestamp(raw.get("updatedAt")),
    )


def convert_score(raw: Mapping[str, Any]) -> ScoreRecord:
    return ScoreRecord(
        score_id=normalize_id(raw.get("scoreId")) or new_id(),
        event_id=normalize_id(raw.get("eventId")),
        child_id=normalize_id(raw.get("makhdoumId")),
        score=int(coerce_score(raw.get("score"))),
        entered_by=normalize_id(raw.get("enteredBy")) or None,
        entered_at=_timestamp(raw.get("enteredAt")),
    )


@dataclass
class ImportReport:
    imported: dict[str, int] = field(default_factory=dict)
    skipped: dict[str, int] = field(default_factory=dict)

    def count(self, kind: str, *, imported: bool) -> None:
        bucket = self.imported if imported else self.skipped
        bucket[kind] = bucket.get(kind, 0) + 1


class LegacyImporter:
    def __init__(
        self,
        *,
        users: UserRepository,
        classes: ClassRepository,
        children: ChildRepository,
        events: EventRepository,
        teams: TeamRepository,
        scores: ScoreRepository,
    ):
        self._users = users
        self._classes = classes
        self._children = children
        self._events = events
        self._teams = teams
        self._scores = scores

    def run(self, data: Mapping[str, Iterable[Mapping[str, Any]]]) -> ImportReport:
        report = ImportReport()
        self._import_users(data.get("users") or (), report)
        self._import_simple("classes", data.get("classes") or (), convert_class, self._classes, report)
        self._import_simple("children", data.get("makhdoumeen") or (), convert_child, self._children, report)
        self._import_simple("events", data.get("events") or (), convert_event, self._events, report)
        self._import_simple("teams", data.get("teams") or (), convert_team, self._teams, report)
        self._import_scores(data.get("scores") or (), report)
        logger.info("legacy import done: imported=%s skipped=%s", report.imported, report.skipped)
        return report

    def _import_users(self, rows: Iterable[Mapping[str, Any]], report: ImportReport) -> None:
        for raw in rows:
            user_id = normalize_id(raw.get("userId"))
            username = _text(raw, "username") or _text(raw, "email")
            if not user_id or not username or self._users.get_by_id(user_id) or self._users.get_by_username(username):
                report.count("users", imported=False)
                continue

            # No stored password (e.g. Google sign-in): the account exists but
            # cannot log in until an Admin sets one.
            password = raw.get("password")
            self._users.create_user(
                user_id=user_id,
                username=username,
                full_name=_text(raw, "fullName") or username,
                password_hash=generate_password_hash(str(password)) if password else "",
                role=_enum(Role, raw.get("role", ""), Role.PENDING),
                email=_text(raw, "email"),
                phone=_text(raw, "phone"),
                class_id=normalize_id(raw.get("classId")) or None,
                created_at=_timestamp(raw.get("createdAt")) or now_local(),
            )
            report.count("users", imported=True)

    @staticmethod
    def _import_simple(kind: str, rows, convert, repo, report: ImportReport) -> None:
        for raw in rows:
            entity = convert(raw)
            entity_id = normalize_id(getattr(entity, _ID_FIELD[kind]))
            if not entity_id or repo.get_by_id(entity_id):
                report.count(kind, imported=False)
                continue
            repo.create(entity)
            report.count(kind, imported=True)

    def _import_scores(self, rows: Iterable[Mapping[str, Any]], report: ImportReport) -> None:
        existing = {s.score_id for s in self._scores.list_all()}
        for raw in rows:
            record = convert_score(raw)
            if not record.event_id or not record.child_id or record.score_id in existing:
                report.count("scores", imported=False)
                continue
            self._scores.add(record)
            existing.add(record.score_id)
            report.count("scores", imported=True)


_ID_FIELD = {
    "classes": "class_id",
    "children": "child_id",
    "events": "event_id",
    "teams": "team_id",
}
