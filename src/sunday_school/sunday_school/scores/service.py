from __future__ import annotations

import logging
from typing import Any, Optional

from ..children.repository import ChildRepository
from ..classes.repository import ClassRepository
from ..common.datetime_utils import now_local
from ..common.ids import new_id, normalize_id
from ..core.constants import DEFAULT_INDIVIDUAL_LEADERBOARD_LIMIT
from ..core.enums import SCANNER_ROLES
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..events.repository import EventRepository
from ..events.service import SCORABLE_STATUSES, default_event, leaderboard_events
from ..teams.repository import TeamRepository
from ..users.model import SessionUser
from .leaderboard import Standings, compute_standings
from .model import ScoreRecord
from .repository import ScoreRepository

logger = logging.getLogger(__name__)


def parse_score(value: Any) -> int:
    """Scores typed on the scanner are whole numbers."""

    text = str(value if value is not None else "").strip()
    if not text:
        raise ValidationError("Please enter a score")
    try:
        return int(text)
    except ValueError:
        raise ValidationError("Score must be a whole number")


class ScoreService:
    """Use case: append a score for a scanned child."""

    def __init__(self, scores: ScoreRepository, children: ChildRepository, events: EventRepository):
        self._scores = scores
        self._children = children
        self._events = events

    def record(self, *, user: SessionUser, event_id: Any, child_id: Any, score: Any) -> ScoreRecord:
        if user.role not in SCANNER_ROLES:
            raise AuthorizationError("You do not have permission")

        eid = normalize_id(event_id)
        if not eid:
            raise ValidationError("Please select an event")
        event = self._events.get_by_id(eid)
        if not event:
            raise NotFoundError("Event not found")
        if event.status not in SCORABLE_STATUSES:
            raise ValidationError("Scores can only be recorded for upcoming or ongoing events")

        child = self._children.get_by_id(normalize_id(child_id))
        if not child:
            raise NotFoundError("Child not found")

        record = ScoreRecord(
            score_id=new_id(),
            event_id=event.event_id,
            child_id=child.child_id,
            score=parse_score(score),
            entered_by=user.user_id,
            entered_at=now_local(),
        )
        self._scores.add(record)
        logger.info("Recorded %s points for %s in event %s", record.score, child.code, event.name)
        return record


class LeaderboardService:
    """Loads the collections the aggregator needs and computes standings."""

    def __init__(
        self,
        scores: ScoreRepository,
        children: ChildRepository,
        teams: TeamRepository,
        classes: ClassRepository,
        events: EventRepository,
        *,
        individual_limit: int = DEFAULT_INDIVIDUAL_LEADERBOARD_LIMIT,
    ):
        self._scores = scores
        self._children = children
        self._teams = teams
        self._classes = classes
        self._events = events
        self._individual_limit = int(individual_limit)

    def standings(self, event_id: Optional[Any]) -> Standings:
        """Standings for one event; a store failure is logged and flagged as ``failed``."""

        if not normalize_id(event_id):
            return Standings()
        try:
            return compute_standings(
                event_id,
                self._scores.list_for_event(normalize_id(event_id)),
                self._children.list_all(),
                self._teams.list_all(),
                self._classes.list_all(),
                individual_limit=self._individual_limit,
            )
        except Exception:
            logger.exception("Error calculating scores for event %s", event_id)
            return Standings(event_id=normalize_id(event_id), failed=True)

    def selectable_events(self) -> list:
        try:
            return leaderboard_events(self._events.list_all())
        except Exception:
            logger.exception("Error loading events for the leaderboard")
            return []

    def resolve_event_id(self, requested: Optional[Any]) -> str:
        """The requested event, or the default one (ongoing, then upcoming, then first)."""

        eid = normalize_id(requested)
        if eid:
            return eid
        chosen = default_event(self.selectable_events())
        return chosen.event_id if chosen else ""
