from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..children.service import ChildService
from ..classes.service import ClassService
from ..core.constants import DEFAULT_UPCOMING_EVENTS_ON_DASHBOARD
from ..core.enums import EventStatus, Role
from ..events.model import Event
from ..events.service import EventService
from ..scores.leaderboard import TeamStanding
from ..scores.service import LeaderboardService
from ..users.model import SessionUser
from ..users.service import UserService


@dataclass
class DashboardStats:
    total_users: int = 0
    total_classes: int = 0
    total_children: int = 0
    total_events: int = 0
    upcoming_events_count: int = 0
    admins: int = 0
    amins: int = 0
    khadems: int = 0
    my_classes: Optional[int] = None
    my_children: Optional[int] = None
    upcoming_events: list[Event] = field(default_factory=list)
    standings_event: Optional[Event] = None
    team_standings: list[TeamStanding] = field(default_factory=list)


class DashboardService:
    def __init__(
        self,
        users: UserService,
        classes: ClassService,
        children: ChildService,
        events: EventService,
        leaderboard: LeaderboardService,
        *,
        upcoming_limit: int = DEFAULT_UPCOMING_EVENTS_ON_DASHBOARD,
    ):
        self._users = users
        self._classes = classes
        self._children = children
        self._events = events
        self._leaderboard = leaderboard
        self._upcoming_limit = upcoming_limit

    def stats_for(self, user: SessionUser) -> DashboardStats:
        users = [u for u in self._users.list_users() if u.is_active]
        classes = self._classes.list_classes()
        children = [c for c in self._children.list_all() if c.is_active]
        events = self._events.list_events()

        stats = DashboardStats(
            total_users=len(users),
            total_classes=len(classes),
            total_children=len(children),
            total_events=len(events),
            upcoming_events_count=sum(1 for e in events if e.status == EventStatus.UPCOMING),
            admins=sum(1 for u in users if u.role == Role.ADMIN),
            amins=sum(1 for u in users if u.role == Role.AMIN),
            khadems=sum(1 for u in users if u.role == Role.KHADEM),
            upcoming_events=self._events.upcoming(self._upcoming_limit),
        )

        if user.role == Role.KHADEM:
            mine = ClassService.ids(self._classes.list_for_khadem(user))
            stats.my_classes = len(mine)
            stats.my_children = sum(1 for c in children if c.class_id in mine)

        event_id = self._leaderboard.resolve_event_id(None)
        if event_id:
            stats.standings_event = self._events.find(event_id)
            stats.team_standings = self._leaderboard.standings(event_id).teams
        return stats
