from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .children.mysql_child_repository import MySQLChildRepository
from .children.repository import ChildRepository
from .children.service import ChildService
from .classes.mysql_class_repository import MySQLClassRepository
from .classes.repository import ClassRepository
from .classes.service import ClassService
from .core.constants import DEFAULT_INDIVIDUAL_LEADERBOARD_LIMIT
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .events.mysql_event_repository import MySQLEventRepository
from .events.repository import EventRepository
from .events.service import EventService
from .qr.service import ScannerService
from .scores.mysql_score_repository import MySQLScoreRepository
from .scores.repository import ScoreRepository
from .scores.service import LeaderboardService, ScoreService
from .teams.mysql_team_repository import MySQLTeamRepository
from .teams.repository import TeamRepository
from .teams.service import TeamService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    classes_repo: ClassRepository
    children_repo: ChildRepository
    events_repo: EventRepository
    teams_repo: TeamRepository
    scores_repo: ScoreRepository

    auth_service: AuthService
    user_service: UserService
    class_service: ClassService
    child_service: ChildService
    event_service: EventService
    team_service: TeamService
    score_service: ScoreService
    leaderboard_service: LeaderboardService
    scanner_service: ScannerService
    dashboard_service: DashboardService


def build_container(
    *,
    db_config: dict,
    individual_limit: int = DEFAULT_INDIVIDUAL_LEADERBOARD_LIMIT,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return assemble_container(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        classes_repo=MySQLClassRepository(conn),
        children_repo=MySQLChildRepository(conn),
        events_repo=MySQLEventRepository(conn),
        teams_repo=MySQLTeamRepository(conn),
        scores_repo=MySQLScoreRepository(conn),
        individual_limit=individual_limit,
    )


def assemble_container(
    *,
    conn: Optional[DatabaseConnection],
    users_repo: UserRepository,
    classes_repo: ClassRepository,
    children_repo: ChildRepository,
    events_repo: EventRepository,
    teams_repo: TeamRepository,
    scores_repo: ScoreRepository,
    individual_limit: int = DEFAULT_INDIVIDUAL_LEADERBOARD_LIMIT,
) -> Container:
    """Wire services over any repository implementations (MySQL or in-memory)."""

    auth_service = AuthService(users_repo)
    user_service = UserService(users_repo)
    class_service = ClassService(classes_repo)
    child_service = ChildService(children_repo, class_service)
    event_service = EventService(events_repo)
    team_service = TeamService(teams_repo, class_service)
    score_service = ScoreService(scores_repo, children_repo, events_repo)
    leaderboard_service = LeaderboardService(
        scores_repo,
        children_repo,
        teams_repo,
        classes_repo,
        events_repo,
        individual_limit=individual_limit,
    )
    scanner_service = ScannerService(child_service, score_service)
    dashboard_service = DashboardService(
        user_service, class_service, child_service, event_service, leaderboard_service
    )

    return Container(
        conn=conn,
        users_repo=users_repo,
        classes_repo=classes_repo,
        children_repo=children_repo,
        events_repo=events_repo,
        teams_repo=teams_repo,
        scores_repo=scores_repo,
        auth_service=auth_service,
        user_service=user_service,
        class_service=class_service,
        child_service=child_service,
        event_service=event_service,
        team_service=team_service,
        score_service=score_service,
        leaderboard_service=leaderboard_service,
        scanner_service=scanner_service,
        dashboard_service=dashboard_service,
    )
