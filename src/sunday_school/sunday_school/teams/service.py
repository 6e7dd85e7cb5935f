from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Iterable, Optional, Sequence

from ..classes.service import ClassService
from ..common.datetime_utils import now_local
from ..common.ids import new_id, normalize_id, normalize_ids
from ..common.validators import optional_text, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import Team
from .repository import TeamRepository

logger = logging.getLogger(__name__)


def random_color() -> str:
    return f"#{random.randint(0, 0xFFFFFF):06X}"


def team_for_class(teams: Sequence[Team], class_id: Optional[str]) -> Optional[Team]:
    """The (first) team whose membership list contains the class."""

    cid = normalize_id(class_id)
    if not cid:
        return None
    for team in teams:
        if cid in team.class_ids:
            return team
    return None


class TeamService:
    """Use case: manage teams and keep every class in at most one team."""

    def __init__(self, teams: TeamRepository, classes: ClassService):
        self._teams = teams
        self._classes = classes

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

    def list_teams(self) -> list[Team]:
        return list(self._teams.list_all())

    def get(self, team_id: str) -> Team:
        team = self._teams.get_by_id(normalize_id(team_id))
        if not team:
            raise NotFoundError("Team not found")
        return team

    def create(
        self,
        *,
        current_role: Role,
        name: str,
        motto: Optional[str] = None,
        icon: Optional[str] = None,
        primary_color: Optional[str] = None,
        class_ids: Iterable[str] = (),
    ) -> Team:
        self._require_admin(current_role)
        team = Team(
            team_id=new_id(),
            name=require_non_empty(name, "Team name"),
            motto=optional_text(motto) or "New Team",
            icon=(icon or "").strip(),
            primary_color=optional_text(primary_color) or random_color(),
            class_ids=(),
            created_at=now_local(),
        )
        self._teams.create(team)

        wanted = normalize_ids(class_ids)
        if wanted:
            return self.set_classes(current_role=current_role, team_id=team.team_id, class_ids=wanted)
        return team

    def update(
        self,
        *,
        current_role: Role,
        team_id: str,
        name: str,
        motto: Optional[str] = None,
        icon: Optional[str] = None,
        primary_color: Optional[str] = None,
    ) -> Team:
        """Edit display fields; membership goes through `set_classes` / `assign_class`."""

        self._require_admin(current_role)
        existing = self.get(team_id)
        updated = replace(
            existing,
            name=require_non_empty(name, "Team name"),
            motto=optional_text(motto),
            icon=(icon or "").strip(),
            primary_color=optional_text(primary_color) or existing.primary_color,
            updated_at=now_local(),
        )
        if not self._teams.update(updated):
            raise ValidationError("Updating the team failed")
        return updated

    def assign_class(self, *, current_role: Role, team_id: str, class_id: str) -> Team:
        """Move one class into a team, removing it from whichever team held it."""

        self._require_admin(current_role)
        cid = normalize_id(class_id)
        self._classes.get(cid)

        teams = list(self._teams.list_all())
        target_id = normalize_id(team_id)
        target = next((t for t in teams if t.team_id == target_id), None)
        if target is None:
            raise NotFoundError("Team not found")

        changes: dict[str, tuple[str, ...]] = {}
        for team in teams:
            if cid in team.class_ids:
                changes[team.team_id] = tuple(x for x in team.class_ids if x != cid)

        changes[target.team_id] = changes.get(target.team_id, target.class_ids) + (cid,)
        now = now_local()
        self._teams.save_memberships(changes, updated_at=now)
        logger.info("Assigned class %s to team %s", cid, target.name)
        return replace(target, class_ids=changes[target.team_id], updated_at=now)

    def set_classes(self, *, current_role: Role, team_id: str, class_ids: Iterable[str]) -> Team:
        """Replace a team's class list; listed classes leave any other team."""

        self._require_admin(current_role)
        wanted = tuple(normalize_ids(class_ids))
        for cid in wanted:
            self._classes.get(cid)

        teams = list(self._teams.list_all())
        target_id = normalize_id(team_id)
        target = next((t for t in teams if t.team_id == target_id), None)
        if target is None:
            raise NotFoundError("Team not found")

        changes: dict[str, tuple[str, ...]] = {}
        for team in teams:
            if team.team_id == target.team_id:
                continue
            kept = tuple(x for x in team.class_ids if x not in wanted)
            if kept != team.class_ids:
                changes[team.team_id] = kept
        changes[target.team_id] = wanted

        now = now_local()
        self._teams.save_memberships(changes, updated_at=now)
        return replace(target, class_ids=wanted, updated_at=now)

    def delete(self, *, current_role: Role, team_id: str) -> None:
        self._require_admin(current_role)
        team = self.get(team_id)
        if not self._teams.delete(team.team_id):
            raise ValidationError("Deleting the team failed")

    def class_names(self, team: Team) -> list[str]:
        names = self._classes.names_by_id()
        return [names[cid] for cid in team.class_ids if cid in names]
