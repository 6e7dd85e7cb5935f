"""Team and individual standings for one event.

Scores are attached to children, not teams. The team of a score is resolved at
read time through the child's *current* class and the *current* class-to-team
mapping, so moving a class to another team moves its history with it.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from ..children.model import Child
from ..classes.model import SchoolClass
from ..common.ids import normalize_id
from ..core.constants import DEFAULT_INDIVIDUAL_LEADERBOARD_LIMIT, UNKNOWN_CLASS_NAME
from ..teams.model import Team
from .model import ScoreRecord

Number = Union[int, float]


@dataclass
class TeamStanding:
    team_id: str
    name: str
    motto: Optional[str]
    icon: str
    primary_color: str
    class_ids: tuple[str, ...]
    class_names: list[str] = field(default_factory=list)
    total_score: Number = 0
    rank: int = 0

    @property
    def icon_is_image(self) -> bool:
        return self.icon.startswith(("data:image", "http://", "https://"))

    def to_dict(self) -> dict:
        return {
            "team_id": self.team_id,
            "name": self.name,
            "motto": self.motto,
            "icon": self.icon,
            "primary_color": self.primary_color,
            "class_ids": list(self.class_ids),
            "class_names": list(self.class_names),
            "total_score": self.total_score,
            "rank": self.rank,
        }


@dataclass
class ChildStanding:
    child_id: str
    code: str
    full_name: str
    class_id: Optional[str]
    class_name: str
    total_score: Number = 0
    rank: int = 0

    def to_dict(self) -> dict:
        return {
            "child_id": self.child_id,
            "code": self.code,
            "full_name": self.full_name,
            "class_id": self.class_id,
            "class_name": self.class_name,
            "total_score": self.total_score,
            "rank": self.rank,
        }


@dataclass
class Standings:
    event_id: str = ""
    teams: list[TeamStanding] = field(default_factory=list)
    individuals: list[ChildStanding] = field(default_factory=list)
    # Set when the store could not be read; callers keep what they last showed.
    failed: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.teams and not self.individuals

    def to_dict(self) -> dict:
        return {
            "event_id": self.event_id,
            "teams": [t.to_dict() for t in self.teams],
            "individuals": [c.to_dict() for c in self.individuals],
        }


def coerce_score(value: Any) -> Number:
    """Numeric value of a stored score; anything unusable counts as 0."""

    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, Decimal):
        value = float(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        return int(value) if value.is_integer() else value

    text = str(value).strip()
    if not text:
        return 0
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return 0
    if not math.isfinite(number):
        return 0
    return int(number) if number.is_integer() else number


def _rank(items: list) -> None:
    for index, item in enumerate(items, start=1):
        item.rank = index


def compute_standings(
    event_id: Any,
    scores: Iterable[ScoreRecord],
    children: Iterable[Child],
    teams: Sequence[Team],
    classes: Iterable[SchoolClass] = (),
    *,
    individual_limit: int = DEFAULT_INDIVIDUAL_LEADERBOARD_LIMIT,
) -> Standings:
    """Rank teams and children by the scores recorded for ``event_id``.

    Records whose child cannot be resolved are skipped; a child whose class is
    in no team still counts for the individual ranking.
    """

    selected = normalize_id(event_id)
    if not selected:
        return Standings()

    class_names: Mapping[str, str] = {c.class_id: c.name for c in classes}
    children_by_id = {normalize_id(c.child_id): c for c in children}

    team_totals: dict[str, TeamStanding] = {}
    for team in teams:
        team_totals[team.team_id] = TeamStanding(
            team_id=team.team_id,
            name=team.name,
            motto=team.motto,
            icon=team.icon,
            primary_color=team.primary_color,
            class_ids=tuple(team.class_ids),
            class_names=[class_names[cid] for cid in team.class_ids if cid in class_names],
        )

    individual_totals: dict[str, ChildStanding] = {}

    for record in scores:
        if normalize_id(record.event_id) != selected:
            continue

        child = children_by_id.get(normalize_id(record.child_id))
        if child is None:
            continue

        points = coerce_score(record.score)
        class_id = normalize_id(child.class_id)

        if class_id:
            for team in teams:
                if class_id in team.class_ids:
                    team_totals[team.team_id].total_score += points
                    break

        standing = individual_totals.get(child.child_id)
        if standing is None:
            standing = ChildStanding(
                child_id=child.child_id,
                code=child.code,
                full_name=child.full_name,
                class_id=child.class_id,
                class_name=class_names.get(class_id, UNKNOWN_CLASS_NAME),
            )
            individual_totals[child.child_id] = standing
        standing.total_score += points

    # sorted() is stable, so ties keep team / first-scan order.
    ranked_teams = sorted(team_totals.values(), key=lambda s: s.total_score, reverse=True)
    ranked_children = sorted(individual_totals.values(), key=lambda s: s.total_score, reverse=True)
    ranked_children = ranked_children[: max(int(individual_limit), 0)]

    _rank(ranked_teams)
    _rank(ranked_children)
    return Standings(event_id=selected, teams=ranked_teams, individuals=ranked_children)
