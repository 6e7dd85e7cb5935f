from __future__ import annotations

from datetime import datetime
from typing import Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_id_list, fetchall, fetchone, load_id_list
from .model import Team
from .repository import TeamRepository

_COLUMNS = "team_id, name, motto, icon, primary_color, class_ids, created_at, updated_at"


def _row_to_team(row: dict) -> Team:
    return Team(
        team_id=str(row["team_id"]),
        name=row["name"],
        motto=row.get("motto"),
        icon=row.get("icon") or "",
        primary_color=row.get("primary_color") or "#3B82F6",
        class_ids=load_id_list(row.get("class_ids")),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLTeamRepository(TeamRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, team_id: str) -> Optional[Team]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM teams WHERE team_id=%s", (team_id,))
            row = fetchone(cur)
            return _row_to_team(row) if row else None

    def list_all(self) -> Sequence[Team]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM teams ORDER BY created_at, team_id")
            return [_row_to_team(r) for r in fetchall(cur)]

    def create(self, team: Team) -> str:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO teams(team_id, name, motto, icon, primary_color, class_ids, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    team.team_id,
                    team.name,
                    team.motto,
                    team.icon,
                    team.primary_color,
                    dump_id_list(team.class_ids),
                    team.created_at,
                ),
            )
            return team.team_id

    def update(self, team: Team) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE teams
                SET name=%s, motto=%s, icon=%s, primary_color=%s, class_ids=%s, updated_at=%s
                WHERE team_id=%s
                """,
                (
                    team.name,
                    team.motto,
                    team.icon,
                    team.primary_color,
                    dump_id_list(team.class_ids),
                    team.updated_at,
                    team.team_id,
                ),
            )
            return cur.rowcount > 0

    def save_memberships(self, changes: Mapping[str, Sequence[str]], *, updated_at: datetime) -> None:
        if not changes:
            return
        # One db_cursor == one transaction: either every team is rewritten or none is.
        with db_cursor(self._conn_factory) as (_, cur):
            for team_id, class_ids in changes.items():
                cur.execute(
                    "UPDATE teams SET class_ids=%s, updated_at=%s WHERE team_id=%s",
                    (dump_id_list(class_ids), updated_at, team_id),
                )

    def delete(self, team_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM teams WHERE team_id=%s", (team_id,))
            return cur.rowcount > 0
