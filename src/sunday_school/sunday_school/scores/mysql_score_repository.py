from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import ScoreRecord
from .repository import ScoreRepository

_COLUMNS = "score_id, event_id, child_id, score, entered_by, entered_at"


def _row_to_record(row: dict) -> ScoreRecord:
    return ScoreRecord(
        score_id=str(row["score_id"]),
        event_id=str(row["event_id"]),
        child_id=str(row["child_id"]),
        score=row.get("score"),
        entered_by=row.get("entered_by"),
        entered_at=row.get("entered_at"),
    )


class MySQLScoreRepository(ScoreRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add(self, record: ScoreRecord) -> str:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO scores({_COLUMNS}) VALUES(%s,%s,%s,%s,%s,%s)",
                (
                    record.score_id,
                    record.event_id,
                    record.child_id,
                    record.score,
                    record.entered_by,
                    record.entered_at,
                ),
            )
            return record.score_id

    def list_all(self) -> Sequence[ScoreRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM scores ORDER BY seq")
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_for_event(self, event_id: str) -> Sequence[ScoreRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM scores WHERE event_id=%s ORDER BY seq", (event_id,))
            return [_row_to_record(r) for r in fetchall(cur)]
