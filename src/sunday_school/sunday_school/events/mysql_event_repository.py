from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import EventStatus, EventType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Event
from .repository import EventRepository

_COLUMNS = """
    event_id, name, event_type, status, description, start_date, end_date, start_time,
    end_time, location, created_at, updated_at
"""


def _row_to_event(row: dict) -> Event:
    return Event(
        event_id=str(row["event_id"]),
        name=row["name"],
        event_type=EventType(row["event_type"]),
        status=EventStatus(row["status"]),
        description=row.get("description"),
        start_date=row.get("start_date"),
        end_date=row.get("end_date"),
        start_time=row.get("start_time"),
        end_time=row.get("end_time"),
        location=row.get("location"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLEventRepository(EventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, event_id: str) -> Optional[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM events WHERE event_id=%s", (event_id,))
            row = fetchone(cur)
            return _row_to_event(row) if row else None

    def list_all(self) -> Sequence[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM events ORDER BY start_date IS NULL, start_date, name")
            return [_row_to_event(r) for r in fetchall(cur)]

    def create(self, event: Event) -> str:
        e = event
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO events(event_id, name, event_type, status, description, start_date, end_date,
                                   start_time, end_time, location, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    e.event_id,
                    e.name,
                    e.event_type.value,
                    e.status.value,
                    e.description,
                    e.start_date,
                    e.end_date,
                    e.start_time,
                    e.end_time,
                    e.location,
                    e.created_at,
                ),
            )
            return e.event_id

    def update(self, event: Event) -> bool:
        e = event
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE events
                SET name=%s, event_type=%s, status=%s, description=%s, start_date=%s, end_date=%s,
                    start_time=%s, end_time=%s, location=%s, updated_at=%s
                WHERE event_id=%s
                """,
                (
                    e.name,
                    e.event_type.value,
                    e.status.value,
                    e.description,
                    e.start_date,
                    e.end_date,
                    e.start_time,
                    e.end_time,
                    e.location,
                    e.updated_at,
                    e.event_id,
                ),
            )
            return cur.rowcount > 0

    def delete(self, event_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM events WHERE event_id=%s", (event_id,))
            return cur.rowcount > 0
