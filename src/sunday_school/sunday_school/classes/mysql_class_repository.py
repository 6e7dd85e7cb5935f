from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_id_list, fetchall, fetchone, load_id_list
from .model import SchoolClass
from .repository import ClassRepository

_COLUMNS = """
    class_id, name, description, schedule_day, schedule_time, location, khadem_ids,
    age_group, is_active, created_at, updated_at
"""


def _row_to_class(row: dict) -> SchoolClass:
    return SchoolClass(
        class_id=str(row["class_id"]),
        name=row["name"],
        description=row.get("description"),
        schedule_day=row.get("schedule_day"),
        schedule_time=row.get("schedule_time"),
        location=row.get("location"),
        khadem_ids=load_id_list(row.get("khadem_ids")),
        age_group=row.get("age_group"),
        is_active=bool(row.get("is_active", True)),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLClassRepository(ClassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, class_id: str) -> Optional[SchoolClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM classes WHERE class_id=%s", (class_id,))
            row = fetchone(cur)
            return _row_to_class(row) if row else None

    def list_all(self) -> Sequence[SchoolClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM classes ORDER BY name")
            return [_row_to_class(r) for r in fetchall(cur)]

    def create(self, school_class: SchoolClass) -> str:
        c = school_class
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO classes(class_id, name, description, schedule_day, schedule_time, location,
                                    khadem_ids, age_group, is_active, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    c.class_id,
                    c.name,
                    c.description,
                    c.schedule_day,
                    c.schedule_time,
                    c.location,
                    dump_id_list(c.khadem_ids),
                    c.age_group,
                    int(c.is_active),
                    c.created_at,
                ),
            )
            return c.class_id

    def update(self, school_class: SchoolClass) -> bool:
        c = school_class
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE classes
                SET name=%s, description=%s, schedule_day=%s, schedule_time=%s, location=%s,
                    khadem_ids=%s, age_group=%s, is_active=%s, updated_at=%s
                WHERE class_id=%s
                """,
                (
                    c.name,
                    c.description,
                    c.schedule_day,
                    c.schedule_time,
                    c.location,
                    dump_id_list(c.khadem_ids),
                    c.age_group,
                    int(c.is_active),
                    c.updated_at,
                    c.class_id,
                ),
            )
            return cur.rowcount > 0
