from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import PROFILE_FIELDS, Child
from .repository import ChildRepository

_COLUMNS = ", ".join(
    ("child_id", "code", "full_name", "class_id", "date_of_birth")
    + PROFILE_FIELDS
    + ("is_active", "created_at", "updated_at")
)


def _row_to_child(row: dict) -> Child:
    return Child(
        child_id=str(row["child_id"]),
        code=row["code"],
        full_name=row["full_name"],
        class_id=row.get("class_id") or None,
        date_of_birth=row.get("date_of_birth"),
        is_active=bool(row.get("is_active", True)),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
        **{name: row.get(name) for name in PROFILE_FIELDS},
    )


class MySQLChildRepository(ChildRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, child_id: str) -> Optional[Child]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM children WHERE child_id=%s", (child_id,))
            row = fetchone(cur)
            return _row_to_child(row) if row else None

    def list_all(self) -> Sequence[Child]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM children ORDER BY code")
            return [_row_to_child(r) for r in fetchall(cur)]

    def list_codes(self) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT code FROM children")
            return [r["code"] for r in fetchall(cur)]

    def create(self, child: Child) -> str:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO children({_COLUMNS})
                VALUES({", ".join(["%s"] * (8 + len(PROFILE_FIELDS)))})
                """,
                (
                    child.child_id,
                    child.code,
                    child.full_name,
                    child.class_id,
                    child.date_of_birth,
                    *(getattr(child, name) for name in PROFILE_FIELDS),
                    int(child.is_active),
                    child.created_at,
                    child.updated_at,
                ),
            )
            return child.child_id

    def update(self, child: Child) -> bool:
        editable = ("full_name", "class_id", "date_of_birth") + PROFILE_FIELDS + ("is_active", "updated_at")
        assignments = ", ".join(f"{name}=%s" for name in editable)
        values = [getattr(child, name) for name in editable]
        values[editable.index("is_active")] = int(child.is_active)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE children SET {assignments} WHERE child_id=%s", (*values, child.child_id))
            return cur.rowcount > 0
