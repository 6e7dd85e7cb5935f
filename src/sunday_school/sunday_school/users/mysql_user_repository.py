from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_COLUMNS = """
    user_id, username, full_name, password_hash, role, email, phone, photo_url,
    class_id, is_active, created_at, updated_at, last_login
"""

_UPDATABLE = {
    "username",
    "full_name",
    "password_hash",
    "role",
    "email",
    "phone",
    "photo_url",
    "class_id",
    "is_active",
}


def _row_to_user(row: dict) -> User:
    return User(
        user_id=str(row["user_id"]),
        username=row["username"],
        full_name=row["full_name"],
        password_hash=row.get("password_hash") or "",
        role=Role(row["role"]),
        email=row.get("email"),
        phone=row.get("phone"),
        photo_url=row.get("photo_url"),
        class_id=row.get("class_id") or None,
        is_active=bool(row.get("is_active", True)),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
        last_login=row.get("last_login"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE username=%s", (username,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY created_at, full_name")
            return [_row_to_user(r) for r in fetchall(cur)]

    def create_user(
        self,
        *,
        user_id: str,
        username: str,
        full_name: str,
        password_hash: str,
        role: Role,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        class_id: Optional[str] = None,
        created_at: datetime,
    ) -> str:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(user_id, username, full_name, password_hash, role, email, phone,
                                  class_id, is_active, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,1,%s)
                """,
                (user_id, username, full_name, password_hash, role.value, email, phone, class_id, created_at),
            )
            return user_id

    def update_fields(self, user_id: str, *, updated_at: datetime, **fields) -> bool:
        unknown = set(fields) - _UPDATABLE
        if unknown:
            raise ValueError(f"Unsupported user fields: {sorted(unknown)}")

        values = []
        assignments = []
        for name, value in fields.items():
            if isinstance(value, Role):
                value = value.value
            assignments.append(f"{name}=%s")
            values.append(value)
        assignments.append("updated_at=%s")
        values.append(updated_at)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE users SET {', '.join(assignments)} WHERE user_id=%s", (*values, user_id))
            return cur.rowcount > 0

    def touch_last_login(self, user_id: str, *, at: datetime) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET last_login=%s WHERE user_id=%s", (at, user_id))

    def delete_by_id(self, user_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s", (user_id,))
            return cur.rowcount > 0
