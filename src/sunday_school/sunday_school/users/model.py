from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: an account of the console.

    Plain data object; persistence lives in the repositories.
    """

    user_id: str
    username: str
    full_name: str
    password_hash: str
    role: Role
    email: Optional[str] = None
    phone: Optional[str] = None
    photo_url: Optional[str] = None
    class_id: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_login: Optional[datetime] = None


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: str
    username: str
    full_name: str
    role: Role
    class_id: Optional[str] = None

    def to_session(self) -> dict:
        return {
            "user_id": self.user_id,
            "username": self.username,
            "name": self.full_name,
            "role": self.role.value,
            "class_id": self.class_id or "",
        }
