from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

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
        raise NotImplementedError

    def update_fields(self, user_id: str, *, updated_at: datetime, **fields) -> bool:
        """Update the given columns of one user; returns False when no row matched."""

        raise NotImplementedError

    def touch_last_login(self, user_id: str, *, at: datetime) -> None:
        raise NotImplementedError

    def delete_by_id(self, user_id: str) -> bool:
        raise NotImplementedError
