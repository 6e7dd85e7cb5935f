from __future__ import annotations

import logging
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import now_local
from ..common.ids import new_id, normalize_id
from ..common.validators import optional_text, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    PendingApprovalError,
    ValidationError,
)
from .model import SessionUser, User
from .repository import UserRepository

logger = logging.getLogger(__name__)

PENDING_MESSAGE = "Your account is pending approval by an administrator."
INVALID_CREDENTIALS = "Invalid username or password"


def _to_session_user(user: User) -> SessionUser:
    return SessionUser(
        user_id=user.user_id,
        username=user.username,
        full_name=user.full_name,
        role=user.role,
        class_id=user.class_id,
    )


class AuthService:
    """Use case: login and self-registration."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        user = self._users.get_by_username((username or "").strip())
        if not user or not user.is_active:
            raise AuthenticationError(INVALID_CREDENTIALS)

        try:
            ok = bool(user.password_hash) and check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes or values imported from older revisions
            ok = False

        if not ok:
            raise AuthenticationError(INVALID_CREDENTIALS)

        if not user.role.is_approved:
            raise PendingApprovalError(PENDING_MESSAGE)

        self._users.touch_last_login(user.user_id, at=now_local())
        return _to_session_user(user)

    def register(self, *, username: str, full_name: str, password: str, email: Optional[str] = None) -> str:
        """Create an account that waits for admin approval (role Pending)."""

        username = require_non_empty(username, "Username")
        full_name = require_non_empty(full_name, "Full name")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_username(username):
            raise ValidationError("Username already exists")

        user_id = self._users.create_user(
            user_id=new_id(),
            username=username,
            full_name=full_name,
            password_hash=generate_password_hash(password),
            role=Role.PENDING,
            email=optional_text(email) or (username if "@" in username else None),
            created_at=now_local(),
        )
        logger.info("Registered pending account %s", username)
        return user_id

    def refresh(self, user_id: str) -> Optional[SessionUser]:
        """Reload the session view of a user (after profile or role edits)."""

        user = self._users.get_by_id(normalize_id(user_id))
        if not user or not user.is_active or not user.role.is_approved:
            return None
        return _to_session_user(user)


class UserService:
    """Use case: manage users (admin) and edit one's own profile."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self) -> Sequence[User]:
        return self._users.list_all()

    def list_pending(self) -> list[User]:
        return [u for u in self._users.list_all() if not u.role.is_approved]

    def get(self, user_id: str) -> User:
        user = self._users.get_by_id(normalize_id(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user

    def create_account(
        self,
        *,
        current_role: Role,
        username: str,
        full_name: str,
        password: str,
        role: Role,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        class_id: Optional[str] = None,
    ) -> str:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        username = require_non_empty(username, "Username")
        full_name = require_non_empty(full_name, "Full name")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_username(username):
            raise ValidationError("Username already exists")

        return self._users.create_user(
            user_id=new_id(),
            username=username,
            full_name=full_name,
            password_hash=generate_password_hash(password),
            role=role,
            email=optional_text(email),
            phone=optional_text(phone),
            class_id=normalize_id(class_id) or None,
            created_at=now_local(),
        )

    def update_account(
        self,
        *,
        current_role: Role,
        user_id: str,
        role: Optional[Role] = None,
        class_id: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> None:
        """Admin edit: approve (assign a real role), reassign class, (de)activate."""

        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        user = self.get(user_id)
        fields: dict = {}
        if role is not None:
            fields["role"] = role
        if class_id is not None:
            fields["class_id"] = normalize_id(class_id) or None
        if is_active is not None:
            if not is_active and user.role == Role.ADMIN:
                raise ValidationError("Admin accounts cannot be deactivated")
            fields["is_active"] = bool(is_active)

        if not fields:
            return

        if not self._users.update_fields(user.user_id, updated_at=now_local(), **fields):
            raise ValidationError("Updating the user failed")

        if role is not None and not user.role.is_approved and role.is_approved:
            logger.info("Approved account %s as %s", user.username, role.value)

    def delete_user(self, *, current_role: Role, user_id: str) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        user = self.get(user_id)
        if user.role == Role.ADMIN:
            raise ValidationError("Admin accounts cannot be deleted")

        if not self._users.delete_by_id(user.user_id):
            raise ValidationError("Deleting the user failed")

    def update_profile(
        self,
        *,
        user_id: str,
        full_name: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        photo_url: Optional[str] = None,
        new_password: Optional[str] = None,
        confirm_password: Optional[str] = None,
    ) -> User:
        user = self.get(user_id)
        fields: dict = {
            "full_name": require_non_empty(full_name, "Full name"),
            "email": optional_text(email),
            "phone": optional_text(phone),
        }
        if photo_url is not None:
            fields["photo_url"] = optional_text(photo_url)

        if new_password:
            if new_password != confirm_password:
                raise ValidationError("Passwords do not match")
            require_min_length(new_password, "Password", MIN_PASSWORD_LENGTH)
            fields["password_hash"] = generate_password_hash(new_password)

        if not self._users.update_fields(user.user_id, updated_at=now_local(), **fields):
            raise ValidationError("Updating the profile failed")
        return self.get(user.user_id)

    def list_by_role(self, role: Role) -> list[User]:
        return [u for u in self._users.list_all() if u.role == role and u.is_active]
