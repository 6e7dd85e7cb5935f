from __future__ import annotations

import logging
from dataclasses import replace
from typing import Mapping, Optional

from ..classes.service import ClassService
from ..common.datetime_utils import now_local, parse_optional_date
from ..common.ids import new_id, normalize_id
from ..common.validators import optional_text, require_non_empty
from ..core.enums import SCANNER_ROLES, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.model import SessionUser
from .codes import next_child_code
from .model import PROFILE_FIELDS, Child
from .repository import ChildRepository

logger = logging.getLogger(__name__)


class ChildService:
    """Use case: enrol and maintain children (Makhdoumeen)."""

    def __init__(self, children: ChildRepository, classes: ClassService):
        self._children = children
        self._classes = classes

    def get(self, child_id: str) -> Child:
        child = self.find(child_id)
        if not child:
            raise NotFoundError("Child not found")
        return child

    def find(self, child_id: Optional[str]) -> Optional[Child]:
        cid = normalize_id(child_id)
        return self._children.get_by_id(cid) if cid else None

    def list_all(self) -> list[Child]:
        return list(self._children.list_all())

    def list_by_class(self, class_id: str) -> list[Child]:
        cid = normalize_id(class_id)
        return [c for c in self._children.list_all() if c.class_id == cid and c.is_active]

    def list_visible(
        self,
        user: SessionUser,
        *,
        search: str = "",
        class_filter: str = "",
        include_inactive: bool = False,
    ) -> list[Child]:
        """Children the user may see, filtered by name/code search and class."""

        children = list(self._children.list_all())
        if user.role == Role.KHADEM:
            allowed = ClassService.ids(self._classes.list_for_khadem(user))
            children = [c for c in children if c.class_id in allowed]
        if not include_inactive:
            children = [c for c in children if c.is_active]

        term = (search or "").strip().lower()
        if term:
            children = [c for c in children if term in c.full_name.lower() or term in (c.code or "").lower()]

        cid = normalize_id(class_filter)
        if cid:
            children = [c for c in children if c.class_id == cid]
        return children

    def _check_class_access(self, user: SessionUser, class_id: str) -> None:
        if user.role not in SCANNER_ROLES:
            raise AuthorizationError("You do not have permission")

        self._classes.get(class_id)
        if user.role == Role.KHADEM:
            allowed = ClassService.ids(self._classes.list_for_khadem(user))
            if class_id not in allowed:
                raise AuthorizationError("You can only manage children in your own classes")

    @staticmethod
    def _profile(fields: Mapping[str, Optional[str]]) -> dict:
        return {name: optional_text(fields.get(name)) for name in PROFILE_FIELDS}

    def create(
        self,
        *,
        user: SessionUser,
        full_name: str,
        class_id: str,
        date_of_birth: Optional[str] = None,
        **profile: Optional[str],
    ) -> Child:
        full_name = require_non_empty(full_name, "Full name")
        class_id = normalize_id(class_id)
        if not class_id:
            raise ValidationError("Class is required")
        self._check_class_access(user, class_id)

        child = Child(
            child_id=new_id(),
            code=next_child_code(self._children.list_codes()),
            full_name=full_name,
            class_id=class_id,
            date_of_birth=parse_optional_date(date_of_birth, "Date of birth"),
            is_active=True,
            created_at=now_local(),
            **self._profile(profile),
        )
        self._children.create(child)
        logger.info("Enrolled child %s (%s)", child.code, child.full_name)
        return child

    def update(
        self,
        *,
        user: SessionUser,
        child_id: str,
        full_name: str,
        class_id: str,
        date_of_birth: Optional[str] = None,
        **profile: Optional[str],
    ) -> Child:
        existing = self.get(child_id)
        if existing.class_id:
            self._check_class_access(user, existing.class_id)

        class_id = normalize_id(class_id)
        if not class_id:
            raise ValidationError("Class is required")
        if class_id != existing.class_id:
            self._check_class_access(user, class_id)

        updated = replace(
            existing,
            full_name=require_non_empty(full_name, "Full name"),
            class_id=class_id,
            date_of_birth=parse_optional_date(date_of_birth, "Date of birth"),
            updated_at=now_local(),
            **self._profile(profile),
        )
        if not self._children.update(updated):
            raise ValidationError("Updating the child failed")
        return updated

    def set_active(self, *, user: SessionUser, child_id: str, is_active: bool) -> None:
        """Soft delete / restore; score history keeps resolving the child."""

        existing = self.get(child_id)
        if existing.class_id:
            self._check_class_access(user, existing.class_id)
        elif user.role not in SCANNER_ROLES:
            raise AuthorizationError("You do not have permission")

        if not self._children.update(replace(existing, is_active=bool(is_active), updated_at=now_local())):
            raise ValidationError("Updating the child failed")
