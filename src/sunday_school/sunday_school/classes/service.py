from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.ids import new_id, normalize_id, normalize_ids
from ..common.validators import optional_text, require_non_empty
from ..core.enums import STAFF_ROLES, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.model import SessionUser
from .model import SchoolClass
from .repository import ClassRepository


class ClassService:
    """Use case: manage classes (Admin/Amin) and scope them for a Khadem."""

    def __init__(self, classes: ClassRepository):
        self._classes = classes

    @staticmethod
    def _require_staff(current_role: Role) -> None:
        if current_role not in STAFF_ROLES:
            raise AuthorizationError("You do not have permission")

    def list_classes(self, *, include_inactive: bool = False) -> list[SchoolClass]:
        items = list(self._classes.list_all())
        if include_inactive:
            return items
        return [c for c in items if c.is_active]

    def get(self, class_id: str) -> SchoolClass:
        c = self._classes.get_by_id(normalize_id(class_id))
        if not c:
            raise NotFoundError("Class not found")
        return c

    def find(self, class_id: Optional[str]) -> Optional[SchoolClass]:
        cid = normalize_id(class_id)
        return self._classes.get_by_id(cid) if cid else None

    def list_for_khadem(self, user: SessionUser) -> list[SchoolClass]:
        """Classes a Khadem works with.

        An explicitly assigned class wins; otherwise every class whose Khadem
        list contains the user.
        """

        classes = self.list_classes()
        if user.class_id:
            return [c for c in classes if c.class_id == normalize_id(user.class_id)]
        uid = normalize_id(user.user_id)
        return [c for c in classes if uid in c.khadem_ids]

    def visible_classes(self, user: SessionUser) -> list[SchoolClass]:
        if user.role == Role.KHADEM:
            return self.list_for_khadem(user)
        return self.list_classes()

    def create(
        self,
        *,
        current_role: Role,
        name: str,
        description: Optional[str] = None,
        schedule_day: Optional[str] = None,
        schedule_time: Optional[str] = None,
        location: Optional[str] = None,
        khadem_ids: Iterable[str] = (),
        age_group: Optional[str] = None,
    ) -> str:
        self._require_staff(current_role)
        school_class = SchoolClass(
            class_id=new_id(),
            name=require_non_empty(name, "Class name"),
            description=optional_text(description),
            schedule_day=optional_text(schedule_day),
            schedule_time=optional_text(schedule_time),
            location=optional_text(location),
            khadem_ids=tuple(normalize_ids(khadem_ids)),
            age_group=optional_text(age_group),
            is_active=True,
            created_at=now_local(),
        )
        return self._classes.create(school_class)

    def update(
        self,
        *,
        current_role: Role,
        class_id: str,
        name: str,
        description: Optional[str] = None,
        schedule_day: Optional[str] = None,
        schedule_time: Optional[str] = None,
        location: Optional[str] = None,
        khadem_ids: Iterable[str] = (),
        age_group: Optional[str] = None,
    ) -> None:
        self._require_staff(current_role)
        existing = self.get(class_id)
        updated = replace(
            existing,
            name=require_non_empty(name, "Class name"),
            description=optional_text(description),
            schedule_day=optional_text(schedule_day),
            schedule_time=optional_text(schedule_time),
            location=optional_text(location),
            khadem_ids=tuple(normalize_ids(khadem_ids)),
            age_group=optional_text(age_group),
            updated_at=now_local(),
        )
        if not self._classes.update(updated):
            raise ValidationError("Updating the class failed")

    def set_active(self, *, current_role: Role, class_id: str, is_active: bool) -> None:
        """Soft delete / restore."""

        self._require_staff(current_role)
        existing = self.get(class_id)
        if not self._classes.update(replace(existing, is_active=bool(is_active), updated_at=now_local())):
            raise ValidationError("Updating the class failed")

    def names_by_id(self) -> dict[str, str]:
        return {c.class_id: c.name for c in self._classes.list_all()}

    @staticmethod
    def ids(classes: Sequence[SchoolClass]) -> set[str]:
        return {c.class_id for c in classes}
