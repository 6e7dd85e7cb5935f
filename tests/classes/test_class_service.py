from __future__ import annotations

import pytest

from src.sunday_school.sunday_school.core.enums import Role
from src.sunday_school.sunday_school.core.exceptions import AuthorizationError
from src.sunday_school.sunday_school.users.model import SessionUser


def test_create_class_normalizes_khadem_ids(container):
    class_id = container.class_service.create(
        current_role=Role.AMIN, name="Grade 4", khadem_ids=["u-khadem", " u-khadem ", "", 7]
    )

    assert container.class_service.get(class_id).khadem_ids == ("u-khadem", "7")


def test_khadem_cannot_create_classes(container):
    with pytest.raises(AuthorizationError):
        container.class_service.create(current_role=Role.KHADEM, name="X")


def test_assigned_class_wins_for_khadem(container, khadem):
    assert [c.class_id for c in container.class_service.list_for_khadem(khadem)] == ["c1"]


def test_khadem_without_assignment_uses_class_lists(container):
    floating = SessionUser(user_id="u-khadem", username="k", full_name="K", role=Role.KHADEM)

    assert [c.class_id for c in container.class_service.list_for_khadem(floating)] == ["c1"]


def test_soft_delete(container):
    container.class_service.set_active(current_role=Role.ADMIN, class_id="c3", is_active=False)

    assert [c.class_id for c in container.class_service.list_classes()] == ["c1", "c2"]
    assert len(container.class_service.list_classes(include_inactive=True)) == 3
