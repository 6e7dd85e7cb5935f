from __future__ import annotations

import pytest

from src.sunday_school.sunday_school.core.exceptions import AuthorizationError, NotFoundError, ValidationError


def test_create_assigns_next_code(container, admin):
    child = container.child_service.create(
        user=admin, full_name="  Kirollos ", class_id="c2", date_of_birth="2018-05-04", mother_name="Mary"
    )

    assert child.code == "MKD-000004"
    assert child.full_name == "Kirollos"
    assert child.mother_name == "Mary"
    assert str(child.date_of_birth) == "2018-05-04"
    assert child.is_active


def test_create_validates_input(container, admin):
    with pytest.raises(ValidationError):
        container.child_service.create(user=admin, full_name="", class_id="c1")
    with pytest.raises(ValidationError):
        container.child_service.create(user=admin, full_name="A", class_id="")
    with pytest.raises(NotFoundError):
        container.child_service.create(user=admin, full_name="A", class_id="c99")
    with pytest.raises(ValidationError):
        container.child_service.create(user=admin, full_name="A", class_id="c1", date_of_birth="04/05/2018")


def test_khadem_limited_to_own_classes(container, khadem):
    created = container.child_service.create(user=khadem, full_name="Own", class_id="c1")
    assert created.class_id == "c1"

    with pytest.raises(AuthorizationError):
        container.child_service.create(user=khadem, full_name="Other", class_id="c2")
    with pytest.raises(AuthorizationError):
        container.child_service.update(user=khadem, child_id="2", full_name="Mariam", class_id="c2")


def test_khadem_sees_only_own_children(container, khadem, admin):
    visible = container.child_service.list_visible(khadem)
    assert [c.child_id for c in visible] == ["1"]

    assert len(container.child_service.list_visible(admin)) == 3


def test_search_by_name_or_code(container, admin):
    service = container.child_service

    assert [c.child_id for c in service.list_visible(admin, search="mari")] == ["2"]
    assert [c.child_id for c in service.list_visible(admin, search="mkd-000003")] == ["3"]
    assert [c.child_id for c in service.list_visible(admin, class_filter="c1")] == ["1"]


def test_soft_delete_hides_child_but_keeps_record(container, repos, admin):
    container.child_service.set_active(user=admin, child_id="2", is_active=False)

    assert repos["children"].get_by_id("2").is_active is False
    assert container.child_service.list_by_class("c2") == []
    assert [c.child_id for c in container.child_service.list_visible(admin, include_inactive=True)] == ["1", "2", "3"]


def test_update_moves_child(container, repos, admin):
    container.child_service.update(user=admin, child_id="1", full_name="Mina S.", class_id="c3", notes="moved")

    child = repos["children"].get_by_id("1")
    assert (child.full_name, child.class_id, child.notes, child.code) == ("Mina S.", "c3", "moved", "MKD-000001")
