from __future__ import annotations

import pytest

from src.sunday_school.sunday_school.core.enums import Role
from src.sunday_school.sunday_school.core.exceptions import (
    AuthenticationError,
    PendingApprovalError,
    ValidationError,
)


def test_login_returns_session_user(container, repos):
    s_user = container.auth_service.authenticate("khadem", "khadem123")

    assert s_user.role == Role.KHADEM
    assert s_user.class_id == "c1"
    assert s_user.to_session()["role"] == "Khadem"
    assert repos["users"].get_by_id("u-khadem").last_login is not None


@pytest.mark.parametrize("username, password", [("khadem", "wrong"), ("ghost", "x"), ("", "")])
def test_bad_credentials(container, username, password):
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate(username, password)


def test_pending_account_cannot_log_in(container):
    with pytest.raises(PendingApprovalError, match="pending approval"):
        container.auth_service.authenticate("newbie", "newbie123")


def test_inactive_account_cannot_log_in(container, repos, fixed_now):
    repos["users"].update_fields("u-amin", updated_at=fixed_now, is_active=False)

    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate("amin", "amin123")


def test_register_creates_pending_account(container, repos):
    user_id = container.auth_service.register(username="sara@example.com", full_name="Sara", password="secret1")

    user = repos["users"].get_by_id(user_id)
    assert user.role == Role.PENDING
    assert user.email == "sara@example.com"
    with pytest.raises(PendingApprovalError):
        container.auth_service.authenticate("sara@example.com", "secret1")


def test_register_rejects_duplicates_and_short_passwords(container):
    with pytest.raises(ValidationError, match="already exists"):
        container.auth_service.register(username="admin", full_name="X", password="secret1")
    with pytest.raises(ValidationError):
        container.auth_service.register(username="new", full_name="X", password="123")


def test_refresh_drops_revoked_accounts(container, repos, fixed_now):
    assert container.auth_service.refresh("u-admin").username == "admin"

    repos["users"].update_fields("u-khadem", updated_at=fixed_now, role=Role.GUEST)
    assert container.auth_service.refresh("u-khadem") is None
