from __future__ import annotations

from datetime import timedelta

from tests.fakes import login_as


def test_login_page_renders(client):
    resp = client.get("/login")

    assert resp.status_code == 200
    assert b"Remember me" in resp.data


def test_login_and_dashboard(client):
    resp = client.post("/login", data={"username": "admin", "password": "admin123"})
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/dashboard")

    resp = client.get("/dashboard")
    assert resp.status_code == 200
    assert b"Welcome, Admin" in resp.data


def test_remember_me_makes_session_permanent(client):
    client.post("/login", data={"username": "admin", "password": "admin123", "remember_me": "1"})

    with client.session_transaction() as sess:
        assert sess.permanent is True


def test_pending_user_sees_approval_message(client):
    resp = client.post("/login", data={"username": "newbie", "password": "newbie123"}, follow_redirects=True)

    assert b"pending approval" in resp.data


def test_pages_require_login(client):
    resp = client.get("/dashboard")

    assert resp.status_code == 302
    assert "/login" in resp.headers["Location"]


def test_api_requires_login(client):
    resp = client.get("/api/leaderboard")

    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_khadem_cannot_open_users(client, khadem):
    login_as(client, khadem)

    assert client.get("/users").status_code == 403


def test_pages_render_for_admin(client, admin):
    login_as(client, admin)

    for path in ("/classes", "/children", "/events", "/teams", "/leaderboard", "/scanner", "/users", "/profile"):
        assert client.get(path).status_code == 200, path


def test_child_qr_image(client, khadem):
    login_as(client, khadem)

    resp = client.get("/children/1/qr.png")

    assert resp.status_code == 200
    assert resp.mimetype == "image/png"
    assert client.get("/children/nope/qr.png").status_code == 404


def test_scan_and_score_flow(client, khadem):
    login_as(client, khadem)

    resp = client.post("/api/scan/resolve", json={"qr_code": "MKD-000001:1"})
    body = resp.get_json()
    assert resp.status_code == 200
    assert body["child"]["full_name"] == "Mina"
    assert body["child"]["class_name"] == "Grade 1"

    resp = client.post("/api/scores", json={"event_id": "e1", "child_id": "1", "score": "9"})
    assert resp.status_code == 201

    board = client.get("/api/leaderboard?event_id=e1").get_json()
    assert board["teams"][0]["name"] == "Lions"
    assert board["teams"][0]["total_score"] == 9
    assert board["individuals"][0]["total_score"] == 9
    assert board["refresh_seconds"] == 30


def test_scan_errors_are_json(client, khadem):
    login_as(client, khadem)

    bad = client.post("/api/scan/resolve", json={"qr_code": "garbage"})
    assert bad.status_code == 400
    assert bad.get_json()["message"] == "Invalid QR format"

    missing = client.post("/api/scan/resolve", json={"qr_code": "MKD-000009:9"})
    assert missing.status_code == 404

    closed = client.post("/api/scores", json={"event_id": "e3", "child_id": "1", "score": "9"})
    assert closed.status_code == 400


def test_leaderboard_defaults_to_ongoing_event(client, admin):
    login_as(client, admin)

    board = client.get("/api/leaderboard").get_json()

    assert board["event_id"] == "e1"


def test_admin_assigns_class_to_team(client, admin, repos):
    login_as(client, admin)

    resp = client.post("/teams/assign", data={"team_id": "t2", "class_id": "c1"})

    assert resp.status_code == 302
    assert repos["teams"].get_by_id("t2").class_ids == ("c3", "c1")
    assert repos["teams"].get_by_id("t1").class_ids == ("c2",)


def test_register_creates_pending_account(client, repos):
    resp = client.post(
        "/register",
        data={"username": "sara", "full_name": "Sara", "password": "secret1", "confirm_password": "secret1"},
    )

    assert resp.status_code == 302
    assert repos["users"].get_by_username("sara").role.value == "Pending"


def test_dashboard_picks_up_role_changes(client, repos, fixed_now):
    client.post("/login", data={"username": "khadem", "password": "khadem123"})
    repos["users"].update_fields("u-khadem", updated_at=fixed_now, role=repos["users"].get_by_id("u-amin").role)

    client.get("/dashboard")

    with client.session_transaction() as sess:
        assert sess["role"] == "Amin"


def test_dashboard_logs_out_revoked_accounts(client, repos, fixed_now):
    client.post("/login", data={"username": "khadem", "password": "khadem123"})
    repos["users"].update_fields("u-khadem", updated_at=fixed_now, is_active=False)

    resp = client.get("/dashboard")

    assert resp.status_code == 302
    assert "/login" in resp.headers["Location"]


def _unavailable(*args, **kwargs):
    raise RuntimeError("database unavailable")


def test_leaderboard_api_reports_store_failure(client, admin, repos, monkeypatch):
    login_as(client, admin)
    monkeypatch.setattr(repos["scores"], "list_for_event", _unavailable)

    resp = client.get("/api/leaderboard?event_id=e1")

    assert resp.status_code == 503
    body = resp.get_json()
    assert body["success"] is False
    assert "teams" not in body


def test_leaderboard_page_survives_store_failure(client, admin, repos, monkeypatch):
    login_as(client, admin)
    monkeypatch.setattr(repos["scores"], "list_for_event", _unavailable)

    resp = client.get("/leaderboard?event_id=e1")

    assert resp.status_code == 200
    assert b"Could not load the scores" in resp.data


def test_children_page_survives_store_failure(client, khadem, repos, monkeypatch):
    login_as(client, khadem)
    monkeypatch.setattr(repos["children"], "list_all", _unavailable)

    resp = client.get("/children")

    assert resp.status_code == 200
    assert b"System error while loading children" in resp.data


def test_dashboard_survives_store_failure(client, admin, repos, monkeypatch):
    login_as(client, admin)
    monkeypatch.setattr(repos["children"], "list_all", _unavailable)

    resp = client.get("/dashboard")

    assert resp.status_code == 200
    assert b"System error while loading the dashboard" in resp.data


def test_login_leaves_session_lifetime_alone(app, client):
    app.permanent_session_lifetime = timedelta(days=1)

    client.post("/login", data={"username": "admin", "password": "admin123", "remember_me": "1"})

    assert app.permanent_session_lifetime == timedelta(days=1)
