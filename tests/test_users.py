from sqlalchemy.exc import OperationalError

from app.core.config import get_settings
from app.routers import auth as auth_router


def _sync(client, **overrides):
    payload = {"external_id": "firebase-abc", "email": "thandi@example.com"}
    payload.update(overrides)
    return client.post("/api/auth/sync-user", json=payload)


def test_sync_creates_user_with_defaults(client):
    res = _sync(client)
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "User synced successfully"
    assert body["user"]["role"] == "consumer"
    assert body["user"]["full_name"] == "thandi@example.com"
    assert body["user"]["sync_pending"] is False


def test_sync_is_idempotent(client):
    first = _sync(client, full_name="Thandi", role="supplier").json()["user"]
    second = _sync(client, full_name="Someone Else", role="consumer").json()["user"]

    assert second["id"] == first["id"]
    assert second["full_name"] == "Thandi"
    assert second["role"] == "supplier"


def test_sync_rejects_admin_role(client):
    res = _sync(client, role="admin")
    assert res.status_code == 400
    assert res.json()["success"] is False


def test_sync_rejects_missing_email(client):
    res = client.post("/api/auth/sync-user", json={"external_id": "firebase-abc"})
    assert res.status_code == 400
    assert "email" in res.json()["error"]


def test_sync_email_taken_by_other_identity(client):
    _sync(client)
    res = _sync(client, external_id="firebase-other")
    assert res.status_code == 400
    assert res.json()["error"] == "Email is already registered to another account"


def _break_store(monkeypatch):
    def boom(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("connection refused"))

    monkeypatch.setattr(auth_router.repo, "get_by_external_id", boom)


def test_sync_falls_back_when_store_down(client, monkeypatch):
    _break_store(monkeypatch)
    res = _sync(client, full_name="Thandi")
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "User authenticated (database sync pending)"
    assert body["user"]["sync_pending"] is True
    assert body["user"]["id"] == "firebase-abc"
    assert body["user"]["role"] == "consumer"


def test_sync_fallback_disabled(client, monkeypatch):
    _break_store(monkeypatch)
    monkeypatch.setattr(get_settings(), "USER_SYNC_FALLBACK_ENABLED", False)
    res = _sync(client)
    assert res.status_code == 500
    assert res.json() == {
        "success": False,
        "error": "Database error",
        "details": "connection refused",
    }


def test_get_profile(client):
    _sync(client, full_name="Thandi")
    res = client.get("/api/users/firebase-abc")
    assert res.status_code == 200
    assert res.json()["user"]["full_name"] == "Thandi"


def test_get_unknown_profile(client):
    res = client.get("/api/users/nobody")
    assert res.status_code == 404
    assert res.json() == {"success": False, "error": "User not found"}


def test_update_profile_name(client):
    _sync(client)
    res = client.put("/api/users/firebase-abc", json={"full_name": "  Thandi M  "})
    assert res.status_code == 200
    assert res.json()["user"]["full_name"] == "Thandi M"
    assert res.json()["message"] == "Profile updated successfully"


def test_update_profile_rejects_blank_name(client):
    _sync(client)
    res = client.put("/api/users/firebase-abc", json={"full_name": "   "})
    assert res.status_code == 400


def test_identity_enforcement(client, monkeypatch, auth_header):
    monkeypatch.setattr(get_settings(), "ENFORCE_IDENTITY", True)

    assert _sync(client).status_code == 401

    res = client.post(
        "/api/auth/sync-user",
        json={"external_id": "firebase-abc", "email": "thandi@example.com"},
        headers=auth_header("firebase-xyz"),
    )
    assert res.status_code == 403

    res = client.post(
        "/api/auth/sync-user",
        json={"external_id": "firebase-abc", "email": "thandi@example.com"},
        headers=auth_header("firebase-abc"),
    )
    assert res.status_code == 200


def test_invalid_token_is_rejected(client):
    res = client.get("/api/users/firebase-abc", headers={"Authorization": "Bearer not-a-jwt"})
    assert res.status_code == 401
    assert res.json()["error"] == "Invalid or expired token"


def test_concurrent_first_sync_returns_existing_user(client, monkeypatch):
    first = _sync(client).json()["user"]

    real_lookup = auth_router.repo.get_by_external_id
    calls = {"n": 0}

    def misses_once(session, external_id):
        # the other request inserted between our lookup and our insert
        calls["n"] += 1
        if calls["n"] == 1:
            return None
        return real_lookup(session, external_id)

    monkeypatch.setattr(auth_router.repo, "get_by_external_id", misses_once)
    res = _sync(client)
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "User synced successfully"
    assert body["user"]["id"] == first["id"]
    assert body["user"]["sync_pending"] is False
