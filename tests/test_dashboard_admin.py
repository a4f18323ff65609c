import uuid


def test_supplier_dashboard_counts(client, make_user, make_business, make_favorite):
    owner = make_user()
    fan_a = make_user(role="consumer")
    fan_b = make_user(role="consumer")

    verified = make_business(owner)
    pending = make_business(owner, verification_status="pending")
    make_business(owner, verification_status="rejected")
    inactive = make_business(owner, is_active=False)
    make_business(make_user(), business_name="Someone else's")

    make_favorite(fan_a, verified)
    make_favorite(fan_b, verified)
    make_favorite(fan_a, pending)
    make_favorite(fan_a, inactive)

    res = client.get("/api/supplier/dashboard", params={"user_id": str(owner.id)})
    assert res.status_code == 200
    assert res.json() == {
        "success": True,
        "total_businesses": 3,
        "verified_businesses": 1,
        "pending_businesses": 1,
        "total_favorites": 3,
    }


def test_supplier_dashboard_without_businesses(client, make_user):
    res = client.get("/api/supplier/dashboard", params={"user_id": str(make_user().id)})
    assert res.json()["total_businesses"] == 0
    assert res.json()["total_favorites"] == 0


def test_supplier_dashboard_requires_user_id(client):
    res = client.get("/api/supplier/dashboard")
    assert res.status_code == 400


def test_admin_requires_token(client, make_user, make_business):
    business = make_business(make_user(), verification_status="pending")
    res = client.patch(
        f"/api/admin/businesses/{business.id}/verification",
        json={"verification_status": "verified"},
    )
    assert res.status_code == 401


def test_admin_requires_admin_role(client, make_user, make_business, auth_header):
    supplier = make_user()
    business = make_business(supplier, verification_status="pending")
    res = client.patch(
        f"/api/admin/businesses/{business.id}/verification",
        json={"verification_status": "verified"},
        headers=auth_header(supplier.external_id),
    )
    assert res.status_code == 403
    assert res.json()["error"] == "Admin access required"


def test_unsynced_token_is_rejected(client, make_user, make_business, auth_header):
    business = make_business(make_user())
    res = client.patch(
        f"/api/admin/businesses/{business.id}/active",
        json={"is_active": False},
        headers=auth_header("never-synced"),
    )
    assert res.status_code == 401
    assert res.json()["error"] == "User not synced"


def test_admin_verifies_business_into_search(client, make_user, make_business, auth_header):
    admin = make_user(role="admin")
    business = make_business(make_user(), verification_status="pending")
    point = {"latitude": business.latitude, "longitude": business.longitude, "radius": 1}

    assert client.post("/api/businesses/search", json=point).json()["count"] == 0

    res = client.patch(
        f"/api/admin/businesses/{business.id}/verification",
        json={"verification_status": "verified"},
        headers=auth_header(admin.external_id),
    )
    assert res.status_code == 200
    assert res.json()["business"]["verification_status"] == "verified"

    assert client.post("/api/businesses/search", json=point).json()["count"] == 1


def test_admin_deactivates_business(client, make_user, make_business, auth_header):
    admin = make_user(role="admin")
    business = make_business(make_user())

    res = client.patch(
        f"/api/admin/businesses/{business.id}/active",
        json={"is_active": False},
        headers=auth_header(admin.external_id),
    )
    assert res.status_code == 200
    assert res.json()["message"] == "Business deactivated"
    assert res.json()["business"]["is_active"] is False


def test_admin_rejects_unknown_status(client, make_user, make_business, auth_header):
    admin = make_user(role="admin")
    business = make_business(make_user())
    res = client.patch(
        f"/api/admin/businesses/{business.id}/verification",
        json={"verification_status": "approved"},
        headers=auth_header(admin.external_id),
    )
    assert res.status_code == 400


def test_admin_unknown_business(client, make_user, auth_header):
    admin = make_user(role="admin")
    res = client.patch(
        f"/api/admin/businesses/{uuid.uuid4()}/active",
        json={"is_active": True},
        headers=auth_header(admin.external_id),
    )
    assert res.status_code == 404


def test_health_db(client):
    res = client.get("/api/health/db")
    assert res.status_code == 200
    assert res.json()["status"] == "connected"


def test_root(client):
    assert client.get("/").json() == {"status": "ok", "service": "lokolo-backend"}
