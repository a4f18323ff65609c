from datetime import datetime, timedelta, timezone
import uuid

from sqlmodel import select

from app.core.storage_utils import get_storage_provider
from app.main import app
from app.models.business import Business, BusinessPhoto
from app.models.favorite import Favorite


def _create(client, owner, **overrides):
    payload = {
        "user_id": str(owner.id),
        "business_name": "Ubuntu Coffee Shop!",
        "category": "Coffee Shop",
        "description": "Authentic African coffee experience",
        "latitude": -26.2041,
        "longitude": 28.0473,
        "city": "Johannesburg",
        "phone": "+27 11 123 4567",
    }
    payload.update(overrides)
    return client.post("/api/businesses", json=payload)


def test_create_business(client, make_user):
    owner = make_user()
    res = _create(client, owner)
    assert res.status_code == 201
    business = res.json()["business"]
    assert business["slug"] == "ubuntu-coffee-shop"
    assert business["verification_status"] == "pending"
    assert business["is_active"] is True
    assert business["user_id"] == str(owner.id)


def test_create_requires_name_and_category(client, make_user):
    owner = make_user()
    res = client.post("/api/businesses", json={"user_id": str(owner.id), "business_name": "X"})
    assert res.status_code == 400
    assert res.json()["success"] is False
    assert "category" in res.json()["error"]

    res = _create(client, owner, business_name="   ")
    assert res.status_code == 400


def test_create_for_unknown_owner(client):
    res = client.post(
        "/api/businesses",
        json={"user_id": str(uuid.uuid4()), "business_name": "X", "category": "Y"},
    )
    assert res.status_code == 404


def test_same_name_gives_same_slug(client, make_user):
    owner = make_user()
    first = _create(client, owner).json()["business"]
    second = _create(client, owner).json()["business"]
    assert first["id"] != second["id"]
    assert first["slug"] == second["slug"]


def test_list_for_owner_newest_first(client, make_user, make_business):
    owner = make_user()
    other = make_user()
    now = datetime.now(timezone.utc)
    make_business(owner, business_name="Old", created_at=now - timedelta(days=2))
    make_business(owner, business_name="New", created_at=now)
    make_business(other, business_name="Not mine")

    res = client.get("/api/businesses", params={"user_id": str(owner.id)})
    assert res.status_code == 200
    body = res.json()
    assert body["count"] == 2
    assert [b["business_name"] for b in body["businesses"]] == ["New", "Old"]


def test_get_business(client, make_user, make_business):
    business = make_business(make_user())
    res = client.get(f"/api/businesses/{business.id}")
    assert res.status_code == 200
    assert res.json()["business"]["business_name"] == "Ubuntu Coffee Shop"


def test_get_unknown_business(client):
    res = client.get(f"/api/businesses/{uuid.uuid4()}")
    assert res.status_code == 404
    assert res.json() == {"success": False, "error": "Business not found"}


def test_get_business_bad_id(client):
    res = client.get("/api/businesses/not-a-uuid")
    assert res.status_code == 400


def test_update_keeps_name_and_clears_omitted_fields(client, make_user):
    owner = make_user()
    created = _create(client, owner).json()["business"]

    res = client.put(
        f"/api/businesses/{created['id']}",
        json={"business_name": None, "description": "Now with pastries"},
    )
    assert res.status_code == 200
    updated = res.json()["business"]
    assert updated["business_name"] == "Ubuntu Coffee Shop!"
    assert updated["category"] == "Coffee Shop"
    assert updated["description"] == "Now with pastries"
    assert updated["phone"] is None
    assert updated["city"] is None
    assert updated["latitude"] is None
    # slug follows the original name only
    assert updated["slug"] == "ubuntu-coffee-shop"


def test_update_unknown_business(client):
    res = client.put(f"/api/businesses/{uuid.uuid4()}", json={"description": "x"})
    assert res.status_code == 404


def test_delete_business_removes_photos_and_favorites(
    client, storage, db, make_user, make_business, make_photo, make_favorite
):
    owner = make_user()
    fan = make_user(role="consumer")
    business = make_business(owner)
    storage.objects[f"business-{business.id}/seed.jpg"] = b"img"
    make_photo(business)
    make_favorite(fan, business)

    res = client.delete(f"/api/businesses/{business.id}")
    assert res.status_code == 200
    assert res.json()["message"] == "Business deleted successfully"

    assert db.get(Business, business.id) is None
    assert db.exec(select(BusinessPhoto)).all() == []
    assert db.exec(select(Favorite)).all() == []
    assert storage.objects == {}


def test_delete_business_with_missing_blob(client, db, make_user, make_business, make_photo):
    business = make_business(make_user())
    make_photo(business)

    res = client.delete(f"/api/businesses/{business.id}")
    assert res.status_code == 200
    assert db.get(Business, business.id) is None


def test_delete_unknown_business(client):
    res = client.delete(f"/api/businesses/{uuid.uuid4()}")
    assert res.status_code == 404


def test_map_links(client, make_user, make_business):
    business = make_business(make_user(), address_formatted="123 Nelson Mandela Square")
    res = client.get(f"/api/businesses/{business.id}/map-links")
    assert res.status_code == 200
    links = res.json()["links"]
    assert links["google_maps_url"].startswith("https://www.google.com/maps/search/?api=1")
    assert links["share_text"] == "Ubuntu Coffee Shop - 123 Nelson Mandela Square"


def test_map_links_without_location(client, make_user, make_business):
    business = make_business(make_user(), latitude=None, longitude=None)
    res = client.get(f"/api/businesses/{business.id}/map-links")
    assert res.status_code == 400
    assert res.json()["error"] == "Business has no location"


def test_unknown_route_uses_error_envelope(client):
    res = client.get("/api/nothing-here")
    assert res.status_code == 404
    assert res.json()["success"] is False


def _storage_unavailable():
    raise RuntimeError("Missing SUPABASE_SERVICE_ROLE_KEY in .env")


def test_delete_business_without_photos_never_opens_storage(client, db, make_user, make_business):
    business = make_business(make_user())

    def must_not_open():
        raise AssertionError("storage opened for a listing without photos")

    app.dependency_overrides[get_storage_provider] = lambda: must_not_open

    res = client.delete(f"/api/businesses/{business.id}")
    assert res.status_code == 200
    assert db.get(Business, business.id) is None


def test_delete_business_when_storage_unavailable(client, db, make_user, make_business, make_photo):
    business = make_business(make_user())
    make_photo(business)
    app.dependency_overrides[get_storage_provider] = lambda: _storage_unavailable

    res = client.delete(f"/api/businesses/{business.id}")
    assert res.status_code == 200
    assert db.exec(select(BusinessPhoto)).all() == []
