# tests/conftest.py
import os

# Settings are read at import time; pin them before the app is imported.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SUPABASE_URL"] = "http://localhost:54321"
os.environ["SUPABASE_JWT_SECRET"] = "test-jwt-secret"
os.environ["ENFORCE_IDENTITY"] = "false"
os.environ["SEARCH_FALLBACK_ENABLED"] = "true"
os.environ["USER_SYNC_FALLBACK_ENABLED"] = "true"

from datetime import datetime, timedelta, timezone  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from jose import jwt  # noqa: E402
from sqlmodel import Session, SQLModel  # noqa: E402

from app.core.storage_utils import (  # noqa: E402
    StorageObjectNotFound,
    get_storage,
    get_storage_provider,
)
from app.database import engine  # noqa: E402
from app.main import app  # noqa: E402
from app.models.business import Business, BusinessPhoto  # noqa: E402
from app.models.favorite import Favorite  # noqa: E402
from app.models.user import User  # noqa: E402


class InMemoryStorage:
    """Stands in for the Supabase bucket."""

    def __init__(self):
        self.objects: dict[str, bytes] = {}

    def upload(self, path: str, file_bytes: bytes, content_type: str) -> str:
        self.objects[path] = file_bytes
        return f"http://localhost:54321/storage/v1/object/public/business-photos/{path}"

    def delete(self, path: str) -> None:
        if path not in self.objects:
            raise StorageObjectNotFound(path)
        del self.objects[path]


@pytest.fixture(autouse=True)
def reset_db():
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    yield


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def client(storage):
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_storage_provider] = lambda: (lambda: storage)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def _save(obj):
    with Session(engine) as s:
        s.add(obj)
        s.commit()
        s.refresh(obj)
        s.expunge(obj)
    return obj


@pytest.fixture
def make_user():
    counter = {"n": 0}

    def _make(role: str = "supplier", **kwargs) -> User:
        counter["n"] += 1
        n = counter["n"]
        data = {
            "external_id": f"ext-{n}",
            "email": f"user{n}@example.com",
            "full_name": f"User {n}",
            "role": role,
        }
        data.update(kwargs)
        return _save(User(**data))

    return _make


@pytest.fixture
def make_business():
    def _make(owner: User, **kwargs) -> Business:
        data = {
            "user_id": owner.id,
            "business_name": "Ubuntu Coffee Shop",
            "slug": "ubuntu-coffee-shop",
            "category": "Restaurant",
            "latitude": -26.2041,
            "longitude": 28.0473,
            "city": "Johannesburg",
            "verification_status": "verified",
            "is_active": True,
        }
        data.update(kwargs)
        return _save(Business(**data))

    return _make


@pytest.fixture
def make_photo():
    def _make(business: Business, **kwargs) -> BusinessPhoto:
        data = {
            "business_id": business.id,
            "photo_url": "http://example.com/photo.jpg",
            "storage_path": f"business-{business.id}/seed.jpg",
            "is_primary": False,
        }
        data.update(kwargs)
        return _save(BusinessPhoto(**data))

    return _make


@pytest.fixture
def make_favorite():
    def _make(user: User, business: Business, **kwargs) -> Favorite:
        return _save(Favorite(user_id=user.id, business_id=business.id, **kwargs))

    return _make


@pytest.fixture
def db():
    with Session(engine) as s:
        yield s


@pytest.fixture
def auth_header():
    def _header(sub: str) -> dict[str, str]:
        token = jwt.encode(
            {"sub": sub, "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            "test-jwt-secret",
            algorithm="HS256",
        )
        return {"Authorization": f"Bearer {token}"}

    return _header
