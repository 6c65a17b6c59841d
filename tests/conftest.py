import os

# 앱 import 전에 in-memory SQLite로 전환
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("UNSPLASH_ACCESS_KEY", "test-key")

import pytest
from fastapi.testclient import TestClient

from app import models  # noqa: F401
from app.db.base import Base
from app.db.session import SessionLocal, engine
from app.main import app
from app.services import cities as city_service
from app.services.banners import banner_cache
from app.services.profiles import create_profile

USER_ID = "00000000-0000-0000-0000-000000000001"
OTHER_USER_ID = "00000000-0000-0000-0000-000000000002"


@pytest.fixture(autouse=True)
def _reset_banner_cache():
    banner_cache.clear()
    yield
    banner_cache.clear()


@pytest.fixture
def db():
    """Fresh schema per test."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    return TestClient(app)


@pytest.fixture
def user(db):
    return create_profile(db, {"id": USER_ID, "username": "traveler", "full_name": "Jane Doe"})


@pytest.fixture
def other_user(db):
    return create_profile(db, {"id": OTHER_USER_ID, "username": "nomad"})


@pytest.fixture
def auth_headers(user):
    return {"X-User-Id": user.id}


@pytest.fixture
def countries(db):
    france = city_service.upsert_country(db, {"id": 1, "name": "France", "continent": "Europe"})
    japan = city_service.upsert_country(db, {"id": 2, "name": "Japan", "continent": "Asia"})
    return {"france": france, "japan": japan}


@pytest.fixture
def make_city(db, countries):
    """Create a city for a user, optionally rated."""

    def _make(user_id, name, country="france", rating=None, admin="Region", visited=None):
        city = city_service.upsert_city(
            db,
            user_id,
            {
                "name": name,
                "admin": admin,
                "country_id": countries[country].id,
                "latitude": 48.85,
                "longitude": 2.35,
                "bucket_list": False,
                "is_visited": bool(visited) or rating is not None,
            },
        )
        if rating is not None:
            city = city_service.set_rating(db, city, rating)
        return city

    return _make
