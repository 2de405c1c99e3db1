# tests/conftest.py

import os

# Must be set before the application modules read their configuration
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ENVIRONMENT"] = "test"

from datetime import timedelta  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from artist_booking.database import Base, get_db  # noqa: E402
from artist_booking.main import app  # noqa: E402
from artist_booking.models import User  # noqa: E402
from artist_booking.security_utils import create_access_token_for_user  # noqa: E402
from artist_booking.shared.validators import utcnow  # noqa: E402

# --- In-memory test database, one connection shared by every session ---
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db_session):
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# --- Users and tokens ---


@pytest.fixture()
def make_user(db_session):
    def _make_user(name: str, user_type: str) -> User:
        user = User(name=name, email=f"{name.lower().replace(' ', '.')}@example.com", user_type=user_type)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def venue(make_user):
    return make_user("Blue Note", "venue")


@pytest.fixture()
def other_venue(make_user):
    return make_user("Red Room", "venue")


@pytest.fixture()
def artist(make_user):
    return make_user("Ella Artist", "artist")


@pytest.fixture()
def other_artist(make_user):
    return make_user("Miles Artist", "artist")


def bearer(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token_for_user(user)}"}


@pytest.fixture()
def auth_headers():
    return bearer


# --- Gig and proposal builders ---


@pytest.fixture()
def gig_payload():
    def _gig_payload(days_ahead: int = 30, **overrides) -> dict:
        day = (utcnow() + timedelta(days=days_ahead)).date().isoformat()
        payload = {
            "name": "Friday Jazz Night",
            "date": day,
            "venue": "Blue Note Hall",
            "hourlyRate": 100,
            "estimatedAudienceSize": 150,
            "startTime": f"{day}T20:00:00",
            "endTime": f"{day}T23:00:00",
            "equipment": "PA system",
            "jobDetails": "Three sets of standards",
        }
        payload.update(overrides)
        return payload

    return _gig_payload


@pytest.fixture()
def create_gig(client, gig_payload):
    def _create_gig(owner: User, **overrides) -> dict:
        response = client.post("/api/v1/venues/gigs", json=gig_payload(**overrides), headers=bearer(owner))
        assert response.status_code == 201, response.text
        return response.json()["data"]["gig"]

    return _create_gig


@pytest.fixture()
def submit_proposal(client):
    def _submit_proposal(gig_id: int, artist: User, **overrides) -> dict:
        payload = {"hourlyRate": 100, "coverLetter": "I have played this room before"}
        payload.update(overrides)
        response = client.post(
            f"/api/v1/artists/gigs/{gig_id}/proposal", json=payload, headers=bearer(artist)
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]["proposal"]

    return _submit_proposal


@pytest.fixture()
def hired_proposal(client, venue, artist, create_gig, submit_proposal):
    """A gig owned by `venue` with `artist` hired on it"""
    gig = create_gig(venue)
    proposal = submit_proposal(gig["id"], artist)
    response = client.post(f"/api/v1/venues/proposals/{proposal['id']}/hire", headers=bearer(venue))
    assert response.status_code == 200, response.text
    return gig, response.json()["data"]["proposal"]
