"""
Shared fixtures: in-memory SQLite, a memory-backed local store per test and
helpers for signing in.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOCAL_STORE_PATH"] = ""
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["AUTO_CREATE_TABLES"] = "true"
# Long enough that API tests observe pending edits; they flush explicitly
os.environ["AUTOSAVE_DEBOUNCE_SECONDS"] = "5"

import pytest
from fastapi.testclient import TestClient
from app.core.config import settings
from app.db.base import Base
from app.db.session import engine
from app.main import app
from app.services.autosave import DebouncedWriter
from app.services.local_store import LocalStore, MemoryStorage


@pytest.fixture
def client():
    """Test client on a fresh database and a freshly seeded local store."""
    Base.metadata.drop_all(bind=engine)
    with TestClient(app) as c:
        local_store = LocalStore(MemoryStorage(), settings.LOCAL_STORE_NAMESPACE)
        local_store.initialize()
        app.state.local_store = local_store
        app.state.writer = DebouncedWriter(local_store.save_sections, settings.AUTOSAVE_DEBOUNCE_SECONDS)
        yield c


@pytest.fixture
def local_store(client):
    return app.state.local_store


def login(client, email, password):
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def signup_and_login(client, email, password="secret123", full_name="Test Traveler"):
    response = client.post(
        "/api/auth/signup",
        json={"email": email, "password": password, "full_name": full_name}
    )
    assert response.status_code == 201
    return login(client, email, password)


@pytest.fixture
def user_headers(client):
    """A signed-up profile whose trips live in the remote store."""
    return signup_and_login(client, "alice@example.com", full_name="Alice Walker")


@pytest.fixture
def other_headers(client):
    return signup_and_login(client, "bob@example.com", full_name="Bob Stone")


@pytest.fixture
def demo_headers(client):
    return login(client, settings.DEMO_EMAIL, settings.DEMO_PASSWORD)


@pytest.fixture
def admin_headers(client):
    return login(client, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)


@pytest.fixture
def paris(client):
    cities = client.get("/api/cities", params={"q": "paris"}).json()
    return cities[0]


def create_trip(client, headers=None, **overrides):
    payload = {
        "name": "Spring in Europe",
        "description": "Cities and trains",
        "start_date": "2026-05-01",
        "end_date": "2026-05-10",
        "total_budget": "1000",
    }
    payload.update(overrides)
    response = client.post("/api/trips", json=payload, headers=headers or {})
    assert response.status_code == 201, response.text
    return response.json()
