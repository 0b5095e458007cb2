import pytest
from fastapi.testclient import TestClient

from alphatrive.app import create_app
from alphatrive.config.settings import Settings
from alphatrive.database import init_db as database

TEST_SECRET = "test-secret-key-0123456789-abcdefghijklmnopqrstuvwxyz"


@pytest.fixture
def settings():
    return Settings(secret_key=TEST_SECRET, database_url="sqlite://", log_level="WARNING")


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(settings):
    """A bare session on a fresh in-memory database, for service-level tests."""
    database.init_db(settings.database_url)
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_user(client):
    """Register and log in a user, returning its id, token and auth headers."""

    def _make_user(username="alice", email=None, password="secret"):
        email = email or f"{username}@example.com"
        resp = client.post("/api/auth/register", json={"username": username, "email": email, "password": password})
        assert resp.status_code == 201, resp.text
        resp = client.post("/api/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        token = resp.json()["token"]
        return {
            "id": resp.json()["user"]["id"],
            "username": username,
            "email": email,
            "token": token,
            "headers": bearer(token),
        }

    return _make_user


@pytest.fixture
def make_post(client):
    def _make_post(user, stock_symbol="AAPL", title="t", description="d", tags=None):
        body = {"stockSymbol": stock_symbol, "title": title, "description": description}
        if tags is not None:
            body["tags"] = tags
        resp = client.post("/api/posts", json=body, headers=user["headers"])
        assert resp.status_code == 200, resp.text
        return resp.json()["postId"]

    return _make_post
