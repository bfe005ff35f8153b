"""
Shared fixtures: an in-memory Mongo (mongomock) injected through the `get_db`
dependency, a TestClient, and helpers to register users and build auth headers.
"""
import os

os.environ.setdefault("JWT_SECRET", "test-secret")

import mongomock
import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_db
from app.main import app


@pytest.fixture
def db():
    return mongomock.MongoClient()["notes_test"]


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Create an account and return (auth headers, response body)."""

    def _register(email: str = "a@x.com", full_name: str = "A", password: str = "p"):
        res = client.post(
            "/create-account",
            json={"fullName": full_name, "email": email, "password": password},
        )
        assert res.status_code == 200, res.text
        body = res.json()
        return {"Authorization": f"Bearer {body['accessToken']}"}, body

    return _register


@pytest.fixture
def auth_headers(register):
    headers, _ = register()
    return headers
