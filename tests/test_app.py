"""
App-level behaviour: health routes, envelopes for framework errors, store
failures, config helpers.
"""
from unittest.mock import patch

import mongomock
import pytest
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from app.core.config import Settings
from app.infrastructure.db import bootstrap
from app.main import app
from app.repositories import note_repo
from app.services import note_service


def test_root_and_ping(client):
    assert client.get("/").json() == {"data": "hello"}
    assert client.get("/ping").json() == {"message": "pong"}


def test_health_without_store():
    res = TestClient(app).get("/health")
    assert res.status_code == 200
    assert res.json() == {"ok": True, "database": False}


def test_data_route_without_store_is_503():
    res = TestClient(app).post("/login", json={"email": "a@x.com", "password": "p"})
    assert res.status_code == 503
    assert res.json()["error"] is True
    assert res.json()["message"] == "Database not available"


def test_unknown_route_uses_envelope(client):
    res = client.get("/does-not-exist")
    assert res.status_code == 404
    assert res.json()["error"] is True


def test_request_id_is_echoed(client):
    res = client.get("/ping", headers={"X-Request-Id": "abc123"})
    assert res.headers["X-Request-Id"] == "abc123"


def test_store_failure_is_generic_500(client, auth_headers, caplog):
    with patch.object(note_repo, "list_notes", side_effect=ServerSelectionTimeoutError("mongo down")):
        res = client.get("/get-all-notes", headers=auth_headers)
    assert res.status_code == 500
    body = res.json()
    assert body["error"] is True
    assert body["message"] == "Internal Server Error"
    assert "mongo down" not in res.text
    assert any("Store error" in r.getMessage() for r in caplog.records)


@pytest.mark.parametrize(
    "raw, expected",
    [("", ""), ("api", "/api"), ("/api/", "/api"), ("/", "/"), ("  /v1 ", "/v1")],
)
def test_api_prefix_normalized(raw, expected):
    assert Settings(api_prefix=raw).api_prefix_normalized == expected


def test_settings_defaults():
    cfg = Settings(_env_file=None)
    assert cfg.access_token_expire_minutes == 36000
    assert cfg.jwt_algorithm == "HS256"
    assert cfg.legacy_conflict_status is False


def test_unexpected_error_is_generic_500(client, auth_headers, caplog):
    with patch.object(note_service, "list_notes", side_effect=RuntimeError("boom")):
        res = TestClient(app, raise_server_exceptions=False).get("/get-all-notes", headers=auth_headers)
    assert res.status_code == 500
    body = res.json()
    assert body["error"] is True
    assert body["message"] == "Internal Server Error"
    assert "boom" not in res.text
    assert any("Unhandled error" in r.getMessage() for r in caplog.records)


def test_startup_attaches_store_and_shutdown_clears_it():
    mongo = mongomock.MongoClient()
    store = mongo["notes_startup"]
    with patch("app.main.init_mongo", return_value=(mongo, store)), \
            patch.object(bootstrap, "_collmod_or_create") as collmod:
        with TestClient(app) as c:
            assert app.state.db is store
            assert app.state.mongo_client is mongo
            assert c.get("/health").json() == {"ok": True, "database": True}
        collmod.assert_any_call(store, "user", bootstrap.USER_VALIDATOR)
        collmod.assert_any_call(store, "note", bootstrap.NOTE_VALIDATOR)
        assert store["user"].index_information()["uniq_email"]["unique"] is True
    assert app.state.db is None
    assert app.state.mongo_client is None


def test_startup_without_store_skips_bootstrap():
    with patch("app.main.init_mongo", return_value=(None, None)), \
            patch("app.main.ensure_collections") as ensure:
        with TestClient(app):
            assert app.state.db is None
    ensure.assert_not_called()
