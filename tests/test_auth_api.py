"""
API tests for account creation, login and current-user lookup.
"""
from unittest.mock import patch

from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import DuplicateKeyError

from app.core.config import settings
from app.main import app
from app.repositories import user_repo
from app.services import token_service


class TestCreateAccount:
    def test_create_account_success(self, client, db):
        res = client.post(
            "/create-account",
            json={"fullName": "A", "email": "A@X.com", "password": "p"},
        )
        assert res.status_code == 200
        body = res.json()
        assert body["error"] is False
        assert body["message"] == "Registration Successful"
        assert body["accessToken"]
        assert body["user"]["fullName"] == "A"
        assert body["user"]["email"] == "a@x.com"
        assert ObjectId.is_valid(body["user"]["_id"])

        stored = db["user"].find_one({"email": "a@x.com"})
        assert stored["password_hash"] != "p"
        assert stored["password_hash"].startswith("$argon2id$")

    def test_response_never_exposes_password(self, client):
        res = client.post(
            "/create-account",
            json={"fullName": "A", "email": "a@x.com", "password": "secret"},
        )
        text = res.text
        assert "password" not in text

    def test_missing_fields_rejected(self, client, db):
        res = client.post("/create-account", json={"fullName": "A", "email": "a@x.com"})
        assert res.status_code == 400
        body = res.json()
        assert body["error"] is True
        assert body["message"] == "All fields are required"
        assert db["user"].count_documents({}) == 0

    def test_blank_field_counts_as_missing(self, client):
        res = client.post(
            "/create-account",
            json={"fullName": "  ", "email": "a@x.com", "password": "p"},
        )
        assert res.status_code == 400
        assert res.json()["message"] == "All fields are required"

    def test_invalid_email_rejected(self, client):
        res = client.post(
            "/create-account",
            json={"fullName": "A", "email": "not-an-email", "password": "p"},
        )
        assert res.status_code == 400
        assert res.json()["error"] is True

    def test_duplicate_email_is_conflict(self, client, db, register):
        register(email="a@x.com")
        res = client.post(
            "/create-account",
            json={"fullName": "Other", "email": "A@x.com", "password": "q"},
        )
        assert res.status_code == 409
        body = res.json()
        assert body["error"] is True
        assert body["message"] == "User already exists"
        assert db["user"].count_documents({"email": "a@x.com"}) == 1

    def test_duplicate_email_legacy_status(self, client, register, monkeypatch):
        monkeypatch.setattr(settings, "legacy_conflict_status", True)
        register(email="a@x.com")
        res = client.post(
            "/create-account",
            json={"fullName": "A", "email": "a@x.com", "password": "p"},
        )
        assert res.status_code == 200
        assert res.json() == {"error": True, "message": "User already exists", "request_id": res.headers["X-Request-Id"]}

    def test_duplicate_key_race_is_conflict(self, client):
        with patch.object(user_repo, "insert_user", side_effect=DuplicateKeyError("dup")):
            res = client.post(
                "/create-account",
                json={"fullName": "A", "email": "a@x.com", "password": "p"},
            )
        assert res.status_code == 409
        assert res.json()["message"] == "User already exists"

    def test_unsigned_registration_stores_nothing(self, client, db, monkeypatch):
        monkeypatch.setattr(settings, "jwt_secret", None)
        payload = {"fullName": "A", "email": "a@x.com", "password": "p"}
        res = TestClient(app, raise_server_exceptions=False).post("/create-account", json=payload)
        assert res.status_code == 500
        assert db["user"].count_documents({}) == 0

        monkeypatch.setattr(settings, "jwt_secret", "test-secret")
        res = client.post("/create-account", json=payload)
        assert res.status_code == 200
        assert res.json()["message"] == "Registration Successful"


class TestLogin:
    def test_login_after_register(self, client, register):
        register(email="a@x.com", password="p")
        res = client.post("/login", json={"email": "a@x.com", "password": "p"})
        assert res.status_code == 200
        body = res.json()
        assert body["error"] is False
        assert body["message"] == "Login Successful"

        me = client.get("/get-user", headers={"Authorization": f"Bearer {body['accessToken']}"})
        assert me.status_code == 200
        assert me.json()["user"]["email"] == "a@x.com"

    def test_login_email_is_case_insensitive(self, client, register):
        register(email="a@x.com", password="p")
        res = client.post("/login", json={"email": "A@X.COM", "password": "p"})
        assert res.status_code == 200

    def test_login_missing_fields(self, client):
        res = client.post("/login", json={"email": "a@x.com"})
        assert res.status_code == 400
        assert res.json()["message"] == "All fields are required"

    def test_login_unknown_user(self, client):
        res = client.post("/login", json={"email": "nobody@x.com", "password": "p"})
        assert res.status_code == 404
        assert res.json()["message"] == "User not found"

    def test_login_wrong_password(self, client, register):
        register(email="a@x.com", password="p")
        res = client.post("/login", json={"email": "a@x.com", "password": "wrong"})
        assert res.status_code == 401
        body = res.json()
        assert body["error"] is True
        assert body["message"] == "Invalid credentials"
        assert "accessToken" not in body


class TestGetUser:
    def test_get_user_projection(self, client, register):
        headers, created = register(email="a@x.com", full_name="Ann")
        res = client.get("/get-user", headers=headers)
        assert res.status_code == 200
        body = res.json()
        assert body["error"] is False
        assert body["user"] == {
            "_id": created["user"]["_id"],
            "fullName": "Ann",
            "email": "a@x.com",
        }

    def test_missing_token(self, client):
        res = client.get("/get-user")
        assert res.status_code == 401
        assert res.json()["message"] == "Access token required"

    def test_wrong_scheme(self, client, auth_headers):
        token = auth_headers["Authorization"].split(" ", 1)[1]
        res = client.get("/get-user", headers={"Authorization": f"Token {token}"})
        assert res.status_code == 401

    def test_garbage_token(self, client):
        res = client.get("/get-user", headers={"Authorization": "Bearer not.a.jwt"})
        assert res.status_code == 403
        assert res.json()["message"] == "Invalid or expired token"

    def test_expired_token(self, client, register, monkeypatch):
        _, created = register()
        monkeypatch.setattr(settings, "access_token_expire_minutes", -1)
        token = token_service.create_access_token(user={"_id": created["user"]["_id"], "email": "a@x.com"})
        res = client.get("/get-user", headers={"Authorization": f"Bearer {token}"})
        assert res.status_code == 403

    def test_deleted_user_is_unauthorized(self, client, db, register):
        headers, created = register()
        db["user"].delete_one({"_id": ObjectId(created["user"]["_id"])})
        res = client.get("/get-user", headers=headers)
        assert res.status_code == 401
        assert res.json()["message"] == "User not found"
