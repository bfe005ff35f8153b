"""
Authentication logic: registration, login and current-user lookup.
"""
import logging
from typing import Any, Dict

from argon2 import PasswordHasher
from argon2.exceptions import Argon2Error, InvalidHashError
from argon2.low_level import Type
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from app.api.schemas.auth import CreateAccountPayload, LoginPayload
from app.core.config import settings
from app.core.exceptions import AuthenticationError, ConflictError, NotFoundError
from app.repositories import user_repo as repo
from app.services.token_service import create_access_token

_log = logging.getLogger("notes.auth")

ph = PasswordHasher(time_cost=2, memory_cost=51200, parallelism=2, hash_len=32, salt_len=16, type=Type.ID)


def hash_password(password: str) -> str:
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return ph.verify(password_hash, password)
    except (Argon2Error, InvalidHashError):
        return False


def register_user(db: Database, payload: CreateAccountPayload) -> Dict[str, Any]:
    """
    Create a local account and issue its first access token.

    Returns {"user": <stored doc>, "access_token": str}.
    """
    # No account is stored unless its token can be signed
    if not settings.jwt_configured:
        raise RuntimeError("JWT_SECRET is not configured")

    if repo.find_user_by_email(db, payload.email):
        raise ConflictError("User already exists")

    try:
        user_id = repo.insert_user(
            db,
            {
                "full_name": payload.full_name,
                "email": payload.email,
                "password_hash": hash_password(payload.password),
            },
        )
    except DuplicateKeyError:
        # Lost a race against a concurrent registration (unique email index)
        raise ConflictError("User already exists")

    user = repo.get_user_by_id(db, user_id)
    _log.info("Account created user_id=%s", user_id)
    return {"user": user, "access_token": create_access_token(user=user)}


def login_local(db: Database, payload: LoginPayload) -> str:
    """Check credentials and return a fresh access token."""
    u = repo.find_user_by_email(db, payload.email)
    if not u:
        raise NotFoundError("User not found")
    if not u.get("password_hash") or not verify_password(payload.password, u["password_hash"]):
        raise AuthenticationError("Invalid credentials")
    return create_access_token(user=u)


def get_current_user(db: Database, user_id: str) -> Dict[str, Any]:
    """Re-read the caller; a vanished account no longer authenticates."""
    u = repo.get_user_by_id(db, user_id)
    if not u:
        raise AuthenticationError("User not found")
    return u
