"""
Creation and verification of access JWTs.

Tokens carry identity claims only; the current user is re-read from the store
on every request.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict
from uuid import uuid4

# Make sure this is PyJWT and not the unrelated "jwt" package
try:
    import jwt as pyjwt  # PyJWT exposes jwt.encode/jwt.decode
    if not hasattr(pyjwt, "encode"):
        raise ImportError("Wrong 'jwt' package installed")
except ImportError as e:
    raise RuntimeError(
        "JWT library conflict: install PyJWT>=2 and remove the 'jwt' package. "
        "Run: pip uninstall jwt && pip install PyJWT"
    ) from e

from app.core.config import settings


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _secret() -> str:
    if not settings.jwt_secret:
        raise RuntimeError("JWT_SECRET is not configured")
    return settings.jwt_secret


def create_access_token(*, user: Dict[str, Any]) -> str:
    """
    Build an HS256 JWT valid for ACCESS_TOKEN_EXPIRE_MINUTES.
    Claims: sub(user_id), email, iat, exp, jti.
    """
    now = _now_utc()
    exp = now + timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "sub": str(user["_id"]),
        "email": user.get("email"),
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
        "jti": str(uuid4()),
    }
    return pyjwt.encode(payload, _secret(), algorithm=settings.jwt_algorithm)


def verify_access_token(token: str) -> Dict[str, Any]:
    """
    Decode and validate signature/expiry. Returns the payload.

    Raises pyjwt.InvalidTokenError (or a subclass) on any failure.
    """
    return pyjwt.decode(
        token,
        key=_secret(),
        algorithms=[settings.jwt_algorithm],
        options={"require": ["sub", "exp"]},
    )
