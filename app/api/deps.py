"""
Reusable router dependencies (FastAPI Depends).

- Store: hands the request the Database attached at startup.
- Authentication: extracts and validates the access token, returns the current user.
- Keep this layer thin: no business logic.
"""
from typing import Any, Dict, Optional

from fastapi import Depends, Header, Request
from pymongo.database import Database

from app.core.exceptions import AuthenticationError, ForbiddenError, ServiceUnavailableError
from app.services import auth_service
from app.services.token_service import pyjwt, verify_access_token


def get_db(request: Request) -> Database:
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise ServiceUnavailableError("Database not available")
    return db


def get_current_user(
    authorization: Optional[str] = Header(default=None),
    db: Database = Depends(get_db),
) -> Dict[str, Any]:
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationError("Access token required")
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise AuthenticationError("Access token required")
    try:
        payload = verify_access_token(token)
    except pyjwt.InvalidTokenError:
        raise ForbiddenError("Invalid or expired token")

    return auth_service.get_current_user(db, str(payload["sub"]))
