"""
Repository for the `user` collection.
"""
from typing import Any, Dict, Optional
from datetime import datetime, timezone

from bson import ObjectId
from pymongo.database import Database

COLLECTION = "user"


def _now_iso() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def insert_user(db: Database, doc: Dict[str, Any]) -> str:
    """
    Insert a user and return the inserted id as a string.
    - Lowercases `email`.
    - Stamps `created_at` and `updated_at` in ISO-8601 UTC.

    A duplicate email surfaces as pymongo's DuplicateKeyError (unique index).
    """
    data = dict(doc)
    if data.get("email"):
        data["email"] = str(data["email"]).lower()
    now = _now_iso()
    data.setdefault("created_at", now)
    data["updated_at"] = now
    res = db[COLLECTION].insert_one(data)
    return str(res.inserted_id)


def find_user_by_email(db: Database, email: str) -> Optional[Dict[str, Any]]:
    """Look a user up by email (stored lowercase)."""
    return db[COLLECTION].find_one({"email": str(email).lower()})


def get_user_by_id(db: Database, user_id: str) -> Optional[Dict[str, Any]]:
    """Fetch a user by id (str); a malformed id finds nothing."""
    if not ObjectId.is_valid(user_id):
        return None
    return db[COLLECTION].find_one({"_id": ObjectId(user_id)})
