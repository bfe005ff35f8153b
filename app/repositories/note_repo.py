"""Repo for the `note` collection.

- Stores `user_id` as a string (serialized ObjectId).
- Stamps timestamps in ISO-8601 UTC (Z).
- Every lookup by id is scoped to its owner: `{_id, user_id}`.
"""
import re
from typing import Dict, Any, List, Optional
from datetime import datetime, timezone

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.database import Database

COLLECTION = "note"

# Pinned first, then most recently updated; `_id` breaks same-second ties
LIST_SORT = [("is_pinned", -1), ("updated_at", -1), ("_id", -1)]


def _now_iso() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _owned(note_id: str, user_id: str) -> Optional[Dict[str, Any]]:
    """Owner-scoped filter, or None when the id cannot name any note."""
    if not ObjectId.is_valid(note_id):
        return None
    return {"_id": ObjectId(note_id), "user_id": str(user_id)}


def _out(doc: Dict[str, Any]) -> Dict[str, Any]:
    d = dict(doc)
    d["id"] = str(d.pop("_id", ""))
    return d


def literal_pattern(text: str) -> re.Pattern:
    """Case-insensitive pattern matching `text` as a literal substring."""
    return re.compile(re.escape(text), re.IGNORECASE)


def insert_note(db: Database, doc: Dict[str, Any]) -> Dict[str, Any]:
    """Insert a note with defaults and return the stored document."""
    data = dict(doc)
    now = _now_iso()
    data["user_id"] = str(data["user_id"])
    data.setdefault("tags", [])
    data.setdefault("is_pinned", False)
    data.setdefault("created_at", now)
    data["updated_at"] = now
    res = db[COLLECTION].insert_one(data)
    data["_id"] = res.inserted_id
    return _out(data)


def update_note(db: Database, note_id: str, user_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Apply `$set` to an owned note; returns the updated note or None if not owned."""
    flt = _owned(note_id, user_id)
    if flt is None:
        return None
    set_ops = dict(updates)
    set_ops["updated_at"] = _now_iso()
    doc = db[COLLECTION].find_one_and_update(
        flt,
        {"$set": set_ops},
        return_document=ReturnDocument.AFTER,
    )
    return _out(doc) if doc else None


def delete_note(db: Database, note_id: str, user_id: str) -> bool:
    """Delete an owned note; False when nothing matched."""
    flt = _owned(note_id, user_id)
    if flt is None:
        return False
    return db[COLLECTION].delete_one(flt).deleted_count > 0


def list_notes(db: Database, user_id: str) -> List[Dict[str, Any]]:
    """All notes of a user, pinned first."""
    docs = db[COLLECTION].find({"user_id": str(user_id)}).sort(LIST_SORT)
    return [_out(d) for d in docs]


def search_notes(db: Database, user_id: str, query: str) -> List[Dict[str, Any]]:
    """Notes of a user whose title, content or any tag contains `query` (literal, case-insensitive)."""
    rx = literal_pattern(query)
    flt = {
        "user_id": str(user_id),
        "$or": [{"title": rx}, {"content": rx}, {"tags": rx}],
    }
    docs = db[COLLECTION].find(flt).sort(LIST_SORT)
    return [_out(d) for d in docs]
