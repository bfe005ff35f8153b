"""
Mongo bootstrap: defines and applies validators (JSON Schema) and indexes.
Runs at startup to guarantee the minimal collections and their consistency.
Does not bring the app down on failure; non-critical cases only log warnings.
"""
from __future__ import annotations

from typing import Any, Dict, List
import logging
from pymongo.database import Database
from pymongo.errors import PyMongoError

from app.repositories.note_repo import COLLECTION as NOTE_COLL
from app.repositories.user_repo import COLLECTION as USER_COLL

_log = logging.getLogger("notes.mongo.bootstrap")


USER_VALIDATOR: Dict[str, Any] = {
    "bsonType": "object",
    "required": ["full_name", "email", "password_hash", "created_at", "updated_at"],
    "properties": {
        "full_name": {"bsonType": "string", "minLength": 1},
        "email": {"bsonType": "string", "minLength": 3, "description": "lowercase"},
        "password_hash": {"bsonType": "string"},
        "created_at": {"bsonType": "string", "minLength": 10},
        "updated_at": {"bsonType": "string", "minLength": 10},
    },
    "additionalProperties": True,
}

NOTE_VALIDATOR: Dict[str, Any] = {
    "bsonType": "object",
    "required": ["user_id", "title", "content", "tags", "is_pinned", "created_at", "updated_at"],
    "properties": {
        "user_id": {"bsonType": "string", "minLength": 10},
        "title": {"bsonType": "string", "minLength": 1},
        "content": {"bsonType": "string", "minLength": 1},
        "tags": {"bsonType": "array", "items": {"bsonType": "string"}},
        "is_pinned": {"bsonType": "bool"},
        "created_at": {"bsonType": "string", "minLength": 10},
        "updated_at": {"bsonType": "string", "minLength": 10},
    },
    "additionalProperties": True,
}

USER_INDEXES: List[Dict[str, Any]] = [
    {"keys": [("email", 1)], "unique": True, "name": "uniq_email"},
]

NOTE_INDEXES: List[Dict[str, Any]] = [
    {"keys": [("user_id", 1), ("is_pinned", -1), ("updated_at", -1)], "name": "ix_note_user_pinned_updated"},
    {"keys": [("user_id", 1), ("tags", 1)], "name": "ix_note_user_tags"},
]


def _collmod_or_create(db: Database, name: str, validator: Dict[str, Any]) -> None:
    try:
        if name in db.list_collection_names():
            db.command({
                "collMod": name,
                "validator": {"$jsonSchema": validator},
                "validationLevel": "moderate",
            })
        else:
            db.create_collection(name, validator={"$jsonSchema": validator})
    except PyMongoError as e:
        # Some deployments reject collMod without privileges; keep going without a strict validator
        _log.warning("Could not apply validator on '%s': %s", name, e)


def ensure_indexes(db: Database, name: str, indexes: List[Dict[str, Any]]) -> None:
    coll = db[name]
    for ix in indexes:
        spec = dict(ix)
        keys = spec.pop("keys")
        try:
            coll.create_index(keys, **spec)
        except PyMongoError as e:
            # e.g. pre-existing non-unique data
            _log.warning("Could not create index on '%s' (%s): %s", name, keys, e)


def ensure_collections(db: Database) -> None:
    """
    Guarantee collections, validators and minimal indexes.
    """
    _collmod_or_create(db, USER_COLL, USER_VALIDATOR)
    ensure_indexes(db, USER_COLL, USER_INDEXES)

    _collmod_or_create(db, NOTE_COLL, NOTE_VALIDATOR)
    ensure_indexes(db, NOTE_COLL, NOTE_INDEXES)
