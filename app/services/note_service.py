"""
Service layer for notes: owner-scoped operations over the repository.
"""
from typing import Any, Dict, List, Optional

from pymongo.database import Database

from app.api.schemas.note import NoteCreate, NoteUpdate
from app.core.exceptions import NotFoundError, ValidationError
from app.repositories import note_repo as repo

NOTE_NOT_FOUND = "Note not found"


def add_note(db: Database, user_id: str, payload: NoteCreate) -> Dict[str, Any]:
    return repo.insert_note(
        db,
        {
            "title": payload.title,
            "content": payload.content,
            "tags": payload.tags or [],
            "user_id": user_id,
        },
    )


def edit_note(db: Database, user_id: str, note_id: str, payload: NoteUpdate) -> Dict[str, Any]:
    updates: Dict[str, Any] = {
        "title": payload.title,
        "content": payload.content,
        "tags": payload.tags or [],
    }
    # Pinned state is kept unless the caller sends it
    if payload.is_pinned is not None:
        updates["is_pinned"] = payload.is_pinned
    note = repo.update_note(db, note_id, user_id, updates)
    if note is None:
        raise NotFoundError(NOTE_NOT_FOUND)
    return note


def set_pinned(db: Database, user_id: str, note_id: str, is_pinned: bool) -> Dict[str, Any]:
    note = repo.update_note(db, note_id, user_id, {"is_pinned": bool(is_pinned)})
    if note is None:
        raise NotFoundError(NOTE_NOT_FOUND)
    return note


def delete_note(db: Database, user_id: str, note_id: str) -> None:
    if not repo.delete_note(db, note_id, user_id):
        raise NotFoundError(NOTE_NOT_FOUND)


def list_notes(db: Database, user_id: str) -> List[Dict[str, Any]]:
    return repo.list_notes(db, user_id)


def search_notes(db: Database, user_id: str, query: Optional[str]) -> List[Dict[str, Any]]:
    if not query:
        raise ValidationError("Query is required")
    return repo.search_notes(db, user_id, query)
