"""
Note endpoints. Every route requires a bearer token and only touches the
caller's own notes.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pymongo.database import Database

from app.api.deps import get_current_user, get_db
from app.api.schemas.common import Envelope
from app.api.schemas.note import (
    NoteCreate,
    NoteEnvelope,
    NoteListEnvelope,
    NoteOut,
    NotePinUpdate,
    NoteUpdate,
)
from app.services import note_service as service


router = APIRouter(tags=["Note"])


def _uid(user) -> str:
    return str(user["_id"])


@router.post(
    "/add-note",
    response_model=NoteEnvelope,
    summary="Create note",
    description="Creates a note owned by the caller; tags default to an empty list.",
)
def add_note(payload: NoteCreate, user=Depends(get_current_user), db: Database = Depends(get_db)):
    note = service.add_note(db, _uid(user), payload)
    return NoteEnvelope(message="Note added successfully", note=NoteOut.from_doc(note))


@router.put(
    "/edit-note/{note_id}",
    response_model=NoteEnvelope,
    summary="Edit note",
    description="Overwrites title, content and tags; isPinned only when sent.",
)
def edit_note(note_id: str, payload: NoteUpdate, user=Depends(get_current_user), db: Database = Depends(get_db)):
    note = service.edit_note(db, _uid(user), note_id, payload)
    return NoteEnvelope(message="Note updated successfully", note=NoteOut.from_doc(note))


@router.get(
    "/get-all-notes",
    response_model=NoteListEnvelope,
    summary="List notes",
    description="All of the caller's notes, pinned first.",
)
def get_all_notes(user=Depends(get_current_user), db: Database = Depends(get_db)):
    items = service.list_notes(db, _uid(user))
    return NoteListEnvelope(
        message="All notes retrieved successfully",
        notes=[NoteOut.from_doc(i) for i in items],
    )


@router.delete(
    "/delete-note/{note_id}",
    response_model=Envelope,
    summary="Delete note",
)
def delete_note(note_id: str, user=Depends(get_current_user), db: Database = Depends(get_db)):
    service.delete_note(db, _uid(user), note_id)
    return Envelope(message="Note deleted successfully")


@router.put(
    "/update-note-pinned/{note_id}",
    response_model=NoteEnvelope,
    summary="Pin or unpin note",
)
def update_note_pinned(
    note_id: str,
    payload: NotePinUpdate,
    user=Depends(get_current_user),
    db: Database = Depends(get_db),
):
    note = service.set_pinned(db, _uid(user), note_id, payload.is_pinned)
    return NoteEnvelope(message="Note pinned status updated successfully", note=NoteOut.from_doc(note))


@router.get(
    "/search-notes",
    response_model=NoteListEnvelope,
    summary="Search notes",
    description="Literal, case-insensitive match on title, content or any tag.",
)
def search_notes(
    query: Optional[str] = Query(default=None),
    user=Depends(get_current_user),
    db: Database = Depends(get_db),
):
    items = service.search_notes(db, _uid(user), query)
    return NoteListEnvelope(
        message="Notes matching search query retrieved successfully",
        notes=[NoteOut.from_doc(i) for i in items],
    )
