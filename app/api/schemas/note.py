"""
Pydantic schemas for `note`.

Stored documents are snake_case; the wire uses camelCase aliases
(`isPinned`, `userId`, `createdOn`, `updatedOn`).
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_core import PydanticCustomError

from app.api.schemas.common import Envelope

TITLE_CONTENT_REQUIRED = "Title and content are required"


def _normalize_tags(v: Optional[List[str]]) -> List[str]:
    """Trim, drop blanks and duplicates; keep first-seen order and case."""
    uniq: List[str] = []
    seen = set()
    for t in (v or []):
        tt = t.strip()
        if tt and tt not in seen:
            seen.add(tt)
            uniq.append(tt)
    return uniq


class _NoteBody(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    tags: Optional[List[str]] = None

    @field_validator("tags")
    @classmethod
    def _clean_tags(cls, v: Optional[List[str]]) -> List[str]:
        return _normalize_tags(v)

    @model_validator(mode="after")
    def _require_title_content(self):
        if not (self.title and self.title.strip() and self.content and self.content.strip()):
            raise PydanticCustomError("missing_fields", TITLE_CONTENT_REQUIRED)
        return self


class NoteCreate(_NoteBody):
    pass


class NoteUpdate(_NoteBody):
    """Full overwrite of title/content/tags; `isPinned` only when sent."""
    model_config = ConfigDict(populate_by_name=True)

    is_pinned: Optional[bool] = Field(default=None, alias="isPinned")


class NotePinUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_pinned: bool = Field(alias="isPinned")


class NoteOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    title: str
    content: str
    tags: List[str]
    is_pinned: bool = Field(alias="isPinned")
    user_id: str = Field(alias="userId")
    created_at: str = Field(alias="createdOn")
    updated_at: str = Field(alias="updatedOn")

    @classmethod
    def from_doc(cls, doc: Dict[str, Any]) -> "NoteOut":
        return cls(
            id=doc["id"],
            title=doc["title"],
            content=doc["content"],
            tags=list(doc.get("tags") or []),
            is_pinned=bool(doc.get("is_pinned", False)),
            user_id=doc["user_id"],
            created_at=doc.get("created_at") or "",
            updated_at=doc.get("updated_at") or "",
        )


class NoteEnvelope(Envelope):
    note: NoteOut


class NoteListEnvelope(Envelope):
    notes: List[NoteOut]
