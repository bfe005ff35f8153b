"""
Pydantic schemas for the `user` collection.

Key rules:
- Stored fields are snake_case; the wire uses camelCase aliases.
- `email` is always stored lowercase.
- Timestamps are ISO-8601 UTC.
"""
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

from app.api.schemas.common import Envelope


class UserOut(BaseModel):
    """Public user projection (no secrets)."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    full_name: str = Field(alias="fullName")
    email: str

    @classmethod
    def from_doc(cls, doc: Dict[str, Any]) -> "UserOut":
        return cls(id=str(doc["_id"]), full_name=doc.get("full_name") or "", email=doc["email"])


class UserEnvelope(Envelope):
    user: UserOut
