"""
Pydantic schemas for authentication operations.

- Keeps validation and normalization (e.g. lowercase email) out of the services.
- Blank strings count as missing, so one message covers both cases.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from pydantic_core import PydanticCustomError

from app.api.schemas.common import Envelope
from app.api.schemas.user import UserOut

MISSING_FIELDS = "All fields are required"


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


class CreateAccountPayload(BaseModel):
    """Registration data: full name, email and password, all required."""
    model_config = ConfigDict(populate_by_name=True)

    full_name: Optional[str] = Field(default=None, alias="fullName")
    email: Optional[EmailStr] = None
    password: Optional[str] = None

    @field_validator("full_name", "email", "password", mode="before")
    @classmethod
    def _blank_as_missing(cls, v):
        return _blank_to_none(v)

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: Optional[str]) -> Optional[str]:
        return str(v).lower() if v else v

    @model_validator(mode="after")
    def _require_all(self):
        if not (self.full_name and self.email and self.password):
            raise PydanticCustomError("missing_fields", MISSING_FIELDS)
        self.full_name = self.full_name.strip()
        return self


class LoginPayload(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

    @field_validator("email", "password", mode="before")
    @classmethod
    def _blank_as_missing(cls, v):
        return _blank_to_none(v)

    @model_validator(mode="after")
    def _require_all(self):
        if not (self.email and self.password):
            raise PydanticCustomError("missing_fields", MISSING_FIELDS)
        self.email = self.email.strip().lower()
        return self


# === Response models ===

class AccountEnvelope(Envelope):
    model_config = ConfigDict(populate_by_name=True)

    user: UserOut
    access_token: str = Field(alias="accessToken")


class TokenEnvelope(Envelope):
    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(alias="accessToken")
