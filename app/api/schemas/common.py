"""Response envelope shared by every endpoint: `{error, message, ...payload}`."""
from pydantic import BaseModel


class Envelope(BaseModel):
    error: bool = False
    message: str
