"""Schemas for health endpoints."""
from pydantic import BaseModel


class HelloOut(BaseModel):
    data: str


class PingOut(BaseModel):
    message: str


class HealthOut(BaseModel):
    ok: bool
    database: bool
