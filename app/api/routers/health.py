"""Health endpoints (no auth), typed and stable outputs."""
from fastapi import APIRouter, Request, status

from app.api.schemas.health import HealthOut, HelloOut, PingOut


router = APIRouter(tags=["Health"])  # no prefix to keep paths stable


@router.get("/", response_model=HelloOut, summary="Root greeting")
def root() -> HelloOut:
    return HelloOut(data="hello")


@router.get("/ping", response_model=PingOut, summary="Basic ping")
def ping() -> PingOut:
    return PingOut(message="pong")


@router.get("/health", status_code=status.HTTP_200_OK, response_model=HealthOut, summary="Basic health")
def health(request: Request) -> HealthOut:
    return HealthOut(ok=True, database=getattr(request.app.state, "db", None) is not None)
