"""
Application errors and global exception handlers.

Every failure leaves the API in the same envelope as a success:
`{"error": true, "message": "..."}` plus `request_id` when one was assigned.

The catch-all handler only shapes the response: Starlette still re-raises
unexpected exceptions afterwards, so the server logs them a second time.
"""
import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


class AppError(Exception):
    """Base class for errors the API reports to the caller."""

    status_code = 500

    def __init__(self, message: str = INTERNAL_ERROR_MESSAGE) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(AppError):
    status_code = 400

    def __init__(self, message: str = "Validation error") -> None:
        super().__init__(message)


class AuthenticationError(AppError):
    status_code = 401

    def __init__(self, message: str = "Access token required") -> None:
        super().__init__(message)


class ForbiddenError(AppError):
    status_code = 403

    def __init__(self, message: str = "Invalid or expired token") -> None:
        super().__init__(message)


class NotFoundError(AppError):
    status_code = 404

    def __init__(self, message: str = "Not found") -> None:
        super().__init__(message)


class ConflictError(AppError):
    status_code = 409

    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message)


class ServiceUnavailableError(AppError):
    status_code = 503

    def __init__(self, message: str = "Database not available") -> None:
        super().__init__(message)


def _req_id(request: Request) -> str | None:
    return getattr(getattr(request, "state", object()), "request_id", None)


def _envelope(request: Request, message: str, **extra: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {"error": True, "message": message, **extra}
    rid = _req_id(request)
    if rid:
        body["request_id"] = rid
    return body


def _status_for(exc: AppError) -> int:
    if isinstance(exc, ConflictError) and settings.legacy_conflict_status:
        return 200
    return exc.status_code


def _first_message(errors: list[Dict[str, Any]]) -> str:
    for err in errors:
        msg = err.get("msg")
        if msg:
            return str(msg)
    return "Validation error"


def register_exception_handlers(app: FastAPI) -> None:
    log = logging.getLogger("notes.errors")

    @app.exception_handler(AppError)
    async def _app_error_handler(request: Request, exc: AppError):
        status = _status_for(exc)
        if status >= 500:
            log.error("%s request_id=%s", exc.message, _req_id(request))
        return JSONResponse(status_code=status, content=_envelope(request, exc.message))

    @app.exception_handler(StarletteHTTPException)
    async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
        body = _envelope(request, str(exc.detail or "HTTP error"))
        return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def _validation_handler(request: Request, exc: RequestValidationError):
        # ctx may hold exception instances that are not JSON serializable
        errors = [{k: v for k, v in e.items() if k not in ("ctx", "input", "url")} for e in exc.errors()]
        body = _envelope(request, _first_message(errors), errors=errors)
        return JSONResponse(status_code=400, content=body)

    @app.exception_handler(PyMongoError)
    async def _store_error_handler(request: Request, exc: PyMongoError):
        log.exception("Store error request_id=%s", _req_id(request))
        return JSONResponse(status_code=500, content=_envelope(request, INTERNAL_ERROR_MESSAGE))

    @app.exception_handler(Exception)
    async def _generic_handler(request: Request, exc: Exception):
        log.exception("Unhandled error request_id=%s", _req_id(request))
        return JSONResponse(status_code=500, content=_envelope(request, INTERNAL_ERROR_MESSAGE))
