"""FastAPI entrypoint (wires middlewares, exception handlers and routers)."""
import logging

from fastapi import FastAPI

from app.api.router import api_router
from app.core.config import settings
from app.core.exceptions import register_exception_handlers
from app.core.logging import setup_logging
from app.core.middleware import add_middlewares
from app.infrastructure.db.bootstrap import ensure_collections
from app.infrastructure.db.mongo import close_mongo, init_mongo

_log = logging.getLogger("notes.startup")

setup_logging(settings.log_level)
app = FastAPI(title=settings.app_name)
app.state.db = None
app.state.mongo_client = None

add_middlewares(app)
register_exception_handlers(app)


@app.on_event("startup")
def on_startup():
    if not settings.jwt_configured:
        _log.warning("JWT_SECRET not set; login and registration will fail")
    client, db = init_mongo(settings)
    app.state.mongo_client = client
    app.state.db = db
    if db is None:
        _log.warning("Mongo not ready; skipping ensure_collections()")
        return
    ensure_collections(db)


@app.on_event("shutdown")
def on_shutdown():
    close_mongo(app.state.mongo_client)
    app.state.mongo_client = None
    app.state.db = None


# Mount routers under the configured prefix
app.include_router(api_router, prefix=settings.api_prefix_normalized)
