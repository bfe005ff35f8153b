"""MongoDB client (pymongo).

The client is built once on startup and the resulting `Database` is attached
to `app.state.db`; requests receive it through `app.api.deps.get_db`.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import certifi
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from app.core.config import Settings

_log = logging.getLogger("notes.mongo")


def _client_kwargs(cfg: Settings) -> Dict[str, Any]:
    kwargs: Dict[str, Any] = dict(serverSelectionTimeoutMS=cfg.mongo_server_selection_timeout_ms)
    if cfg.mongo_uri.startswith("mongodb+srv://"):
        # SRV already implies TLS; provide the CA bundle anyway
        kwargs["tlsCAFile"] = certifi.where()
    elif cfg.mongo_tls:
        kwargs["tls"] = True
        kwargs["tlsCAFile"] = certifi.where()
        if cfg.mongo_tls_insecure:
            kwargs["tlsAllowInvalidCertificates"] = True
        if cfg.mongo_tls_allow_invalid_hostnames:
            kwargs["tlsAllowInvalidHostnames"] = True
    return kwargs


def init_mongo(cfg: Settings) -> tuple[Optional[MongoClient], Optional[Database]]:
    """
    Build the client and validate the connection (ping).

    Never raises: an unreachable store leaves both values as None so the app
    can still start and answer 503 on data routes.
    """
    client: Optional[MongoClient] = None
    try:
        client = MongoClient(cfg.mongo_uri, **_client_kwargs(cfg))
        client.admin.command("ping")
    except PyMongoError as e:
        _log.warning("Mongo not reachable: %s", e)
        close_mongo(client)
        return None, None
    _log.info("Mongo connected (db=%s)", cfg.mongo_db)
    return client, client[cfg.mongo_db]


def close_mongo(client: Optional[MongoClient]) -> None:
    if client is not None:
        client.close()
        _log.info("Mongo client closed")
