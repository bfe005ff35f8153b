"""Central application configuration (Pydantic Settings).

- Loads variables from the .env at the repository root.
- Groups settings by area: App, Logging, CORS, Mongo, Auth/JWT.
"""
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the .env at the repository root (independent of the CWD)
ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    """Configuration values with sensible defaults.

    Every value can be overridden through environment variables (.env).
    """
    # App
    app_name: str = "Notes API"
    api_prefix: str = ""
    log_level: str = "INFO"

    # CORS (Vite/React dev server)
    cors_origins: list[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]
    cors_allow_any: bool = False  # allow every origin (use with care)

    # Mongo
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db: str = "notes_db"
    mongo_tls: bool = False
    # TLS relax options (dev only)
    mongo_tls_insecure: bool = False
    mongo_tls_allow_invalid_hostnames: bool = False
    mongo_server_selection_timeout_ms: int = 15000

    # Auth / JWT
    jwt_secret: str | None = None
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 36000

    # Older clients expect HTTP 200 with error=true on a duplicate email
    legacy_conflict_status: bool = False

    @property
    def api_prefix_normalized(self) -> str:
        """Return `api_prefix` in a consistent shape.

        - Always starts with '/'
        - No trailing '/' (unless it is just '/')
        - Empty string when unset
        """
        pref = (self.api_prefix or "").strip()
        if not pref:
            return ""
        if not pref.startswith('/'):
            pref = '/' + pref
        if len(pref) > 1 and pref.endswith('/'):
            pref = pref[:-1]
        return pref

    @property
    def jwt_configured(self) -> bool:
        return bool(self.jwt_secret)

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
