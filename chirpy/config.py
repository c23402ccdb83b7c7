"""Runtime configuration for Chirpy.

All environment reads happen here, once at startup. The resulting
:class:`Settings` is handed to :func:`chirpy.api.app.create_app` and the
handlers read it from ``app.state.settings``.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite:///./chirpy.db"
DEV_PLATFORM = "dev"


def normalize_database_url(url: str) -> str:
    """Map libpq-style ``postgres://`` URLs onto SQLAlchemy's psycopg dialect."""
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return "postgresql+psycopg://" + url[len(prefix):]
    return url


def _env_flag(name: str, default: str = "False") -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration built from the environment."""

    database_url: str = DEFAULT_DATABASE_URL
    platform: Optional[str] = None
    fileserver_root: str = "."
    debug: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8080
    db_echo: bool = False
    db_pool_size: int = 5
    db_max_overflow: int = 5
    db_pool_timeout: int = 30

    @property
    def is_dev(self) -> bool:
        return self.platform == DEV_PLATFORM


def load_settings() -> Settings:
    """Load settings from the environment (and a local ``.env`` file if present)."""
    load_dotenv()
    # DB_URL is the primary name; DATABASE_URL is accepted for hosted Postgres setups.
    database_url = os.getenv("DB_URL") or os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL
    platform = os.getenv("PLATFORM") or None
    return Settings(
        database_url=normalize_database_url(database_url),
        platform=platform,
        fileserver_root=os.getenv("FILESERVER_ROOT", "."),
        debug=_env_flag("DEBUG"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8080")),
        db_echo=_env_flag("DEBUG"),
        db_pool_size=int(os.getenv("DB_POOL_SIZE", "5")),
        db_max_overflow=int(os.getenv("DB_MAX_OVERFLOW", "5")),
        db_pool_timeout=int(os.getenv("DB_POOL_TIMEOUT_SEC", "30")),
    )


def configure_logging(settings: Settings) -> None:
    """Configure root logging for the server process."""
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
