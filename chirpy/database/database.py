"""Database connection and session management for Chirpy.

This module supports both:
- Local SQLite (default for dev)
- PostgreSQL via `DB_URL`

Nothing is built at import time: :func:`chirpy.api.app.create_app` builds the
engine and session factory from its :class:`~chirpy.config.Settings` and keeps
them on ``app.state``.
"""

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base

from chirpy.config import Settings


def _is_sqlite_url(database_url: str) -> bool:
    return "sqlite" in (database_url or "")


def get_engine_kwargs(settings: Settings) -> dict:
    """Return deterministic create_engine kwargs for the configured DB URL.

    This is separated to allow deterministic unit testing without connecting.
    """
    engine_kwargs: dict = {
        "echo": settings.db_echo,
        "pool_pre_ping": True,
    }

    if _is_sqlite_url(settings.database_url):
        # Handlers run in FastAPI's threadpool; one connection may be used from several threads.
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        return engine_kwargs

    # Postgres / other DBs
    engine_kwargs["pool_size"] = settings.db_pool_size
    engine_kwargs["max_overflow"] = settings.db_max_overflow
    engine_kwargs["pool_timeout"] = settings.db_pool_timeout
    return engine_kwargs


def set_sqlite_pragmas(dbapi_conn, connection_record):
    """Enable foreign key enforcement (needed for chirp -> user references and cascades)."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(settings: Settings, **overrides) -> Engine:
    """Create an engine for ``settings.database_url``.

    Keyword overrides are merged over :func:`get_engine_kwargs` (tests pass a StaticPool).
    """
    engine = create_engine(settings.database_url, **{**get_engine_kwargs(settings), **overrides})
    if _is_sqlite_url(settings.database_url):
        event.listen(engine, "connect", set_sqlite_pragmas)
    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


# Base class for declarative models
Base = declarative_base()


def get_db(request: Request) -> Session:
    """Get database session from the app's session factory (dependency for FastAPI)."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def init_db(engine: Engine) -> None:
    """Create the users and chirps tables if they do not exist."""
    # Import models so they are registered on Base.metadata.
    from chirpy.database import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
