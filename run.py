#!/usr/bin/env python3
"""Run script for Chirpy."""

import uvicorn

from chirpy.config import configure_logging, load_settings
from chirpy.database.database import build_engine, init_db

if __name__ == "__main__":
    settings = load_settings()
    configure_logging(settings)
    engine = build_engine(settings)
    try:
        init_db(engine)
    finally:
        engine.dispose()
    uvicorn.run(
        "chirpy.api.app:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
