"""
Main entry point for the FastAPI application.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI

from meetdesk.config import settings
from meetdesk.logging_config import setup_logging
from meetdesk.routes import functions
from meetdesk.services.backend import close_backend
from meetdesk.utils.db_async import describe_database_url, dispose_engine, init_db

import logging
logger = logging.getLogger(__name__)

setup_logging(level=settings.log_level, access_log=settings.access_log)


def _describe_target() -> str:
    """Human-readable backend target for startup logs. Never includes secrets."""
    if settings.storage_backend == "postgres":
        if not settings.database_url:
            return "postgres (DATABASE_URL not set)"
        return f"postgres {describe_database_url(settings.database_url)}"
    return f"supabase {settings.supabase_url or '(SUPABASE_URL not set)'}"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Storage target: %s", _describe_target())

    should_init_db = (
        settings.storage_backend == "postgres"
        and settings.is_dev
        and settings.auto_init_db
    )
    if should_init_db:
        logger.info("Running init_db()…")
        try:
            await init_db()
            logger.info("DB ready.")
        except Exception:
            logger.exception("init_db failed")
            raise

    yield

    try:
        logger.info("Closing storage backend…")
        await close_backend()
        await dispose_engine()
    except Exception:
        logger.exception("Failed to close storage backend")


app = FastAPI(title="Meetdesk", lifespan=lifespan)
app.include_router(functions.router)


@app.get("/health")
async def health_check():
    """Health Check Endpoint"""
    return {"status": "ok"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8080)
