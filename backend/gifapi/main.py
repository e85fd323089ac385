"""GIF API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Diagnostic routes registered before /api/gif; /{seconds} only matches digits
    - Startup is all-or-nothing: any failure raises StartupError and nothing stays open
    - Global error handlers map every failure to the {code, message} envelope
    - No trailing-slash redirects: /api/gif/cats/ is an unmatched route (404)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from pydantic import ValidationError

from gifapi.api.error_handlers import register_error_handlers
from gifapi.api.routes import diagnostics, gifs
from gifapi.config import Settings, get_settings
from gifapi.core.errors import StartupError
from gifapi.infrastructure.database import close_db, init_db
from gifapi.infrastructure.id_provider import init_id_generator
from gifapi.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def load_settings() -> Settings:
    """Read settings, turning validation failures into StartupError."""
    try:
        return get_settings()
    except ValidationError as e:
        raise StartupError(f"Invalid configuration: {e}") from e


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = load_settings()
    setup_logging(settings.log_level, settings.log_format)
    try:
        init_id_generator(
            settings.snowflake_epoch_ms,
            settings.snowflake_worker_id,
            settings.snowflake_process_id,
        )
    except ValueError as e:
        raise StartupError(f"Invalid snowflake settings: {e}") from e

    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    try:
        await manager.verify_connection()
        if settings.database_create_schema:
            await manager.create_schema()
    except StartupError:
        await close_db()
        raise
    logger.info("gif-api started")
    yield
    logger.info("gif-api shutting down")
    await close_db()


app = FastAPI(
    title="gif-api", version="0.1.0", lifespan=lifespan, redirect_slashes=False,
)

app.include_router(diagnostics.router)
app.include_router(gifs.router)

register_error_handlers(app)
