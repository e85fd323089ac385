"""Database Session Manager: async connection pool with automatic rollback and a startup connection check.

Invariants:
    - Every session auto-rolls-back on exception and is always closed
    - SQLAlchemy exceptions escaping a session are mapped to DatabaseError
    - Connection pool uses pool_pre_ping for stale connection detection
    - verify_connection() is the startup connection check; failure raises StartupError

Design Decisions:
    - Singleton db_manager initialized by the FastAPI lifespan, not at import time
    - expire_on_commit=False: ORM rows stay readable after commit in async context
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from gifapi.core.errors import DatabaseError, StartupError
from gifapi.db.base import Base
import gifapi.models  # noqa: F401

logger = logging.getLogger(__name__)


def masked_url(database_url: str) -> str:
    """Render a database URL with the password hidden, for logs."""
    return make_url(database_url).render_as_string(hide_password=True)


def _engine_kwargs(database_url: str, pool_size: int, max_overflow: int) -> dict:
    # SQLite engines pick their own pool class and reject sizing arguments.
    if make_url(database_url).get_backend_name() == "sqlite":
        return {}
    return {
        "pool_size": pool_size,
        "max_overflow": max_overflow,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
    }


class DatabaseSessionManager:
    """Manages async database sessions with pooling and rollback."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 0,
    ):
        self.database_url = database_url
        self.engine = create_async_engine(
            database_url,
            **_engine_kwargs(database_url, pool_size, max_overflow),
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise DatabaseError("Database operation failed", "session") from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def verify_connection(self) -> None:
        """Open one pooled connection or fail startup."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            raise StartupError(
                f"Cannot connect to database at {masked_url(self.database_url)}",
            ) from e
        logger.info(
            f"Connected to the database at url {masked_url(self.database_url)}",
        )

    async def create_schema(self) -> None:
        """Create missing tables; failure raises StartupError."""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            raise StartupError(f"Cannot create schema: {e}") from e

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def close_db() -> None:
    global db_manager
    if db_manager is not None:
        await db_manager.dispose()
        db_manager = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
