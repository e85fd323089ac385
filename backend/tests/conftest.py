"""Root conftest: shared test configuration and in-memory database fixtures.

Invariants:
    - DATABASE_URL always points at SQLite so no test reaches a real server
    - Every test gets a fresh in-memory SQLite database with gif_gifs created
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, async_sessionmaker, create_async_engine,
)

from gifapi.db.base import Base  # noqa: E402
from gifapi.models.gif import Gif  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def seed_gifs(test_session_factory):
    """Insert rows given as (id, url, category) tuples."""
    async def _seed(*rows: tuple[int, str, str]) -> None:
        async with test_session_factory() as session:
            session.add_all(
                Gif(id=gif_id, url=url, category=category)
                for gif_id, url, category in rows
            )
            await session.commit()
    return _seed
