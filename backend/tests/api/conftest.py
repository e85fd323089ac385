"""API test fixtures: FastAPI test client over an in-memory database.

Invariants:
    - get_db overridden to hand out sessions from the test engine
    - get_id_generator overridden with a fresh generator per test
"""

import pytest
from httpx import ASGITransport, AsyncClient

from gifapi.core.snowflake import SnowflakeGenerator
from gifapi.infrastructure.database import get_db
from gifapi.infrastructure.gif_repository import GifRepository
from gifapi.infrastructure.id_provider import get_id_generator
from gifapi.main import app


@pytest.fixture
def id_generator():
    return SnowflakeGenerator(worker_id=1, process_id=1)


@pytest.fixture
async def client(test_session_factory, id_generator):
    """FastAPI test client with DB and id generator overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_id_generator] = lambda: id_generator

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def count_gifs(test_session_factory):
    """Count rows of a category through a fresh session."""
    async def _count(category: str) -> int:
        async with test_session_factory() as session:
            return await GifRepository(session).count_by_category(category)
    return _count
