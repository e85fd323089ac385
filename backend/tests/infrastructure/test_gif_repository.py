"""Gif repository: random fetch, insert, and error classification.

Tests cover:
    - Empty category is GifNotFoundError, not a database error
    - Insert returns the caller-supplied id and the row is fetchable
    - Category values are bound parameters (quote characters match literally)
    - Duplicate ids surface as DatabaseError and the session stays usable
"""

import pytest

from gifapi.core.errors import DatabaseError, GifNotFoundError
from gifapi.infrastructure.gif_repository import GifRepository


@pytest.fixture
async def repo(test_session_factory):
    async with test_session_factory() as session:
        yield GifRepository(session)


async def test_fetch_empty_category_raises_not_found(repo):
    with pytest.raises(GifNotFoundError) as exc_info:
        await repo.fetch_random_by_category("nonexistent")
    assert exc_info.value.category == "nonexistent"


async def test_insert_returns_supplied_id(repo):
    assert await repo.insert_gif(123456789, "http://x", "cats") == 123456789


async def test_insert_then_fetch(repo):
    gif_id = await repo.insert_gif(42, "http://x", "cats")
    gif = await repo.fetch_random_by_category("cats")
    assert (gif.id, gif.url, gif.category) == (gif_id, "http://x", "cats")


async def test_fetch_only_matches_category(repo, seed_gifs):
    await seed_gifs((1, "http://dog", "dogs"), (2, "http://cat", "cats"))
    for _ in range(10):
        gif = await repo.fetch_random_by_category("dogs")
        assert gif.id == 1


async def test_category_is_bound_not_interpolated(repo, seed_gifs):
    await seed_gifs((1, "http://cat", "cats"))
    with pytest.raises(GifNotFoundError):
        await repo.fetch_random_by_category("cats' OR '1'='1")
    gif_id = await repo.insert_gif(2, "http://q'uote", "it's")
    gif = await repo.fetch_random_by_category("it's")
    assert gif.id == gif_id
    assert gif.url == "http://q'uote"


async def test_count_by_category(repo, seed_gifs):
    await seed_gifs((1, "a", "cats"), (2, "b", "cats"), (3, "c", "dogs"))
    assert await repo.count_by_category("cats") == 2
    assert await repo.count_by_category("birds") == 0


async def test_duplicate_id_is_database_error(repo):
    await repo.insert_gif(7, "http://first", "cats")
    with pytest.raises(DatabaseError) as exc_info:
        await repo.insert_gif(7, "http://second", "cats")
    assert exc_info.value.operation == "insert"
    assert exc_info.value.http_status == 500
    # rolled back, session still usable
    assert await repo.count_by_category("cats") == 1


async def test_random_pick_covers_all_rows(repo, seed_gifs):
    await seed_gifs((1, "a", "cats"), (2, "b", "cats"))
    seen = {(await repo.fetch_random_by_category("cats")).id for _ in range(50)}
    assert seen == {1, 2}
