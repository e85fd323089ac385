"""Gif Routes: random fetch and snowflake-keyed insert on one path.

Invariants:
    - GET /api/gif/{category} with a url query parameter inserts, without it fetches
    - Presence decides, not value: ?url= (empty) still inserts
    - The id is generated here, before the insert; the database never assigns it
"""

import logging

from fastapi import APIRouter, Depends, Query

from gifapi.api.dependencies import get_gif_repository
from gifapi.core.snowflake import SnowflakeGenerator
from gifapi.infrastructure.gif_repository import GifRepository
from gifapi.infrastructure.id_provider import get_id_generator
from gifapi.schemas.gif import ErrorResponse, GifCreated, GifResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/gif", tags=["gifs"])


@router.get(
    "/{category}",
    response_model=None,
    responses={
        200: {"model": GifResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def gif_by_category(
    category: str,
    url: str | None = Query(None),
    repo: GifRepository = Depends(get_gif_repository),
    ids: SnowflakeGenerator = Depends(get_id_generator),
):
    """Insert a gif when ?url= is given, otherwise return a random one."""
    if url is not None:
        return await add_gif(category, url, repo, ids)
    return await random_gif(category, repo)


async def random_gif(category: str, repo: GifRepository) -> GifResponse:
    gif = await repo.fetch_random_by_category(category)
    return GifResponse.model_validate(gif)


async def add_gif(
    category: str, url: str, repo: GifRepository, ids: SnowflakeGenerator,
) -> GifCreated:
    gif_id = await repo.insert_gif(ids.next_id(), url, category)
    return GifCreated(id=gif_id)
