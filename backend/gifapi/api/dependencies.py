"""Request Dependencies: per-request repository wiring."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gifapi.infrastructure.database import get_db
from gifapi.infrastructure.gif_repository import GifRepository


async def get_gif_repository(
    db: AsyncSession = Depends(get_db),
) -> GifRepository:
    return GifRepository(db)
