"""Gif Repository: parameterized queries against gif_gifs.

Invariants:
    - Every statement is a SQLAlchemy construct with bound parameters;
      category and url never reach the SQL text
    - Zero matching rows is GifNotFoundError (404), not a database failure
    - SQLAlchemyError (including duplicate key) → rollback + DatabaseError (500)
    - The repository borrows a session; it never owns pool or engine lifecycle
"""

import logging

from sqlalchemy import func, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gifapi.core.errors import DatabaseError, GifNotFoundError
from gifapi.models.gif import Gif

logger = logging.getLogger(__name__)


class GifRepository:
    """Storage gateway for gif rows."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def fetch_random_by_category(self, category: str) -> Gif:
        """Pick one gif of the category uniformly at random."""
        query = (
            select(Gif)
            .where(Gif.category == category)
            .order_by(func.random())
            .limit(1)
        )
        try:
            result = await self._db.execute(query)
        except SQLAlchemyError as e:
            await self._rollback(e, "select")
            raise DatabaseError(type(e).__name__, "select") from e
        gif = result.scalar_one_or_none()
        if gif is None:
            raise GifNotFoundError(category)
        return gif

    async def insert_gif(self, gif_id: int, url: str, category: str) -> int:
        """Insert a gif under a pre-generated id and return the stored id."""
        stmt = (
            insert(Gif)
            .values(id=gif_id, url=url, category=category)
            .returning(Gif.id)
        )
        try:
            result = await self._db.execute(stmt)
            inserted_id = result.scalar_one()
            await self._db.commit()
        except SQLAlchemyError as e:
            await self._rollback(e, "insert")
            raise DatabaseError(type(e).__name__, "insert") from e
        logger.info(
            f"Inserted gif {inserted_id}",
            extra={"gif_id": inserted_id, "category": category},
        )
        return inserted_id

    async def count_by_category(self, category: str) -> int:
        query = select(func.count()).select_from(Gif).where(
            Gif.category == category,
        )
        try:
            result = await self._db.execute(query)
        except SQLAlchemyError as e:
            await self._rollback(e, "count")
            raise DatabaseError(type(e).__name__, "count") from e
        return result.scalar_one()

    async def _rollback(self, exc: SQLAlchemyError, operation: str) -> None:
        await self._db.rollback()
        logger.error(f"DB {operation} error: {exc}")
