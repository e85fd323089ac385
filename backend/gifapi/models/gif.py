"""Gif ORM: one row per stored gif url.

Invariants:
    - id is a snowflake supplied by the caller; the database never generates it
    - url and category are opaque client strings, never mutated after insert
"""

from sqlalchemy import BigInteger, Text
from sqlalchemy.orm import Mapped, mapped_column

from gifapi.db.base import Base


class Gif(Base):
    __tablename__ = "gif_gifs"

    id: Mapped[int] = mapped_column(
        BigInteger, primary_key=True, autoincrement=False,
    )
    url: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(Text, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"Gif(id={self.id}, category={self.category!r})"
