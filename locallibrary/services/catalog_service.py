"""Catalog home page aggregates."""
import asyncio
from typing import Any, Optional

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from locallibrary.database import with_timeout
from locallibrary.models import Author, Book, BookInstance, BookInstanceStatus, Genre
from locallibrary.schemas.catalog import CatalogSummary


def _count(model: Any, *criteria: Any) -> Select:
    statement = select(func.count()).select_from(model)
    if criteria:
        statement = statement.where(*criteria)
    return statement


class CatalogService:
    """Record counts for the catalog home page.

    Each count runs in its own session so the queries can proceed
    concurrently. If any count fails, the whole summary fails with that
    error.
    """

    def __init__(
        self,
        sessionmaker: async_sessionmaker[AsyncSession],
        timeout: Optional[float] = None,
    ):
        self.sessionmaker = sessionmaker
        self.timeout = timeout

    async def _scalar(self, statement: Select) -> int:
        async with self.sessionmaker() as session:
            result = await with_timeout(session.execute(statement), self.timeout)
            return result.scalar_one()

    async def get_summary(self) -> CatalogSummary:
        counts = await asyncio.gather(
            self._scalar(_count(Book)),
            self._scalar(_count(BookInstance)),
            self._scalar(
                _count(BookInstance, BookInstance.status == BookInstanceStatus.AVAILABLE)
            ),
            self._scalar(_count(Author)),
            self._scalar(_count(Genre)),
        )
        book, instance, available, author, genre = counts
        return CatalogSummary(
            book_count=book,
            book_instance_count=instance,
            book_instance_available_count=available,
            author_count=author,
            genre_count=genre,
        )
