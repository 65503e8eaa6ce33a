"""Referential checks for deletes and references on write.

The store does not enforce these relationships on every backend, so the
catalog enforces them here: a record is only deleted when nothing refers
to it, and book or copy submissions may only refer to existing records.

``guarded_delete`` locks the parent row, counts dependents and deletes in
the same session transaction. On PostgreSQL the row lock conflicts with
the key-share lock a concurrent child insert takes through its foreign
key, so a reference cannot appear between the count and the delete.
SQLite ignores ``FOR UPDATE``; there the window between count and delete
remains open.
"""
from dataclasses import dataclass
from typing import Any, Callable, Sequence, Union

from sqlalchemy import ColumnElement, Select, func, select

from locallibrary.core.logging import get_logger
from locallibrary.database import Base
from locallibrary.models import Book, BookInstance, book_genres
from locallibrary.schemas.outcomes import (
    Deleted,
    NotFound,
    ReferenceBlocked,
    ReferenceSummary,
)
from locallibrary.services.base import StoreService

logger = get_logger("integrity")

DeleteOutcome = Union[Deleted, NotFound, ReferenceBlocked]


@dataclass(frozen=True)
class Dependency:
    """Child records that reference a parent through one column."""

    resource: str
    model: type[Base]
    column: ColumnElement
    summarize: Callable[[Any], ReferenceSummary]
    order_by: ColumnElement

    def count_statement(self, parent_id: int) -> Select:
        return (
            select(func.count())
            .select_from(self.column.table)
            .where(self.column == parent_id)
        )

    def fetch_statement(self, parent_id: int) -> Select:
        statement = select(self.model)
        if self.column.table is not self.model.__table__:
            statement = statement.join(self.column.table)
        return statement.where(self.column == parent_id).order_by(self.order_by)


def _book_summary(book: Book) -> ReferenceSummary:
    return ReferenceSummary(id=book.id, label=book.title, url=book.url)


def _instance_summary(instance: BookInstance) -> ReferenceSummary:
    return ReferenceSummary(
        id=instance.id,
        label=f"{instance.imprint} ({instance.status.value})",
        url=instance.url,
    )


BOOKS_BY_AUTHOR = Dependency(
    "Book", Book, Book.__table__.c.author_id, _book_summary, Book.title
)
BOOKS_BY_GENRE = Dependency(
    "Book", Book, book_genres.c.genre_id, _book_summary, Book.title
)
INSTANCES_BY_BOOK = Dependency(
    "BookInstance",
    BookInstance,
    BookInstance.__table__.c.book_id,
    _instance_summary,
    BookInstance.id,
)


class ReferenceGuard(StoreService):
    """Reference counting and guarded deletion."""

    async def count_references(self, dependency: Dependency, parent_id: int) -> int:
        result = await self._scalar(dependency.count_statement(parent_id))
        return result or 0

    async def blocking(
        self,
        dependency: Dependency,
        parent_id: int,
    ) -> list[ReferenceSummary]:
        """Summaries of the dependents that would block deleting the parent."""
        if not await self.count_references(dependency, parent_id):
            return []
        children = await self._scalars(dependency.fetch_statement(parent_id))
        return [dependency.summarize(child) for child in children]

    async def guarded_delete(
        self,
        model: type[Base],
        resource: str,
        record_id: int,
        dependency: Dependency,
        options: Sequence[Any] = (),
    ) -> DeleteOutcome:
        """Delete a record only if no dependent records reference it."""
        record = await self._get(model, record_id, options=options, lock=True)
        if record is None:
            return NotFound(resource=resource, id=record_id)

        blocking = await self.blocking(dependency, record_id)
        if blocking:
            logger.info(
                f"Refused to delete {resource} {record_id}: "
                f"referenced by {len(blocking)} {dependency.resource}(s)"
            )
            return ReferenceBlocked(
                resource=resource,
                id=record_id,
                blocked_by=dependency.resource,
                blocking=blocking,
            )

        await self.db.delete(record)
        await self._flush()
        await self._commit()
        logger.info(f"Deleted {resource} {record_id}")
        return Deleted(resource=resource, id=record_id)

    async def missing_ids(self, model: type[Base], ids: Sequence[int]) -> list[int]:
        """IDs from ``ids`` with no matching record, in the given order."""
        if not ids:
            return []
        found = set(await self._scalars(select(model.id).where(model.id.in_(ids))))
        return [record_id for record_id in ids if record_id not in found]
