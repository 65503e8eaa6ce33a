"""Book instance service for managing physical copies."""
from typing import Any, Mapping, Sequence, Union

from sqlalchemy import select

from locallibrary.core.logging import get_logger
from locallibrary.models import Book, BookInstance
from locallibrary.schemas.book import BookInstanceFormOptions
from locallibrary.schemas.book_instance import BookInstanceWithBook, BookRef
from locallibrary.schemas.outcomes import Deleted, NotFound, ValidationFailure
from locallibrary.services.base import StoreService
from locallibrary.services.integrity import ReferenceGuard
from locallibrary.validation import FormResult, validate_book_instance

logger = get_logger("book_instance_service")


def _with_book(instance: BookInstance, book: Book) -> BookInstanceWithBook:
    return BookInstanceWithBook(
        id=instance.id,
        url=instance.url,
        book_id=instance.book_id,
        imprint=instance.imprint,
        status=instance.status,
        due_back=instance.due_back,
        due_back_formatted=instance.due_back_formatted,
        book=BookRef.model_validate(book),
    )


class BookInstanceService(StoreService):
    """Service for book instance operations."""

    resource = "BookInstance"

    async def resolve_books(self, instances: Sequence[BookInstance]) -> dict[int, Book]:
        """Fetch the books of ``instances`` in one query, keyed by ID."""
        book_ids = {instance.book_id for instance in instances}
        if not book_ids:
            return {}
        books = await self._scalars(select(Book).where(Book.id.in_(book_ids)))
        return {book.id: book for book in books}

    async def list_book_instances(self) -> list[BookInstanceWithBook]:
        instances = await self._scalars(select(BookInstance).order_by(BookInstance.id))
        books = await self.resolve_books(instances)
        return [
            _with_book(instance, books[instance.book_id])
            for instance in instances
            if instance.book_id in books
        ]

    async def get_book_instance_detail(
        self,
        instance_id: int,
    ) -> Union[BookInstanceWithBook, NotFound]:
        instance = await self._get(BookInstance, instance_id)
        if instance is None:
            return NotFound(resource=self.resource, id=instance_id)
        book = await self._get(Book, instance.book_id)
        if book is None:
            return NotFound(resource="Book", id=instance.book_id)
        return _with_book(instance, book)

    async def get_form_options(self) -> BookInstanceFormOptions:
        """Book titles for the copy form."""
        books = await self._scalars(select(Book).order_by(Book.title))
        return BookInstanceFormOptions(
            books=[BookRef.model_validate(book) for book in books]
        )

    async def _validate(self, form: Mapping[str, Any]) -> FormResult:
        result = validate_book_instance(form)
        if result.is_valid:
            guard = ReferenceGuard(self.db, self.timeout)
            if await guard.missing_ids(Book, [result.data["book"]]):
                result.add_error("book", "Book not found.")
        return result

    def _apply(self, instance: BookInstance, data: dict[str, Any]) -> None:
        instance.book_id = data["book"]
        instance.imprint = data["imprint"]
        instance.status = data["status"]
        instance.due_back = data["due_back"]

    async def create_book_instance(
        self,
        form: Mapping[str, Any],
    ) -> Union[BookInstanceWithBook, ValidationFailure]:
        """Create a copy of an existing book."""
        result = await self._validate(form)
        if not result.is_valid:
            return result.failure()

        instance = BookInstance()
        self._apply(instance, result.data)
        instance = await self._save(instance)
        logger.info(f"Created book instance {instance.id} of book {instance.book_id}")
        return _with_book(instance, await self._get(Book, instance.book_id))

    async def update_book_instance(
        self,
        instance_id: int,
        form: Mapping[str, Any],
    ) -> Union[BookInstanceWithBook, NotFound, ValidationFailure]:
        """Replace every field of an existing copy."""
        instance = await self._get(BookInstance, instance_id)
        if instance is None:
            return NotFound(resource=self.resource, id=instance_id)

        result = await self._validate(form)
        if not result.is_valid:
            return result.failure()

        self._apply(instance, result.data)
        instance = await self._save(instance)
        logger.info(f"Updated book instance {instance.id}")
        return _with_book(instance, await self._get(Book, instance.book_id))

    async def delete_book_instance(self, instance_id: int) -> Union[Deleted, NotFound]:
        """Delete a copy. Nothing refers to copies, so there is no guard."""
        instance = await self._get(BookInstance, instance_id)
        if instance is None:
            return NotFound(resource=self.resource, id=instance_id)
        await self.db.delete(instance)
        await self._flush()
        await self._commit()
        logger.info(f"Deleted book instance {instance_id}")
        return Deleted(resource=self.resource, id=instance_id)
