"""Author service for managing authors."""
from typing import Any, Mapping, Union

from sqlalchemy import select

from locallibrary.core.logging import get_logger
from locallibrary.models import Author, Book
from locallibrary.schemas.author import AuthorDetail, AuthorResponse, BookSummary
from locallibrary.schemas.outcomes import NotFound, ValidationFailure
from locallibrary.services.base import StoreService
from locallibrary.services.integrity import BOOKS_BY_AUTHOR, DeleteOutcome, ReferenceGuard
from locallibrary.validation import validate_author

logger = get_logger("author_service")


class AuthorService(StoreService):
    """Service for author operations."""

    resource = "Author"

    async def list_authors(self) -> list[AuthorResponse]:
        """All authors ordered by family name."""
        authors = await self._scalars(
            select(Author).order_by(Author.family_name, Author.first_name)
        )
        return [AuthorResponse.model_validate(author) for author in authors]

    async def get_author(self, author_id: int) -> Union[AuthorResponse, NotFound]:
        author = await self._get(Author, author_id)
        if author is None:
            return NotFound(resource=self.resource, id=author_id)
        return AuthorResponse.model_validate(author)

    async def get_author_detail(self, author_id: int) -> Union[AuthorDetail, NotFound]:
        """Author plus the title and summary of each of its books."""
        author = await self._get(Author, author_id)
        if author is None:
            return NotFound(resource=self.resource, id=author_id)

        books = await self._scalars(
            select(Book)
            .where(Book.author_id == author_id)
            .order_by(Book.title)
        )
        return AuthorDetail(
            author=AuthorResponse.model_validate(author),
            books=[BookSummary.model_validate(book) for book in books],
        )

    async def create_author(
        self,
        form: Mapping[str, Any],
    ) -> Union[AuthorResponse, ValidationFailure]:
        """Create an author from a submitted form."""
        result = validate_author(form)
        if not result.is_valid:
            return result.failure()

        author = await self._save(Author(**result.data))
        logger.info(f"Created author {author.id}: {author.name}")
        return AuthorResponse.model_validate(author)

    async def update_author(
        self,
        author_id: int,
        form: Mapping[str, Any],
    ) -> Union[AuthorResponse, NotFound, ValidationFailure]:
        """Replace every field of an existing author."""
        author = await self._get(Author, author_id)
        if author is None:
            return NotFound(resource=self.resource, id=author_id)

        result = validate_author(form)
        if not result.is_valid:
            return result.failure()

        for field, value in result.data.items():
            setattr(author, field, value)
        author = await self._save(author)
        logger.info(f"Updated author {author.id}")
        return AuthorResponse.model_validate(author)

    async def delete_author(self, author_id: int) -> DeleteOutcome:
        """Delete an author that no book refers to."""
        guard = ReferenceGuard(self.db, self.timeout)
        return await guard.guarded_delete(
            Author, self.resource, author_id, BOOKS_BY_AUTHOR
        )
