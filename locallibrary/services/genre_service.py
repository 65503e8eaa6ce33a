"""Genre service for managing genres."""
from typing import Any, Mapping, Optional, Union

from sqlalchemy import select

from locallibrary.core.logging import get_logger
from locallibrary.models import Book, Genre, book_genres
from locallibrary.schemas.author import BookSummary
from locallibrary.schemas.genre import GenreCreateResult, GenreDetail, GenreResponse
from locallibrary.schemas.outcomes import NotFound, ValidationFailure
from locallibrary.services.base import StoreService
from locallibrary.services.integrity import BOOKS_BY_GENRE, DeleteOutcome, ReferenceGuard
from locallibrary.validation import validate_genre

logger = get_logger("genre_service")


class GenreService(StoreService):
    """Service for genre operations."""

    resource = "Genre"

    async def list_genres(self) -> list[GenreResponse]:
        genres = await self._scalars(select(Genre).order_by(Genre.name))
        return [GenreResponse.model_validate(genre) for genre in genres]

    async def find_by_name(self, name: str) -> Optional[Genre]:
        """Exact, case-sensitive name lookup."""
        return await self._scalar(
            select(Genre).where(Genre.name == name).order_by(Genre.id).limit(1)
        )

    async def get_genre(self, genre_id: int) -> Union[GenreResponse, NotFound]:
        genre = await self._get(Genre, genre_id)
        if genre is None:
            return NotFound(resource=self.resource, id=genre_id)
        return GenreResponse.model_validate(genre)

    async def get_genre_detail(self, genre_id: int) -> Union[GenreDetail, NotFound]:
        """Genre plus every book filed under it."""
        genre = await self._get(Genre, genre_id)
        if genre is None:
            return NotFound(resource=self.resource, id=genre_id)

        books = await self._scalars(
            select(Book)
            .join(book_genres)
            .where(book_genres.c.genre_id == genre_id)
            .order_by(Book.title)
        )
        return GenreDetail(
            genre=GenreResponse.model_validate(genre),
            books=[BookSummary.model_validate(book) for book in books],
        )

    async def create_genre(
        self,
        form: Mapping[str, Any],
    ) -> Union[GenreCreateResult, ValidationFailure]:
        """Create a genre, or return the existing one with the same name."""
        result = validate_genre(form)
        if not result.is_valid:
            return result.failure()

        existing = await self.find_by_name(result.data["name"])
        if existing is not None:
            logger.info(f"Genre {existing.name!r} already exists as {existing.id}")
            return GenreCreateResult(
                genre=GenreResponse.model_validate(existing), created=False
            )

        genre = await self._save(Genre(**result.data))
        logger.info(f"Created genre {genre.id}: {genre.name}")
        return GenreCreateResult(genre=GenreResponse.model_validate(genre), created=True)

    async def update_genre(
        self,
        genre_id: int,
        form: Mapping[str, Any],
    ) -> Union[GenreResponse, NotFound, ValidationFailure]:
        """Rename a genre. Names are only deduplicated on create."""
        genre = await self._get(Genre, genre_id)
        if genre is None:
            return NotFound(resource=self.resource, id=genre_id)

        result = validate_genre(form)
        if not result.is_valid:
            return result.failure()

        genre.name = result.data["name"]
        genre = await self._save(genre)
        logger.info(f"Updated genre {genre.id}")
        return GenreResponse.model_validate(genre)

    async def delete_genre(self, genre_id: int) -> DeleteOutcome:
        """Delete a genre that no book is filed under."""
        guard = ReferenceGuard(self.db, self.timeout)
        return await guard.guarded_delete(
            Genre, self.resource, genre_id, BOOKS_BY_GENRE
        )
