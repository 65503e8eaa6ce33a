"""Book service for managing books and their author and genre links."""
from typing import Any, Mapping, Optional, Sequence, Union

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from locallibrary.core.logging import get_logger
from locallibrary.models import Author, Book, BookInstance, Genre, book_genres
from locallibrary.schemas.author import AuthorRef, AuthorResponse
from locallibrary.schemas.book import (
    BookDetail,
    BookFormOptions,
    BookListItem,
    BookResponse,
    GenreChoice,
)
from locallibrary.schemas.book_instance import BookInstanceResponse
from locallibrary.schemas.genre import GenreResponse
from locallibrary.schemas.outcomes import NotFound, ValidationFailure
from locallibrary.services.base import StoreService
from locallibrary.services.integrity import (
    INSTANCES_BY_BOOK,
    DeleteOutcome,
    ReferenceGuard,
)
from locallibrary.validation import FormResult, validate_book

logger = get_logger("book_service")


def _book_response(book: Book, genre_ids: Sequence[int]) -> BookResponse:
    return BookResponse.model_validate(book).model_copy(
        update={"genre_ids": list(genre_ids)}
    )


class BookService(StoreService):
    """Service for book operations."""

    resource = "Book"

    async def resolve_authors(self, books: Sequence[Book]) -> dict[int, Author]:
        """Fetch the authors of ``books`` in one query, keyed by ID."""
        author_ids = {book.author_id for book in books}
        if not author_ids:
            return {}
        authors = await self._scalars(select(Author).where(Author.id.in_(author_ids)))
        return {author.id: author for author in authors}

    async def resolve_genres(self, book_id: int) -> list[Genre]:
        """Genres a book is filed under, by name."""
        return await self._scalars(
            select(Genre)
            .join(book_genres)
            .where(book_genres.c.book_id == book_id)
            .order_by(Genre.name)
        )

    async def list_books(self) -> list[BookListItem]:
        """All books by title with the author name attached."""
        books = await self._scalars(select(Book).order_by(Book.title))
        authors = await self.resolve_authors(books)
        items = []
        for book in books:
            author = authors.get(book.author_id)
            if author is None:
                # Dangling author reference; nothing to display it with.
                logger.warning(f"Book {book.id} refers to missing author {book.author_id}")
                continue
            items.append(
                BookListItem(
                    id=book.id,
                    url=book.url,
                    title=book.title,
                    author=AuthorRef.model_validate(author),
                )
            )
        return items

    async def get_book_detail(self, book_id: int) -> Union[BookDetail, NotFound]:
        """Book with author, genres and copies resolved."""
        book = await self._get(Book, book_id)
        if book is None:
            return NotFound(resource=self.resource, id=book_id)

        author = await self._get(Author, book.author_id)
        if author is None:
            return NotFound(resource="Author", id=book.author_id)
        genres = await self.resolve_genres(book_id)
        instances = await self._scalars(
            select(BookInstance)
            .where(BookInstance.book_id == book_id)
            .order_by(BookInstance.id)
        )
        return BookDetail(
            book=_book_response(book, [genre.id for genre in genres]),
            author=AuthorResponse.model_validate(author),
            genres=[GenreResponse.model_validate(genre) for genre in genres],
            instances=[BookInstanceResponse.model_validate(i) for i in instances],
        )

    async def get_form_options(
        self,
        book_id: Optional[int] = None,
    ) -> Union[BookFormOptions, NotFound]:
        """Authors and genres for the book form, with a book's genres checked."""
        checked: set[int] = set()
        if book_id is not None:
            if await self._get(Book, book_id) is None:
                return NotFound(resource=self.resource, id=book_id)
            checked = {genre.id for genre in await self.resolve_genres(book_id)}

        authors = await self._scalars(
            select(Author).order_by(Author.family_name, Author.first_name)
        )
        genres = await self._scalars(select(Genre).order_by(Genre.name))
        return BookFormOptions(
            authors=[AuthorResponse.model_validate(author) for author in authors],
            genres=[
                GenreChoice(
                    id=genre.id,
                    url=genre.url,
                    name=genre.name,
                    checked=genre.id in checked,
                )
                for genre in genres
            ],
        )

    async def _check_references(self, result: FormResult) -> None:
        """Record form errors for author or genre IDs that do not exist."""
        guard = ReferenceGuard(self.db, self.timeout)
        if await guard.missing_ids(Author, [result.data["author"]]):
            result.add_error("author", "Author not found.")
        if await guard.missing_ids(Genre, result.data["genre"]):
            result.add_error("genre", "Genre not found.")

    async def _load_genres(self, genre_ids: Sequence[int]) -> list[Genre]:
        if not genre_ids:
            return []
        return await self._scalars(select(Genre).where(Genre.id.in_(genre_ids)))

    async def create_book(
        self,
        form: Mapping[str, Any],
    ) -> Union[BookResponse, ValidationFailure]:
        """Create a book from a submitted form."""
        result = validate_book(form)
        if result.is_valid:
            await self._check_references(result)
        if not result.is_valid:
            return result.failure()

        data = result.data
        book = Book(
            title=data["title"],
            author_id=data["author"],
            summary=data["summary"],
            isbn=data["isbn"],
            genres=await self._load_genres(data["genre"]),
        )
        book = await self._save(book)
        logger.info(f"Created book {book.id}: {book.title}")
        return _book_response(book, data["genre"])

    async def update_book(
        self,
        book_id: int,
        form: Mapping[str, Any],
    ) -> Union[BookResponse, NotFound, ValidationFailure]:
        """Replace every field of a book, including its genre set."""
        book = await self._get(Book, book_id, options=[selectinload(Book.genres)])
        if book is None:
            return NotFound(resource=self.resource, id=book_id)

        result = validate_book(form)
        if result.is_valid:
            await self._check_references(result)
        if not result.is_valid:
            return result.failure()

        data = result.data
        book.title = data["title"]
        book.author_id = data["author"]
        book.summary = data["summary"]
        book.isbn = data["isbn"]
        book.genres = await self._load_genres(data["genre"])
        book = await self._save(book)
        logger.info(f"Updated book {book.id}")
        return _book_response(book, data["genre"])

    async def delete_book(self, book_id: int) -> DeleteOutcome:
        """Delete a book with no copies, along with its genre links."""
        guard = ReferenceGuard(self.db, self.timeout)
        return await guard.guarded_delete(
            Book,
            self.resource,
            book_id,
            INSTANCES_BY_BOOK,
            options=[selectinload(Book.genres)],
        )
