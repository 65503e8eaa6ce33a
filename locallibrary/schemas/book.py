"""Book Pydantic schemas."""
from locallibrary.schemas.author import AuthorRef, AuthorResponse
from locallibrary.schemas.book_instance import BookInstanceResponse, BookRef
from locallibrary.schemas.common import BaseSchema, LinkSchema
from locallibrary.schemas.genre import GenreResponse


class BookResponse(LinkSchema):
    """Schema for book response."""

    title: str
    summary: str
    isbn: str
    author_id: int
    genre_ids: list[int] = []


class BookListItem(LinkSchema):
    """Book list row with the author resolved."""

    title: str
    author: AuthorRef


class BookDetail(BaseSchema):
    """Book with author, genres and copies resolved."""

    book: BookResponse
    author: AuthorResponse
    genres: list[GenreResponse] = []
    instances: list[BookInstanceResponse] = []


class GenreChoice(GenreResponse):
    """Genre checkbox on the book form."""

    checked: bool = False


class BookFormOptions(BaseSchema):
    """Choices for the book create and update forms."""

    authors: list[AuthorResponse]
    genres: list[GenreChoice]


class BookInstanceFormOptions(BaseSchema):
    """Choices for the book instance create and update forms."""

    books: list[BookRef]
