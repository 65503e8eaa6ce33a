"""SQLAlchemy models."""
from locallibrary.models.author import NAME_MAX_LENGTH, Author
from locallibrary.models.book import Book, book_genres
from locallibrary.models.book_instance import BookInstance, BookInstanceStatus
from locallibrary.models.genre import GENRE_NAME_MAX_LENGTH, GENRE_NAME_MIN_LENGTH, Genre

__all__ = [
    # Author
    "Author",
    "NAME_MAX_LENGTH",
    # Genre
    "Genre",
    "GENRE_NAME_MIN_LENGTH",
    "GENRE_NAME_MAX_LENGTH",
    # Book
    "Book",
    "book_genres",
    # BookInstance
    "BookInstance",
    "BookInstanceStatus",
]
