"""Business logic services."""
from locallibrary.services.author_service import AuthorService
from locallibrary.services.book_instance_service import BookInstanceService
from locallibrary.services.book_service import BookService
from locallibrary.services.catalog_service import CatalogService
from locallibrary.services.genre_service import GenreService
from locallibrary.services.integrity import ReferenceGuard

__all__ = [
    "AuthorService",
    "BookInstanceService",
    "BookService",
    "CatalogService",
    "GenreService",
    "ReferenceGuard",
]
