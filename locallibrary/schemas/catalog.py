"""Catalog home page schema."""
from pydantic import BaseModel


class CatalogSummary(BaseModel):
    """Record counts shown on the catalog home page."""

    book_count: int
    book_instance_count: int
    book_instance_available_count: int
    author_count: int
    genre_count: int
