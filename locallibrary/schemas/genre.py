"""Genre Pydantic schemas."""
from locallibrary.schemas.author import BookSummary
from locallibrary.schemas.common import BaseSchema, LinkSchema


class GenreResponse(LinkSchema):
    """Schema for genre response."""

    name: str


class GenreCreateResult(BaseSchema):
    """Genre create outcome; ``created`` is False when the name existed."""

    genre: GenreResponse
    created: bool


class GenreDetail(BaseSchema):
    """Genre with the books that reference it."""

    genre: GenreResponse
    books: list[BookSummary] = []
