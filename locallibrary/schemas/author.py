"""Author Pydantic schemas."""
from datetime import date
from typing import Optional

from locallibrary.schemas.common import BaseSchema, LinkSchema


class AuthorResponse(LinkSchema):
    """Schema for author response, including derived display fields."""

    first_name: str
    family_name: str
    date_of_birth: Optional[date] = None
    date_of_death: Optional[date] = None
    name: str
    lifespan: str


class AuthorRef(LinkSchema):
    """Author as shown next to a book."""

    name: str


class BookSummary(LinkSchema):
    """Book projection used on author and genre pages."""

    title: str
    summary: str


class AuthorDetail(BaseSchema):
    """Author with the books that reference it."""

    author: AuthorResponse
    books: list[BookSummary] = []
