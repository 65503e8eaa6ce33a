"""BookInstance Pydantic schemas."""
from datetime import date
from typing import Optional

from locallibrary.models.book_instance import BookInstanceStatus
from locallibrary.schemas.common import LinkSchema


class BookRef(LinkSchema):
    """Book as shown next to one of its copies."""

    title: str


class BookInstanceResponse(LinkSchema):
    """Schema for book instance response."""

    book_id: int
    imprint: str
    status: BookInstanceStatus
    due_back: Optional[date] = None
    due_back_formatted: str


class BookInstanceWithBook(BookInstanceResponse):
    """Book instance with its book resolved."""

    book: BookRef
