"""Genre model."""
from typing import TYPE_CHECKING

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from locallibrary.database import Base

if TYPE_CHECKING:
    from locallibrary.models.book import Book

GENRE_NAME_MIN_LENGTH = 3
GENRE_NAME_MAX_LENGTH = 100


class Genre(Base):
    """A genre. Names are unique only through the create-time lookup.

    Length limits apply to the submitted name; the stored name is escaped
    and may be longer, so the column is unbounded.
    """

    __tablename__ = "genres"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(
        Text, nullable=False, index=True
    )

    books: Mapped[list["Book"]] = relationship(
        "Book", secondary="book_genres", back_populates="genres", passive_deletes=True
    )

    @property
    def url(self) -> str:
        return f"/catalog/genre/{self.id}"

    def __repr__(self) -> str:
        return f"<Genre(id={self.id}, name={self.name})>"
