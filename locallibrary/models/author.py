"""Author model."""
from datetime import date
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from locallibrary.database import Base
from locallibrary.models.display import format_date_medium

if TYPE_CHECKING:
    from locallibrary.models.book import Book

NAME_MAX_LENGTH = 100


class Author(Base):
    """An author referenced by one or more books."""

    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    first_name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    family_name: Mapped[str] = mapped_column(
        String(NAME_MAX_LENGTH), nullable=False, index=True
    )
    date_of_birth: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    date_of_death: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    books: Mapped[list["Book"]] = relationship(
        "Book", back_populates="author", passive_deletes="all"
    )

    @property
    def name(self) -> str:
        return f"{self.family_name}, {self.first_name}"

    @property
    def lifespan(self) -> str:
        """Birth and death dates, with "Present" for living authors."""
        born = format_date_medium(self.date_of_birth)
        died = format_date_medium(self.date_of_death) or "Present"
        return f"{born} - {died}"

    @property
    def url(self) -> str:
        return f"/catalog/author/{self.id}"

    def __repr__(self) -> str:
        return f"<Author(id={self.id}, name={self.name})>"
