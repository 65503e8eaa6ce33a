"""Book model and the book/genre association table."""
from typing import TYPE_CHECKING

from sqlalchemy import Column, ForeignKey, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from locallibrary.database import Base

if TYPE_CHECKING:
    from locallibrary.models.author import Author
    from locallibrary.models.book_instance import BookInstance
    from locallibrary.models.genre import Genre


book_genres = Table(
    "book_genres",
    Base.metadata,
    Column("book_id", ForeignKey("books.id"), primary_key=True),
    Column(
        "genre_id",
        ForeignKey("genres.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)


class Book(Base):
    """A catalogued title written by one author."""

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[int] = mapped_column(
        ForeignKey("authors.id"), nullable=False, index=True
    )
    summary: Mapped[str] = mapped_column(Text, nullable=False)
    isbn: Mapped[str] = mapped_column(Text, nullable=False)

    # Relationships
    author: Mapped["Author"] = relationship("Author", back_populates="books")
    genres: Mapped[list["Genre"]] = relationship(
        "Genre", secondary=book_genres, back_populates="books"
    )
    instances: Mapped[list["BookInstance"]] = relationship(
        "BookInstance", back_populates="book", passive_deletes="all"
    )

    @property
    def url(self) -> str:
        return f"/catalog/book/{self.id}"

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, title={self.title})>"
