"""Derived display fields on the models."""
from datetime import date

from sqlalchemy import Text

from locallibrary.models import Author, Book, BookInstance, BookInstanceStatus, Genre
from locallibrary.models.display import format_date_medium


def test_format_date_medium():
    assert format_date_medium(date(1920, 1, 2)) == "Jan 2, 1920"
    assert format_date_medium(None) == ""


def test_author_derived_fields():
    author = Author(
        id=3,
        first_name="Isaac",
        family_name="Asimov",
        date_of_birth=date(1920, 1, 2),
        date_of_death=date(1992, 4, 6),
    )

    assert author.name == "Asimov, Isaac"
    assert author.lifespan == "Jan 2, 1920 - Apr 6, 1992"
    assert author.url == "/catalog/author/3"


def test_author_lifespan_for_living_or_undated_author():
    living = Author(first_name="Ann", family_name="Leckie", date_of_birth=date(1966, 3, 2))
    undated = Author(first_name="Homer", family_name="Unknown")

    assert living.lifespan == "Mar 2, 1966 - Present"
    assert undated.lifespan == " - Present"


def test_urls():
    assert Genre(id=1, name="Fantasy").url == "/catalog/genre/1"
    assert Book(id=2, title="Dune").url == "/catalog/book/2"
    assert BookInstance(id=5).url == "/catalog/bookinstance/5"


def test_book_instance_due_back_formatted():
    instance = BookInstance(
        id=1,
        imprint="Ace",
        status=BookInstanceStatus.LOANED,
        due_back=date(2024, 12, 25),
    )

    assert instance.due_back_formatted == "Dec 25, 2024"
    assert BookInstance(id=2).due_back_formatted == ""


def test_format_date_medium_uses_english_month_names():
    months = [format_date_medium(date(2001, month, 9)) for month in range(1, 13)]

    assert [m.split()[0] for m in months] == [
        "Jan", "Feb", "Mar", "Apr", "May", "Jun",
        "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
    ]
    assert months[8] == "Sep 9, 2001"


def test_escaped_text_columns_are_unbounded():
    """Escaping lengthens values, so escaped free text is stored as TEXT."""
    columns = [
        Genre.__table__.c.name,
        Book.__table__.c.title,
        Book.__table__.c.isbn,
        Book.__table__.c.summary,
        BookInstance.__table__.c.imprint,
    ]

    for column in columns:
        assert isinstance(column.type, Text), column.name
        assert getattr(column.type, "length", None) is None, column.name
