"""Form validation and sanitization tests."""
from datetime import date

import pytest

from locallibrary.models import BookInstanceStatus
from locallibrary.validation import (
    normalize_multi,
    validate_author,
    validate_book,
    validate_book_instance,
    validate_genre,
)
from locallibrary.validation.rules import escape, parse_iso_date


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, []),
        ("3", ["3"]),
        (["1", "2"], ["1", "2"]),
        ((), []),
    ],
)
def test_normalize_multi(raw, expected):
    assert normalize_multi(raw) == expected


def test_escape_markup_characters():
    assert escape("<b>Tom & Jerry</b>") == "&lt;b&gt;Tom &amp; Jerry&lt;&#x2F;b&gt;"
    assert escape("it's \"quoted\"") == "it&#x27;s &quot;quoted&quot;"


def test_parse_iso_date_accepts_datetimes():
    assert parse_iso_date("1920-01-02") == date(1920, 1, 2)
    assert parse_iso_date("1920-01-02T10:30:00Z") == date(1920, 1, 2)


def test_author_valid_form_is_trimmed_and_parsed():
    result = validate_author({
        "first_name": "  Isaac ",
        "family_name": "Asimov",
        "date_of_birth": "1920-01-02",
        "date_of_death": "",
    })

    assert result.is_valid
    assert result.data == {
        "first_name": "Isaac",
        "family_name": "Asimov",
        "date_of_birth": date(1920, 1, 2),
        "date_of_death": None,
    }


def test_author_collects_every_field_error_in_order():
    result = validate_author({
        "first_name": "",
        "family_name": "O'Brien",
        "date_of_birth": "not-a-date",
        "date_of_death": "1990-02-30",
    })

    assert [(e.field, e.message) for e in result.errors] == [
        ("first_name", "First name must be specified."),
        ("family_name", "Family name has non-alphanumeric characters."),
        ("date_of_birth", "Invalid date of birth"),
        ("date_of_death", "Invalid date of death"),
    ]
    # Rejected text is echoed back escaped
    assert result.data["family_name"] == "O&#x27;Brien"


def test_author_name_length_limit():
    result = validate_author({"first_name": "a" * 101, "family_name": "Smith"})

    assert [e.field for e in result.errors] == ["first_name"]
    assert result.errors[0].message == "First name must be at most 100 characters."


def test_author_missing_fields_report_one_error_each():
    result = validate_author({})

    assert [e.field for e in result.errors] == ["first_name", "family_name"]
    assert result.data["date_of_birth"] is None


def test_genre_name_minimum_length():
    result = validate_genre({"name": " SF "})

    assert not result.is_valid
    assert result.error_for("name").message == "Genre name must contain at least 3 characters"


def test_genre_name_is_escaped():
    result = validate_genre({"name": "Sci-Fi & Fantasy"})

    assert result.is_valid
    assert result.data["name"] == "Sci-Fi &amp; Fantasy"


def _book_form(**overrides):
    form = {"title": "Dune", "author": "1", "summary": "Spice.", "isbn": "9780441013593"}
    form.update(overrides)
    return form


def test_book_without_genre_normalizes_to_empty_list():
    result = validate_book(_book_form())

    assert result.is_valid
    assert result.data["genre"] == []
    assert result.data["author"] == 1


def test_book_single_and_repeated_genres():
    assert validate_book(_book_form(genre="4")).data["genre"] == [4]
    assert validate_book(_book_form(genre=["4", "2", "4"])).data["genre"] == [4, 2]


def test_book_rejects_bad_ids():
    result = validate_book(_book_form(author="abc", genre=["1", "x"]))

    assert [(e.field, e.message) for e in result.errors] == [
        ("author", "Invalid author."),
        ("genre", "Invalid genre."),
    ]


def test_book_required_fields():
    result = validate_book({"title": "   "})

    assert [e.message for e in result.errors] == [
        "Title must not be empty.",
        "Author must not be empty.",
        "Summary must not be empty.",
        "ISBN must not be empty",
    ]


def test_book_title_is_escaped():
    result = validate_book(_book_form(title="<script>x</script>"))

    assert result.data["title"] == "&lt;script&gt;x&lt;&#x2F;script&gt;"


def test_book_instance_bad_due_back_only_flags_due_back():
    result = validate_book_instance({
        "book": "7",
        "imprint": " Ace, 1990 ",
        "status": "Loaned",
        "due_back": "next tuesday",
    })

    assert [e.field for e in result.errors] == ["due_back"]
    assert result.errors[0].message == "Invalid date"
    assert result.data["book"] == 7
    assert result.data["imprint"] == "Ace, 1990"
    assert result.data["status"] is BookInstanceStatus.LOANED


def test_book_instance_status_defaults_to_maintenance():
    result = validate_book_instance({"book": "1", "imprint": "Ace"})

    assert result.is_valid
    assert result.data["status"] is BookInstanceStatus.MAINTENANCE
    assert result.data["due_back"] is None


def test_book_instance_status_is_a_closed_set():
    result = validate_book_instance({"book": "1", "imprint": "Ace", "status": "Lost"})

    assert result.error_for("status").message == "Invalid status"
