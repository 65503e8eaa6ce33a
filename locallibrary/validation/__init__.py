"""Form validation and sanitization."""
from locallibrary.validation.forms import (
    FormResult,
    validate_author,
    validate_book,
    validate_book_instance,
    validate_genre,
)
from locallibrary.validation.rules import normalize_multi

__all__ = [
    "FormResult",
    "normalize_multi",
    "validate_author",
    "validate_book",
    "validate_book_instance",
    "validate_genre",
]
