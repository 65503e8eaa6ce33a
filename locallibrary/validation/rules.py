"""Field rules for form validation and sanitization.

A rule is a plain function taking the current field value and returning the
(possibly transformed) value, or raising ``ValueError`` with a user-facing
message. Rules are composed into ordered chains per field by
``locallibrary.validation.forms``; the first rule that raises ends the chain.
"""
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable, Optional, Sequence, Union

Rule = Callable[[Any], Any]
RawValue = Union[str, Sequence[str], None]

# Characters rewritten by ``escape``, matching what browsers treat as markup.
_ESCAPES = str.maketrans({
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#x27;",
    "/": "&#x2F;",
    "\\": "&#x5C;",
    "`": "&#96;",
})


def normalize_multi(value: RawValue) -> list[str]:
    """Normalize a multi-value form field.

    Absent becomes an empty list, a scalar becomes a one-element list and a
    sequence is returned as a list, so checkbox groups decode the same way
    whether zero, one or several boxes were checked.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


def normalize_single(value: RawValue) -> str:
    """Collapse a scalar form field to one string; the last repeat wins."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    values = list(value)
    return values[-1] if values else ""


def trim(value: Optional[str]) -> str:
    return (value or "").strip()


def escape(value: str) -> str:
    """Replace markup-significant characters with HTML entities."""
    return value.translate(_ESCAPES)


def required(message: str) -> Rule:
    def rule(value: str) -> str:
        if not value:
            raise ValueError(message)
        return value
    return rule


def min_length(length: int, message: str) -> Rule:
    def rule(value: str) -> str:
        if len(value) < length:
            raise ValueError(message)
        return value
    return rule


def max_length(length: int, message: str) -> Rule:
    def rule(value: str) -> str:
        if len(value) > length:
            raise ValueError(message)
        return value
    return rule


def alphanumeric(message: str) -> Rule:
    """Only ASCII letters and digits."""
    def rule(value: str) -> str:
        if not (value.isascii() and value.isalnum()):
            raise ValueError(message)
        return value
    return rule


def parse_iso_date(value: str) -> date:
    """Parse an ISO-8601 date or date-time string to a date."""
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    # Python < 3.11 does not accept a trailing "Z" in fromisoformat.
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value).date()


def optional_date(message: str) -> Rule:
    """Empty means "not provided" (None); anything else must be ISO-8601."""
    def rule(value: str) -> Optional[date]:
        if not value:
            return None
        try:
            return parse_iso_date(value)
        except ValueError:
            raise ValueError(message) from None
    return rule


def identifier(message: str) -> Rule:
    """A positive integer record ID."""
    def rule(value: str) -> int:
        if not (value.isascii() and value.isdigit()) or int(value) < 1:
            raise ValueError(message)
        return int(value)
    return rule


def default(fallback: str) -> Rule:
    def rule(value: str) -> str:
        return value or fallback
    return rule


def one_of(choices: type[Enum], message: str) -> Rule:
    """Member of a closed enumeration, matched by value."""
    def rule(value: str) -> Enum:
        try:
            return choices(value)
        except ValueError:
            raise ValueError(message) from None
    return rule


def each(*rules: Rule) -> Rule:
    """Apply a chain to every item of a list, dropping repeated results."""
    def rule(values: list[str]) -> list[Any]:
        results = []
        for item in values:
            for item_rule in rules:
                item = item_rule(item)
            if item not in results:
                results.append(item)
        return results
    return rule
