"""Per-entity form validators.

Each form is an ordered tuple of fields, each field an ordered chain of
rules. ``validate_form`` runs every field, keeps the first error per field
and returns the sanitized values of all fields alongside the errors.
"""
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from locallibrary.models import (
    GENRE_NAME_MAX_LENGTH,
    GENRE_NAME_MIN_LENGTH,
    NAME_MAX_LENGTH,
    BookInstanceStatus,
)
from locallibrary.schemas.outcomes import FieldError, ValidationFailure
from locallibrary.validation.rules import (
    RawValue,
    Rule,
    alphanumeric,
    default,
    each,
    escape,
    identifier,
    max_length,
    min_length,
    normalize_multi,
    normalize_single,
    one_of,
    optional_date,
    required,
    trim,
)


@dataclass(frozen=True)
class FormField:
    """A form field and its rule chain."""

    name: str
    rules: tuple[Rule, ...]
    multiple: bool = False


@dataclass
class FormResult:
    """Sanitized values for every field plus the collected errors."""

    data: dict[str, Any] = field(default_factory=dict)
    errors: list[FieldError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def error_for(self, name: str) -> Optional[FieldError]:
        return next((e for e in self.errors if e.field == name), None)

    def add_error(self, name: str, message: str) -> None:
        self.errors.append(
            FieldError(field=name, message=message, value=self.data.get(name))
        )

    def failure(self) -> ValidationFailure:
        return ValidationFailure(errors=self.errors, values=self.data)


def _echo(raw: RawValue, multiple: bool) -> Any:
    """Trimmed, escaped copy of a rejected value, for redisplay."""
    if multiple:
        return [escape(trim(item)) for item in normalize_multi(raw)]
    return escape(trim(normalize_single(raw)))


def validate_form(
    fields: tuple[FormField, ...],
    raw: Mapping[str, RawValue],
) -> FormResult:
    """Run every field's chain against the submitted values."""
    result = FormResult()
    for form_field in fields:
        submitted = raw.get(form_field.name)
        if form_field.multiple:
            value: Any = normalize_multi(submitted)
        else:
            value = normalize_single(submitted)
        try:
            for rule in form_field.rules:
                value = rule(value)
        except ValueError as exc:
            echoed = _echo(submitted, form_field.multiple)
            result.data[form_field.name] = echoed
            result.errors.append(
                FieldError(field=form_field.name, message=str(exc), value=echoed)
            )
        else:
            result.data[form_field.name] = value
    return result


def _name_field(name: str, label: str) -> FormField:
    return FormField(name, (
        trim,
        required(f"{label} must be specified."),
        max_length(NAME_MAX_LENGTH, f"{label} must be at most {NAME_MAX_LENGTH} characters."),
        alphanumeric(f"{label} has non-alphanumeric characters."),
        escape,
    ))


AUTHOR_FORM = (
    _name_field("first_name", "First name"),
    _name_field("family_name", "Family name"),
    FormField("date_of_birth", (trim, optional_date("Invalid date of birth"))),
    FormField("date_of_death", (trim, optional_date("Invalid date of death"))),
)

GENRE_FORM = (
    FormField("name", (
        trim,
        min_length(
            GENRE_NAME_MIN_LENGTH,
            f"Genre name must contain at least {GENRE_NAME_MIN_LENGTH} characters",
        ),
        max_length(
            GENRE_NAME_MAX_LENGTH,
            f"Genre name must be at most {GENRE_NAME_MAX_LENGTH} characters.",
        ),
        escape,
    )),
)

BOOK_FORM = (
    FormField("title", (trim, required("Title must not be empty."), escape)),
    FormField("author", (
        trim,
        required("Author must not be empty."),
        escape,
        identifier("Invalid author."),
    )),
    FormField("summary", (trim, required("Summary must not be empty."), escape)),
    FormField("isbn", (trim, required("ISBN must not be empty"), escape)),
    FormField(
        "genre",
        (each(trim, escape, identifier("Invalid genre.")),),
        multiple=True,
    ),
)

BOOK_INSTANCE_FORM = (
    FormField("book", (
        trim,
        required("Book must be specified"),
        escape,
        identifier("Invalid book."),
    )),
    FormField("imprint", (trim, required("Imprint must be specified"), escape)),
    FormField("status", (
        trim,
        default(BookInstanceStatus.MAINTENANCE.value),
        one_of(BookInstanceStatus, "Invalid status"),
    )),
    FormField("due_back", (trim, optional_date("Invalid date"))),
)


def validate_author(raw: Mapping[str, RawValue]) -> FormResult:
    return validate_form(AUTHOR_FORM, raw)


def validate_genre(raw: Mapping[str, RawValue]) -> FormResult:
    return validate_form(GENRE_FORM, raw)


def validate_book(raw: Mapping[str, RawValue]) -> FormResult:
    return validate_form(BOOK_FORM, raw)


def validate_book_instance(raw: Mapping[str, RawValue]) -> FormResult:
    return validate_form(BOOK_INSTANCE_FORM, raw)
