"""Operation outcomes returned by services instead of raised.

Callers branch on the outcome type: a validation failure re-renders the
form, ``NotFound`` becomes a 404 and ``ReferenceBlocked`` shows the records
that must be removed first.
"""
from typing import Any, Literal, Optional

from pydantic import BaseModel


class FieldError(BaseModel):
    """One rule violation on one form field."""

    field: str
    message: str
    value: Optional[Any] = None


class ValidationFailure(BaseModel):
    """Every field error of a submission, in field order."""

    outcome: Literal["validation_failure"] = "validation_failure"
    errors: list[FieldError]
    values: dict[str, Any] = {}

    @property
    def fields(self) -> list[str]:
        return [error.field for error in self.errors]


class NotFound(BaseModel):
    """No record exists for the requested ID."""

    outcome: Literal["not_found"] = "not_found"
    resource: str
    id: int

    @property
    def message(self) -> str:
        return f"{self.resource} not found"


class ReferenceSummary(BaseModel):
    """Short description of a record that references another."""

    id: int
    label: str
    url: str


class ReferenceBlocked(BaseModel):
    """Delete refused because other records still reference the target."""

    outcome: Literal["reference_blocked"] = "reference_blocked"
    resource: str
    id: int
    blocked_by: str
    blocking: list[ReferenceSummary]

    @property
    def message(self) -> str:
        return (
            f"{self.resource} {self.id} is referenced by "
            f"{len(self.blocking)} {self.blocked_by} record(s)"
        )


class Deleted(BaseModel):
    """Record removed."""

    outcome: Literal["deleted"] = "deleted"
    resource: str
    id: int
