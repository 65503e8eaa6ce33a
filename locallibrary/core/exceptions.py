"""Custom exceptions for the application.

Validation failures, missing records and blocked deletes are ordinary
outcomes (see ``locallibrary.schemas.outcomes``) and are never raised.
The exceptions here are for conditions that end the request.
"""
from typing import Any, Optional


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class StoreTimeoutError(AppException):
    """A store call did not complete within the configured timeout."""

    def __init__(self, timeout: float):
        super().__init__(
            f"Store call exceeded {timeout:g}s timeout",
            error_code="STORE_TIMEOUT",
            details={"timeout": timeout},
        )