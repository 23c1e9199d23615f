"""Pagination exceptions.

Every error raised by the pagination core derives from PaginationError so
callers can catch the whole family at once. Failures coming from a record
store are deliberately absent: they propagate to the caller unchanged.
"""

from __future__ import annotations

from typing import Any


class PaginationError(Exception):
    """Base exception for pagination failures.

    Attributes:
        message: Error description
        details: Additional context about the error
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize pagination error.

        Args:
            message: Error description
            details: Additional context about the error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Format error message with details."""
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class PaginationValidationError(PaginationError, ValueError):
    """Malformed pagination request.

    Raised while normalizing a request, always before the record store
    is touched. Covers wrong types, out-of-range sizes, conflicting
    selectors and conflicting anchors.

    Attributes:
        field: Name of the offending field, if one can be singled out
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """Initialize validation error.

        Args:
            message: Error description
            field: Offending field name (e.g. "per_page")
            details: Additional context about the error
        """
        self.field = field
        merged = {"field": field} if field else {}
        merged.update(details or {})
        super().__init__(message, details=merged)


class CursorDecodeError(PaginationError):
    """A cursor key could not be read from a returned record.

    Raised lazily, only when a start or end cursor is actually needed.
    Typical cause: the query's field selection left out the cursor field.
    """

    def __init__(self, message: str, field: str | None = None):
        """Initialize cursor decode error.

        Args:
            message: Error description
            field: Record field the codec tried to read
        """
        self.field = field
        super().__init__(message, details={"field": field} if field else {})


__all__ = [
    "CursorDecodeError",
    "PaginationError",
    "PaginationValidationError",
]
