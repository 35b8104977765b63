"""
Domain errors raised by the service core.

The HTTP layer renders these with their status code; see ``hearth.app``.
"""

from __future__ import annotations

from typing import Optional


class HearthError(Exception):
    """Base error with a consistent HTTP-facing structure."""

    status_code: int = 500
    error_code: str = "INTERNAL"

    def __init__(self, detail: str, error_code: Optional[str] = None):
        super().__init__(detail)
        self.detail = detail
        if error_code:
            self.error_code = error_code


class NotFoundError(HearthError):
    """Resource not found."""

    status_code = 404
    error_code = "NOT_FOUND"


class ForbiddenError(HearthError):
    """Caller may not perform the operation."""

    status_code = 403
    error_code = "FORBIDDEN"


class ConflictError(HearthError):
    """Resource already exists (e.g., duplicate participation)."""

    status_code = 409
    error_code = "CONFLICT"


class InvalidInputError(HearthError):
    """Input passed schema validation but is inconsistent with stored state."""

    status_code = 422
    error_code = "VALIDATION_ERROR"
