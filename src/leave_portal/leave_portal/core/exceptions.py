from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class InvalidReferenceDate(ValidationError):
    """Raised when a calendar (year, month) pair is malformed."""


class InvalidEventRange(ValidationError):
    """Raised when a leave event ends before it starts."""

    def __init__(self, message: str, *, event_id: Optional[Any] = None):
        super().__init__(message)
        self.event_id = event_id
