from __future__ import annotations

from typing import Mapping, Optional, Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""


class NotFoundError(DomainError):
    """Raised when the requested entity has no row."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules.

    ``errors`` maps a form field name to its messages.
    """

    def __init__(self, message: str, errors: Optional[Mapping[str, Sequence[str]]] = None):
        super().__init__(message)
        self.errors: dict[str, list[str]] = {k: list(v) for k, v in (errors or {}).items()}


class CapacityExceededError(ValidationError):
    """Raised when more employees attend an event than its maximum capacity allows."""

    field = "maximum_capacity"

    def __init__(self, *, attending: int, capacity: int):
        message = f"The number of attendees exceeds the maximum capacity provided ({attending} > {capacity})."
        super().__init__(message, {self.field: [message]})
        self.attending = attending
        self.capacity = capacity


class EventLockedError(DomainError):
    """Raised when editing an event whose start time has already passed."""


class OperationCancelledError(DomainError):
    """Raised when a request is cancelled before its store calls complete."""
