"""
Exception types raised by the booking core.

``ValidationError`` and its ``InvalidTimeSpec`` variant are client
faults and map to HTTP 400.  ``PersistenceError`` means a configured
store failed and maps to HTTP 500.  ``StoreUnavailable`` is raised only
by the unconfigured store and is always handled inside the service by
falling back to degraded, non-persisted bookings.
"""

from typing import Iterable, Optional


class BookingError(Exception):
    """Base class for all booking errors."""


class ValidationError(BookingError):
    """A request is missing a mandatory field or carries a malformed one."""

    def __init__(self, message: str, fields: Optional[Iterable[str]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.fields = list(fields or [])


class InvalidTimeSpec(ValidationError):
    """A date or start time could not be parsed into an instant."""


class PersistenceError(BookingError):
    """The booking store exists but an operation on it failed."""


class StoreUnavailable(BookingError):
    """No booking store is configured."""
