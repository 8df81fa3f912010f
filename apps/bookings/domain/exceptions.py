"""Booking domain exceptions."""

from __future__ import annotations

CONFLICT_MESSAGE = "This time slot is already booked for the selected resource"


class BookingError(Exception):
    """Base class for booking rule violations."""


class InvalidInterval(BookingError, ValueError):
    """A window whose start is not strictly before its end."""

    def __init__(self, message: str = "End time must be after start time.", field: str = "end_time"):
        super().__init__(message)
        self.field = field


class InvalidRate(BookingError, ValueError):
    """Negative hourly rate."""


class BookingConflict(BookingError):
    """The requested window overlaps an active booking of the same resource."""

    def __init__(self, conflicting=None, message: str = CONFLICT_MESSAGE):
        super().__init__(message)
        self.conflicting = conflicting


class ResourceUnavailable(BookingError):
    """The resource does not exist or is not open for booking."""


class BookingStateError(BookingError):
    """A status transition that the booking's current status forbids."""


class PriceOutOfRange(BookingError):
    """The charge for the window is larger than a booking can record."""
