"""
Booking Domain Entities

ReservedSlot is the read model the conflict check works on: the window an
active booking occupies on a resource. Repositories build them from stored
bookings; the rules below never touch the database.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from shared.domain.value_objects import TimeSlot

from .exceptions import InvalidInterval


def make_slot(start: datetime, end: datetime) -> TimeSlot:
    """Build a TimeSlot, reporting an inverted or empty window as InvalidInterval."""
    if start is None:
        raise InvalidInterval("Start time is required.", field="start_time")
    if end is None:
        raise InvalidInterval("End time is required.", field="end_time")
    if start >= end:
        raise InvalidInterval("End time must be after start time.", field="end_time")
    return TimeSlot(start, end)


@dataclass(frozen=True)
class ReservedSlot:
    """Window held by an active (not cancelled) booking."""
    booking_id: Any
    resource_id: Any
    slot: TimeSlot

    @property
    def start(self) -> datetime:
        return self.slot.start

    @property
    def end(self) -> datetime:
        return self.slot.end

    @classmethod
    def of(cls, booking_id, resource_id, start: datetime, end: datetime) -> "ReservedSlot":
        return cls(booking_id=booking_id, resource_id=resource_id, slot=make_slot(start, end))
