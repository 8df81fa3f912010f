"""
Conflict detection

A proposed window [start, end) conflicts with an existing active booking
[s, e) of the same resource iff s < end and e > start. Touching windows are
legal, so back-to-back bookings never conflict.

Callers pass only active bookings; cancelled ones must be filtered out
before the check.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from .entities import ReservedSlot, make_slot
from .exceptions import BookingConflict


def find_conflict(
    resource_id,
    start: datetime,
    end: datetime,
    existing: Iterable[ReservedSlot],
) -> Optional[ReservedSlot]:
    """
    Return the first existing slot of ``resource_id`` overlapping the window.

    Slots belonging to other resources are ignored. Raises InvalidInterval
    when ``start >= end``.
    """
    proposed = make_slot(start, end)
    for reserved in existing:
        if reserved.resource_id != resource_id:
            continue
        if reserved.slot.overlaps_with(proposed):
            return reserved
    return None


def has_conflict(resource_id, start: datetime, end: datetime, existing: Iterable[ReservedSlot]) -> bool:
    return find_conflict(resource_id, start, end, existing) is not None


def ensure_no_conflict(resource_id, start: datetime, end: datetime, existing: Iterable[ReservedSlot]) -> None:
    """Raise BookingConflict carrying the overlapping slot, if there is one."""
    conflict = find_conflict(resource_id, start, end, existing)
    if conflict is not None:
        raise BookingConflict(conflict)
