"""
Booking Domain Events

Published on the message bus after the transaction that produced them
commits.
"""

from dataclasses import dataclass
from typing import Any

from shared.domain.base import DomainEvent
from shared.domain.value_objects import Money, TimeSlot


@dataclass(kw_only=True)
class BookingCreated(DomainEvent):
    booking_id: Any
    resource_id: Any
    user_id: Any
    slot: TimeSlot
    price: Money


@dataclass(kw_only=True)
class BookingCancelled(DomainEvent):
    booking_id: Any
    resource_id: Any
    previous_status: str
    reason: str = ''


@dataclass(kw_only=True)
class BookingCompleted(DomainEvent):
    booking_id: Any
    resource_id: Any
