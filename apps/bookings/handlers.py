"""Subscribers for booking domain events.

They run after the surrounding transaction commits, so a failure here never
undoes a booking.
"""

from __future__ import annotations

import structlog

from shared.application.message_bus import MessageBus

from .domain.events import BookingCancelled, BookingCompleted, BookingCreated

logger = structlog.get_logger(__name__)


def log_booking_created(event: BookingCreated) -> None:
    logger.info(
        "booking.created",
        booking_id=event.booking_id,
        resource_id=event.resource_id,
        user_id=event.user_id,
        start=event.slot.start.isoformat(),
        end=event.slot.end.isoformat(),
        price=str(event.price),
    )


def log_booking_cancelled(event: BookingCancelled) -> None:
    logger.info(
        "booking.cancelled",
        booking_id=event.booking_id,
        resource_id=event.resource_id,
        previous_status=event.previous_status,
        reason=event.reason,
    )


def log_booking_completed(event: BookingCompleted) -> None:
    logger.info(
        "booking.completed",
        booking_id=event.booking_id,
        resource_id=event.resource_id,
    )


def register(bus: MessageBus) -> None:
    bus.subscribe(BookingCreated, log_booking_created)
    bus.subscribe(BookingCancelled, log_booking_cancelled)
    bus.subscribe(BookingCompleted, log_booking_completed)
