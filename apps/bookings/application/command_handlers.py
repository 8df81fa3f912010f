"""
Booking Command Handlers

Use cases of the booking domain. Each handler receives its repository
explicitly and runs inside a unit of work.

Commands:
- CreateBookingCommand: validate, price and persist a new booking
- CancelBookingCommand: release a booking's slot
- CompleteBookingCommand: close a booking after use
- MarkBookingPaidCommand: record payment
Queries:
- QuoteBookingQuery: price and availability of a window, nothing persisted
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional
import logging

from django.conf import settings
from django.utils import timezone

from shared.application.uow import DjangoUnitOfWork
from shared.domain.value_objects import Money
from apps.bookings.domain.conflicts import find_conflict
from apps.bookings.domain.entities import ReservedSlot, make_slot
from apps.bookings.domain.events import BookingCancelled, BookingCompleted, BookingCreated
from apps.bookings.domain.exceptions import (
    BookingConflict,
    BookingStateError,
    PriceOutOfRange,
    ResourceUnavailable,
)
from apps.bookings.domain.pricing import quote_price
from apps.bookings.models import MAX_BOOKING_PRICE, Booking

logger = logging.getLogger(__name__)


# ===== Commands =====

@dataclass
class CreateBookingCommand:
    resource_id: Any
    user_id: Any
    start_time: datetime
    end_time: datetime
    notes: str = ''


@dataclass
class CancelBookingCommand:
    booking_id: Any
    reason: str = ''


@dataclass
class CompleteBookingCommand:
    booking_id: Any


@dataclass
class MarkBookingPaidCommand:
    booking_id: Any


@dataclass
class QuoteBookingQuery:
    resource_id: Any
    start_time: datetime
    end_time: datetime


@dataclass
class Quote:
    price: Money
    available: bool
    conflicting: Optional[ReservedSlot] = None


def _currency() -> str:
    return getattr(settings, 'BOOKING_CURRENCY', 'USD')


def _price(slot, hourly_rate) -> Money:
    price = quote_price(slot.start, slot.end, hourly_rate, _currency())
    if price.amount > MAX_BOOKING_PRICE:
        raise PriceOutOfRange(
            f"The charge {price} exceeds the maximum of {MAX_BOOKING_PRICE} per booking. "
            "Book a shorter window."
        )
    return price


# ===== Command Handlers =====

class CreateBookingHandler:
    """
    Handler for CreateBooking command

    1. Validate the window (InvalidInterval)
    2. Open a unit of work and lock the resource row
    3. Load the resource's active bookings overlapping the window
    4. Conflict check (BookingConflict)
    5. Price the window at the resource's current hourly rate
    6. Persist a confirmed, unpaid booking
    7. BookingCreated is published after commit
    """

    def __init__(self, booking_repo, uow_factory=DjangoUnitOfWork):
        self.booking_repo = booking_repo
        self.uow_factory = uow_factory

    def handle(self, command: CreateBookingCommand) -> Booking:
        slot = make_slot(command.start_time, command.end_time)

        logger.info(
            f"Creating booking for resource {command.resource_id}, "
            f"user {command.user_id}, window {slot}"
        )

        with self.uow_factory() as uow:
            resource = self.booking_repo.get_resource(command.resource_id, lock=True)
            if resource is None:
                raise ResourceUnavailable(f"Resource {command.resource_id} not found.")
            if not resource.is_active:
                raise ResourceUnavailable(f"Resource {resource.name} is not available for booking.")

            existing = self.booking_repo.active_slots(resource.pk, within=slot)
            conflict = find_conflict(resource.pk, slot.start, slot.end, existing)
            if conflict is not None:
                logger.info(
                    f"Booking rejected: {slot} overlaps booking {conflict.booking_id} "
                    f"on resource {resource.pk}"
                )
                raise BookingConflict(conflict)

            price = _price(slot, resource.hourly_rate)

            booking = self.booking_repo.add(
                resource=resource,
                user_id=command.user_id,
                slot=slot,
                price=price.amount,
                notes=command.notes,
            )

            uow.collect(BookingCreated(
                aggregate_id=booking.pk,
                booking_id=booking.pk,
                resource_id=resource.pk,
                user_id=command.user_id,
                slot=slot,
                price=price,
            ))

        logger.info(f"Booking {booking.pk} created, price {price}")
        return booking


class QuoteBookingHandler:
    """Price a window and report whether it is free right now."""

    def __init__(self, booking_repo):
        self.booking_repo = booking_repo

    def handle(self, query: QuoteBookingQuery) -> Quote:
        slot = make_slot(query.start_time, query.end_time)
        resource = self.booking_repo.get_resource(query.resource_id)
        if resource is None or not resource.is_active:
            raise ResourceUnavailable(f"Resource {query.resource_id} is not available for booking.")

        existing = self.booking_repo.active_slots(resource.pk, within=slot)
        conflict = find_conflict(resource.pk, slot.start, slot.end, existing)
        price = _price(slot, resource.hourly_rate)
        return Quote(price=price, available=conflict is None, conflicting=conflict)


class CancelBookingHandler:
    """Handler for cancelling a booking; the slot becomes bookable again."""

    def __init__(self, booking_repo, uow_factory=DjangoUnitOfWork):
        self.booking_repo = booking_repo
        self.uow_factory = uow_factory

    def handle(self, command: CancelBookingCommand) -> Booking:
        logger.info(f"Cancelling booking {command.booking_id}, reason: {command.reason!r}")

        with self.uow_factory() as uow:
            booking = self.booking_repo.get(command.booking_id, lock=True)
            if booking is None:
                raise BookingStateError(f"Booking {command.booking_id} not found.")

            if booking.status == Booking.Status.CANCELLED:
                return booking
            if booking.status == Booking.Status.COMPLETED:
                raise BookingStateError("A completed booking cannot be cancelled.")

            previous_status = booking.status
            booking.status = Booking.Status.CANCELLED
            booking.cancelled_at = timezone.now()
            booking.cancellation_reason = command.reason[:255]
            self.booking_repo.save(booking, ["status", "cancelled_at", "cancellation_reason"])

            uow.collect(BookingCancelled(
                aggregate_id=booking.pk,
                booking_id=booking.pk,
                resource_id=booking.resource_id,
                previous_status=previous_status,
                reason=booking.cancellation_reason,
            ))

        logger.info(f"Booking {booking.pk} cancelled")
        return booking


class CompleteBookingHandler:
    """Handler for closing a confirmed booking."""

    def __init__(self, booking_repo, uow_factory=DjangoUnitOfWork):
        self.booking_repo = booking_repo
        self.uow_factory = uow_factory

    def handle(self, command: CompleteBookingCommand) -> Booking:
        with self.uow_factory() as uow:
            booking = self.booking_repo.get(command.booking_id, lock=True)
            if booking is None:
                raise BookingStateError(f"Booking {command.booking_id} not found.")
            if booking.status != Booking.Status.CONFIRMED:
                raise BookingStateError(
                    f"Only confirmed bookings can be completed (current status: {booking.status})."
                )

            booking.status = Booking.Status.COMPLETED
            self.booking_repo.save(booking, ["status"])

            uow.collect(BookingCompleted(
                aggregate_id=booking.pk,
                booking_id=booking.pk,
                resource_id=booking.resource_id,
            ))

        logger.info(f"Booking {booking.pk} completed")
        return booking


class MarkBookingPaidHandler:
    def __init__(self, booking_repo, uow_factory=DjangoUnitOfWork):
        self.booking_repo = booking_repo
        self.uow_factory = uow_factory

    def handle(self, command: MarkBookingPaidCommand) -> Booking:
        with self.uow_factory():
            booking = self.booking_repo.get(command.booking_id, lock=True)
            if booking is None:
                raise BookingStateError(f"Booking {command.booking_id} not found.")
            if booking.status == Booking.Status.CANCELLED:
                raise BookingStateError("A cancelled booking cannot be paid.")
            if not booking.paid:
                booking.paid = True
                self.booking_repo.save(booking, ["paid"])
                logger.info(f"Booking {booking.pk} marked as paid")
        return booking
