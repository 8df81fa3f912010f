"""
Booking repository

Persistence boundary for the booking workflows. Handlers receive an instance
explicitly instead of reaching for the ORM, so the rules in ``domain`` stay
pure and the storage can be swapped in tests.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from django.db import transaction  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore

from apps.resources.models import Resource
from shared.domain.value_objects import TimeSlot

from .domain.entities import ReservedSlot
from .models import Booking


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


class DjangoBookingRepository:
    """Reads and writes bookings through the Django ORM."""

    def get_resource(self, resource_id, *, lock: bool = False) -> Optional[Resource]:
        """
        Load a resource.

        With ``lock=True`` inside a transaction the row is locked, which
        serializes concurrent booking attempts for the same resource.
        """
        qs = Resource.objects.filter(pk=resource_id)
        if lock:
            qs = _lock_queryset_if_possible(qs)
        return qs.first()

    def active_slots(
        self,
        resource_id,
        *,
        within: Optional[TimeSlot] = None,
        exclude_booking_id=None,
    ) -> List[ReservedSlot]:
        """Windows held by the resource's bookings whose status is not cancelled."""
        qs = Booking.objects.active().for_resource(resource_id)
        if within is not None:
            qs = qs.overlapping(within.start, within.end)
        if exclude_booking_id is not None:
            qs = qs.exclude(pk=exclude_booking_id)
        rows = qs.order_by("start_time").values_list("pk", "start_time", "end_time")
        return [
            ReservedSlot.of(pk, resource_id, start, end)
            for pk, start, end in rows
        ]

    def get(self, booking_id, *, lock: bool = False) -> Optional[Booking]:
        qs = Booking.objects.select_related("resource", "user").filter(pk=booking_id)
        if lock:
            qs = _lock_queryset_if_possible(qs)
        return qs.first()

    def add(
        self,
        *,
        resource: Resource,
        user_id,
        slot: TimeSlot,
        price: Decimal,
        notes: str = "",
    ) -> Booking:
        return Booking.objects.create(
            resource=resource,
            user_id=user_id,
            start_time=slot.start,
            end_time=slot.end,
            status=Booking.Status.CONFIRMED,
            price=price,
            paid=False,
            notes=notes,
        )

    def save(self, booking: Booking, fields: List[str]) -> None:
        booking.save(update_fields=[*fields, "updated_at"])
