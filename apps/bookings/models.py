"""Booking models for the coworking platform."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import TimeSlot

# Largest charge the price column (14 digits, 2 decimals) can hold
MAX_BOOKING_PRICE = Decimal("999999999999.99")


class BookingQuerySet(models.QuerySet):
    def active(self):
        """Bookings that still hold their slot."""
        return self.exclude(status=Booking.Status.CANCELLED)

    def overlapping(self, start, end):
        return self.filter(start_time__lt=end, end_time__gt=start)

    def for_resource(self, resource_id):
        return self.filter(resource_id=resource_id)


class Booking(models.Model):
    """Reservation of a resource by a user for [start_time, end_time)."""

    class Status(models.TextChoices):
        CONFIRMED = "confirmed", _("Confirmed")
        CANCELLED = "cancelled", _("Cancelled")
        COMPLETED = "completed", _("Completed")

    resource = models.ForeignKey(
        "resources.Resource",
        on_delete=models.PROTECT,
        related_name="bookings",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    start_time = models.DateTimeField()
    end_time = models.DateTimeField()
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.CONFIRMED,
    )
    price = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Charge captured when the booking was made."),
    )
    paid = models.BooleanField(default=False)
    notes = models.CharField(max_length=500, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    cancellation_reason = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = BookingQuerySet.as_manager()

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["start_time"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_time__gt=models.F("start_time")),
                name="booking_valid_window",
            ),
        ]
        indexes = [
            models.Index(fields=["resource", "start_time", "end_time"], name="bookings_bo_resourc_3f2a9d_idx"),
            models.Index(fields=["user", "start_time"], name="bookings_bo_user_id_8c1e4b_idx"),
            models.Index(fields=["status"], name="bookings_bo_status_5d7f20_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} of {self.resource_id} ({self.start_time:%Y-%m-%d %H:%M})"

    @property
    def slot(self) -> TimeSlot:
        return TimeSlot(self.start_time, self.end_time)

    @property
    def duration_minutes(self) -> int:
        return self.slot.minutes

    @property
    def is_active(self) -> bool:
        return self.status != self.Status.CANCELLED
