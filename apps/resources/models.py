"""Resource models."""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Resource(models.Model):
    """A bookable unit of the coworking space."""

    class ResourceType(models.TextChoices):
        DESK = "desk", _("Desk")
        MEETING_ROOM = "meeting_room", _("Meeting room")
        PRIVATE_OFFICE = "private_office", _("Private office")
        PHONE_BOOTH = "phone_booth", _("Phone booth")

    name = models.CharField(max_length=100)
    type = models.CharField(max_length=20, choices=ResourceType.choices)
    description = models.TextField(max_length=500, blank=True)
    capacity = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1), MaxValueValidator(100)],
    )
    hourly_rate = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    location = models.CharField(max_length=100, blank=True)
    floor = models.CharField(max_length=20, blank=True)
    amenities = models.JSONField(default=list, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Resource")
        verbose_name_plural = _("Resources")
        ordering = ["name"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(capacity__gte=1),
                name="resource_positive_capacity",
            ),
            models.CheckConstraint(
                condition=models.Q(hourly_rate__gte=0),
                name="resource_non_negative_rate",
            ),
        ]
        indexes = [
            models.Index(fields=["type", "is_active"], name="resources_r_type_6a4e1c_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.get_type_display()})"
