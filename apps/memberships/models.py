"""Membership plan models."""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class MembershipPlan(models.Model):
    """A plan members subscribe to."""

    class PlanType(models.TextChoices):
        HOT_DESK = "hot_desk", _("Hot desk")
        DEDICATED_DESK = "dedicated_desk", _("Dedicated desk")
        PRIVATE_OFFICE = "private_office", _("Private office")
        VIRTUAL = "virtual", _("Virtual office")

    name = models.CharField(max_length=100, unique=True)
    type = models.CharField(max_length=20, choices=PlanType.choices, default=PlanType.HOT_DESK)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text=_("Monthly price."),
    )
    features = models.JSONField(default=list, blank=True)
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Membership plan")
        verbose_name_plural = _("Membership plans")
        ordering = ["price", "name"]

    def __str__(self) -> str:
        return f"{self.name} ({self.price})"
