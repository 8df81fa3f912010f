"""System checks for booking settings."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.core.checks import Error, register  # type: ignore

from shared.domain.value_objects import is_currency_code


@register()
def check_booking_currency(app_configs=None, **kwargs):
    currency = getattr(settings, "BOOKING_CURRENCY", "USD")
    if is_currency_code(currency):
        return []
    return [
        Error(
            f"BOOKING_CURRENCY must be a three-letter ISO 4217 code, got {currency!r}.",
            hint="Set BOOKING_CURRENCY to a code such as USD, EUR or CAD.",
            id="bookings.E001",
        )
    ]
