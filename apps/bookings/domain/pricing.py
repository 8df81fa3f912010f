"""
Pricing

Charge = elapsed hours * hourly rate, billed linearly with no minimum
duration. The product is computed exactly and rounded half-up to cents once,
at the end.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from shared.domain.value_objects import Money, to_decimal

from .entities import make_slot
from .exceptions import InvalidRate

SECONDS_PER_HOUR = Decimal(3600)


def calculate_price(start: datetime, end: datetime, hourly_rate) -> Decimal:
    """
    Price of the window [start, end) at ``hourly_rate``.

    >>> calculate_price(datetime(2024, 1, 1, 9), datetime(2024, 1, 1, 10, 30), 20)
    Decimal('30.00')

    Raises InvalidInterval when ``end <= start`` and InvalidRate for a
    negative rate.
    """
    return quote_price(start, end, hourly_rate).amount


def quote_price(start: datetime, end: datetime, hourly_rate, currency: str = 'USD') -> Money:
    slot = make_slot(start, end)
    rate = to_decimal(hourly_rate)
    if rate < 0:
        raise InvalidRate(f"Hourly rate cannot be negative: {rate}")
    # multiply before dividing so the only inexact step is the final division
    raw = slot.seconds * rate / SECONDS_PER_HOUR
    return Money(raw, currency).rounded()
