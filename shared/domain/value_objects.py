"""
Common Value Objects

Value objects used across multiple domains:
- Money: a monetary amount with currency
- TimeSlot: a half-open time window [start, end)
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from shared.domain.base import ValueObject

CENT = Decimal('0.01')
# ISO 4217 alphabetic code
CURRENCY_CODE = re.compile(r'^[A-Z]{3}$')


def is_currency_code(code) -> bool:
    return isinstance(code, str) and CURRENCY_CODE.match(code) is not None


def to_decimal(value) -> Decimal:
    """Coerce ints, floats and strings to Decimal without binary float noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


@dataclass(frozen=True)
class Money(ValueObject):
    """
    Money value object

    Represents a non-negative monetary amount with currency.
    """
    amount: Decimal
    currency: str = 'USD'

    def __post_init__(self):
        object.__setattr__(self, 'amount', to_decimal(self.amount))
        if self.amount < 0:
            raise ValueError("Amount cannot be negative")
        if not is_currency_code(self.currency):
            raise ValueError(f"Invalid currency code: {self.currency!r}")

    def __add__(self, other: 'Money') -> 'Money':
        if not isinstance(other, Money):
            raise TypeError("Can only add Money to Money")
        if self.currency != other.currency:
            raise ValueError(f"Cannot add different currencies: {self.currency} and {other.currency}")
        return Money(self.amount + other.amount, self.currency)

    def rounded(self) -> 'Money':
        """Round to cents, half-up."""
        return Money(self.amount.quantize(CENT, rounding=ROUND_HALF_UP), self.currency)

    def __str__(self):
        return f"{self.amount:,.2f} {self.currency}"

    def __repr__(self):
        return f"Money({self.amount}, '{self.currency}')"


@dataclass(frozen=True)
class TimeSlot(ValueObject):
    """
    Time slot value object

    Represents a window from start (inclusive) to end (exclusive), so two
    slots that merely touch do not overlap.
    """
    start: datetime
    end: datetime

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(f"Start ({self.start.isoformat()}) must be before end ({self.end.isoformat()})")

    def overlaps_with(self, other: 'TimeSlot') -> bool:
        """
        Check if this slot overlaps with another

        Examples:
            - 09:00-10:00 overlaps with 09:30-10:30 -> True
            - 09:00-10:00 overlaps with 10:00-11:00 -> False (adjacent)
        """
        if not isinstance(other, TimeSlot):
            raise TypeError("Can only check overlap with another TimeSlot")
        return self.start < other.end and self.end > other.start

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment < self.end

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def seconds(self) -> Decimal:
        """Exact length of the slot in seconds, microseconds included."""
        delta = self.duration
        return Decimal(delta.days * 86400 + delta.seconds) + Decimal(delta.microseconds) / Decimal(1_000_000)

    @property
    def minutes(self) -> int:
        return round(self.duration.total_seconds() / 60)

    def __str__(self):
        return f"{self.start:%Y-%m-%d %H:%M} - {self.end:%Y-%m-%d %H:%M}"

    def __repr__(self):
        return f"TimeSlot({self.start.isoformat()}, {self.end.isoformat()})"
