"""
Base Domain Classes

- ValueObject: immutable objects compared by value
- DomainEvent: something that happened in a domain, published after commit
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects

    Value objects are immutable and have no identity.
    Two value objects are equal if all their attributes are equal.
    """
    pass


@dataclass(kw_only=True)
class DomainEvent:
    """
    Base class for domain events

    Events are collected during a unit of work and handed to the message bus
    once the transaction has been committed.
    """
    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    aggregate_id: Any = None

    @property
    def name(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> dict:
        """Convert event to dictionary for serialization"""
        return {
            'event_id': str(self.event_id),
            'event_type': self.name,
            'occurred_at': self.occurred_at.isoformat(),
            'aggregate_id': str(self.aggregate_id) if self.aggregate_id is not None else None,
        }
