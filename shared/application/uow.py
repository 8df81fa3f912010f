"""
Unit of Work Pattern

Wraps a database transaction and defers domain event publishing until the
transaction has committed.
"""

from abc import ABC, abstractmethod
from typing import List
import logging

from django.db import transaction

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)


class AbstractUnitOfWork(ABC):
    """Abstract Unit of Work pattern"""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.commit()
        else:
            self.rollback()

    @abstractmethod
    def commit(self):
        pass

    @abstractmethod
    def rollback(self):
        pass

    @abstractmethod
    def collect(self, event: DomainEvent):
        pass


class DjangoUnitOfWork(AbstractUnitOfWork):
    """
    Django implementation of Unit of Work

    Usage:
        with DjangoUnitOfWork() as uow:
            resource = repo.get_resource(resource_id, lock=True)
            booking = repo.add(...)
            uow.collect(BookingCreated(...))
        # events are published after commit
    """

    def __init__(self, bus=None):
        self._events: List[DomainEvent] = []
        self._transaction = None
        self._bus = bus

    def __enter__(self):
        self._transaction = transaction.atomic()
        self._transaction.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is None:
                self.commit()
            else:
                self.rollback()
        finally:
            if self._transaction:
                self._transaction.__exit__(exc_type, exc_val, exc_tb)

    def commit(self):
        """
        Schedule publishing of collected events

        transaction.on_commit() runs the callback only once the outermost
        atomic block commits; nothing is published on rollback.
        """
        logger.debug(f"Committing transaction with {len(self._events)} events")

        events = self._events.copy()
        self._events.clear()

        if events:
            transaction.on_commit(lambda: self._publish_events(events))

    def rollback(self):
        if self._events:
            logger.warning(f"Rolling back transaction, discarding {len(self._events)} events")
        self._events.clear()

    def collect(self, event: DomainEvent):
        self._events.append(event)

    def _publish_events(self, events: List[DomainEvent]):
        bus = self._bus
        if bus is None:
            from shared.application.message_bus import message_bus as bus

        logger.info(f"Publishing {len(events)} domain events after commit")
        bus.publish_events(events)
