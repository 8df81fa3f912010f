"""
Message Bus

Routes domain events to the handlers subscribed to them.
"""

from typing import Callable, Dict, Iterable, List, Type
import logging

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[DomainEvent], None]


class MessageBus:
    """
    In-process event bus

    Any number of handlers may subscribe to an event type. Handlers run
    synchronously in subscription order.
    """

    def __init__(self):
        self._handlers: Dict[Type[DomainEvent], List[EventHandler]] = {}

    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler):
        handlers = self._handlers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)
            logger.debug(f"Subscribed {handler.__name__} to {event_type.__name__}")

    def handlers_for(self, event_type: Type[DomainEvent]) -> List[EventHandler]:
        return list(self._handlers.get(event_type, []))

    def publish_events(self, events: Iterable[DomainEvent]):
        """
        Publish domain events

        Errors in handlers are logged but don't stop other handlers: the
        events describe work that has already been committed.
        """
        for event in events:
            handlers = self.handlers_for(type(event))

            if not handlers:
                logger.debug(f"No handlers registered for event {event.name}")
                continue

            logger.info(f"Publishing event: {event.name} (ID: {event.event_id})")

            for handler in handlers:
                try:
                    handler(event)
                except Exception as e:
                    logger.error(
                        f"Error in event handler {handler.__name__} "
                        f"for event {event.name}: {e}",
                        exc_info=True
                    )


# Global message bus instance
message_bus = MessageBus()
