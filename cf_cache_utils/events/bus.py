"""
cf-cache-utils — Event Bus

Synchronous publish/subscribe keyed by event type. Handlers run in
subscription order inside the publishing call; a handler that raises is
logged and skipped so the remaining handlers, and the content mutation that
published the event, carry on.
"""

import logging
from collections.abc import Callable
from typing import Any

from .models import Event

logger = logging.getLogger(__name__)

Handler = Callable[[Any], Any]


class EventBus:
    """Registry of event handlers."""

    def __init__(self) -> None:
        self._handlers: dict[type[Event], list[Handler]] = {}

    def subscribe(self, event_type: type[Event], handler: Handler) -> None:
        """Register a handler for an event type."""
        self._handlers.setdefault(event_type, []).append(handler)
        logger.debug(
            f"Subscribed {getattr(handler, '__qualname__', repr(handler))} to {event_type.__name__}",
            extra={"event_type": event_type.__name__},
        )

    def unsubscribe(self, event_type: type[Event], handler: Handler) -> bool:
        """Remove a handler. Returns False if it was not registered."""
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)
            return True
        return False

    def handlers(self, event_type: type[Event]) -> list[Handler]:
        return list(self._handlers.get(event_type, []))

    def publish(self, event: Event) -> list[Any]:
        """
        Deliver an event to every handler registered for its exact type.

        Returns:
            Handler return values, in order, for handlers that did not raise
        """
        results: list[Any] = []
        for handler in self.handlers(type(event)):
            try:
                results.append(handler(event))
            except Exception as e:
                logger.error(
                    f"Handler {getattr(handler, '__qualname__', repr(handler))} failed for "
                    f"{type(event).__name__}: {e}",
                    extra={"event_type": type(event).__name__, "error": str(e)},
                    exc_info=True,
                )
        return results
