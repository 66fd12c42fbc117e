"""Synchronous in-process bus carrying selection events to their handlers."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable

from pydantic import BaseModel

logger = logging.getLogger(__name__)

Handler = Callable[[Any], None]


class EventBus:
    """Routes each published event to the handlers subscribed to its type.

    Handlers run synchronously, in subscription order, on the caller's
    thread. A handler error propagates to the publisher.
    """

    def __init__(self) -> None:
        self._handlers: dict[type[BaseModel], list[Handler]] = defaultdict(list)

    def subscribe(self, event_type: type[BaseModel], handler: Handler) -> None:
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: type[BaseModel], handler: Handler) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event: BaseModel) -> int:
        """Deliver *event*; returns how many handlers received it."""
        handlers = list(self._handlers.get(type(event), []))
        if not handlers:
            logger.debug("No handlers for %s", type(event).__name__)
        for handler in handlers:
            handler(event)
        return len(handlers)
