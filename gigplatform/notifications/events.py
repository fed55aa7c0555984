"""
gigplatform/notifications/events.py

In-process domain events.
Publishing never blocks the request that caused the event: every handler is
scheduled as a background task, and handler failures are only logged.
"""

import asyncio
import logging
from collections import defaultdict
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

logger = logging.getLogger(__name__)

EventHandler = Callable[[Any], Awaitable[None]]


@dataclass(frozen=True)
class GigAllocated:
    """A provider was allocated to an open gig."""

    gig_id: UUID
    client_id: UUID
    provider_id: UUID
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class EventDispatcher:
    def __init__(self) -> None:
        self._handlers: dict[type, list[EventHandler]] = defaultdict(list)
        self._pending: set[asyncio.Task[None]] = set()

    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        if handler not in self._handlers[event_type]:
            self._handlers[event_type].append(handler)
            logger.debug(f"[EVENTS] {getattr(handler, '__name__', handler)} subscribed to {event_type.__name__}")

    def unsubscribe(self, event_type: type, handler: EventHandler) -> None:
        if handler in self._handlers[event_type]:
            self._handlers[event_type].remove(handler)

    def publish(self, event: Any) -> None:
        """Schedule delivery of `event` to every subscribed handler and return immediately."""
        handlers = list(self._handlers.get(type(event), ()))
        logger.info(f"[EVENTS] Publishing {type(event).__name__} to {len(handlers)} handler(s)")
        for handler in handlers:
            task = asyncio.create_task(self._deliver(handler, event))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

    async def _deliver(self, handler: EventHandler, event: Any) -> None:
        try:
            await handler(event)
        except Exception as e:
            logger.error(
                f"[EVENTS] Handler {getattr(handler, '__name__', handler)} failed for "
                f"{type(event).__name__}: {e}",
                exc_info=True,
            )

    async def drain(self) -> None:
        """Wait for every delivery scheduled so far."""
        while self._pending:
            await asyncio.gather(*list(self._pending))


dispatcher = EventDispatcher()
