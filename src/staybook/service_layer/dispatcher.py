"""In-process publish/subscribe dispatcher for domain events.

The dispatcher owns nothing but its subscription table: an event-type key
mapped to an ordered list of handlers. One instance is built at startup
(see ``staybook.bootstrap``) and handed to everything that publishes or
subscribes.

Delivery is synchronous, in subscription order. A handler that raises does
not stop the others; once every handler ran, the collected faults are raised
together as ``EventHandlerError``. Whatever produced the event has already
committed by then, so callers usually log the error and move on.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from enum import Enum
from typing import Any

from staybook.domain.events import DomainEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[str, Any], None]
"""A handler receives the event-type key and the payload."""


class EventHandlerError(Exception):
    """Raised by ``publish`` after one or more handlers failed.

    Attributes:
        event_key: The event-type key that was being published.
        failures: ``(handler, exception)`` pairs, in the order handlers ran.
    """

    def __init__(
        self, event_key: str, failures: list[tuple[EventHandler, BaseException]]
    ) -> None:
        names = ", ".join(_handler_name(h) for h, _ in failures)
        super().__init__(f"{len(failures)} handler(s) failed for {event_key}: {names}")
        self.event_key = event_key
        self.failures = failures


def _key(event_key: str | Enum) -> str:
    return event_key.value if isinstance(event_key, Enum) else event_key


def _handler_name(fn: Callable[..., Any]) -> str:
    if hasattr(fn, "__qualname__"):
        return fn.__qualname__
    if hasattr(fn, "func") and hasattr(fn.func, "__name__"):
        return fn.func.__name__
    return repr(fn)


class EventDispatcher:
    """Routes published events to the handlers subscribed to their key.

    ``subscribe``, ``unsubscribe`` and ``publish`` are individually atomic:
    ``publish`` iterates over a copy of the handler list taken under the lock,
    so concurrent (un)subscriptions never expose a half-mutated list.
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, list[EventHandler]] = {}
        self._lock = threading.Lock()

    def subscribe(self, event_key: str | Enum, handler: EventHandler) -> None:
        """Append ``handler`` to the list for ``event_key``.

        Subscribing the same handler twice keeps both entries; it then runs
        twice per publish.
        """
        key = _key(event_key)
        with self._lock:
            self._subscribers.setdefault(key, []).append(handler)
        logger.debug("Subscribed %s to %s", _handler_name(handler), key)

    def unsubscribe(self, event_key: str | Enum, handler: EventHandler) -> None:
        """Remove the first entry equal to ``handler``. No-op if absent."""
        key = _key(event_key)
        with self._lock:
            handlers = self._subscribers.get(key)
            if not handlers or handler not in handlers:
                return
            handlers.remove(handler)
        logger.debug("Unsubscribed %s from %s", _handler_name(handler), key)

    def subscribers(self, event_key: str | Enum) -> list[EventHandler]:
        """Return a copy of the handlers subscribed to ``event_key``."""
        with self._lock:
            return list(self._subscribers.get(_key(event_key), ()))

    def publish(self, event_key: str | Enum, payload: Any) -> None:
        """Call every handler subscribed to ``event_key`` with the payload.

        No subscribers is not an error.

        Raises:
            EventHandlerError: If any handler raised. All handlers still ran.
        """
        key = _key(event_key)
        handlers = self.subscribers(key)
        if not handlers:
            logger.debug("No subscribers for %s", key)
            return

        failures: list[tuple[EventHandler, BaseException]] = []
        for handler in handlers:
            try:
                handler(key, payload)
            except Exception as exc:  # pylint: disable=broad-except
                logger.exception(
                    "Event handler %s failed on %s", _handler_name(handler), key
                )
                failures.append((handler, exc))

        logger.debug("Published %s to %d handler(s)", key, len(handlers))
        if failures:
            raise EventHandlerError(key, failures)

    def publish_events(self, events: Iterable[DomainEvent]) -> None:
        """Publish aggregate events in order.

        Every event is published even if an earlier one had failing handlers;
        the first ``EventHandlerError`` is raised at the end.
        """
        first_error: EventHandlerError | None = None
        for event in events:
            try:
                self.publish(event.key, event.payload)
            except EventHandlerError as exc:
                first_error = first_error or exc
        if first_error is not None:
            raise first_error
