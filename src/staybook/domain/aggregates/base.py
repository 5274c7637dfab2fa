"""Base class for all aggregates."""

import abc

from staybook.domain.events import DomainEvent, EventType


class Aggregate(abc.ABC):
    """Generic base class for all aggregates.

    Tracks the aggregate's identity, the version it was loaded at (used for
    optimistic locking on save) and the domain events raised since the last
    time they were dequeued.
    """

    KIND: str
    """Human-readable entity name, used in errors and logs."""

    def __init__(self, aggregate_id: str, version: int = 0) -> None:
        self.aggregate_id: str = aggregate_id
        self._version: int = version
        self._pending_events: list[DomainEvent] = []

    # --- Plumbing ---

    def _record(self, event_type: EventType) -> None:
        self._pending_events.append(DomainEvent(event_type=event_type, payload=self))

    def dequeue_uncommitted(self) -> list[DomainEvent]:
        """Dequeue all events recorded since the last call.

        Returns:
            A list of all uncommitted events since the last call to this method.

        Note: This is NOT thread-safe. An aggregate instance belongs to a
        single unit of work.
        """

        uncommitted_events = self._pending_events
        self._pending_events = []
        return uncommitted_events

    def mark_saved(self, version: int) -> None:
        """Record the version the aggregate was persisted at."""
        self._version = version

    @property
    def version(self) -> int:
        """The version the aggregate was loaded or last saved at (0 = never saved)."""
        return self._version
