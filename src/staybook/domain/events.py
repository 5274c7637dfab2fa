"""Events"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class EventType(str, Enum):
    """Event-type keys routed through the dispatcher.

    The string values are the contract with listeners; do not rename them.
    """

    BOOKING_CREATED = "BOOKING_CREATED"
    BOOKING_CANCELED = "BOOKING_CANCELED"
    CHANGEROLE_ACCEPTED = "CHANGEROLE_ACCEPTED"
    CHANGEROLE_REJECTED = "CHANGEROLE_REJECTED"


@dataclass(frozen=True, slots=True)
class DomainEvent:
    """Something that happened to an aggregate.

    The payload is the aggregate itself, in the state it had right after the
    transition that produced the event.
    """

    event_type: EventType
    payload: Any

    @property
    def key(self) -> str:
        """The event-type key used for routing."""
        return self.event_type.value
