"""Event listeners that turn domain events into user notifications."""

from __future__ import annotations

import logging
from typing import Any

from staybook.domain.aggregates import Booking, ChangeRoleRequest
from staybook.domain.events import EventType
from staybook.domain.value_objects import Severity
from staybook.interfaces.notification_sink import NotificationSink

from .dispatcher import EventDispatcher

logger = logging.getLogger(__name__)


class NotificationListener:
    """Notify the people concerned by bookings and role-change decisions.

    | Event               | Recipient | Severity |
    |---------------------|-----------|----------|
    | BOOKING_CREATED     | guest     | success  |
    | BOOKING_CREATED     | host      | success  |
    | BOOKING_CANCELED    | guest     | success  |
    | BOOKING_CANCELED    | host      | error    |
    | CHANGEROLE_ACCEPTED | requester | success  |
    | CHANGEROLE_REJECTED | requester | error    |

    Payloads of an unexpected type are ignored.
    """

    EVENT_KEYS = tuple(EventType)

    def __init__(self, sink: NotificationSink) -> None:
        self.sink = sink

    def subscribe_to(self, dispatcher: EventDispatcher) -> None:
        """Subscribe this listener to every event type it handles."""
        for key in self.EVENT_KEYS:
            dispatcher.subscribe(key, self)

    def __call__(self, event_key: str, payload: Any) -> None:
        if event_key == EventType.BOOKING_CREATED and isinstance(payload, Booking):
            self._booking_created(payload)
        elif event_key == EventType.BOOKING_CANCELED and isinstance(payload, Booking):
            self._booking_canceled(payload)
        elif event_key == EventType.CHANGEROLE_ACCEPTED and isinstance(
            payload, ChangeRoleRequest
        ):
            self.sink.create_notification(
                payload.user_id,
                "Your role change request has been accepted!",
                Severity.SUCCESS,
            )
        elif event_key == EventType.CHANGEROLE_REJECTED and isinstance(
            payload, ChangeRoleRequest
        ):
            self.sink.create_notification(
                payload.user_id,
                "Your role change request has been rejected.",
                Severity.ERROR,
            )
        else:
            logger.debug(
                "Ignoring %s with payload of type %s", event_key, type(payload).__name__
            )

    def _booking_created(self, booking: Booking) -> None:
        self.sink.create_notification(
            booking.user_id,
            "Your booking is confirmed! Confirmation code: "
            f"{booking.confirmation_code}",
            Severity.SUCCESS,
        )
        self.sink.create_notification(
            booking.host_id,
            f"A new booking was made for your property {booking.property_id} "
            f"({booking.check_in} to {booking.check_out}).",
            Severity.SUCCESS,
        )

    def _booking_canceled(self, booking: Booking) -> None:
        self.sink.create_notification(
            booking.user_id, "Your booking has been canceled.", Severity.SUCCESS
        )
        self.sink.create_notification(
            booking.host_id,
            f"The booking {booking.confirmation_code} for your property "
            f"{booking.property_id} has been canceled.",
            Severity.ERROR,
        )
