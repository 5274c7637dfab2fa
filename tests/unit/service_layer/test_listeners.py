"""Unit tests for the NotificationListener."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from staybook.domain.aggregates import Booking, ChangeRoleRequest
from staybook.domain.events import EventType
from staybook.domain.value_objects import Severity, StayPeriod
from staybook.interfaces.notification_sink import NotificationSink
from staybook.service_layer.dispatcher import EventDispatcher
from staybook.service_layer.listeners import NotificationListener

# pylint: disable=redefined-outer-name,too-few-public-methods

NOW = datetime(2025, 6, 1, tzinfo=timezone.utc)


class RecordingSink(NotificationSink):
    """Keeps notifications in a list."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str, Severity]] = []

    def create_notification(self, recipient: str, message: str, severity: Severity) -> None:
        self.sent.append((recipient, message, severity))


@pytest.fixture
def sink() -> RecordingSink:
    """An empty recording sink."""
    return RecordingSink()


@pytest.fixture
def dispatcher(sink) -> EventDispatcher:
    """A dispatcher with the listener subscribed."""
    dispatcher = EventDispatcher()
    NotificationListener(sink).subscribe_to(dispatcher)
    return dispatcher


@pytest.fixture
def booking() -> Booking:
    """A confirmed booking of p1 by guest g1 at host h1."""
    return Booking(
        "b1",
        property_id="p1",
        host_id="h1",
        user_id="g1",
        period=StayPeriod(date(2025, 7, 1), date(2025, 7, 5)),
        num_adults=2,
        num_children=0,
        confirmation_code="QWERTY1234",
        total_amount=Decimal("400.00"),
        created_at=NOW,
    )


@pytest.fixture
def request_() -> ChangeRoleRequest:
    """A role-change request by u1."""
    return ChangeRoleRequest.submit("c1", user_id="u1", motivation="please", now=NOW)


def test_subscribes_to_every_event_type():
    """One subscription per event type."""
    dispatcher = EventDispatcher()
    listener = NotificationListener(RecordingSink())
    listener.subscribe_to(dispatcher)
    for event_type in EventType:
        assert dispatcher.subscribers(event_type) == [listener]


def test_booking_created_notifies_guest_then_host(dispatcher, sink, booking):
    """Guest gets the code, host gets the dates."""
    dispatcher.publish(EventType.BOOKING_CREATED, booking)
    assert sink.sent == [
        (
            "g1",
            "Your booking is confirmed! Confirmation code: QWERTY1234",
            Severity.SUCCESS,
        ),
        (
            "h1",
            "A new booking was made for your property p1 (2025-07-01 to 2025-07-05).",
            Severity.SUCCESS,
        ),
    ]


def test_booking_canceled_notifies_guest_and_warns_host(dispatcher, sink, booking):
    """The host's notice is an error: they lost a booking."""
    dispatcher.publish(EventType.BOOKING_CANCELED, booking)
    assert sink.sent == [
        ("g1", "Your booking has been canceled.", Severity.SUCCESS),
        (
            "h1",
            "The booking QWERTY1234 for your property p1 has been canceled.",
            Severity.ERROR,
        ),
    ]


def test_role_change_accepted(dispatcher, sink, request_):
    """The requester hears about acceptance."""
    dispatcher.publish(EventType.CHANGEROLE_ACCEPTED, request_)
    assert sink.sent == [
        ("u1", "Your role change request has been accepted!", Severity.SUCCESS)
    ]


def test_role_change_rejected(dispatcher, sink, request_):
    """The requester hears about rejection."""
    dispatcher.publish(EventType.CHANGEROLE_REJECTED, request_)
    assert sink.sent == [
        ("u1", "Your role change request has been rejected.", Severity.ERROR)
    ]


@pytest.mark.parametrize("event_type", list(EventType))
def test_unexpected_payload_is_ignored(dispatcher, sink, event_type):
    """A payload of the wrong type produces nothing and raises nothing."""
    dispatcher.publish(event_type, {"not": "an aggregate"})
    assert sink.sent == []


def test_mismatched_payload_is_ignored(dispatcher, sink, booking):
    """A booking published under a role-change key is not a role change."""
    dispatcher.publish(EventType.CHANGEROLE_ACCEPTED, booking)
    assert sink.sent == []
