"""Search and listing contracts, identical on every backend."""

from __future__ import annotations

import threading
from datetime import date

import pytest

from staybook.service_layer import commands
from tests.fixtures.datagen import (
    BACKENDS,
    CITY,
    GUEST,
    HOST,
    PROPERTY,
    UNLISTED_PROPERTY,
    booking_cmd,
)

pytestmark = pytest.mark.parametrize("shared_app", BACKENDS, indirect=True)

JUL_1, JUL_3, JUL_5, JUL_8 = (date(2025, 7, d) for d in (1, 3, 5, 8))


def _found(app, check_in=JUL_1, check_out=JUL_5, guests=2) -> list[str]:
    found = app.message_bus.handle(
        commands.FindAvailableProperties(
            city=CITY, check_in=check_in, check_out=check_out, num_guests=guests
        )
    )
    return [p.property_id for p in found]


def test_search_follows_bookings(shared_app):
    assert _found(shared_app) == [PROPERTY]

    booking = shared_app.message_bus.handle(booking_cmd(JUL_1, JUL_5))
    assert _found(shared_app, JUL_3, JUL_8) == []
    assert _found(shared_app, JUL_5, JUL_8) == [PROPERTY]

    shared_app.message_bus.handle(
        commands.CancelBooking(
            confirmation_code=booking.confirmation_code, requesting_user_id=GUEST
        )
    )
    assert _found(shared_app, JUL_3, JUL_8) == [PROPERTY]


def test_concurrent_toggles_serialize(shared_app):
    """Every toggle sees the previous one, so an even number restores the listing."""
    threads_count = 6
    barrier = threading.Barrier(threads_count)
    states: list[bool] = []
    lock = threading.Lock()

    def worker():
        barrier.wait(timeout=10)
        prop = shared_app.message_bus.handle(
            commands.ToggleAvailability(property_id=PROPERTY, host_id=HOST)
        )
        with lock:
            states.append(prop.is_available)

    threads = [threading.Thread(target=worker) for _ in range(threads_count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)

    assert sorted(states) == [False] * 3 + [True] * 3
    assert _found(shared_app) == [PROPERTY]
    assert UNLISTED_PROPERTY not in _found(shared_app, guests=1)
