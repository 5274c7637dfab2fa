"""Fixtures and helpers for generating marketplace test data.

The seeded marketplace is small and fixed so tests can refer to its members
by the constants below:

| id        | what                                                      |
|-----------|-----------------------------------------------------------|
| host-1    | HOST owning prop-1 (Trieste, 100.00/night, 4 guests)      |
| host-2    | HOST owning prop-2 (Trieste, 80.00/night, 2 guests,       |
|           | unlisted)                                                 |
| guest-1   | CLIENT                                                    |
| guest-2   | CLIENT                                                    |
| mod-1     | MODERATOR                                                 |
| admin-1   | ADMIN                                                     |
| SAVE10    | 10% off, per user, valid through 2025-12-31               |
| FLAT50    | 50.00 off, global, valid through 2025-12-31               |
| OLD20     | 20% off, per user, expired on 2025-01-31                  |
"""

from __future__ import annotations

import itertools
import threading
from collections.abc import Callable
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING

import pytest

from staybook.adapters.repositories import InMemoryData
from staybook.adapters.unit_of_work import InMemoryUnitOfWork
from staybook.bootstrap import bootstrap, bootstrap_in_memory
from staybook.domain.entities import Coupon, Property, UserAccount
from staybook.domain.value_objects import CouponUsage, Role
from staybook.interfaces.id_generator import IdGenerator
from staybook.service_layer import commands

if TYPE_CHECKING:
    from staybook.bootstrap import AppContainer
    from staybook.interfaces.unit_of_work import AbstractUnitOfWork

# pylint: disable=redefined-outer-name,too-few-public-methods

#: "Now" for every test that goes through the service layer.
FIXED_NOW = datetime(2025, 6, 1, 9, 30, tzinfo=timezone.utc)

HOST = "host-1"
HOST_2 = "host-2"
GUEST = "guest-1"
GUEST_2 = "guest-2"
MODERATOR = "mod-1"
ADMIN = "admin-1"

CITY = "Trieste"
PROPERTY = "prop-1"
UNLISTED_PROPERTY = "prop-2"

USERS = (
    UserAccount(HOST, "hannah", Role.HOST),
    UserAccount(HOST_2, "hugo", Role.HOST),
    UserAccount(GUEST, "gina", Role.CLIENT),
    UserAccount(GUEST_2, "gus", Role.CLIENT),
    UserAccount(MODERATOR, "mona", Role.MODERATOR),
    UserAccount(ADMIN, "ada", Role.ADMIN),
)

PROPERTIES = (
    Property(
        PROPERTY, HOST, "Sea-view flat", Decimal("100.00"), max_guests=4, city=CITY
    ),
    Property(
        UNLISTED_PROPERTY,
        HOST_2,
        "Garden studio",
        Decimal("80.00"),
        max_guests=2,
        city=CITY,
        is_available=False,
    ),
)

COUPONS = (
    Coupon("SAVE10", date(2025, 12, 31), discount_percentage=Decimal("10")),
    Coupon(
        "FLAT50",
        date(2025, 12, 31),
        discount_amount=Decimal("50.00"),
        usage=CouponUsage.GLOBAL,
    ),
    Coupon("OLD20", date(2025, 1, 31), discount_percentage=Decimal("20")),
)


def fixed_clock() -> datetime:
    """Clock frozen at ``FIXED_NOW``."""
    return FIXED_NOW


def seed_marketplace(uow: AbstractUnitOfWork) -> None:
    """Insert the users, properties and coupons described in the module docstring."""
    with uow:
        for user in USERS:
            uow.users.add(user)
        for prop in PROPERTIES:
            uow.properties.add(prop)
        for coupon in COUPONS:
            uow.coupons.add(coupon)
        uow.commit()


def booking_cmd(
    check_in: date,
    check_out: date,
    *,
    user_id: str = GUEST,
    property_id: str = PROPERTY,
    num_adults: int = 2,
    num_children: int = 0,
    coupon_code: str | None = None,
) -> commands.CreateBooking:
    """A ``CreateBooking`` for the seeded property with sensible defaults."""
    return commands.CreateBooking(
        property_id=property_id,
        user_id=user_id,
        check_in=check_in,
        check_out=check_out,
        num_adults=num_adults,
        num_children=num_children,
        coupon_code=coupon_code,
    )


class SimpleIdGenerator(IdGenerator):
    """Sequential zero-padded ids, safe to share between threads."""

    def __init__(self, length: int = 26, prefix: str = "") -> None:
        self._counter = 0
        self._length = length
        self._prefix = prefix
        self._lock = threading.Lock()

    def new_id(self) -> str:
        with self._lock:
            self._counter += 1
            return f"{self._prefix}{self._counter:0{self._length}d}"


class SequenceIdGenerator(IdGenerator):
    """Hands out the given ids in order, then ``<prefix><n>`` forever."""

    def __init__(self, *ids: str, prefix: str = "ID") -> None:
        self._ids = list(ids)
        self._counter = itertools.count(1)
        self._prefix = prefix

    def new_id(self) -> str:
        if self._ids:
            return self._ids.pop(0)
        return f"{self._prefix}{next(self._counter):08d}"


@pytest.fixture
def clock() -> Callable[[], datetime]:
    """The frozen test clock."""
    return fixed_clock


@pytest.fixture
def memory_data() -> InMemoryData:
    """A seeded in-memory store."""
    data = InMemoryData()
    seed_marketplace(InMemoryUnitOfWork(data))
    return data


@pytest.fixture
def memory_app(memory_data: InMemoryData, clock) -> AppContainer:
    """Application wired on the seeded in-memory store."""
    return bootstrap_in_memory(memory_data, clock=clock)


@pytest.fixture
def sqlite_app(sqlite_url: str, clock) -> AppContainer:
    """Application wired on a seeded, migrated SQLite file."""
    app = bootstrap(sqlite_url, clock=clock)
    seed_marketplace(app.uow_factory())
    return app


@pytest.fixture
def shared_app(request: pytest.FixtureRequest, clock) -> AppContainer:
    """One application over a seeded backend, shared by every thread of a test.

    Parametrize indirectly with ``"memory"``, ``"sqlite_file"`` or
    ``"postgres"``. Like a real process, the test gets a single message bus
    and a single dispatcher; the bus opens a unit of work per command.
    """
    backend = request.param
    if backend == "memory":
        data = InMemoryData()
        seed_marketplace(InMemoryUnitOfWork(data))
        return bootstrap_in_memory(data, clock=clock)

    if backend == "sqlite_file":
        url = request.getfixturevalue("sqlite_url")
    elif backend == "postgres":
        engine = request.getfixturevalue("postgres_engine")
        url = engine.url.render_as_string(hide_password=False)
    else:
        raise ValueError(f"unknown backend: {backend}")

    app = bootstrap(url, clock=clock)
    seed_marketplace(app.uow_factory())
    return app


#: Backends accepted by ``shared_app``. Postgres ones skip without Docker.
BACKENDS = ("memory", "sqlite_file", "postgres")
