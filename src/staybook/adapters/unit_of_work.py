"""Unit of Work implementations for STAYBOOK.

- ``SqlAlchemyUnitOfWork``: one SQLAlchemy ``Connection`` (and transaction)
  per ``with`` block, shared by all repositories.
- ``InMemoryUnitOfWork``: repositories over a shared ``InMemoryData``; holds
  the store lock for the whole block and restores a snapshot on rollback.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from staybook.adapters.repositories import (
    InMemoryBookingRepository,
    InMemoryChangeRoleRepository,
    InMemoryCouponRepository,
    InMemoryData,
    InMemoryNotificationRepository,
    InMemoryPropertyRepository,
    InMemoryTicketRepository,
    InMemoryUserRepository,
    SqlAlchemyBookingRepository,
    SqlAlchemyChangeRoleRepository,
    SqlAlchemyCouponRepository,
    SqlAlchemyNotificationRepository,
    SqlAlchemyPropertyRepository,
    SqlAlchemyTicketRepository,
    SqlAlchemyUserRepository,
)
from staybook.interfaces.unit_of_work import AbstractUnitOfWork

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """SQLAlchemy-backed Unit of Work."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.connection: Connection | None = None

    def __enter__(self):
        if self.connection is not None:
            raise RuntimeError(
                "This unit of work is already open; use a new one per transaction."
            )
        self.connection = self.engine.connect()
        self.properties = SqlAlchemyPropertyRepository(self.connection)
        self.users = SqlAlchemyUserRepository(self.connection)
        self.bookings = SqlAlchemyBookingRepository(self.connection)
        self.coupons = SqlAlchemyCouponRepository(self.connection)
        self.tickets = SqlAlchemyTicketRepository(self.connection)
        self.change_roles = SqlAlchemyChangeRoleRepository(self.connection)
        self.notifications = SqlAlchemyNotificationRepository(self.connection)
        return super().__enter__()

    def __exit__(self, *args):
        try:
            super().__exit__(*args)
        finally:
            self.connection.close()
            self.connection = None

    def commit(self):
        self.connection.commit()

    def rollback(self):
        self.connection.rollback()


class InMemoryUnitOfWork(AbstractUnitOfWork):
    """In-memory Unit of Work.

    Transactions on the same ``InMemoryData`` are fully serialized: the
    store's re-entrant lock is held from ``__enter__`` to ``__exit__``.
    """

    def __init__(self, data: InMemoryData | None = None):
        self.data = data if data is not None else InMemoryData()
        self._baseline: dict[str, Any] | None = None
        self.committed = False

    def __enter__(self):
        if self._baseline is not None:
            raise RuntimeError(
                "This unit of work is already open; use a new one per transaction."
            )
        self.data.lock.acquire()
        self._baseline = self.data.snapshot()
        self.committed = False
        self.properties = InMemoryPropertyRepository(self.data)
        self.users = InMemoryUserRepository(self.data)
        self.bookings = InMemoryBookingRepository(self.data)
        self.coupons = InMemoryCouponRepository(self.data)
        self.tickets = InMemoryTicketRepository(self.data)
        self.change_roles = InMemoryChangeRoleRepository(self.data)
        self.notifications = InMemoryNotificationRepository(self.data)
        return super().__enter__()

    def __exit__(self, *args):
        try:
            super().__exit__(*args)
        finally:
            self._baseline = None
            self.data.lock.release()

    def commit(self):
        self._baseline = self.data.snapshot()
        self.committed = True

    def rollback(self):
        if self._baseline is not None:
            self.data.restore(self._baseline)
