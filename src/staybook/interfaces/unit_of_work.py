"""Unit of Work interface for STAYBOOK.

Defines the AbstractUnitOfWork contract: a context-managed transaction that
exposes the repositories and abstract commit/rollback methods. Everything
done between ``__enter__`` and ``commit()`` is atomic; in particular the
booking overlap check, the coupon redemption and the booking insert.
"""

from __future__ import annotations

import abc

from .repositories import (
    BookingRepository,
    ChangeRoleRepository,
    CouponRepository,
    NotificationRepository,
    PropertyRepository,
    TicketRepository,
    UserRepository,
)


class AbstractUnitOfWork(abc.ABC):
    """Contract for a transactional unit of work.

    A unit of work instance holds one transaction at a time and must not be
    shared between threads; entering one that is already open raises
    ``RuntimeError``. Build a new one per transaction (the message bus does
    so for every command). Any number of them may point to the same store.
    """

    properties: PropertyRepository
    users: UserRepository
    bookings: BookingRepository
    coupons: CouponRepository
    tickets: TicketRepository
    change_roles: ChangeRoleRepository
    notifications: NotificationRepository

    def __enter__(self) -> AbstractUnitOfWork:
        """Enter the unit of work context and return the unit.

        Implementations may acquire transactional resources here.
        """
        return self

    def __exit__(self, *args):
        """Exit the unit of work context.

        Default behavior is to roll back on exit; after a commit there is
        nothing left to roll back.
        """
        self.rollback()

    @abc.abstractmethod
    def commit(self):
        """Persist changes and finalize the transaction."""

    @abc.abstractmethod
    def rollback(self):
        """Revert changes and clean up transactional resources."""
