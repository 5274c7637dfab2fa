"""Repository interfaces for STAYBOOK (the persistence gateway).

One repository per entity kind. All of them are bound to the unit of work
that created them and read/write inside its transaction.

Contract overview
-----------------
Properties:
- `find_available(city, period, num_guests)` lists the listed properties of a
  city that are large enough and have no active booking overlapping `period`.
- `set_available(property_id, is_available)` lists or unlists a property.

Bookings:
- `find_overlapping(property_id, period)` returns the *active* (non-canceled)
  bookings whose stay shares at least one night with `period`
  (half-open ranges: `existing.check_in < period.check_out` and
  `period.check_in < existing.check_out`).
- `add(booking)` inserts a new booking; a clashing confirmation code is an error.
- `mark_canceled(booking)` flags an active booking; returns False if it was
  already canceled (or unknown), so two concurrent cancellations cannot both win.

Coupons:
- `mark_used(coupon, user_id, redeemed_at)` records a redemption atomically. A second
  redemption within the same scope (see `Coupon.redemption_scope`) raises
  `CouponAlreadyUsed`.

Workflow entities (tickets, role-change requests):
- A user holds at most one PENDING role-change request; `add` of a second
  one raises `DuplicatePendingRequest`.
- `update(entity)` writes the entity only if the stored version still equals
  `entity.version`, then bumps it. Otherwise `ConcurrentModification`.
"""

from __future__ import annotations

import abc
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from staybook.domain.aggregates import Booking, ChangeRoleRequest, Ticket
    from staybook.domain.entities import (
        Coupon,
        Notification,
        Property,
        TicketReply,
        UserAccount,
    )
    from staybook.domain.value_objects import Role, StayPeriod


class PropertyRepository(abc.ABC):
    """Access to properties."""

    @abc.abstractmethod
    def get(self, property_id: str, *, for_update: bool = False) -> Property | None:
        """Return the property, or None if it does not exist.

        Args:
            property_id: The property to load.
            for_update: Lock the property for the rest of the transaction.
                Concurrent transactions asking for the same lock wait until
                this one ends.
        """

    @abc.abstractmethod
    def add(self, prop: Property) -> None:
        """Insert a property."""

    @abc.abstractmethod
    def find_available(
        self, city: str, period: StayPeriod, num_guests: int
    ) -> list[Property]:
        """Properties in `city` that can take `num_guests` for the whole stay.

        A property qualifies when it is listed (`is_available`), is large
        enough, and has no active booking overlapping `period` (the same test
        as `BookingRepository.find_overlapping`). Cheapest first.
        """

    @abc.abstractmethod
    def set_available(self, property_id: str, is_available: bool) -> None:
        """List or unlist a property.

        Raises:
            EntityNotFound: If the property does not exist.
        """


class UserRepository(abc.ABC):
    """Access to user accounts."""

    @abc.abstractmethod
    def get(self, user_id: str, *, for_update: bool = False) -> UserAccount | None:
        """Return the user, or None if it does not exist.

        Args:
            user_id: The user to load.
            for_update: Lock the user for the rest of the transaction, so
                per-user checks (one pending role change) are serialized.
        """

    @abc.abstractmethod
    def add(self, user: UserAccount) -> None:
        """Insert a user."""

    @abc.abstractmethod
    def update_role(self, user_id: str, role: Role) -> None:
        """Change a user's role."""


class BookingRepository(abc.ABC):
    """Access to bookings."""

    @abc.abstractmethod
    def find_overlapping(self, property_id: str, period: StayPeriod) -> list[Booking]:
        """Return active bookings of the property overlapping `period`."""

    @abc.abstractmethod
    def add(self, booking: Booking) -> None:
        """Insert a new booking."""

    @abc.abstractmethod
    def get_by_confirmation_code(self, confirmation_code: str) -> Booking | None:
        """Return the booking with this confirmation code (canceled or not)."""

    @abc.abstractmethod
    def confirmation_code_exists(self, confirmation_code: str) -> bool:
        """Return True if any booking already uses this confirmation code."""

    @abc.abstractmethod
    def mark_canceled(self, booking: Booking) -> bool:
        """Persist the booking's cancellation. False if it was not active."""

    @abc.abstractmethod
    def list_for_user(self, user_id: str) -> Sequence[Booking]:
        """Bookings made by the user, newest first."""

    @abc.abstractmethod
    def list_for_host(self, host_id: str) -> Sequence[Booking]:
        """Bookings on the host's properties, newest first."""


class CouponRepository(abc.ABC):
    """Access to coupons and their redemptions."""

    @abc.abstractmethod
    def get(self, code: str) -> Coupon | None:
        """Return the coupon, or None if it does not exist."""

    @abc.abstractmethod
    def add(self, coupon: Coupon) -> None:
        """Insert a coupon."""

    @abc.abstractmethod
    def is_used(self, coupon: Coupon, user_id: str) -> bool:
        """Return True if a redemption already exists in the user's scope."""

    @abc.abstractmethod
    def mark_used(self, coupon: Coupon, user_id: str, redeemed_at: datetime) -> None:
        """Record a redemption.

        Raises:
            CouponAlreadyUsed: If the scope already holds a redemption.
        """


class TicketRepository(abc.ABC):
    """Access to support tickets and their replies."""

    @abc.abstractmethod
    def get(self, ticket_id: str) -> Ticket | None:
        """Return the ticket, or None if it does not exist."""

    @abc.abstractmethod
    def add(self, ticket: Ticket) -> None:
        """Insert a new ticket (version 1)."""

    @abc.abstractmethod
    def update(self, ticket: Ticket) -> None:
        """Save a ticket loaded at `ticket.version`.

        Raises:
            ConcurrentModification: If the stored version moved on.
        """

    @abc.abstractmethod
    def add_reply(self, reply: TicketReply) -> None:
        """Insert a reply."""

    @abc.abstractmethod
    def list_replies(self, ticket_id: str) -> Sequence[TicketReply]:
        """Replies on the ticket, oldest first."""


class ChangeRoleRepository(abc.ABC):
    """Access to role-change requests."""

    @abc.abstractmethod
    def get(self, request_id: str) -> ChangeRoleRequest | None:
        """Return the request, or None if it does not exist."""

    @abc.abstractmethod
    def add(self, request: ChangeRoleRequest) -> None:
        """Insert a new request (version 1).

        Raises:
            DuplicatePendingRequest: If the user already has a PENDING request.
        """

    @abc.abstractmethod
    def update(self, request: ChangeRoleRequest) -> None:
        """Save a request loaded at `request.version`.

        Raises:
            ConcurrentModification: If the stored version moved on.
        """

    @abc.abstractmethod
    def find_pending_for_user(self, user_id: str) -> ChangeRoleRequest | None:
        """Return the user's pending request, if any."""


class NotificationRepository(abc.ABC):
    """Access to in-app notifications."""

    @abc.abstractmethod
    def add(self, notification: Notification) -> None:
        """Insert a notification."""

    @abc.abstractmethod
    def list_for_recipient(self, recipient: str) -> Sequence[Notification]:
        """Notifications for the recipient, oldest first."""

    @abc.abstractmethod
    def mark_read(self, notification_id: str, recipient: str) -> bool:
        """Mark the recipient's notification as read. False if not found."""
