"""In-memory repositories.

Used by the test-suite and for demos. Rows live in a shared
``InMemoryData``; the owning ``InMemoryUnitOfWork`` holds the store lock for
the whole transaction, so no repository here does its own locking.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from staybook.domain.aggregates import Booking, ChangeRoleRequest, Ticket
from staybook.domain.entities import (
    Coupon,
    Notification,
    Property,
    TicketReply,
    UserAccount,
)
from staybook.domain.errors import (
    ConcurrentModification,
    CouponAlreadyUsed,
    DuplicatePendingRequest,
    EntityNotFound,
)
from staybook.domain.value_objects import Role, StayPeriod
from staybook.domain.workflows import ChangeRoleStatus
from staybook.interfaces.repositories import (
    BookingRepository,
    ChangeRoleRepository,
    CouponRepository,
    NotificationRepository,
    PropertyRepository,
    TicketRepository,
    UserRepository,
)

from . import mappers
from .memory_store import InMemoryData


class DuplicateKeyError(Exception):
    """Raised when an insert clashes with an existing primary or unique key."""


def _insert(table: dict, key, row: dict, what: str) -> None:
    if key in table:
        raise DuplicateKeyError(f"{what} {key!r} already exists.")
    table[key] = row


def _blocks(row: dict, period: StayPeriod) -> bool:
    """True if the booking row is active and shares a night with `period`."""
    return (
        row["canceled_at"] is None
        and row["check_in"] < period.check_out
        and period.check_in < row["check_out"]
    )


class InMemoryPropertyRepository(PropertyRepository):
    """Properties stored in ``InMemoryData.properties``."""

    def __init__(self, data: InMemoryData) -> None:
        self._data = data

    def get(self, property_id: str, *, for_update: bool = False) -> Property | None:
        # for_update: the unit of work already holds the store lock
        if (row := self._data.properties.get(property_id)) is None:
            return None
        return mappers.property_from_row(row)

    def add(self, prop: Property) -> None:
        _insert(
            self._data.properties,
            prop.property_id,
            mappers.property_to_row(prop),
            "Property",
        )

    def find_available(
        self, city: str, period: StayPeriod, num_guests: int
    ) -> list[Property]:
        booked = {
            row["property_id"]
            for row in self._data.bookings.values()
            if _blocks(row, period)
        }
        found = [
            mappers.property_from_row(row)
            for row in self._data.properties.values()
            if row["city"] == city
            and row["is_available"]
            and row["max_guests"] >= num_guests
            and row["property_id"] not in booked
        ]
        return sorted(found, key=lambda p: (p.price_per_night, p.property_id))

    def set_available(self, property_id: str, is_available: bool) -> None:
        if (row := self._data.properties.get(property_id)) is None:
            raise EntityNotFound("Property", property_id)
        row["is_available"] = is_available


class InMemoryUserRepository(UserRepository):
    """Users stored in ``InMemoryData.users``."""

    def __init__(self, data: InMemoryData) -> None:
        self._data = data

    def get(self, user_id: str, *, for_update: bool = False) -> UserAccount | None:
        # for_update: the unit of work already holds the store lock
        if (row := self._data.users.get(user_id)) is None:
            return None
        return mappers.user_from_row(row)

    def add(self, user: UserAccount) -> None:
        _insert(self._data.users, user.user_id, mappers.user_to_row(user), "User")

    def update_role(self, user_id: str, role: Role) -> None:
        if (row := self._data.users.get(user_id)) is None:
            raise EntityNotFound("User", user_id)
        row["role"] = role.value


class InMemoryBookingRepository(BookingRepository):
    """Bookings stored in ``InMemoryData.bookings``."""

    def __init__(self, data: InMemoryData) -> None:
        self._data = data

    def find_overlapping(self, property_id: str, period: StayPeriod) -> list[Booking]:
        return [
            mappers.booking_from_row(row)
            for row in self._data.bookings.values()
            if row["property_id"] == property_id and _blocks(row, period)
        ]

    def add(self, booking: Booking) -> None:
        if self.confirmation_code_exists(booking.confirmation_code):
            raise DuplicateKeyError(
                f"Confirmation code {booking.confirmation_code!r} already exists."
            )
        _insert(
            self._data.bookings,
            booking.aggregate_id,
            mappers.booking_to_row(booking),
            "Booking",
        )

    def get_by_confirmation_code(self, confirmation_code: str) -> Booking | None:
        for row in self._data.bookings.values():
            if row["confirmation_code"] == confirmation_code:
                return mappers.booking_from_row(row)
        return None

    def confirmation_code_exists(self, confirmation_code: str) -> bool:
        return any(
            row["confirmation_code"] == confirmation_code
            for row in self._data.bookings.values()
        )

    def mark_canceled(self, booking: Booking) -> bool:
        row = self._data.bookings.get(booking.aggregate_id)
        if row is None or row["canceled_at"] is not None:
            return False
        row["canceled_at"] = booking.canceled_at
        return True

    def list_for_user(self, user_id: str) -> Sequence[Booking]:
        return self._newest_first(
            row for row in self._data.bookings.values() if row["user_id"] == user_id
        )

    def list_for_host(self, host_id: str) -> Sequence[Booking]:
        return self._newest_first(
            row for row in self._data.bookings.values() if row["host_id"] == host_id
        )

    @staticmethod
    def _newest_first(rows) -> list[Booking]:
        ordered = sorted(
            rows, key=lambda r: (r["created_at"], r["booking_id"]), reverse=True
        )
        return [mappers.booking_from_row(row) for row in ordered]


class InMemoryCouponRepository(CouponRepository):
    """Coupons and redemptions stored in ``InMemoryData``."""

    def __init__(self, data: InMemoryData) -> None:
        self._data = data

    def get(self, code: str) -> Coupon | None:
        if (row := self._data.coupons.get(code)) is None:
            return None
        return mappers.coupon_from_row(row)

    def add(self, coupon: Coupon) -> None:
        _insert(self._data.coupons, coupon.code, mappers.coupon_to_row(coupon), "Coupon")

    def is_used(self, coupon: Coupon, user_id: str) -> bool:
        key = (coupon.code, coupon.redemption_scope(user_id))
        return key in self._data.coupon_redemptions

    def mark_used(self, coupon: Coupon, user_id: str, redeemed_at: datetime) -> None:
        key = (coupon.code, coupon.redemption_scope(user_id))
        if key in self._data.coupon_redemptions:
            raise CouponAlreadyUsed(coupon.code)
        self._data.coupon_redemptions[key] = {
            "coupon_code": coupon.code,
            "scope_key": key[1],
            "user_id": user_id,
            "redeemed_at": redeemed_at,
        }


class InMemoryTicketRepository(TicketRepository):
    """Tickets and replies stored in ``InMemoryData``."""

    def __init__(self, data: InMemoryData) -> None:
        self._data = data

    def get(self, ticket_id: str) -> Ticket | None:
        if (row := self._data.tickets.get(ticket_id)) is None:
            return None
        return mappers.ticket_from_row(row)

    def add(self, ticket: Ticket) -> None:
        _insert(
            self._data.tickets,
            ticket.aggregate_id,
            mappers.ticket_to_row(ticket, version=1),
            "Ticket",
        )
        ticket.mark_saved(1)

    def update(self, ticket: Ticket) -> None:
        row = self._data.tickets.get(ticket.aggregate_id)
        if row is None or row["version"] != ticket.version:
            raise ConcurrentModification(
                Ticket.KIND, ticket.aggregate_id, ticket.version
            )
        new_version = ticket.version + 1
        self._data.tickets[ticket.aggregate_id] = mappers.ticket_to_row(
            ticket, version=new_version
        )
        ticket.mark_saved(new_version)

    def add_reply(self, reply: TicketReply) -> None:
        _insert(
            self._data.ticket_replies,
            reply.reply_id,
            mappers.reply_to_row(reply),
            "Reply",
        )

    def list_replies(self, ticket_id: str) -> Sequence[TicketReply]:
        rows = [
            row
            for row in self._data.ticket_replies.values()
            if row["ticket_id"] == ticket_id
        ]
        rows.sort(key=lambda r: (r["created_at"], r["reply_id"]))
        return [mappers.reply_from_row(row) for row in rows]


class InMemoryChangeRoleRepository(ChangeRoleRepository):
    """Role-change requests stored in ``InMemoryData.change_role_requests``."""

    def __init__(self, data: InMemoryData) -> None:
        self._data = data

    def get(self, request_id: str) -> ChangeRoleRequest | None:
        if (row := self._data.change_role_requests.get(request_id)) is None:
            return None
        return mappers.change_role_from_row(row)

    def add(self, request: ChangeRoleRequest) -> None:
        if request.status is ChangeRoleStatus.PENDING and (
            pending := self.find_pending_for_user(request.user_id)
        ):
            raise DuplicatePendingRequest(request.user_id, pending.aggregate_id)
        _insert(
            self._data.change_role_requests,
            request.aggregate_id,
            mappers.change_role_to_row(request, version=1),
            "ChangeRoleRequest",
        )
        request.mark_saved(1)

    def update(self, request: ChangeRoleRequest) -> None:
        row = self._data.change_role_requests.get(request.aggregate_id)
        if row is None or row["version"] != request.version:
            raise ConcurrentModification(
                ChangeRoleRequest.KIND, request.aggregate_id, request.version
            )
        new_version = request.version + 1
        self._data.change_role_requests[request.aggregate_id] = (
            mappers.change_role_to_row(request, version=new_version)
        )
        request.mark_saved(new_version)

    def find_pending_for_user(self, user_id: str) -> ChangeRoleRequest | None:
        for row in self._data.change_role_requests.values():
            if (
                row["user_id"] == user_id
                and row["status"] == ChangeRoleStatus.PENDING.value
            ):
                return mappers.change_role_from_row(row)
        return None


class InMemoryNotificationRepository(NotificationRepository):
    """Notifications stored in ``InMemoryData.notifications``."""

    def __init__(self, data: InMemoryData) -> None:
        self._data = data

    def add(self, notification: Notification) -> None:
        _insert(
            self._data.notifications,
            notification.notification_id,
            mappers.notification_to_row(notification),
            "Notification",
        )

    def list_for_recipient(self, recipient: str) -> Sequence[Notification]:
        rows = [
            row
            for row in self._data.notifications.values()
            if row["recipient"] == recipient
        ]
        rows.sort(key=lambda r: (r["created_at"], r["notification_id"]))
        return [mappers.notification_from_row(row) for row in rows]

    def mark_read(self, notification_id: str, recipient: str) -> bool:
        row = self._data.notifications.get(notification_id)
        if row is None or row["recipient"] != recipient:
            return False
        row["read"] = True
        return True
