"""Repositories implemented with SQLAlchemy Core (Postgres and SQLite).

All repositories share the unit of work's ``Connection`` and never commit.

Locking:
- PostgreSQL: ``SqlAlchemyPropertyRepository.get(..., for_update=True)`` takes
  a row lock on the property (``SELECT ... FOR UPDATE``). Concurrent booking
  attempts on the same property queue up behind it, which makes
  "check overlap, then insert" atomic per property.
  ``SqlAlchemyUserRepository.get(..., for_update=True)`` does the same for
  per-user checks (one pending role-change request), with a partial unique
  index behind it.
- SQLite: ``FOR UPDATE`` is not rendered; every transaction already holds the
  database write lock (``BEGIN IMMEDIATE``, see ``staybook.adapters.db.engine``).

Coupon redemptions and workflow updates do not rely on those locks: the
redemption insert is conflict-tolerant and its rowcount decides, and updates
are guarded by the row version.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import exists, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from staybook.adapters.db.dialects import DialectName, UnsupportedDialect
from staybook.adapters.db.schema import (
    bookings,
    change_role_requests,
    coupon_redemptions,
    coupons,
    notifications,
    properties,
    ticket_replies,
    tickets,
    users,
)
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

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement
    from sqlalchemy.engine import Connection
    from sqlalchemy.sql.dml import Insert

#: How a clash on the one-pending-request-per-user index reads on PostgreSQL
#: (constraint name) and on SQLite (table.column).
PENDING_REQUEST_CONFLICT_MARKERS = (
    "uq_change_role_requests_pending_user",
    "change_role_requests.user_id",
)


def _blocking(period: StayPeriod) -> list[ColumnElement[bool]]:
    """WHERE clauses for active bookings sharing a night with `period`."""
    return [
        bookings.c.canceled_at.is_(None),
        bookings.c.check_in < period.check_out,
        bookings.c.check_out > period.check_in,
    ]


class _SqlRepository:
    """Holds the unit of work's connection."""

    def __init__(self, connection: Connection) -> None:
        self.connection = connection


class SqlAlchemyPropertyRepository(_SqlRepository, PropertyRepository):
    """Properties backed by the ``properties`` table."""

    def get(self, property_id: str, *, for_update: bool = False) -> Property | None:
        stmt = select(properties).where(properties.c.property_id == property_id)
        if for_update:
            stmt = stmt.with_for_update()
        if not (row := self.connection.execute(stmt).fetchone()):
            return None
        return mappers.property_from_row(row._mapping)

    def add(self, prop: Property) -> None:
        self.connection.execute(insert(properties).values(**mappers.property_to_row(prop)))

    def find_available(
        self, city: str, period: StayPeriod, num_guests: int
    ) -> list[Property]:
        booked = exists().where(
            bookings.c.property_id == properties.c.property_id, *_blocking(period)
        )
        stmt = (
            select(properties)
            .where(
                properties.c.city == city,
                properties.c.is_available.is_(True),
                properties.c.max_guests >= num_guests,
                ~booked,
            )
            .order_by(properties.c.price_per_night, properties.c.property_id)
        )
        return [
            mappers.property_from_row(row._mapping)
            for row in self.connection.execute(stmt)
        ]

    def set_available(self, property_id: str, is_available: bool) -> None:
        result = self.connection.execute(
            update(properties)
            .where(properties.c.property_id == property_id)
            .values(is_available=is_available)
        )
        if result.rowcount != 1:
            raise EntityNotFound("Property", property_id)


class SqlAlchemyUserRepository(_SqlRepository, UserRepository):
    """Users backed by the ``users`` table."""

    def get(self, user_id: str, *, for_update: bool = False) -> UserAccount | None:
        stmt = select(users).where(users.c.user_id == user_id)
        if for_update:
            stmt = stmt.with_for_update()
        if not (row := self.connection.execute(stmt).fetchone()):
            return None
        return mappers.user_from_row(row._mapping)

    def add(self, user: UserAccount) -> None:
        self.connection.execute(insert(users).values(**mappers.user_to_row(user)))

    def update_role(self, user_id: str, role: Role) -> None:
        result = self.connection.execute(
            update(users).where(users.c.user_id == user_id).values(role=role.value)
        )
        if result.rowcount != 1:
            raise EntityNotFound("User", user_id)


class SqlAlchemyBookingRepository(_SqlRepository, BookingRepository):
    """Bookings backed by the ``bookings`` table."""

    def find_overlapping(self, property_id: str, period: StayPeriod) -> list[Booking]:
        stmt = (
            select(bookings)
            .where(bookings.c.property_id == property_id, *_blocking(period))
            .order_by(bookings.c.check_in)
        )
        return [
            mappers.booking_from_row(row._mapping)
            for row in self.connection.execute(stmt)
        ]

    def add(self, booking: Booking) -> None:
        self.connection.execute(insert(bookings).values(**mappers.booking_to_row(booking)))

    def get_by_confirmation_code(self, confirmation_code: str) -> Booking | None:
        stmt = select(bookings).where(bookings.c.confirmation_code == confirmation_code)
        if not (row := self.connection.execute(stmt).fetchone()):
            return None
        return mappers.booking_from_row(row._mapping)

    def confirmation_code_exists(self, confirmation_code: str) -> bool:
        stmt = select(
            exists().where(bookings.c.confirmation_code == confirmation_code)
        )
        return bool(self.connection.execute(stmt).scalar())

    def mark_canceled(self, booking: Booking) -> bool:
        result = self.connection.execute(
            update(bookings)
            .where(
                bookings.c.booking_id == booking.aggregate_id,
                bookings.c.canceled_at.is_(None),
            )
            .values(canceled_at=booking.canceled_at)
        )
        return result.rowcount == 1

    def list_for_user(self, user_id: str) -> Sequence[Booking]:
        return self._newest_first(bookings.c.user_id == user_id)

    def list_for_host(self, host_id: str) -> Sequence[Booking]:
        return self._newest_first(bookings.c.host_id == host_id)

    def _newest_first(self, criterion) -> list[Booking]:
        stmt = (
            select(bookings)
            .where(criterion)
            .order_by(bookings.c.created_at.desc(), bookings.c.booking_id.desc())
        )
        return [
            mappers.booking_from_row(row._mapping)
            for row in self.connection.execute(stmt)
        ]


class SqlAlchemyCouponRepository(_SqlRepository, CouponRepository):
    """Coupons backed by ``coupons`` and ``coupon_redemptions``."""

    def get(self, code: str) -> Coupon | None:
        stmt = select(coupons).where(coupons.c.code == code)
        if not (row := self.connection.execute(stmt).fetchone()):
            return None
        return mappers.coupon_from_row(row._mapping)

    def add(self, coupon: Coupon) -> None:
        self.connection.execute(insert(coupons).values(**mappers.coupon_to_row(coupon)))

    def is_used(self, coupon: Coupon, user_id: str) -> bool:
        stmt = select(
            exists().where(
                coupon_redemptions.c.coupon_code == coupon.code,
                coupon_redemptions.c.scope_key == coupon.redemption_scope(user_id),
            )
        )
        return bool(self.connection.execute(stmt).scalar())

    def mark_used(self, coupon: Coupon, user_id: str, redeemed_at: datetime) -> None:
        # 1) No-throw insert: a concurrent redemption in the same scope waits
        #    for the other transaction, then inserts nothing.
        stmt = self._build_no_throw_insert(
            {
                "coupon_code": coupon.code,
                "scope_key": coupon.redemption_scope(user_id),
                "user_id": user_id,
                "redeemed_at": redeemed_at,
            }
        )

        # 2) The rowcount is the arbiter
        if self.connection.execute(stmt).rowcount != 1:
            raise CouponAlreadyUsed(coupon.code)

    def _build_no_throw_insert(self, values: dict) -> Insert:
        dialect_name = DialectName.from_sqlalchemy(self.connection)
        if dialect_name is DialectName.POSTGRES:
            return pg_insert(coupon_redemptions).values(**values).on_conflict_do_nothing()
        if dialect_name is DialectName.SQLITE:
            return (
                sqlite_insert(coupon_redemptions).values(**values).on_conflict_do_nothing()
            )

        msg = f"Unsupported dialect: {dialect_name}"  # pragma: no cover
        raise UnsupportedDialect(msg)  # pragma: no cover


class SqlAlchemyTicketRepository(_SqlRepository, TicketRepository):
    """Tickets backed by ``tickets`` and ``ticket_replies``."""

    def get(self, ticket_id: str) -> Ticket | None:
        stmt = select(tickets).where(tickets.c.ticket_id == ticket_id)
        if not (row := self.connection.execute(stmt).fetchone()):
            return None
        return mappers.ticket_from_row(row._mapping)

    def add(self, ticket: Ticket) -> None:
        self.connection.execute(
            insert(tickets).values(**mappers.ticket_to_row(ticket, version=1))
        )
        ticket.mark_saved(1)

    def update(self, ticket: Ticket) -> None:
        new_version = ticket.version + 1
        values = mappers.ticket_to_row(ticket, version=new_version)
        del values["ticket_id"]
        result = self.connection.execute(
            update(tickets)
            .where(
                tickets.c.ticket_id == ticket.aggregate_id,
                tickets.c.version == ticket.version,
            )
            .values(**values)
        )
        if result.rowcount != 1:
            raise ConcurrentModification(Ticket.KIND, ticket.aggregate_id, ticket.version)
        ticket.mark_saved(new_version)

    def add_reply(self, reply: TicketReply) -> None:
        self.connection.execute(insert(ticket_replies).values(**mappers.reply_to_row(reply)))

    def list_replies(self, ticket_id: str) -> Sequence[TicketReply]:
        stmt = (
            select(ticket_replies)
            .where(ticket_replies.c.ticket_id == ticket_id)
            .order_by(ticket_replies.c.created_at, ticket_replies.c.reply_id)
        )
        return [
            mappers.reply_from_row(row._mapping)
            for row in self.connection.execute(stmt)
        ]


class SqlAlchemyChangeRoleRepository(_SqlRepository, ChangeRoleRepository):
    """Role-change requests backed by ``change_role_requests``."""

    def get(self, request_id: str) -> ChangeRoleRequest | None:
        stmt = select(change_role_requests).where(
            change_role_requests.c.request_id == request_id
        )
        if not (row := self.connection.execute(stmt).fetchone()):
            return None
        return mappers.change_role_from_row(row._mapping)

    def add(self, request: ChangeRoleRequest) -> None:
        try:
            self.connection.execute(
                insert(change_role_requests).values(
                    **mappers.change_role_to_row(request, version=1)
                )
            )
        except IntegrityError as e:
            msg = str(e.orig) if e.orig is not None else str(e)
            if any(marker in msg for marker in PENDING_REQUEST_CONFLICT_MARKERS):
                raise DuplicatePendingRequest(request.user_id) from e
            raise
        request.mark_saved(1)

    def update(self, request: ChangeRoleRequest) -> None:
        new_version = request.version + 1
        values = mappers.change_role_to_row(request, version=new_version)
        del values["request_id"]
        result = self.connection.execute(
            update(change_role_requests)
            .where(
                change_role_requests.c.request_id == request.aggregate_id,
                change_role_requests.c.version == request.version,
            )
            .values(**values)
        )
        if result.rowcount != 1:
            raise ConcurrentModification(
                ChangeRoleRequest.KIND, request.aggregate_id, request.version
            )
        request.mark_saved(new_version)

    def find_pending_for_user(self, user_id: str) -> ChangeRoleRequest | None:
        stmt = (
            select(change_role_requests)
            .where(
                change_role_requests.c.user_id == user_id,
                change_role_requests.c.status == ChangeRoleStatus.PENDING.value,
            )
            .order_by(change_role_requests.c.created_at)
            .limit(1)
        )
        if not (row := self.connection.execute(stmt).fetchone()):
            return None
        return mappers.change_role_from_row(row._mapping)


class SqlAlchemyNotificationRepository(_SqlRepository, NotificationRepository):
    """Notifications backed by the ``notifications`` table."""

    def add(self, notification: Notification) -> None:
        self.connection.execute(
            insert(notifications).values(**mappers.notification_to_row(notification))
        )

    def list_for_recipient(self, recipient: str) -> Sequence[Notification]:
        stmt = (
            select(notifications)
            .where(notifications.c.recipient == recipient)
            .order_by(notifications.c.created_at, notifications.c.notification_id)
        )
        return [
            mappers.notification_from_row(row._mapping)
            for row in self.connection.execute(stmt)
        ]

    def mark_read(self, notification_id: str, recipient: str) -> bool:
        result = self.connection.execute(
            update(notifications)
            .where(
                notifications.c.notification_id == notification_id,
                notifications.c.recipient == recipient,
            )
            .values(read=True)
        )
        return result.rowcount == 1
