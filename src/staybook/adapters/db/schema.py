"""Relational schema for STAYBOOK.

SQLAlchemy Core tables for every persisted entity. The migration in
``alembic/versions`` creates exactly these tables; keep them in sync.

Constraints that carry business invariants:

| Constraint                                   | Purpose                                   |
|----------------------------------------------|-------------------------------------------|
| UNIQUE(bookings.confirmation_code)           | confirmation codes are unique             |
| CHECK(bookings.check_in < check_out)         | non-empty half-open stay                  |
| CHECK(bookings.num_adults >= 1)              | at least one adult                        |
| CHECK(bookings.total_amount >= 0)            | discounts never go below zero             |
| PK(coupon_redemptions.coupon_code, scope_key)| single-use coupons (per user or global)   |
| UNIQUE(change_role_requests.user_id) WHERE PENDING | one pending role change per user |
| tickets.version / change_role_requests.version | optimistic locking of workflow entities |

Booking overlap itself cannot be expressed portably as a constraint; it is
enforced by the repositories under the property lock (see
``staybook.adapters.repositories.sqlalchemy_repositories``).
"""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
    text,
)

from .sa_types import MONEY, UTCDateTime

__all__ = [
    "metadata",
    "users",
    "properties",
    "bookings",
    "coupons",
    "coupon_redemptions",
    "tickets",
    "ticket_replies",
    "change_role_requests",
    "notifications",
]

ID_LENGTH = 36

#: Rows covered by the one-pending-request-per-user index.
PENDING_ONLY = "status = 'PENDING'"

#: Constraint and index names are derived from the table and columns, so the
#: migration and autogenerate agree on them (e.g. ``uq_bookings_confirmation_code``,
#: ``fk_bookings_property_id_properties``, ``ck_bookings_stay_not_empty``).
metadata = MetaData(
    naming_convention={
        "pk": "pk_%(table_name)s",
        "fk": "fk_%(table_name)s_%(column_0_N_name)s_%(referred_table_name)s",
        "uq": "uq_%(table_name)s_%(column_0_N_name)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "ix": "ix_%(table_name)s_%(column_0_N_label)s",
    }
)

users = Table(
    "users",
    metadata,
    Column("user_id", String(ID_LENGTH), primary_key=True),
    Column("username", String(150), nullable=False, unique=True),
    Column("role", String(20), nullable=False, comment="Role value (client, host, ...)."),
    comment="Marketplace users.",
)

properties = Table(
    "properties",
    metadata,
    Column("property_id", String(ID_LENGTH), primary_key=True),
    Column("host_id", String(ID_LENGTH), ForeignKey("users.user_id"), nullable=False),
    Column("title", String(200), nullable=False),
    Column("city", String(100), nullable=False, server_default=""),
    Column("price_per_night", MONEY, nullable=False),
    Column("max_guests", Integer, nullable=False),
    Column("is_available", Boolean, nullable=False, default=True),
    CheckConstraint("max_guests >= 1", name="max_guests_positive"),
    CheckConstraint("price_per_night >= 0", name="price_non_negative"),
    Index("ix_properties_city", "city"),
    comment="Rentable properties (only the fields the reservation engine reads).",
)

bookings = Table(
    "bookings",
    metadata,
    Column("booking_id", String(ID_LENGTH), primary_key=True),
    Column(
        "property_id",
        String(ID_LENGTH),
        ForeignKey("properties.property_id"),
        nullable=False,
    ),
    Column(
        "host_id",
        String(ID_LENGTH),
        nullable=False,
        comment="Host of the property at booking time.",
    ),
    Column("user_id", String(ID_LENGTH), ForeignKey("users.user_id"), nullable=False),
    Column("check_in", Date, nullable=False),
    Column("check_out", Date, nullable=False, comment="Departure day, not a booked night."),
    Column("num_adults", Integer, nullable=False),
    Column("num_children", Integer, nullable=False, default=0),
    Column("confirmation_code", String(32), nullable=False, unique=True),
    Column("total_amount", MONEY, nullable=False),
    Column("applied_coupon_code", String(64), nullable=True),
    Column("created_at", UTCDateTime(), nullable=False),
    Column(
        "canceled_at",
        UTCDateTime(),
        nullable=True,
        comment="Set when the booking is canceled; canceled bookings never block dates.",
    ),
    CheckConstraint("check_in < check_out", name="stay_not_empty"),
    CheckConstraint("num_adults >= 1", name="at_least_one_adult"),
    CheckConstraint("num_children >= 0", name="children_non_negative"),
    CheckConstraint("total_amount >= 0", name="total_non_negative"),
    Index("ix_bookings_property_stay", "property_id", "check_in", "check_out"),
    Index("ix_bookings_user_id", "user_id"),
    Index("ix_bookings_host_id", "host_id"),
    comment="Confirmed bookings.",
)

coupons = Table(
    "coupons",
    metadata,
    Column("code", String(64), primary_key=True),
    Column("discount_percentage", Numeric(5, 2), nullable=True),
    Column("discount_amount", MONEY, nullable=True),
    Column("expiry_date", Date, nullable=False),
    Column("usage", String(20), nullable=False, comment="per_user or global."),
    comment="Discount coupons.",
)

coupon_redemptions = Table(
    "coupon_redemptions",
    metadata,
    Column("coupon_code", String(64), ForeignKey("coupons.code"), primary_key=True),
    Column(
        "scope_key",
        String(ID_LENGTH),
        primary_key=True,
        comment="Redeeming user id for per-user coupons, '*' for global ones.",
    ),
    Column("user_id", String(ID_LENGTH), nullable=False),
    Column("redeemed_at", UTCDateTime(), nullable=False),
    comment="One row per coupon redemption; the primary key enforces single use.",
)

tickets = Table(
    "tickets",
    metadata,
    Column("ticket_id", String(ID_LENGTH), primary_key=True),
    Column("user_id", String(ID_LENGTH), ForeignKey("users.user_id"), nullable=False),
    Column("title", String(200), nullable=False),
    Column("description", Text, nullable=False),
    Column("status", String(20), nullable=False),
    Column("creation_date", UTCDateTime(), nullable=False),
    Column("closing_date", UTCDateTime(), nullable=True),
    Column("version", Integer, nullable=False, comment="Optimistic lock."),
    Index("ix_tickets_user_id", "user_id"),
    Index("ix_tickets_status", "status"),
    comment="Support tickets.",
)

ticket_replies = Table(
    "ticket_replies",
    metadata,
    Column("reply_id", String(ID_LENGTH), primary_key=True),
    Column(
        "ticket_id", String(ID_LENGTH), ForeignKey("tickets.ticket_id"), nullable=False
    ),
    Column("author_id", String(ID_LENGTH), nullable=False),
    Column("content", Text, nullable=False),
    Column("from_moderator", Boolean, nullable=False),
    Column("created_at", UTCDateTime(), nullable=False),
    Index("ix_ticket_replies_ticket", "ticket_id", "created_at"),
    comment="Replies on support tickets.",
)

change_role_requests = Table(
    "change_role_requests",
    metadata,
    Column("request_id", String(ID_LENGTH), primary_key=True),
    Column("user_id", String(ID_LENGTH), ForeignKey("users.user_id"), nullable=False),
    Column("motivation", Text, nullable=False),
    Column("status", String(20), nullable=False),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("fulfilled_by", String(ID_LENGTH), nullable=True),
    Column("fulfilled_at", UTCDateTime(), nullable=True),
    Column("version", Integer, nullable=False, comment="Optimistic lock."),
    Index("ix_change_role_requests_user_status", "user_id", "status"),
    Index(
        "uq_change_role_requests_pending_user",
        "user_id",
        unique=True,
        postgresql_where=text(PENDING_ONLY),
        sqlite_where=text(PENDING_ONLY),
    ),
    comment="Requests to be promoted from client to host.",
)

notifications = Table(
    "notifications",
    metadata,
    Column("notification_id", String(ID_LENGTH), primary_key=True),
    Column("recipient", String(ID_LENGTH), nullable=False),
    Column("message", Text, nullable=False),
    Column("severity", String(20), nullable=False),
    Column("created_at", UTCDateTime(), nullable=False),
    Column("read", Boolean, nullable=False, default=False),
    Index("ix_notifications_recipient", "recipient", "created_at"),
    comment="In-app notifications.",
)
