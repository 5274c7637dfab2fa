"""create marketplace tables

Revision ID: 3f6c2a1d9b07
Revises:
Create Date: 2026-10-12 09:14:27.503118

"""

# pylint: disable=invalid-name

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from staybook.adapters.db.sa_types import UTCDateTime

# pylint: disable=no-member

# revision identifiers, used by Alembic.
revision: str = "3f6c2a1d9b07"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

ID = sa.String(length=36)
MONEY = sa.Numeric(precision=12, scale=2)


def upgrade() -> None:
    """Upgrade schema."""

    op.create_table(
        "users",
        sa.Column("user_id", ID, nullable=False),
        sa.Column("username", sa.String(length=150), nullable=False),
        sa.Column(
            "role",
            sa.String(length=20),
            nullable=False,
            comment="Role value (client, host, ...).",
        ),
        sa.PrimaryKeyConstraint("user_id", name=op.f("pk_users")),
        sa.UniqueConstraint("username", name=op.f("uq_users_username")),
        comment="Marketplace users.",
    )

    op.create_table(
        "properties",
        sa.Column("property_id", ID, nullable=False),
        sa.Column("host_id", ID, nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("price_per_night", MONEY, nullable=False),
        sa.Column("max_guests", sa.Integer(), nullable=False),
        sa.Column("is_available", sa.Boolean(), nullable=False),
        sa.CheckConstraint(
            "max_guests >= 1", name=op.f("ck_properties_max_guests_positive")
        ),
        sa.CheckConstraint(
            "price_per_night >= 0", name=op.f("ck_properties_price_non_negative")
        ),
        sa.ForeignKeyConstraint(
            ["host_id"],
            ["users.user_id"],
            name=op.f("fk_properties_host_id_users"),
        ),
        sa.PrimaryKeyConstraint("property_id", name=op.f("pk_properties")),
        comment="Rentable properties (only the fields the reservation engine reads).",
    )

    op.create_table(
        "bookings",
        sa.Column("booking_id", ID, nullable=False),
        sa.Column("property_id", ID, nullable=False),
        sa.Column(
            "host_id", ID, nullable=False, comment="Host of the property at booking time."
        ),
        sa.Column("user_id", ID, nullable=False),
        sa.Column("check_in", sa.Date(), nullable=False),
        sa.Column(
            "check_out",
            sa.Date(),
            nullable=False,
            comment="Departure day, not a booked night.",
        ),
        sa.Column("num_adults", sa.Integer(), nullable=False),
        sa.Column("num_children", sa.Integer(), nullable=False),
        sa.Column("confirmation_code", sa.String(length=32), nullable=False),
        sa.Column("total_amount", MONEY, nullable=False),
        sa.Column("applied_coupon_code", sa.String(length=64), nullable=True),
        sa.Column("created_at", UTCDateTime(), nullable=False),
        sa.Column(
            "canceled_at",
            UTCDateTime(),
            nullable=True,
            comment="Set when the booking is canceled; canceled bookings never block dates.",
        ),
        sa.CheckConstraint("check_in < check_out", name=op.f("ck_bookings_stay_not_empty")),
        sa.CheckConstraint("num_adults >= 1", name=op.f("ck_bookings_at_least_one_adult")),
        sa.CheckConstraint(
            "num_children >= 0", name=op.f("ck_bookings_children_non_negative")
        ),
        sa.CheckConstraint(
            "total_amount >= 0", name=op.f("ck_bookings_total_non_negative")
        ),
        sa.ForeignKeyConstraint(
            ["property_id"],
            ["properties.property_id"],
            name=op.f("fk_bookings_property_id_properties"),
        ),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.user_id"], name=op.f("fk_bookings_user_id_users")
        ),
        sa.PrimaryKeyConstraint("booking_id", name=op.f("pk_bookings")),
        sa.UniqueConstraint(
            "confirmation_code", name=op.f("uq_bookings_confirmation_code")
        ),
        comment="Confirmed bookings.",
    )
    op.create_index(
        "ix_bookings_property_stay",
        "bookings",
        ["property_id", "check_in", "check_out"],
    )
    op.create_index("ix_bookings_user_id", "bookings", ["user_id"])
    op.create_index("ix_bookings_host_id", "bookings", ["host_id"])

    op.create_table(
        "coupons",
        sa.Column("code", sa.String(length=64), nullable=False),
        sa.Column("discount_percentage", sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column("discount_amount", MONEY, nullable=True),
        sa.Column("expiry_date", sa.Date(), nullable=False),
        sa.Column(
            "usage", sa.String(length=20), nullable=False, comment="per_user or global."
        ),
        sa.PrimaryKeyConstraint("code", name=op.f("pk_coupons")),
        comment="Discount coupons.",
    )

    op.create_table(
        "coupon_redemptions",
        sa.Column("coupon_code", sa.String(length=64), nullable=False),
        sa.Column(
            "scope_key",
            ID,
            nullable=False,
            comment="Redeeming user id for per-user coupons, '*' for global ones.",
        ),
        sa.Column("user_id", ID, nullable=False),
        sa.Column("redeemed_at", UTCDateTime(), nullable=False),
        sa.ForeignKeyConstraint(
            ["coupon_code"],
            ["coupons.code"],
            name=op.f("fk_coupon_redemptions_coupon_code_coupons"),
        ),
        sa.PrimaryKeyConstraint(
            "coupon_code", "scope_key", name=op.f("pk_coupon_redemptions")
        ),
        comment="One row per coupon redemption; the primary key enforces single use.",
    )

    op.create_table(
        "tickets",
        sa.Column("ticket_id", ID, nullable=False),
        sa.Column("user_id", ID, nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("creation_date", UTCDateTime(), nullable=False),
        sa.Column("closing_date", UTCDateTime(), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, comment="Optimistic lock."),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.user_id"], name=op.f("fk_tickets_user_id_users")
        ),
        sa.PrimaryKeyConstraint("ticket_id", name=op.f("pk_tickets")),
        comment="Support tickets.",
    )
    op.create_index("ix_tickets_user_id", "tickets", ["user_id"])
    op.create_index("ix_tickets_status", "tickets", ["status"])

    op.create_table(
        "ticket_replies",
        sa.Column("reply_id", ID, nullable=False),
        sa.Column("ticket_id", ID, nullable=False),
        sa.Column("author_id", ID, nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("from_moderator", sa.Boolean(), nullable=False),
        sa.Column("created_at", UTCDateTime(), nullable=False),
        sa.ForeignKeyConstraint(
            ["ticket_id"],
            ["tickets.ticket_id"],
            name=op.f("fk_ticket_replies_ticket_id_tickets"),
        ),
        sa.PrimaryKeyConstraint("reply_id", name=op.f("pk_ticket_replies")),
        comment="Replies on support tickets.",
    )
    op.create_index(
        "ix_ticket_replies_ticket", "ticket_replies", ["ticket_id", "created_at"]
    )

    op.create_table(
        "change_role_requests",
        sa.Column("request_id", ID, nullable=False),
        sa.Column("user_id", ID, nullable=False),
        sa.Column("motivation", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("created_at", UTCDateTime(), nullable=False),
        sa.Column("fulfilled_by", ID, nullable=True),
        sa.Column("fulfilled_at", UTCDateTime(), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, comment="Optimistic lock."),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.user_id"],
            name=op.f("fk_change_role_requests_user_id_users"),
        ),
        sa.PrimaryKeyConstraint("request_id", name=op.f("pk_change_role_requests")),
        comment="Requests to be promoted from client to host.",
    )
    op.create_index(
        "ix_change_role_requests_user_status",
        "change_role_requests",
        ["user_id", "status"],
    )

    op.create_table(
        "notifications",
        sa.Column("notification_id", ID, nullable=False),
        sa.Column("recipient", ID, nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("severity", sa.String(length=20), nullable=False),
        sa.Column("created_at", UTCDateTime(), nullable=False),
        sa.Column("read", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("notification_id", name=op.f("pk_notifications")),
        comment="In-app notifications.",
    )
    op.create_index(
        "ix_notifications_recipient", "notifications", ["recipient", "created_at"]
    )


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_index("ix_notifications_recipient", table_name="notifications")
    op.drop_table("notifications")
    op.drop_index(
        "ix_change_role_requests_user_status", table_name="change_role_requests"
    )
    op.drop_table("change_role_requests")
    op.drop_index("ix_ticket_replies_ticket", table_name="ticket_replies")
    op.drop_table("ticket_replies")
    op.drop_index("ix_tickets_status", table_name="tickets")
    op.drop_index("ix_tickets_user_id", table_name="tickets")
    op.drop_table("tickets")
    op.drop_table("coupon_redemptions")
    op.drop_table("coupons")
    op.drop_index("ix_bookings_host_id", table_name="bookings")
    op.drop_index("ix_bookings_user_id", table_name="bookings")
    op.drop_index("ix_bookings_property_stay", table_name="bookings")
    op.drop_table("bookings")
    op.drop_table("properties")
    op.drop_table("users")
