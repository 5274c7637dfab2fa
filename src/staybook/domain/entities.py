"""Plain records read (and occasionally updated) by the service layer.

These carry no workflow. Bookings, tickets and role-change requests, which
do, live in ``staybook.domain.aggregates``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from staybook.domain import pricing
from staybook.domain.value_objects import CouponUsage, Role, Severity


@dataclass(frozen=True, slots=True)
class Property:
    """A rentable property as seen by the reservation engine."""

    property_id: str
    host_id: str
    title: str
    price_per_night: Decimal
    max_guests: int
    city: str = ""
    is_available: bool = True


@dataclass(frozen=True, slots=True)
class UserAccount:
    """A marketplace user."""

    user_id: str
    username: str
    role: Role = Role.CLIENT


@dataclass(frozen=True, slots=True)
class Coupon:
    """A discount coupon.

    At least one of ``discount_percentage`` and ``discount_amount`` should be
    set; when both are, the percentage is applied first.
    """

    code: str
    expiry_date: date
    discount_percentage: Decimal | None = None
    discount_amount: Decimal | None = None
    usage: CouponUsage = CouponUsage.PER_USER

    def is_expired(self, today: date) -> bool:
        """A coupon stays valid through its expiry date."""
        return self.expiry_date < today

    def discount(self, amount: Decimal) -> Decimal:
        """Return ``amount`` after this coupon's discount (never negative)."""
        return pricing.discounted_amount(
            amount,
            percentage=self.discount_percentage,
            fixed=self.discount_amount,
        )

    def redemption_scope(self, user_id: str) -> str:
        """Key under which a redemption by ``user_id`` is recorded.

        Two redemptions with the same coupon code and scope key conflict.
        """
        if self.usage is CouponUsage.GLOBAL:
            return "*"
        return user_id


@dataclass(frozen=True, slots=True)
class Notification:
    """An in-app message for a single recipient."""

    notification_id: str
    recipient: str
    message: str
    severity: Severity
    created_at: datetime
    read: bool = False


@dataclass(frozen=True, slots=True)
class TicketReply:
    """A reply posted on a support ticket."""

    reply_id: str
    ticket_id: str
    author_id: str
    content: str
    from_moderator: bool
    created_at: datetime
