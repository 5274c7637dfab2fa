"""Module including value objects used across the domain layer."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from staybook.domain.errors import InvalidBookingRequest


class Role(Enum):
    """Enumeration of user roles."""

    CLIENT = "client"
    HOST = "host"
    MODERATOR = "moderator"
    ADMIN = "admin"


class Severity(Enum):
    """Enumeration of notification severities."""

    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class CouponUsage(Enum):
    """How often a coupon may be redeemed.

    PER_USER coupons can be redeemed once by each user; GLOBAL coupons can be
    redeemed once in total.
    """

    PER_USER = "per_user"
    GLOBAL = "global"


@dataclass(frozen=True, slots=True)
class StayPeriod:
    """Half-open date range ``[check_in, check_out)``.

    The guest leaves on ``check_out``, so the night of ``check_out`` belongs to
    the next stay: a stay ending on June 10 does not overlap one starting on
    June 10.
    """

    check_in: date
    check_out: date

    def __post_init__(self) -> None:
        if not self.check_in < self.check_out:
            raise InvalidBookingRequest(
                f"Check-in ({self.check_in}) must be before check-out ({self.check_out})."
            )

    @property
    def nights(self) -> int:
        """Number of nights in the stay."""
        return (self.check_out - self.check_in).days

    def overlaps(self, other: StayPeriod) -> bool:
        """Return True if both stays share at least one night."""
        return self.check_in < other.check_out and other.check_in < self.check_out

    def starts_before(self, day: date) -> bool:
        """Return True if the stay begins before ``day``."""
        return self.check_in < day
