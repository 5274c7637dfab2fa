"""Aggregate representing a confirmed booking."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import ClassVar

from staybook.domain.errors import InvalidBookingRequest
from staybook.domain.events import EventType
from staybook.domain.value_objects import StayPeriod

from .base import Aggregate

# pylint: disable=too-many-arguments,too-many-instance-attributes


class Booking(Aggregate):
    """A committed reservation of a property for a stay period.

    Bookings are never edited. The only later change is cancellation, which
    flags the booking (``canceled_at``) instead of deleting it.
    """

    KIND: ClassVar[str] = "Booking"

    def __init__(
        self,
        aggregate_id: str,
        *,
        property_id: str,
        host_id: str,
        user_id: str,
        period: StayPeriod,
        num_adults: int,
        num_children: int,
        confirmation_code: str,
        total_amount: Decimal,
        applied_coupon_code: str | None = None,
        created_at: datetime | None = None,
        canceled_at: datetime | None = None,
        version: int = 0,
    ) -> None:
        super().__init__(aggregate_id, version)
        self.property_id = property_id
        self.host_id = host_id
        self.user_id = user_id
        self.period = period
        self.num_adults = num_adults
        self.num_children = num_children
        self.confirmation_code = confirmation_code
        self.total_amount = total_amount
        self.applied_coupon_code = applied_coupon_code
        self.created_at = created_at
        self.canceled_at = canceled_at

    # --- Construction Paths ---

    @classmethod
    def reserve(
        cls,
        aggregate_id: str,
        *,
        property_id: str,
        host_id: str,
        user_id: str,
        period: StayPeriod,
        num_adults: int,
        num_children: int,
        confirmation_code: str,
        total_amount: Decimal,
        applied_coupon_code: str | None,
        created_at: datetime,
    ) -> Booking:
        """Create a new booking and record ``BOOKING_CREATED``.

        Raises:
            InvalidBookingRequest: If the party or the amount is invalid.
        """
        if num_adults < 1:
            raise InvalidBookingRequest("At least one adult is required.")
        if num_children < 0:
            raise InvalidBookingRequest("Number of children cannot be negative.")
        if total_amount < 0:
            raise InvalidBookingRequest("Total amount cannot be negative.")

        booking = cls(
            aggregate_id,
            property_id=property_id,
            host_id=host_id,
            user_id=user_id,
            period=period,
            num_adults=num_adults,
            num_children=num_children,
            confirmation_code=confirmation_code,
            total_amount=total_amount,
            applied_coupon_code=applied_coupon_code,
            created_at=created_at,
        )
        booking._record(EventType.BOOKING_CREATED)
        return booking

    # --- State Transitions ---

    def cancel(self, now: datetime) -> None:
        """Flag the booking as canceled and record ``BOOKING_CANCELED``."""
        self.canceled_at = now
        self._record(EventType.BOOKING_CANCELED)

    # --- Queries ---

    @property
    def is_canceled(self) -> bool:
        """True once the booking has been canceled."""
        return self.canceled_at is not None

    @property
    def check_in(self) -> date:
        """First night of the stay."""
        return self.period.check_in

    @property
    def check_out(self) -> date:
        """Departure day (not a booked night)."""
        return self.period.check_out

    @property
    def num_guests(self) -> int:
        """Adults plus children."""
        return self.num_adults + self.num_children

    def involves(self, user_id: str) -> bool:
        """True for the guest and for the property's host."""
        return user_id in (self.user_id, self.host_id)

    def __repr__(self) -> str:
        return (
            f"Booking(id={self.aggregate_id!r}, code={self.confirmation_code!r}, "
            f"property={self.property_id!r}, {self.check_in}..{self.check_out})"
        )
