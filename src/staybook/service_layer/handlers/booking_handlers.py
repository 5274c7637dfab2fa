"""Handlers for reservations: availability, bookings and coupons.

``create_booking`` is the consistency-critical path. Everything from the
overlap check to the booking insert (coupon redemption included) happens in
one unit of work, after locking the property, so two concurrent requests for
overlapping stays cannot both commit.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import date
from decimal import Decimal

from staybook import config
from staybook.domain import pricing
from staybook.domain.aggregates import Booking
from staybook.domain.entities import Coupon, Property
from staybook.domain.errors import (
    CouponAlreadyUsed,
    CouponExpired,
    CouponNotFound,
    EntityNotFound,
    InvalidBookingRequest,
    UnavailableProperty,
    UserUnauthorized,
)
from staybook.domain.value_objects import StayPeriod
from staybook.interfaces.id_generator import IdGenerator
from staybook.interfaces.unit_of_work import AbstractUnitOfWork
from staybook.service_layer import commands
from staybook.service_layer.dispatcher import EventDispatcher

from .common import Clock, load_property, load_user, publish_committed

logger = logging.getLogger(__name__)

# pylint: disable=too-many-arguments


# --- Internal Helpers ---


def _unavailability_reason(
    uow: AbstractUnitOfWork, prop: Property, period: StayPeriod, num_guests: int
) -> str | None:
    """Why the property cannot take this stay, or None if it can."""
    if not prop.is_available:
        return "not available for booking"
    if num_guests > prop.max_guests:
        return f"cannot accommodate {num_guests} guests (max {prop.max_guests})"
    if uow.bookings.find_overlapping(prop.property_id, period):
        return f"already booked between {period.check_in} and {period.check_out}"
    return None


def _redeemable_coupon(
    uow: AbstractUnitOfWork, code: str, user_id: str, today: date
) -> Coupon:
    if (coupon := uow.coupons.get(code)) is None:
        raise CouponNotFound(code)
    if coupon.is_expired(today):
        raise CouponExpired(code)
    if uow.coupons.is_used(coupon, user_id):
        raise CouponAlreadyUsed(code)
    return coupon


def _new_confirmation_code(uow: AbstractUnitOfWork, generator: IdGenerator) -> str:
    for _ in range(config.CONFIRMATION_CODE_MAX_ATTEMPTS):
        code = generator.new_id()
        if not uow.bookings.confirmation_code_exists(code):
            return code
        logger.info("Confirmation code collision, generating a new one")
    raise RuntimeError(
        "Could not generate a unique confirmation code after "
        f"{config.CONFIRMATION_CODE_MAX_ATTEMPTS} attempts"
    )


def _load_booking_for(
    uow: AbstractUnitOfWork, confirmation_code: str, user_id: str, action: str
) -> Booking:
    booking = uow.bookings.get_by_confirmation_code(confirmation_code)
    if booking is None or booking.is_canceled:
        raise EntityNotFound(Booking.KIND, confirmation_code)
    if not booking.involves(user_id):
        raise UserUnauthorized(user_id, f"{action} booking {confirmation_code}")
    return booking


# --- Command Handlers ---


def check_availability(cmd: commands.CheckAvailability, uow: AbstractUnitOfWork) -> bool:
    """Return True if the property can host the guests for the whole stay."""
    period = StayPeriod(cmd.check_in, cmd.check_out)
    with uow:
        prop = load_property(uow, cmd.property_id)
        reason = _unavailability_reason(uow, prop, period, cmd.num_guests)
    if reason is not None:
        logger.debug("Property %s unavailable: %s", cmd.property_id, reason)
    return reason is None


def create_booking(
    cmd: commands.CreateBooking,
    uow: AbstractUnitOfWork,
    dispatcher: EventDispatcher,
    clock: Clock,
    id_generator: IdGenerator,
    confirmation_code_generator: IdGenerator,
) -> Booking:
    """Reserve a property and publish ``BOOKING_CREATED``.

    Raises:
        InvalidBookingRequest: Empty or past stay, no adult in the party.
        EntityNotFound: Unknown property or user.
        UnavailableProperty: Property unavailable, too small or already booked.
        CouponNotFound, CouponExpired, CouponAlreadyUsed: Coupon rejected.
    """
    now = clock()
    period = StayPeriod(cmd.check_in, cmd.check_out)
    if period.starts_before(now.date()):
        raise InvalidBookingRequest(f"Check-in date {cmd.check_in} is in the past.")
    if cmd.num_adults < 1:
        raise InvalidBookingRequest("At least one adult is required.")
    if cmd.num_children < 0:
        raise InvalidBookingRequest("Number of children cannot be negative.")

    with uow:
        # 1) Lock the property: overlapping requests queue up here
        prop = load_property(uow, cmd.property_id, for_update=True)
        load_user(uow, cmd.user_id)

        # 2) Overlap and capacity check, inside the same transaction as the insert
        reason = _unavailability_reason(
            uow, prop, period, cmd.num_adults + cmd.num_children
        )
        if reason is not None:
            raise UnavailableProperty(prop.property_id, reason)

        # 3) Price the stay and redeem the coupon
        total = pricing.stay_total(prop.price_per_night, period)
        if cmd.coupon_code is not None:
            coupon = _redeemable_coupon(uow, cmd.coupon_code, cmd.user_id, now.date())
            total = coupon.discount(total)
            uow.coupons.mark_used(coupon, cmd.user_id, now)

        # 4) Commit the booking
        booking = Booking.reserve(
            id_generator.new_id(),
            property_id=prop.property_id,
            host_id=prop.host_id,
            user_id=cmd.user_id,
            period=period,
            num_adults=cmd.num_adults,
            num_children=cmd.num_children,
            confirmation_code=_new_confirmation_code(uow, confirmation_code_generator),
            total_amount=total,
            applied_coupon_code=cmd.coupon_code,
            created_at=now,
        )
        uow.bookings.add(booking)
        uow.commit()
        events = booking.dequeue_uncommitted()

    logger.info(
        "Booking %s confirmed for property %s (%s..%s, total %s)",
        booking.confirmation_code,
        booking.property_id,
        booking.check_in,
        booking.check_out,
        booking.total_amount,
    )
    publish_committed(dispatcher, events)
    return booking


def cancel_booking(
    cmd: commands.CancelBooking,
    uow: AbstractUnitOfWork,
    dispatcher: EventDispatcher,
    clock: Clock,
) -> Booking:
    """Cancel a booking and publish ``BOOKING_CANCELED``.

    Raises:
        EntityNotFound: No active booking has this confirmation code.
        UserUnauthorized: The user is neither the guest nor the host.
    """
    with uow:
        booking = _load_booking_for(
            uow, cmd.confirmation_code, cmd.requesting_user_id, "cancel"
        )
        booking.cancel(clock())
        if not uow.bookings.mark_canceled(booking):
            # canceled by a concurrent transaction in the meantime
            raise EntityNotFound(Booking.KIND, cmd.confirmation_code)
        uow.commit()
        events = booking.dequeue_uncommitted()

    logger.info(
        "Booking %s canceled by %s", booking.confirmation_code, cmd.requesting_user_id
    )
    publish_committed(dispatcher, events)
    return booking


def get_booking(cmd: commands.GetBooking, uow: AbstractUnitOfWork) -> Booking:
    """Return an active booking to its guest or host."""
    with uow:
        return _load_booking_for(
            uow, cmd.confirmation_code, cmd.requesting_user_id, "view"
        )


def list_user_bookings(
    cmd: commands.ListUserBookings, uow: AbstractUnitOfWork
) -> Sequence[Booking]:
    """Bookings made by the user, newest first (canceled ones included)."""
    with uow:
        return uow.bookings.list_for_user(cmd.user_id)


def list_host_bookings(
    cmd: commands.ListHostBookings, uow: AbstractUnitOfWork
) -> Sequence[Booking]:
    """Bookings on the host's properties, newest first (canceled ones included)."""
    with uow:
        return uow.bookings.list_for_host(cmd.host_id)


def quote_coupon(
    cmd: commands.QuoteCoupon, uow: AbstractUnitOfWork, clock: Clock
) -> Decimal:
    """Return ``cmd.amount`` after the coupon's discount, without redeeming it."""
    with uow:
        coupon = _redeemable_coupon(uow, cmd.coupon_code, cmd.user_id, clock().date())
    return coupon.discount(cmd.amount)


COMMAND_HANDLERS: dict[type, Callable[..., object]] = {
    commands.CheckAvailability: check_availability,
    commands.CreateBooking: create_booking,
    commands.CancelBooking: cancel_booking,
    commands.GetBooking: get_booking,
    commands.ListUserBookings: list_user_bookings,
    commands.ListHostBookings: list_host_bookings,
    commands.QuoteCoupon: quote_coupon,
}
