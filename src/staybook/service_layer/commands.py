"""Module defining Commands."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

# pylint: disable=too-many-instance-attributes


@dataclass(frozen=True)
class Command:
    """Base class for all commands."""


# --- Reservations ---


@dataclass(frozen=True)
class CheckAvailability(Command):
    """Ask whether a property can host ``num_guests`` over a stay."""

    property_id: str
    check_in: date
    check_out: date
    num_guests: int


@dataclass(frozen=True)
class CreateBooking(Command):
    """Command to reserve a property for a stay, optionally with a coupon."""

    property_id: str
    user_id: str
    check_in: date
    check_out: date
    num_adults: int
    num_children: int = 0
    coupon_code: str | None = None


@dataclass(frozen=True)
class CancelBooking(Command):
    """Command to cancel a booking (guest or host only)."""

    confirmation_code: str
    requesting_user_id: str


@dataclass(frozen=True)
class GetBooking(Command):
    """Look up a booking by confirmation code (guest or host only)."""

    confirmation_code: str
    requesting_user_id: str


@dataclass(frozen=True)
class ListUserBookings(Command):
    """List the bookings a user made."""

    user_id: str


@dataclass(frozen=True)
class ListHostBookings(Command):
    """List the bookings on a host's properties."""

    host_id: str


@dataclass(frozen=True)
class QuoteCoupon(Command):
    """Preview a coupon's discount on ``amount`` without redeeming it."""

    coupon_code: str
    user_id: str
    amount: Decimal


# --- Properties ---


@dataclass(frozen=True)
class FindAvailableProperties(Command):
    """Search a city for properties free over a stay for ``num_guests``."""

    city: str
    check_in: date
    check_out: date
    num_guests: int


@dataclass(frozen=True)
class ToggleAvailability(Command):
    """Command to list or unlist a property (its host only)."""

    property_id: str
    host_id: str


# --- Support tickets ---


@dataclass(frozen=True)
class OpenTicket(Command):
    """Command to open a support ticket."""

    user_id: str
    title: str
    description: str


@dataclass(frozen=True)
class ReopenTicket(Command):
    """Command to move a ticket back to OPEN (always rejected)."""

    ticket_id: str
    actor_id: str


@dataclass(frozen=True)
class StartTicketProgress(Command):
    """Command for a moderator to pick up a ticket."""

    ticket_id: str
    actor_id: str


@dataclass(frozen=True)
class SolveTicket(Command):
    """Command for a moderator to mark a ticket solved."""

    ticket_id: str
    actor_id: str


@dataclass(frozen=True)
class CloseTicket(Command):
    """Command for the ticket's owner to close it."""

    ticket_id: str
    actor_id: str


@dataclass(frozen=True)
class ReplyToTicket(Command):
    """Command to post a reply on a ticket that is not closed."""

    ticket_id: str
    author_id: str
    content: str


# --- Role changes ---


@dataclass(frozen=True)
class RequestRoleChange(Command):
    """Command for a client to ask to become a host."""

    user_id: str
    motivation: str


@dataclass(frozen=True)
class AcceptRoleChange(Command):
    """Command for an admin to accept a pending role-change request."""

    request_id: str
    admin_id: str


@dataclass(frozen=True)
class RejectRoleChange(Command):
    """Command for an admin to reject a pending role-change request."""

    request_id: str
    admin_id: str
    motivation: str | None = None


# --- Notifications ---


@dataclass(frozen=True)
class ListNotifications(Command):
    """List a user's notifications, oldest first."""

    recipient: str


@dataclass(frozen=True)
class MarkNotificationRead(Command):
    """Mark one of the user's notifications as read."""

    notification_id: str
    recipient: str
