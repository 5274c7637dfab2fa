"""Plain-text renderings used by the CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.engine import make_url

if TYPE_CHECKING:
    from staybook.domain.aggregates import Booking
    from staybook.domain.entities import Property


def sanitize_url(url: str) -> str:
    """Render a database URL with its password replaced by ``***``.

    Secrets passed as query parameters (``?password=...``) are left as they are.
    """
    return make_url(url).render_as_string(hide_password=True)


def format_booking(booking: Booking) -> str:
    """One line per booking: code, property, stay, party, total and state.

    ``K3Z9Q1M2XA  prop-1  2026-11-01 -> 2026-11-05  2+1  400.00  (active)``
    """
    state = "canceled" if booking.is_canceled else "active"
    return (
        f"{booking.confirmation_code}  {booking.property_id}  "
        f"{booking.check_in} -> {booking.check_out}  "
        f"{booking.num_adults}+{booking.num_children}  "
        f"{booking.total_amount}  ({state})"
    )


def format_property(prop: Property) -> str:
    """``prop-1  Trieste  100.00/night  up to 4  Sea-view flat``"""
    return (
        f"{prop.property_id}  {prop.city}  {prop.price_per_night}/night  "
        f"up to {prop.max_guests}  {prop.title}"
    )
