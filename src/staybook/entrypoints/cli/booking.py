"""STAYBOOK booking CLI: search, availability, booking, cancellation, listings.

Every command wires the application against ``STAYBOOK_DB_URL`` (see
``staybook.bootstrap``) and sends one command through the message bus.
Domain errors are reported as ``Error: <message> [<code>]`` with exit code 1;
the bracketed code is stable, the message is not.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import click
import click_extra as clickx

from staybook.bootstrap import AppContainer, bootstrap
from staybook.domain.errors import DomainError
from staybook.service_layer import commands

from .db import get_checked_url
from .helpers import format_booking, format_property, success, warn

DATE = click.DateTime(formats=["%Y-%m-%d"])


@contextmanager
def domain_errors() -> Iterator[None]:
    """Turn domain errors into ``ClickException``s."""
    try:
        yield
    except DomainError as e:
        raise click.ClickException(f"{e} [{e.code}]") from e


def _app() -> AppContainer:
    return bootstrap(get_checked_url())


@click.group(cls=clickx.ExtraGroup)
def booking() -> None:
    """Booking commands."""


@booking.command()
@click.argument("property_id")
@click.option("--check-in", type=DATE, required=True, help="First night (YYYY-MM-DD).")
@click.option("--check-out", type=DATE, required=True, help="Departure day (YYYY-MM-DD).")
@click.option("--guests", type=click.IntRange(min=1), default=1, show_default=True)
def availability(property_id: str, check_in, check_out, guests: int) -> None:
    """Tell whether PROPERTY_ID can be booked for the stay."""
    with domain_errors():
        available = _app().message_bus.handle(
            commands.CheckAvailability(
                property_id=property_id,
                check_in=check_in.date(),
                check_out=check_out.date(),
                num_guests=guests,
            )
        )
    click.echo("available" if available else "unavailable")


@booking.command()
@click.argument("property_id")
@click.option("--user", "user_id", required=True, help="Guest user id.")
@click.option("--check-in", type=DATE, required=True, help="First night (YYYY-MM-DD).")
@click.option("--check-out", type=DATE, required=True, help="Departure day (YYYY-MM-DD).")
@click.option("--adults", type=int, default=1, show_default=True)
@click.option("--children", type=int, default=0, show_default=True)
@click.option("--coupon", "coupon_code", default=None, help="Coupon code to redeem.")
def create(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    property_id: str,
    user_id: str,
    check_in,
    check_out,
    adults: int,
    children: int,
    coupon_code: str | None,
) -> None:
    """Book PROPERTY_ID and print the confirmation code."""
    with domain_errors():
        result = _app().message_bus.handle(
            commands.CreateBooking(
                property_id=property_id,
                user_id=user_id,
                check_in=check_in.date(),
                check_out=check_out.date(),
                num_adults=adults,
                num_children=children,
                coupon_code=coupon_code,
            )
        )
    success(f"Booking confirmed, total {result.total_amount}")
    click.echo(result.confirmation_code)


@booking.command()
@click.argument("confirmation_code")
@click.option("--user", "user_id", required=True, help="Guest or host user id.")
def cancel(confirmation_code: str, user_id: str) -> None:
    """Cancel the booking with CONFIRMATION_CODE."""
    with domain_errors():
        _app().message_bus.handle(
            commands.CancelBooking(
                confirmation_code=confirmation_code, requesting_user_id=user_id
            )
        )
    success(f"Booking {confirmation_code} canceled")


@booking.command(name="list")
@click.option("--user", "user_id", default=None, help="List the user's bookings.")
@click.option("--host", "host_id", default=None, help="List bookings on the host's properties.")
def list_(user_id: str | None, host_id: str | None) -> None:
    """List bookings of a guest (--user) or of a host (--host)."""
    if (user_id is None) == (host_id is None):
        raise click.UsageError("Pass exactly one of --user or --host.")
    cmd: commands.Command = (
        commands.ListUserBookings(user_id=user_id)
        if user_id is not None
        else commands.ListHostBookings(host_id=host_id)  # type: ignore[arg-type]
    )
    with domain_errors():
        bookings = _app().message_bus.handle(cmd)
    for b in bookings:
        click.echo(format_booking(b))


@booking.command()
@click.option("--city", required=True, help="City to search (exact match).")
@click.option("--check-in", type=DATE, required=True, help="First night (YYYY-MM-DD).")
@click.option("--check-out", type=DATE, required=True, help="Departure day (YYYY-MM-DD).")
@click.option("--guests", type=click.IntRange(min=1), default=1, show_default=True)
def search(city: str, check_in, check_out, guests: int) -> None:
    """List the properties in CITY free for the whole stay, cheapest first."""
    with domain_errors():
        found = _app().message_bus.handle(
            commands.FindAvailableProperties(
                city=city,
                check_in=check_in.date(),
                check_out=check_out.date(),
                num_guests=guests,
            )
        )
    if not found:
        warn(f"No properties available in {city}")
    for prop in found:
        click.echo(format_property(prop))


@booking.command()
@click.argument("property_id")
@click.option("--host", "host_id", required=True, help="Host user id.")
def toggle(property_id: str, host_id: str) -> None:
    """List or unlist PROPERTY_ID (its host only)."""
    with domain_errors():
        prop = _app().message_bus.handle(
            commands.ToggleAvailability(property_id=property_id, host_id=host_id)
        )
    state = "activated" if prop.is_available else "deactivated"
    success(f"Property {prop.property_id} {state}")
