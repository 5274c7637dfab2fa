"""Handlers for property search and listing."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable

from staybook.domain.entities import Property
from staybook.domain.errors import InvalidBookingRequest, UserUnauthorized
from staybook.domain.value_objects import StayPeriod
from staybook.interfaces.unit_of_work import AbstractUnitOfWork
from staybook.service_layer import commands

from .common import load_property

logger = logging.getLogger(__name__)


def find_available_properties(
    cmd: commands.FindAvailableProperties, uow: AbstractUnitOfWork
) -> list[Property]:
    """Listed properties in the city that are free for the whole stay.

    Cheapest first. The city must match exactly.

    Raises:
        InvalidBookingRequest: Empty stay or no guests.
    """
    period = StayPeriod(cmd.check_in, cmd.check_out)
    if cmd.num_guests < 1:
        raise InvalidBookingRequest("At least one guest is required.")
    with uow:
        found = uow.properties.find_available(cmd.city, period, cmd.num_guests)
    logger.debug(
        "%d properties available in %s for %s..%s",
        len(found),
        cmd.city,
        cmd.check_in,
        cmd.check_out,
    )
    return found


def toggle_availability(
    cmd: commands.ToggleAvailability, uow: AbstractUnitOfWork
) -> Property:
    """Flip ``is_available`` and return the property as stored.

    Existing bookings are kept; an unlisted property only stops taking new ones.

    Raises:
        EntityNotFound: Unknown property.
        UserUnauthorized: The caller does not host the property.
    """
    with uow:
        prop = load_property(uow, cmd.property_id, for_update=True)
        if prop.host_id != cmd.host_id:
            raise UserUnauthorized(
                cmd.host_id, f"change availability of property {cmd.property_id}"
            )
        prop = dataclasses.replace(prop, is_available=not prop.is_available)
        uow.properties.set_available(prop.property_id, prop.is_available)
        uow.commit()

    logger.info(
        "Property %s %s by %s",
        prop.property_id,
        "activated" if prop.is_available else "deactivated",
        cmd.host_id,
    )
    return prop


COMMAND_HANDLERS: dict[type, Callable[..., object]] = {
    commands.FindAvailableProperties: find_available_properties,
    commands.ToggleAvailability: toggle_availability,
}
