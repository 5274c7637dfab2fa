"""Service layer handlers."""

from collections.abc import Callable

from .booking_handlers import COMMAND_HANDLERS as BOOKING_COMMAND_HANDLERS
from .change_role_handlers import COMMAND_HANDLERS as CHANGE_ROLE_COMMAND_HANDLERS
from .notification_handlers import COMMAND_HANDLERS as NOTIFICATION_COMMAND_HANDLERS
from .property_handlers import COMMAND_HANDLERS as PROPERTY_COMMAND_HANDLERS
from .ticket_handlers import COMMAND_HANDLERS as TICKET_COMMAND_HANDLERS

__all__ = ["COMMAND_HANDLERS"]

COMMAND_HANDLERS: dict[type, Callable[..., object]] = {
    **BOOKING_COMMAND_HANDLERS,
    **PROPERTY_COMMAND_HANDLERS,
    **TICKET_COMMAND_HANDLERS,
    **CHANGE_ROLE_COMMAND_HANDLERS,
    **NOTIFICATION_COMMAND_HANDLERS,
}
