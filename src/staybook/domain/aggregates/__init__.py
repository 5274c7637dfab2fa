"""Aggregates: the entities whose changes raise domain events or follow a workflow."""

from .base import Aggregate
from .booking import Booking
from .change_role import ChangeRoleRequest
from .ticket import Ticket

__all__ = ["Aggregate", "Booking", "ChangeRoleRequest", "Ticket"]
