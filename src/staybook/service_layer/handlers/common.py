"""Helpers shared by the command handlers."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime, timezone

from staybook.domain.entities import Property, UserAccount
from staybook.domain.errors import EntityNotFound, UserUnauthorized
from staybook.domain.events import DomainEvent
from staybook.domain.value_objects import Role
from staybook.interfaces.unit_of_work import AbstractUnitOfWork
from staybook.service_layer.dispatcher import EventDispatcher, EventHandlerError

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

STAFF_ROLES = frozenset({Role.MODERATOR, Role.ADMIN})


def utc_now() -> datetime:
    """Default clock: the current time in UTC."""
    return datetime.now(timezone.utc)


def load_user(
    uow: AbstractUnitOfWork, user_id: str, *, for_update: bool = False
) -> UserAccount:
    """Return the user or raise ``EntityNotFound``."""
    if (user := uow.users.get(user_id, for_update=for_update)) is None:
        raise EntityNotFound("User", user_id)
    return user


def load_property(
    uow: AbstractUnitOfWork, property_id: str, *, for_update: bool = False
) -> Property:
    """Return the property or raise ``EntityNotFound``."""
    if (prop := uow.properties.get(property_id, for_update=for_update)) is None:
        raise EntityNotFound("Property", property_id)
    return prop


def require_role(
    uow: AbstractUnitOfWork, user_id: str, roles: Iterable[Role], action: str
) -> UserAccount:
    """Return the user if their role is one of ``roles``.

    Raises:
        EntityNotFound: If the user does not exist.
        UserUnauthorized: If the user has another role.
    """
    user = load_user(uow, user_id)
    if user.role not in set(roles):
        raise UserUnauthorized(user_id, action)
    return user


def publish_committed(dispatcher: EventDispatcher, events: list[DomainEvent]) -> None:
    """Publish events of a committed transaction.

    Handler faults are logged and swallowed: the state change is already
    durable and side effects are best-effort.
    """
    if not events:
        return
    try:
        dispatcher.publish_events(events)
    except EventHandlerError as exc:
        logger.warning("Side effects incomplete after commit: %s", exc)
