"""Handlers for role-change requests (client to host promotion)."""

from __future__ import annotations

import logging
from collections.abc import Callable

from staybook.domain.aggregates import ChangeRoleRequest
from staybook.domain.errors import (
    DuplicatePendingRequest,
    EntityNotFound,
    UserUnauthorized,
)
from staybook.domain.value_objects import Role
from staybook.interfaces.id_generator import IdGenerator
from staybook.interfaces.unit_of_work import AbstractUnitOfWork
from staybook.service_layer import commands
from staybook.service_layer.dispatcher import EventDispatcher

from .common import Clock, load_user, publish_committed, require_role

logger = logging.getLogger(__name__)


def _load_request(uow: AbstractUnitOfWork, request_id: str) -> ChangeRoleRequest:
    if (request := uow.change_roles.get(request_id)) is None:
        raise EntityNotFound(ChangeRoleRequest.KIND, request_id)
    return request


def request_role_change(
    cmd: commands.RequestRoleChange,
    uow: AbstractUnitOfWork,
    clock: Clock,
    id_generator: IdGenerator,
) -> ChangeRoleRequest:
    """Submit a client's request to become a host.

    Raises:
        UserUnauthorized: The user is not a client.
        DuplicatePendingRequest: The user already has a pending request.
    """
    with uow:
        # Lock the user: concurrent requests of the same user queue up here
        user = load_user(uow, cmd.user_id, for_update=True)
        if user.role is not Role.CLIENT:
            raise UserUnauthorized(cmd.user_id, "request a role change")
        if pending := uow.change_roles.find_pending_for_user(cmd.user_id):
            raise DuplicatePendingRequest(cmd.user_id, pending.aggregate_id)

        request = ChangeRoleRequest.submit(
            id_generator.new_id(),
            user_id=cmd.user_id,
            motivation=cmd.motivation,
            now=clock(),
        )
        uow.change_roles.add(request)
        uow.commit()
    logger.info(
        "Role change request %s submitted by %s", request.aggregate_id, cmd.user_id
    )

    return request


def accept_role_change(
    cmd: commands.AcceptRoleChange,
    uow: AbstractUnitOfWork,
    dispatcher: EventDispatcher,
    clock: Clock,
) -> ChangeRoleRequest:
    """Accept a pending request, promote the requester to HOST and publish
    ``CHANGEROLE_ACCEPTED``.
    """
    with uow:
        require_role(uow, cmd.admin_id, {Role.ADMIN}, "accept role change requests")
        request = _load_request(uow, cmd.request_id)
        request.accept(cmd.admin_id, clock())
        uow.change_roles.update(request)
        uow.users.update_role(request.user_id, Role.HOST)
        uow.commit()
        events = request.dequeue_uncommitted()

    logger.info(
        "Role change request %s accepted by %s", request.aggregate_id, cmd.admin_id
    )

    publish_committed(dispatcher, events)
    return request


def reject_role_change(
    cmd: commands.RejectRoleChange,
    uow: AbstractUnitOfWork,
    dispatcher: EventDispatcher,
    clock: Clock,
) -> ChangeRoleRequest:
    """Reject a pending request and publish ``CHANGEROLE_REJECTED``."""
    with uow:
        require_role(uow, cmd.admin_id, {Role.ADMIN}, "reject role change requests")
        request = _load_request(uow, cmd.request_id)
        request.reject(cmd.admin_id, clock(), cmd.motivation)
        uow.change_roles.update(request)
        uow.commit()
        events = request.dequeue_uncommitted()

    logger.info(
        "Role change request %s rejected by %s", request.aggregate_id, cmd.admin_id
    )

    publish_committed(dispatcher, events)
    return request


COMMAND_HANDLERS: dict[type, Callable[..., object]] = {
    commands.RequestRoleChange: request_role_change,
    commands.AcceptRoleChange: accept_role_change,
    commands.RejectRoleChange: reject_role_change,
}
