"""Handlers for support tickets.

Tickets only change through ``TICKET_WORKFLOW``; an illegal move raises
``IllegalStateTransition`` before anything is written. Saves are versioned,
so two moderators acting on the same ticket cannot silently overwrite each
other.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from staybook.domain.aggregates import Ticket
from staybook.domain.entities import TicketReply
from staybook.domain.errors import EntityNotFound, UserUnauthorized
from staybook.domain.value_objects import Role
from staybook.interfaces.id_generator import IdGenerator
from staybook.interfaces.unit_of_work import AbstractUnitOfWork
from staybook.service_layer import commands

from .common import STAFF_ROLES, Clock, load_user, require_role

logger = logging.getLogger(__name__)


def _load_ticket(uow: AbstractUnitOfWork, ticket_id: str) -> Ticket:
    if (ticket := uow.tickets.get(ticket_id)) is None:
        raise EntityNotFound(Ticket.KIND, ticket_id)
    return ticket


def _save(uow: AbstractUnitOfWork, ticket: Ticket) -> Ticket:
    uow.tickets.update(ticket)
    uow.commit()
    logger.info("Ticket %s is now %s", ticket.aggregate_id, ticket.status.value)
    return ticket


def open_ticket(
    cmd: commands.OpenTicket,
    uow: AbstractUnitOfWork,
    clock: Clock,
    id_generator: IdGenerator,
) -> Ticket:
    """Open a new ticket on behalf of the user."""
    with uow:
        load_user(uow, cmd.user_id)
        ticket = Ticket.open(
            id_generator.new_id(),
            user_id=cmd.user_id,
            title=cmd.title,
            description=cmd.description,
            now=clock(),
        )
        uow.tickets.add(ticket)
        uow.commit()
    logger.info("Ticket %s opened by %s", ticket.aggregate_id, cmd.user_id)
    return ticket


def reopen_ticket(cmd: commands.ReopenTicket, uow: AbstractUnitOfWork) -> Ticket:
    """Move the ticket back to OPEN; the workflow never allows it."""
    with uow:
        ticket = _load_ticket(uow, cmd.ticket_id)
        ticket.reopen()
        return _save(uow, ticket)


def start_ticket_progress(
    cmd: commands.StartTicketProgress, uow: AbstractUnitOfWork
) -> Ticket:
    """A moderator (or admin) takes the ticket in charge."""
    with uow:
        require_role(uow, cmd.actor_id, STAFF_ROLES, "work on tickets")
        ticket = _load_ticket(uow, cmd.ticket_id)
        ticket.start_progress()
        return _save(uow, ticket)


def solve_ticket(cmd: commands.SolveTicket, uow: AbstractUnitOfWork) -> Ticket:
    """A moderator (or admin) marks the ticket solved."""
    with uow:
        require_role(uow, cmd.actor_id, STAFF_ROLES, "solve tickets")
        ticket = _load_ticket(uow, cmd.ticket_id)
        ticket.solve()
        return _save(uow, ticket)


def close_ticket(
    cmd: commands.CloseTicket, uow: AbstractUnitOfWork, clock: Clock
) -> Ticket:
    """The ticket's owner closes it."""
    with uow:
        ticket = _load_ticket(uow, cmd.ticket_id)
        if ticket.user_id != cmd.actor_id:
            raise UserUnauthorized(cmd.actor_id, f"close ticket {cmd.ticket_id}")
        ticket.close(clock())
        return _save(uow, ticket)


def reply_to_ticket(
    cmd: commands.ReplyToTicket,
    uow: AbstractUnitOfWork,
    clock: Clock,
    id_generator: IdGenerator,
) -> TicketReply:
    """Post a reply from the ticket's owner or from staff."""
    with uow:
        author = load_user(uow, cmd.author_id)
        ticket = _load_ticket(uow, cmd.ticket_id)
        if author.user_id != ticket.user_id and author.role not in STAFF_ROLES:
            raise UserUnauthorized(cmd.author_id, f"reply to ticket {cmd.ticket_id}")
        reply = ticket.add_reply(
            id_generator.new_id(),
            author_id=author.user_id,
            content=cmd.content,
            from_moderator=author.role is Role.MODERATOR,
            now=clock(),
        )
        uow.tickets.add_reply(reply)
        uow.commit()
    return reply


COMMAND_HANDLERS: dict[type, Callable[..., object]] = {
    commands.OpenTicket: open_ticket,
    commands.ReopenTicket: reopen_ticket,
    commands.StartTicketProgress: start_ticket_progress,
    commands.SolveTicket: solve_ticket,
    commands.CloseTicket: close_ticket,
    commands.ReplyToTicket: reply_to_ticket,
}
