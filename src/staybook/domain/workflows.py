"""Workflow state machines for tickets and role-change requests.

Each workflow is a plain transition table ``(state, action) -> next state``.
Anything missing from the table is illegal. Entities only store the current
status tag and ask the machine for the next one.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Generic, TypeVar

from staybook.domain.errors import IllegalStateTransition

S = TypeVar("S", bound=Enum)  # State
A = TypeVar("A", bound=Enum)  # Action


class WorkflowStateMachine(Generic[S, A]):
    """A finite-state machine defined by an explicit transition table.

    Args:
        entity: Name of the entity kind, used in error messages.
        initial: The state new entities start in.
        transitions: Mapping of ``(state, action)`` to the resulting state.
    """

    def __init__(
        self, entity: str, initial: S, transitions: Mapping[tuple[S, A], S]
    ) -> None:
        self.entity = entity
        self.initial = initial
        self._transitions = dict(transitions)

    def next_state(self, state: S, action: A) -> S:
        """Return the state reached by applying ``action`` in ``state``.

        Raises:
            IllegalStateTransition: If the table has no entry for the pair.
        """
        try:
            return self._transitions[(state, action)]
        except KeyError:
            raise IllegalStateTransition(self.entity, state, action) from None

    def is_legal(self, state: S, action: A) -> bool:
        """Return True if ``action`` is allowed in ``state``."""
        return (state, action) in self._transitions

    def is_terminal(self, state: S) -> bool:
        """Return True if no action leads out of ``state``."""
        return not any(source == state for source, _ in self._transitions)


# ============================================================================
#                               Tickets
# ============================================================================


class TicketStatus(Enum):
    """Enumeration of possible ticket statuses."""

    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    SOLVED = "SOLVED"
    CLOSED = "CLOSED"


class TicketAction(Enum):
    """Actions that can be attempted on a ticket."""

    OPEN = "open"
    IN_PROGRESS = "in_progress"
    SOLVED = "solved"
    CLOSED = "closed"


TICKET_WORKFLOW: WorkflowStateMachine[TicketStatus, TicketAction] = (
    WorkflowStateMachine(
        "Ticket",
        TicketStatus.OPEN,
        {
            (TicketStatus.OPEN, TicketAction.IN_PROGRESS): TicketStatus.IN_PROGRESS,
            (TicketStatus.OPEN, TicketAction.SOLVED): TicketStatus.SOLVED,
            (TicketStatus.OPEN, TicketAction.CLOSED): TicketStatus.CLOSED,
            (TicketStatus.IN_PROGRESS, TicketAction.SOLVED): TicketStatus.SOLVED,
            (TicketStatus.IN_PROGRESS, TicketAction.CLOSED): TicketStatus.CLOSED,
            (TicketStatus.SOLVED, TicketAction.IN_PROGRESS): TicketStatus.IN_PROGRESS,
            (TicketStatus.SOLVED, TicketAction.CLOSED): TicketStatus.CLOSED,
        },
    )
)


# ============================================================================
#                           Role-change requests
# ============================================================================


class ChangeRoleStatus(Enum):
    """Enumeration of possible role-change request statuses."""

    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


class ChangeRoleAction(Enum):
    """Actions that can be attempted on a role-change request."""

    PENDING = "pending"
    ACCEPT = "accept"
    REJECT = "reject"


CHANGE_ROLE_WORKFLOW: WorkflowStateMachine[ChangeRoleStatus, ChangeRoleAction] = (
    WorkflowStateMachine(
        "ChangeRoleRequest",
        ChangeRoleStatus.PENDING,
        {
            (ChangeRoleStatus.PENDING, ChangeRoleAction.ACCEPT): ChangeRoleStatus.ACCEPTED,
            (ChangeRoleStatus.PENDING, ChangeRoleAction.REJECT): ChangeRoleStatus.REJECTED,
        },
    )
)
