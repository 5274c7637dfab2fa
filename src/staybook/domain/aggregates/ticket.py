"""Aggregate representing a support ticket."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar

from staybook.domain.entities import TicketReply
from staybook.domain.errors import IllegalStateTransition
from staybook.domain.workflows import TICKET_WORKFLOW, TicketAction, TicketStatus

from .base import Aggregate

# pylint: disable=too-many-arguments


class Ticket(Aggregate):
    """A support ticket opened by a user and handled by moderators.

    All status changes go through ``TICKET_WORKFLOW``. Entering CLOSED stamps
    ``closing_date``, whichever state the ticket was closed from.
    """

    KIND: ClassVar[str] = "Ticket"

    def __init__(
        self,
        aggregate_id: str,
        *,
        user_id: str,
        title: str,
        description: str,
        creation_date: datetime,
        status: TicketStatus = TicketStatus.OPEN,
        closing_date: datetime | None = None,
        version: int = 0,
    ) -> None:
        super().__init__(aggregate_id, version)
        self.user_id = user_id
        self.title = title
        self.description = description
        self.creation_date = creation_date
        self.status = status
        self.closing_date = closing_date

    # --- Construction Paths ---

    @classmethod
    def open(
        cls,
        aggregate_id: str,
        *,
        user_id: str,
        title: str,
        description: str,
        now: datetime,
    ) -> Ticket:
        """Open a new ticket."""
        return cls(
            aggregate_id,
            user_id=user_id,
            title=title,
            description=description,
            creation_date=now,
            status=TICKET_WORKFLOW.initial,
        )

    # --- State Transitions ---

    def reopen(self) -> None:
        """Move back to OPEN. No state allows this; kept for completeness."""
        self._transition(TicketAction.OPEN)

    def start_progress(self) -> None:
        """A moderator picks the ticket up."""
        self._transition(TicketAction.IN_PROGRESS)

    def solve(self) -> None:
        """Mark the issue as solved."""
        self._transition(TicketAction.SOLVED)

    def close(self, now: datetime) -> None:
        """Close the ticket and stamp the closing date."""
        self._transition(TicketAction.CLOSED)
        self.closing_date = now

    def add_reply(
        self,
        reply_id: str,
        *,
        author_id: str,
        content: str,
        from_moderator: bool,
        now: datetime,
    ) -> TicketReply:
        """Create a reply on this ticket.

        Raises:
            IllegalStateTransition: If the ticket is closed.
        """
        if self.status is TicketStatus.CLOSED:
            raise IllegalStateTransition(self.KIND, self.status, "reply")
        return TicketReply(
            reply_id=reply_id,
            ticket_id=self.aggregate_id,
            author_id=author_id,
            content=content,
            from_moderator=from_moderator,
            created_at=now,
        )

    # --- Internal Helpers ---

    def _transition(self, action: TicketAction) -> None:
        self.status = TICKET_WORKFLOW.next_state(self.status, action)
