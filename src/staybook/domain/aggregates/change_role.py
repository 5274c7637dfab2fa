"""Aggregate representing a request to be promoted from client to host."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar

from staybook.domain.events import EventType
from staybook.domain.workflows import (
    CHANGE_ROLE_WORKFLOW,
    ChangeRoleAction,
    ChangeRoleStatus,
)

from .base import Aggregate

# pylint: disable=too-many-arguments


class ChangeRoleRequest(Aggregate):
    """A user's request to become a host, decided once by an admin."""

    KIND: ClassVar[str] = "ChangeRoleRequest"

    def __init__(
        self,
        aggregate_id: str,
        *,
        user_id: str,
        motivation: str,
        created_at: datetime,
        status: ChangeRoleStatus = ChangeRoleStatus.PENDING,
        fulfilled_by: str | None = None,
        fulfilled_at: datetime | None = None,
        version: int = 0,
    ) -> None:
        super().__init__(aggregate_id, version)
        self.user_id = user_id
        self.motivation = motivation
        self.created_at = created_at
        self.status = status
        self.fulfilled_by = fulfilled_by
        self.fulfilled_at = fulfilled_at

    # --- Construction Paths ---

    @classmethod
    def submit(
        cls, aggregate_id: str, *, user_id: str, motivation: str, now: datetime
    ) -> ChangeRoleRequest:
        """Submit a new, pending request."""
        return cls(
            aggregate_id,
            user_id=user_id,
            motivation=motivation,
            created_at=now,
            status=CHANGE_ROLE_WORKFLOW.initial,
        )

    # --- State Transitions ---

    def mark_pending(self) -> None:
        """Put the request back to PENDING. Never legal."""
        self.status = CHANGE_ROLE_WORKFLOW.next_state(
            self.status, ChangeRoleAction.PENDING
        )

    def accept(self, admin_id: str, now: datetime) -> None:
        """Accept the request and record ``CHANGEROLE_ACCEPTED``."""
        self.status = CHANGE_ROLE_WORKFLOW.next_state(
            self.status, ChangeRoleAction.ACCEPT
        )
        self._fulfil(admin_id, now)
        self._record(EventType.CHANGEROLE_ACCEPTED)

    def reject(self, admin_id: str, now: datetime, motivation: str | None = None) -> None:
        """Reject the request and record ``CHANGEROLE_REJECTED``.

        A rejection motivation, when given, replaces the requester's one.
        """
        self.status = CHANGE_ROLE_WORKFLOW.next_state(
            self.status, ChangeRoleAction.REJECT
        )
        self._fulfil(admin_id, now)
        if motivation is not None:
            self.motivation = motivation
        self._record(EventType.CHANGEROLE_REJECTED)

    # --- Internal Helpers ---

    def _fulfil(self, admin_id: str, now: datetime) -> None:
        self.fulfilled_by = admin_id
        self.fulfilled_at = now
