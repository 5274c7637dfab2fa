"""Tests for the role-change (client to host) handlers."""

from __future__ import annotations

import pytest

from staybook.domain.errors import (
    DuplicatePendingRequest,
    EntityNotFound,
    IllegalStateTransition,
    UserUnauthorized,
)
from staybook.domain.value_objects import Role, Severity
from staybook.domain.workflows import ChangeRoleStatus
from staybook.service_layer import commands
from tests.fixtures.datagen import ADMIN, FIXED_NOW, GUEST, GUEST_2, HOST, MODERATOR
from tests.unit.service_layer.handlers.base import HandlerTestBase

# pylint: disable=magic-value-comparison


class TestRoleChange(HandlerTestBase):
    """Submitting and deciding role-change requests."""

    def _request(self, user_id: str = GUEST):
        return self.bus.handle(
            commands.RequestRoleChange(user_id=user_id, motivation="I own a cabin")
        )

    def _role_of(self, user_id: str) -> Role:
        with self.app.uow_factory() as uow:
            return uow.users.get(user_id).role

    def test_client_submits_a_pending_request(self):
        """Requests start PENDING, unfulfilled."""
        request = self._request()
        assert request.status is ChangeRoleStatus.PENDING
        assert request.created_at == FIXED_NOW
        assert request.fulfilled_by is None

    def test_one_pending_request_at_a_time(self):
        """A second request while one is pending is refused."""
        first = self._request()
        with pytest.raises(DuplicatePendingRequest) as excinfo:
            self._request()
        assert excinfo.value.request_id == first.aggregate_id
        # other users are not affected
        self._request(GUEST_2)

    @pytest.mark.parametrize("user_id", [HOST, MODERATOR, ADMIN])
    def test_only_clients_can_ask(self, user_id):
        """Hosts and staff have nothing to ask for."""
        with pytest.raises(UserUnauthorized):
            self._request(user_id)

    def test_unknown_user(self):
        """The requester must exist."""
        with pytest.raises(EntityNotFound):
            self._request("nobody")

    def test_admin_accepts_and_user_becomes_host(self):
        """Acceptance promotes the requester and tells them."""
        request = self._request()
        accepted = self.bus.handle(
            commands.AcceptRoleChange(request_id=request.aggregate_id, admin_id=ADMIN)
        )

        assert accepted.status is ChangeRoleStatus.ACCEPTED
        assert (accepted.fulfilled_by, accepted.fulfilled_at) == (ADMIN, FIXED_NOW)
        assert self._role_of(GUEST) is Role.HOST
        (note,) = self.notifications(GUEST)
        assert note.message == "Your role change request has been accepted!"
        assert note.severity is Severity.SUCCESS
        # hosts cannot ask again
        with pytest.raises(UserUnauthorized):
            self._request()

    def test_admin_rejects_with_reason(self):
        """Rejection keeps the role, records the reason, and allows a new request."""
        request = self._request()
        rejected = self.bus.handle(
            commands.RejectRoleChange(
                request_id=request.aggregate_id,
                admin_id=ADMIN,
                motivation="Please add a listing first",
            )
        )

        assert rejected.status is ChangeRoleStatus.REJECTED
        assert rejected.motivation == "Please add a listing first"
        assert self._role_of(GUEST) is Role.CLIENT
        (note,) = self.notifications(GUEST)
        assert note.message == "Your role change request has been rejected."
        assert note.severity is Severity.ERROR
        assert self._request().status is ChangeRoleStatus.PENDING

    @pytest.mark.parametrize("actor", [MODERATOR, HOST, GUEST_2])
    def test_only_admins_decide(self, actor):
        """Nobody but an admin may accept or reject."""
        request = self._request()
        rid = request.aggregate_id
        with pytest.raises(UserUnauthorized):
            self.bus.handle(commands.AcceptRoleChange(request_id=rid, admin_id=actor))
        with pytest.raises(UserUnauthorized):
            self.bus.handle(commands.RejectRoleChange(request_id=rid, admin_id=actor))
        assert self._role_of(GUEST) is Role.CLIENT
        assert self.notifications(GUEST) == []

    def test_decision_is_final(self):
        """A decided request cannot be decided again."""
        rid = self._request().aggregate_id
        self.bus.handle(commands.RejectRoleChange(request_id=rid, admin_id=ADMIN))
        with pytest.raises(IllegalStateTransition):
            self.bus.handle(commands.AcceptRoleChange(request_id=rid, admin_id=ADMIN))
        assert self._role_of(GUEST) is Role.CLIENT
        assert len(self.notifications(GUEST)) == 1

    def test_unknown_request(self):
        """Deciding a missing request is EntityNotFound."""
        with pytest.raises(EntityNotFound):
            self.bus.handle(commands.AcceptRoleChange(request_id="nope", admin_id=ADMIN))
