"""Tests for reading and acknowledging notifications."""

from __future__ import annotations

from datetime import date

import pytest

from staybook.domain.errors import EntityNotFound
from staybook.service_layer import commands
from tests.fixtures.datagen import GUEST, HOST, booking_cmd
from tests.unit.service_layer.handlers.base import HandlerTestBase


class TestNotifications(HandlerTestBase):
    """list_notifications and mark_notification_read."""

    def _book(self):
        self.bus.handle(booking_cmd(date(2025, 7, 1), date(2025, 7, 5)))

    def test_nothing_yet(self):
        """A new user has no notifications."""
        assert self.notifications(GUEST) == []

    def test_recipient_marks_read(self):
        """Only the targeted notification changes."""
        self._book()
        (note,) = self.notifications(GUEST)
        assert not note.read

        self.bus.handle(
            commands.MarkNotificationRead(
                notification_id=note.notification_id, recipient=GUEST
            )
        )

        assert [n.read for n in self.notifications(GUEST)] == [True]
        assert [n.read for n in self.notifications(HOST)] == [False]

    def test_someone_else_cannot_mark_read(self):
        """Marking another user's notification looks like a missing one."""
        self._book()
        (note,) = self.notifications(GUEST)
        with pytest.raises(EntityNotFound):
            self.bus.handle(
                commands.MarkNotificationRead(
                    notification_id=note.notification_id, recipient=HOST
                )
            )
        assert not self.notifications(GUEST)[0].read

    def test_unknown_notification(self):
        """Unknown ids are EntityNotFound."""
        with pytest.raises(EntityNotFound):
            self.bus.handle(
                commands.MarkNotificationRead(notification_id="nope", recipient=GUEST)
            )
