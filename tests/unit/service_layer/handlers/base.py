"""Base class for handler tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from staybook.service_layer import commands

if TYPE_CHECKING:
    from staybook.bootstrap import AppContainer
    from staybook.domain.entities import Notification
    from staybook.service_layer.messagebus import MessageBus


class HandlerTestBase:
    """Fresh application per test, wired on the seeded in-memory store.

    Subclasses get ``self.app`` and ``self.bus``; the store is seeded with
    the marketplace from ``tests.fixtures.datagen`` and the clock is frozen at
    ``FIXED_NOW``.
    """

    app: AppContainer
    bus: MessageBus

    @pytest.fixture(autouse=True)
    def _attach_app(self, memory_app: AppContainer):
        self.app = memory_app
        self.bus = memory_app.message_bus

    def notifications(self, recipient: str) -> list[Notification]:
        """The recipient's notifications, oldest first."""
        return list(self.bus.handle(commands.ListNotifications(recipient=recipient)))

    def messages(self, recipient: str) -> list[str]:
        """Just the text of the recipient's notifications."""
        return [n.message for n in self.notifications(recipient)]
