"""Pytest fixtures for service layer handler tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from staybook.bootstrap import AppContainer
    from staybook.service_layer.messagebus import MessageBus


@pytest.fixture
def bus(memory_app: AppContainer) -> MessageBus:
    """The message bus of the seeded in-memory application."""
    return memory_app.message_bus
