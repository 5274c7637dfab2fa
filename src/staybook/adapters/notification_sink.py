"""NotificationSink that stores in-app notifications through a unit of work."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from staybook.domain.entities import Notification
from staybook.domain.value_objects import Severity
from staybook.interfaces.id_generator import IdGenerator
from staybook.interfaces.notification_sink import NotificationSink
from staybook.interfaces.unit_of_work import AbstractUnitOfWork
from staybook.service_layer.handlers.common import utc_now

logger = logging.getLogger(__name__)

# pylint: disable=too-few-public-methods


class UnitOfWorkNotificationSink(NotificationSink):
    """Persist each notification in its own short transaction.

    The sink is shared by every thread that publishes events, so it takes a
    unit-of-work *factory* and opens a fresh unit per notification.
    """

    def __init__(
        self,
        uow_factory: Callable[[], AbstractUnitOfWork],
        id_generator: IdGenerator,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._uow_factory = uow_factory
        self._id_generator = id_generator
        self._clock = clock

    def create_notification(self, recipient: str, message: str, severity: Severity) -> None:
        notification = Notification(
            notification_id=self._id_generator.new_id(),
            recipient=recipient,
            message=message,
            severity=severity,
            created_at=self._clock(),
        )
        with self._uow_factory() as uow:
            uow.notifications.add(notification)
            uow.commit()
        logger.debug(
            "Notification %s stored for %s (%s)",
            notification.notification_id,
            recipient,
            severity.value,
        )
