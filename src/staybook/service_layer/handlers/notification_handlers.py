"""Handlers for reading in-app notifications."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from staybook.domain.entities import Notification
from staybook.domain.errors import EntityNotFound
from staybook.interfaces.unit_of_work import AbstractUnitOfWork
from staybook.service_layer import commands


def list_notifications(
    cmd: commands.ListNotifications, uow: AbstractUnitOfWork
) -> Sequence[Notification]:
    """The recipient's notifications, oldest first."""
    with uow:
        return uow.notifications.list_for_recipient(cmd.recipient)


def mark_notification_read(
    cmd: commands.MarkNotificationRead, uow: AbstractUnitOfWork
) -> None:
    """Mark a notification read; only its recipient may do so."""
    with uow:
        if not uow.notifications.mark_read(cmd.notification_id, cmd.recipient):
            raise EntityNotFound("Notification", cmd.notification_id)
        uow.commit()


COMMAND_HANDLERS: dict[type, Callable[..., object]] = {
    commands.ListNotifications: list_notifications,
    commands.MarkNotificationRead: mark_notification_read,
}
