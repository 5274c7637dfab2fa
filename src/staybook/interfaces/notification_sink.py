"""Interface for delivering notifications to users."""

import abc

from staybook.domain.value_objects import Severity

# pylint: disable=too-few-public-methods


class NotificationSink(abc.ABC):
    """Contract for whatever turns a message into a user-visible notification."""

    @abc.abstractmethod
    def create_notification(self, recipient: str, message: str, severity: Severity) -> None:
        """Deliver ``message`` to ``recipient``.

        Args:
            recipient: The user id of the recipient.
            message: Human-readable message text.
            severity: How the message should be presented.
        """
