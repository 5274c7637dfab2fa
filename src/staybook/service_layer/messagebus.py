"""Message bus implementation for handling commands."""

import inspect
import logging
from collections.abc import Callable
from typing import Any

from staybook.domain.errors import DomainError
from staybook.interfaces.unit_of_work import AbstractUnitOfWork

from .commands import Command
from .dispatcher import EventDispatcher

logger = logging.getLogger(__name__)

# pylint: disable=too-few-public-methods


class NoHandlerForCommand(LookupError):
    """Exception raised when no handler is found for a command."""

    def __init__(self, cmd: Command) -> None:
        super().__init__(f"No handler found for command {type(cmd).__name__}")


class MessageBus:
    """A simple message bus for handling commands.

    The main responsibility of the message bus is to route commands to their
    appropriate handlers and hand their result back. It also manages logging
    and error handling during the dispatch process.

    Every ``handle`` call gets a unit of work of its own from ``uow_factory``,
    passed to the handler as ``uow``. No state is kept between calls, so one
    bus (and its dispatcher) can serve many threads at once.

    Args:
        uow_factory: Builds a fresh unit of work for each command.
        dispatcher: The event dispatcher injected into the command handlers.
        command_handlers: A mapping of command types to their handlers.
            Handlers are callables accepting the command and, if they ask
            for it, a ``uow`` keyword; their other dependencies are already
            bound.
    """

    def __init__(
        self,
        uow_factory: Callable[[], AbstractUnitOfWork],
        dispatcher: EventDispatcher,
        command_handlers: dict[type[Command], Callable[..., Any]],
    ) -> None:
        self.uow_factory = uow_factory
        self.dispatcher = dispatcher
        self._command_handlers = command_handlers
        self._takes_uow = {
            command_type
            for command_type, handler in command_handlers.items()
            if "uow" in inspect.signature(handler).parameters
        }

    def handle(self, cmd: Command) -> Any:
        """Handle a command by dispatching it to the appropriate handler.

        Args:
            cmd: The command to handle.

        Returns:
            Whatever the handler returns.

        Raises:
            NoHandlerForCommand: If no handler is found for the command type.
            DomainError: If the handler rejects the command.
            Exception: If the handler raises any other exception.
        """

        if handler := self._command_handlers.get(type(cmd)):
            handler_name = self._get_handler_name(handler)
            logger.debug("Handling command %s with handler %s", cmd, handler_name)
            try:
                if type(cmd) in self._takes_uow:
                    return handler(cmd, uow=self.uow_factory())
                return handler(cmd)
            except DomainError as exc:
                logger.warning(
                    "Command %s rejected by %s: %s [%s]",
                    type(cmd).__name__,
                    handler_name,
                    exc,
                    exc.code,
                )
                raise
            except Exception:  # pylint: disable=broad-except
                logger.exception(
                    "Exception handling command %s with handler %s", cmd, handler_name
                )
                raise
        else:
            logger.error("No handler found for command %s", type(cmd).__name__)
            raise NoHandlerForCommand(cmd)

    @staticmethod
    def _get_handler_name(fn: Callable[..., Any]) -> str:
        if hasattr(fn, "__name__"):
            return fn.__name__
        if hasattr(fn, "func") and hasattr(fn.func, "__name__"):
            return fn.func.__name__
        return repr(fn)
