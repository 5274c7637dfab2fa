"""Bootstrap the message bus with handlers, unit of work and event dispatcher."""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from staybook import config
from staybook.adapters.db.engine import make_engine
from staybook.adapters.id_generators import ConfirmationCodeGenerator, ULIDGenerator
from staybook.adapters.notification_sink import UnitOfWorkNotificationSink
from staybook.adapters.repositories import InMemoryData
from staybook.adapters.unit_of_work import InMemoryUnitOfWork, SqlAlchemyUnitOfWork
from staybook.interfaces.unit_of_work import AbstractUnitOfWork
from staybook.service_layer.dispatcher import EventDispatcher
from staybook.service_layer.handlers import COMMAND_HANDLERS
from staybook.service_layer.handlers.common import utc_now
from staybook.service_layer.listeners import NotificationListener
from staybook.service_layer.messagebus import MessageBus

if TYPE_CHECKING:
    from datetime import datetime

    from staybook.interfaces.id_generator import IdGenerator
    from staybook.service_layer.commands import Command


@dataclass(frozen=True)
class AppContainer:
    """A class to hold application wiring constants.

    One container per process: ``message_bus`` opens a unit of work per
    command, so every thread can share it and its single ``dispatcher``.
    """

    message_bus: MessageBus
    dispatcher: EventDispatcher
    uow_factory: Callable[[], AbstractUnitOfWork]


def build_dispatcher(
    uow_factory: Callable[[], AbstractUnitOfWork],
    id_generator: IdGenerator,
    clock: Callable[[], datetime] = utc_now,
) -> EventDispatcher:
    """Build the event dispatcher with the notification listener subscribed."""
    dispatcher = EventDispatcher()
    sink = UnitOfWorkNotificationSink(uow_factory, id_generator, clock)
    NotificationListener(sink).subscribe_to(dispatcher)
    return dispatcher


def build_message_bus(
    uow_factory: Callable[[], AbstractUnitOfWork],
    dispatcher: EventDispatcher,
    command_handlers: Mapping[type[Command], Callable[..., Any]] = COMMAND_HANDLERS,
    *,
    clock: Callable[[], datetime] = utc_now,
    id_generator: IdGenerator | None = None,
    confirmation_code_generator: IdGenerator | None = None,
) -> MessageBus:
    """Build a message bus with injected dependencies.

    Everything but the unit of work is bound here; the bus opens a fresh unit
    of work from ``uow_factory`` for every command it handles.
    """
    dependencies = {
        "dispatcher": dispatcher,
        "clock": clock,
        "id_generator": id_generator or ULIDGenerator(),
        "confirmation_code_generator": (
            confirmation_code_generator or ConfirmationCodeGenerator()
        ),
    }
    injected_command_handlers = {
        command_type: inject_dependencies(handler, dependencies)
        for command_type, handler in command_handlers.items()
    }

    return MessageBus(
        uow_factory,
        dispatcher,
        command_handlers=injected_command_handlers,
    )


def _assemble(
    uow_factory: Callable[[], AbstractUnitOfWork],
    clock: Callable[[], datetime],
) -> AppContainer:
    id_generator = ULIDGenerator()
    dispatcher = build_dispatcher(uow_factory, id_generator, clock)
    message_bus = build_message_bus(
        uow_factory, dispatcher, clock=clock, id_generator=id_generator
    )
    return AppContainer(
        message_bus=message_bus, dispatcher=dispatcher, uow_factory=uow_factory
    )


def bootstrap(
    db_url: str | None = None, *, clock: Callable[[], datetime] = utc_now
) -> AppContainer:
    """Wire the application against the SQL database.

    Args:
        db_url: Database URL; defaults to ``STAYBOOK_DB_URL``.
        clock: Source of the current time.
    """
    engine = make_engine(db_url or config.get_db_url())
    return _assemble(functools.partial(SqlAlchemyUnitOfWork, engine), clock)


def bootstrap_in_memory(
    data: InMemoryData | None = None, *, clock: Callable[[], datetime] = utc_now
) -> AppContainer:
    """Wire the application against an in-memory store (tests, demos)."""
    store = data if data is not None else InMemoryData()
    return _assemble(functools.partial(InMemoryUnitOfWork, store), clock)


def inject_dependencies(
    handler: Callable, dependencies: Mapping[str, object]
) -> Callable:
    """Inject dependencies into a handler function based on its parameters."""
    params = inspect.signature(handler).parameters
    deps = {
        name: dependency for name, dependency in dependencies.items() if name in params
    }
    return functools.partial(handler, **deps)
