"""Repository adapters: in-memory and SQLAlchemy implementations."""

from .memory import (
    DuplicateKeyError,
    InMemoryBookingRepository,
    InMemoryChangeRoleRepository,
    InMemoryCouponRepository,
    InMemoryNotificationRepository,
    InMemoryPropertyRepository,
    InMemoryTicketRepository,
    InMemoryUserRepository,
)
from .memory_store import InMemoryData
from .sqlalchemy_repositories import (
    SqlAlchemyBookingRepository,
    SqlAlchemyChangeRoleRepository,
    SqlAlchemyCouponRepository,
    SqlAlchemyNotificationRepository,
    SqlAlchemyPropertyRepository,
    SqlAlchemyTicketRepository,
    SqlAlchemyUserRepository,
)

__all__ = [
    "DuplicateKeyError",
    "InMemoryBookingRepository",
    "InMemoryChangeRoleRepository",
    "InMemoryCouponRepository",
    "InMemoryData",
    "InMemoryNotificationRepository",
    "InMemoryPropertyRepository",
    "InMemoryTicketRepository",
    "InMemoryUserRepository",
    "SqlAlchemyBookingRepository",
    "SqlAlchemyChangeRoleRepository",
    "SqlAlchemyCouponRepository",
    "SqlAlchemyNotificationRepository",
    "SqlAlchemyPropertyRepository",
    "SqlAlchemyTicketRepository",
    "SqlAlchemyUserRepository",
]
