"""In-memory shared data store for the in-memory repositories."""

from __future__ import annotations

import copy
import threading
from dataclasses import dataclass, field, fields
from typing import Any


@dataclass(slots=True)
class InMemoryData:
    """Shared in-memory backing store for in-memory repositories.

    A single shared instance should be passed to every
    ``InMemoryUnitOfWork`` that is meant to see the same data, the same way
    several SQL units of work share one database.

    Every table is a dict of rows (plain dicts shaped like the SQL tables),
    keyed by primary key. ``lock`` serializes transactions: a unit of work
    holds it from ``__enter__`` to ``__exit__``.
    """

    # keyed by user_id
    users: dict[str, dict[str, Any]] = field(default_factory=dict)

    # keyed by property_id
    properties: dict[str, dict[str, Any]] = field(default_factory=dict)

    # keyed by booking_id
    bookings: dict[str, dict[str, Any]] = field(default_factory=dict)

    # keyed by coupon code
    coupons: dict[str, dict[str, Any]] = field(default_factory=dict)

    # keyed by (coupon_code, scope_key)
    coupon_redemptions: dict[tuple[str, str], dict[str, Any]] = field(
        default_factory=dict
    )

    # keyed by ticket_id
    tickets: dict[str, dict[str, Any]] = field(default_factory=dict)

    # keyed by reply_id
    ticket_replies: dict[str, dict[str, Any]] = field(default_factory=dict)

    # keyed by request_id
    change_role_requests: dict[str, dict[str, Any]] = field(default_factory=dict)

    # keyed by notification_id
    notifications: dict[str, dict[str, Any]] = field(default_factory=dict)

    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def snapshot(self) -> dict[str, Any]:
        """Return a deep copy of every table (not the lock)."""
        return {
            f.name: copy.deepcopy(getattr(self, f.name))
            for f in fields(self)
            if f.name != "lock"
        }

    def restore(self, snapshot: dict[str, Any]) -> None:
        """Put every table back the way ``snapshot`` captured it."""
        for name, table in snapshot.items():
            setattr(self, name, copy.deepcopy(table))
