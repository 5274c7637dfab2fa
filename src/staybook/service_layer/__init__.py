"""Service layer for STAYBOOK.

Implements application use-cases: command handlers (reservations, tickets,
role changes, notifications), the message bus, the event dispatcher and its
listeners, and transaction boundaries.

Dependency rule: may import `staybook.domain` and `staybook.interfaces`, but
not `staybook.adapters` or `staybook.entrypoints`.
"""
