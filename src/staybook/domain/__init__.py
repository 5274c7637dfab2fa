"""Domain layer for STAYBOOK.

Contains business rules: aggregates, workflow transition tables, pricing,
value objects, domain events and the error taxonomy. This package is
deliberately technology-agnostic.

Dependency rule: do not import from `staybook.adapters` or `staybook.entrypoints`.
"""
