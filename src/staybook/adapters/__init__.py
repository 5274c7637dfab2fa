"""Adapters (infrastructure) for STAYBOOK.

Concrete implementations of the interfaces: in-memory and SQLAlchemy
repositories and units of work, the database engine, schema and migrations,
id generators and the notification sink.

Dependency rule: may import `staybook.domain` and `staybook.interfaces`; the
domain must not import this package.
"""
