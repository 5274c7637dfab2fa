"""Contract tests: one behaviour, every backend.

Each test is parametrized over the in-memory, SQLite and PostgreSQL
applications (see ``tests.fixtures.datagen.BACKENDS``) so the adapters stay
interchangeable, races included.
"""
