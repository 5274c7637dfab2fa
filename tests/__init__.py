"""STAYBOOK test suite.

Folder taxonomy
- unit/         : Fast checks of one module, no real I/O beyond in-memory SQLite.
- contract/     : Behaviour every adapter must share (memory, SQLite, PostgreSQL),
                  including the concurrent booking and workflow races.
- integration/  : SQLAlchemy repositories, migrations and bootstrap on real databases.
- e2e/          : The ``staybook`` command as a user runs it (CliRunner).
- fixtures/     : Pytest plugins: engines, seeded marketplace, frozen clock.
- helpers/      : Shared utilities (no tests here).

Each layer's conftest marks its tests (``unit``, ``contract``, ``integration``,
``e2e``). Tests that need PostgreSQL are skipped when Docker is unavailable.
"""
