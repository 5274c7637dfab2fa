"""Integration tests: SQLAlchemy repositories, Alembic migrations and
``bootstrap()`` against real SQLite files and, with Docker, PostgreSQL.
"""
