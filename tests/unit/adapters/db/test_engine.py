"""Tests for the engine factory and its SQLite tuning."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import text
from sqlalchemy.engine import make_url

from staybook.adapters.db.engine import SQLITE_BUSY_TIMEOUT_MS, is_sqlite, make_engine

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

# pylint: disable=magic-value-comparison


@pytest.mark.parametrize(
    "url,expected",
    [
        ("sqlite:///:memory:", True),
        ("sqlite+pysqlite:////tmp/staybook.db", True),
        (make_url("sqlite:///relative.db"), True),
        ("postgresql+psycopg://u:p@localhost/staybook", False),
        (make_url("postgresql://u:p@db:5432/staybook"), False),
    ],
)
def test_is_sqlite(url, expected):
    """Backend detection accepts strings and URL objects."""
    assert is_sqlite(url) is expected


def test_sqlite_connections_are_tuned(sqlite_engine_file: Engine):
    """Every new connection gets the pragmas."""
    with sqlite_engine_file.connect() as conn:
        assert conn.exec_driver_sql("PRAGMA foreign_keys").scalar() == 1
        assert conn.exec_driver_sql("PRAGMA journal_mode").scalar().lower() == "wal"
        assert (
            conn.exec_driver_sql("PRAGMA busy_timeout").scalar()
            == SQLITE_BUSY_TIMEOUT_MS
        )


def test_sqlite_transactions_take_the_write_lock(sqlite_engine_file: Engine):
    """A second writer cannot begin while a transaction is open."""
    with sqlite_engine_file.begin() as conn:
        conn.execute(text("SELECT 1"))
        other = sqlite_engine_file.raw_connection()
        try:
            other.driver_connection.execute("PRAGMA busy_timeout=0")
            with pytest.raises(Exception, match="locked"):
                other.driver_connection.execute("BEGIN IMMEDIATE")
        finally:
            other.close()


def test_foreign_keys_are_enforced(sqlite_engine_file: Engine):
    """A booking for an unknown property is refused by the database."""
    with pytest.raises(Exception, match="FOREIGN KEY"):
        with sqlite_engine_file.begin() as conn:
            conn.execute(
                text(
                    "INSERT INTO properties (property_id, host_id, title, "
                    "price_per_night, max_guests, is_available) "
                    "VALUES ('p', 'nobody', 't', 1, 1, 1)"
                )
            )


def test_make_engine_leaves_other_backends_alone():
    """No SQLite listeners on a Postgres engine (nothing connects here)."""
    engine = make_engine("postgresql+psycopg://u:p@localhost/staybook")
    try:
        assert engine.dialect.name == "postgresql"
    finally:
        engine.dispose()
