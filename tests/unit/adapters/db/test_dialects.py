"""Tests for DialectName normalization."""

from types import SimpleNamespace

import pytest

from staybook.adapters.db.dialects import DialectName, UnsupportedDialect


@pytest.mark.parametrize(
    "raw",
    ["postgresql", "postgres", "PG", " postgresql+psycopg ", "postgresql+psycopg2"],
)
def test_postgres_spellings(raw):
    """Aliases and driver suffixes all mean Postgres."""
    assert DialectName.from_string(raw) is DialectName.POSTGRES


@pytest.mark.parametrize("raw", ["sqlite", "SQLite", "sqlite+pysqlite"])
def test_sqlite_spellings(raw):
    """Case and driver suffix are ignored for SQLite too."""
    assert DialectName.from_string(raw) is DialectName.SQLITE


@pytest.mark.parametrize("raw", [None, "", "mysql+pymysql", "oracle", "duckdb"])
def test_unsupported(raw):
    """Anything else is refused, naming the input."""
    with pytest.raises(UnsupportedDialect, match="Unsupported dialect"):
        DialectName.from_string(raw)


def test_members_compare_equal_to_sqlalchemy_names():
    """The enum is a str, so it can be compared to ``dialect.name`` directly."""
    assert DialectName.POSTGRES == "postgresql"
    assert DialectName.SQLITE == "sqlite"


def test_from_sqlalchemy_reads_dialect_name(sqlite_engine_memory):
    """A real engine exposes ``.dialect.name``."""
    assert DialectName.from_sqlalchemy(sqlite_engine_memory) is DialectName.SQLITE


def test_from_sqlalchemy_with_duck_typed_object():
    """Only ``.dialect.name`` is looked at."""
    fake = SimpleNamespace(dialect=SimpleNamespace(name="postgresql"))
    assert DialectName.from_sqlalchemy(fake) is DialectName.POSTGRES  # type: ignore[arg-type]


def test_from_sqlalchemy_without_dialect():
    """Objects with no dialect are refused, naming their type."""
    with pytest.raises(UnsupportedDialect, match="object does not expose"):
        DialectName.from_sqlalchemy(object())  # type: ignore[arg-type]
