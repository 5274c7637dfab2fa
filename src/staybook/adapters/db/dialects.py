"""The two database backends STAYBOOK runs on.

Code that must branch on the backend (coupon redemption upserts, SQLite's
naive datetimes, batch migrations) compares :class:`DialectName` members
rather than raw strings.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine


class UnsupportedDialect(Exception):
    """The backend is neither PostgreSQL nor SQLite."""


class DialectName(str, Enum):
    """Supported SQLAlchemy dialects, valued by SQLAlchemy's own names."""

    POSTGRES = "postgresql"
    SQLITE = "sqlite"

    @classmethod
    def from_string(cls, dialect_str: str) -> DialectName:
        """Map ``"postgres"``, ``"postgresql+psycopg"``, ``"sqlite"``... to a member.

        Raises:
            UnsupportedDialect: For anything else.
        """
        backend, _, _driver = (dialect_str or "").strip().lower().partition("+")
        try:
            return _ALIASES[backend]
        except KeyError:
            raise UnsupportedDialect(f"Unsupported dialect: {dialect_str!r}") from None

    @classmethod
    def from_sqlalchemy(cls, obj: Engine | Connection) -> DialectName:
        """The dialect of an Engine or Connection (anything with ``.dialect.name``)."""
        dialect = getattr(obj, "dialect", None)
        if dialect is None or not hasattr(dialect, "name"):
            raise UnsupportedDialect(
                f"Object {type(obj).__name__} does not expose .dialect.name"
            )
        return cls.from_string(dialect.name)


_ALIASES = {
    "postgresql": DialectName.POSTGRES,
    "postgres": DialectName.POSTGRES,
    "pg": DialectName.POSTGRES,
    "sqlite": DialectName.SQLITE,
}
