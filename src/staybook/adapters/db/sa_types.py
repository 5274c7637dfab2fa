"""Column types shared by the STAYBOOK tables."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from sqlalchemy import Numeric
from sqlalchemy.types import DateTime, TypeDecorator

from staybook.adapters.db.dialects import DialectName

if TYPE_CHECKING:
    from sqlalchemy.engine.interfaces import Dialect

__all__ = ["MONEY", "UTCDateTime"]

#: Prices and totals: exact decimals with cents.
MONEY = Numeric(12, 2, asdecimal=True)


def _as_utc(value: datetime) -> datetime:
    """Aware UTC copy of ``value``; naive input is taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class UTCDateTime(TypeDecorator[datetime]):  # pylint: disable=too-many-ancestors
    """A ``DateTime`` that always hands back aware UTC datetimes.

    PostgreSQL stores ``timestamptz``. SQLite has no time zones, so the UTC
    wall time is stored naive and re-tagged as UTC when read.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> Any:
        if value is None:
            return None
        utc = _as_utc(value)
        if DialectName.from_string(dialect.name) is DialectName.SQLITE:
            return utc.replace(tzinfo=None)
        return utc

    def process_result_value(self, value: Any, dialect: Dialect) -> datetime | None:
        if isinstance(value, datetime):
            return _as_utc(value)
        return value

    def process_literal_param(self, value: datetime | None, dialect: Dialect) -> Any:
        return self.process_bind_param(value, dialect)

    @property
    def python_type(self) -> type[datetime]:
        return datetime
