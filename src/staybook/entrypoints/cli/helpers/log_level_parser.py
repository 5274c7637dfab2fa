"""Parsing of ``-L NAME=LEVEL`` logger-level options.

Values may be repeated (``-L sqlalchemy=INFO -L alembic=DEBUG``) or packed
into one comma/space separated string (``STAYBOOK_LOGGER_LEVELS``).
"""

import logging
import re
from collections.abc import Iterable

import click

#: Third-party loggers that are chatty at INFO; overridable from the CLI.
DEFAULT_LIB_LEVELS = {
    "sqlalchemy": logging.WARNING,
    "alembic": logging.WARNING,
    "testcontainers": logging.WARNING,
}

_SEPARATORS = re.compile(r"[,\s]+")


def split_items(value: str | Iterable[str]) -> list[str]:
    """Flatten one string or several into non-empty NAME=LEVEL items."""
    chunks = [value] if isinstance(value, str) else list(value)
    return [item for chunk in chunks for item in _SEPARATORS.split(chunk) if item]


def to_level(level_name: str) -> int:
    """Convert a level name (any case) to its numeric value.

    Raises:
        click.BadParameter: If the name is not a standard logging level.
    """
    level = logging.getLevelName(level_name.strip().upper())
    if not isinstance(level, int):
        raise click.BadParameter(f"Invalid log level: {level_name}")
    return level


def parse_log_level(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: str | Iterable[str],
) -> dict[str, int]:
    """Click callback: merge ``DEFAULT_LIB_LEVELS`` with the given overrides.

    Returns:
        Mapping of logger name to numeric level.

    Raises:
        click.BadParameter: On an item without ``=`` or with an unknown level.
    """
    levels = dict(DEFAULT_LIB_LEVELS)
    for item in split_items(value):
        name, sep, level_name = item.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"Expected NAME=LEVEL, got {item!r}")
        levels[name.strip()] = to_level(level_name)
    return levels
