"""Settings read from the environment, and fixed application constants.

``STAYBOOK_DB_URL`` is the only required setting. The CLI reads its logging
settings (``STAYBOOK_LOG_PATH``, ``STAYBOOK_LOGGER_LEVELS``...) through Click.
"""

import os
import sys
from importlib.resources import files
from typing import TextIO

from alembic.config import Config

DB_URL_ENV_VAR = "STAYBOOK_DB_URL"

#: Package holding ``env.py`` and ``versions/``.
MIGRATIONS_PACKAGE = "staybook.adapters.db.alembic"

# Booking confirmation codes
CONFIRMATION_CODE_LENGTH = 10
CONFIRMATION_CODE_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
CONFIRMATION_CODE_MAX_ATTEMPTS = 5


class DatabaseUrlNotSetError(Exception):
    """``STAYBOOK_DB_URL`` is unset or empty."""


def get_db_url() -> str:
    """Return ``STAYBOOK_DB_URL``.

    Raises:
        DatabaseUrlNotSetError: If the variable is unset or empty.
    """
    if not (url := os.environ.get(DB_URL_ENV_VAR)):
        raise DatabaseUrlNotSetError
    return url


def build_alembic_config(
    db_url: str | None = None, stdout: TextIO = sys.stdout
) -> Config:
    """Alembic configuration for the migrations shipped in the package.

    No ``alembic.ini`` is involved; only ``script_location`` and, when given,
    ``sqlalchemy.url`` are set.

    Args:
        db_url: Database to migrate or inspect. Leave out for commands that
            only read the scripts (``heads``, offline ``history``).
        stdout: Where Alembic prints its report.
    """
    cfg = Config(stdout=stdout)
    cfg.set_main_option("script_location", str(files(MIGRATIONS_PACKAGE)))
    if db_url is not None:
        # ConfigParser interpolation: a literal "%" (e.g. in a password) is "%%"
        cfg.set_main_option("sqlalchemy.url", db_url.replace("%", "%%"))
    return cfg
