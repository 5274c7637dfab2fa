"""Alembic environment for STAYBOOK.

The target metadata is ``staybook.adapters.db.schema.metadata``. Online runs
go through :func:`staybook.adapters.db.engine.make_engine`, so migrations see
the same SQLite PRAGMAs as the application. SQLite also gets batch mode for
ALTER TABLE.

The database URL is the first of: ``alembic -x url=...``, the
``sqlalchemy.url`` option, ``STAYBOOK_DB_URL``.
"""

import os
from logging.config import fileConfig

from alembic import context

from staybook.adapters.db.dialects import DialectName
from staybook.adapters.db.engine import make_engine
from staybook.adapters.db.schema import metadata
from staybook.config import DB_URL_ENV_VAR

# pylint: disable=no-member

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

COMPARE_OPTIONS = {"compare_type": True, "compare_server_default": True}


def database_url() -> str:
    """Return the URL to migrate, or fail with a hint."""
    candidates = (
        context.get_x_argument(as_dictionary=True).get("url"),
        config.get_main_option("sqlalchemy.url"),
        os.environ.get(DB_URL_ENV_VAR),
    )
    for url in candidates:
        # an unexpanded "%(...)s" placeholder counts as unset
        if url and "%(" not in url:
            return url
    raise RuntimeError(f"Set {DB_URL_ENV_VAR} to your database URL.")


def run_offline() -> None:
    """Write the migration SQL to the script output."""
    context.configure(
        url=database_url(),
        target_metadata=metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **COMPARE_OPTIONS,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_online() -> None:
    """Apply the migrations over a live connection."""
    engine = make_engine(database_url())
    try:
        with engine.connect() as connection:
            context.configure(
                connection=connection,
                target_metadata=metadata,
                render_as_batch=DialectName.from_sqlalchemy(connection)
                is DialectName.SQLITE,
                **COMPARE_OPTIONS,
            )
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_offline()
else:
    run_online()
