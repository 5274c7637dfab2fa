"""Fixtures for the STAYBOOK command-line tests.

Provides a test-only ``log-demo`` command for the logging tests, a CliRunner,
an isolated filesystem, and a migrated, seeded SQLite database exposed
through ``STAYBOOK_DB_URL``.
"""

import logging
from datetime import date, timedelta

import click
import pytest
from click.testing import CliRunner

from staybook.bootstrap import bootstrap
from staybook.entrypoints.cli.main import staybook
from tests.fixtures.datagen import seed_marketplace

# pylint: disable=redefined-outer-name


@click.command()
def log_demo():
    """Emit one message per level on a STAYBOOK and a third-party logger."""
    logger = logging.getLogger("staybook.demo")
    logger.debug("This is a debug-level test message.")
    logger.info("This is an info-level test message.")
    logger.warning("This is a warning-level test message.")
    logger.error("This is an error-level test message.")
    logger.critical("This is a critical-level test message.")
    third_party_logger = logging.getLogger("some.thirdparty")
    third_party_logger.debug("This is a debug-level third-party test message.")
    third_party_logger.info("This is an info-level third-party test message.")
    third_party_logger.warning("This is a warning-level third-party test message.")
    logger.debug("This is a final debug-level test message.")


def _remove_command_everywhere(group, name: str) -> None:
    """Drop ``name`` from the group and from click-extra's help sections."""
    group.commands.pop(name, None)
    if hasattr(group, "_default_section"):
        group._default_section.commands.pop(name, None)  # pylint: disable=protected-access
    for sec in getattr(group, "_sections", []):
        getattr(sec, "commands", {}).pop(name, None)


@pytest.fixture
def registered_log_demo():
    """Register ``log-demo`` on the top-level group for one test."""
    staybook.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        _remove_command_everywhere(staybook, "log-demo")


@pytest.fixture
def runner():
    """A Click CliRunner."""
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside ``runner.isolated_filesystem()``."""
    with runner.isolated_filesystem():
        yield


@pytest.fixture
def db_env(sqlite_url: str, tmp_path) -> dict[str, str]:
    """Environment pointing the CLI at a seeded SQLite database.

    The flight recorder writes into ``tmp_path`` instead of the user log dir.
    """
    seed_marketplace(bootstrap(sqlite_url).uow_factory())
    return {
        "STAYBOOK_DB_URL": sqlite_url,
        "STAYBOOK_LOG_PATH": str(tmp_path / "latest.log"),
    }


@pytest.fixture
def stay() -> tuple[str, str]:
    """A four-night stay a month from today, as CLI date strings."""
    check_in = date.today() + timedelta(days=30)
    return check_in.isoformat(), (check_in + timedelta(days=4)).isoformat()
