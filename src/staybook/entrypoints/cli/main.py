"""STAYBOOK CLI entry point.

Defines the top-level ``staybook`` command (via Click-Extra) and registers
the subcommand groups:

- ``staybook db``: forward-only database management (upgrade/current/heads/history/status).
- ``staybook booking``: check availability, book, cancel and list bookings.

Examples
    $ staybook --version
    $ staybook db upgrade
    $ staybook booking create PROPERTY --user USER --check-in 2026-11-01 --check-out 2026-11-05
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from platformdirs import user_log_dir

from staybook import __version__
from staybook.logging import config_console_handler, config_flight_recorder, log_startup

from .booking import booking as booking_group
from .db import db as db_group
from .helpers import hyperlink
from .helpers.log_level_parser import parse_log_level

if TYPE_CHECKING:
    from logging import Handler

logger = logging.getLogger(__name__)


HELP = """STAYBOOK command-line interface.

    STAYBOOK is the booking core of a property-rental marketplace: it keeps
    reservations free of overlaps, redeems coupons exactly once, runs the
    support-ticket and host-promotion workflows, and notifies guests and hosts.
    """


EPILOG = "\b\n" + "\n".join(
    [
        f"{click.style('See Also:', fg='blue', bold=True, underline=True)}",
        "  Alembic   : " + hyperlink("https://alembic.sqlalchemy.org/"),
        "  SQLAlchemy: " + hyperlink("https://docs.sqlalchemy.org/"),
    ]
)

DEFAULT_LOG_PATH = (
    Path(user_log_dir("staybook", appauthor=False, ensure_exists=True)) / "latest.log"
)


def console_level(verbose_count: int, quiet_count: int) -> int:
    """WARNING moved one level per -v (down) or -q (up), kept within DEBUG..CRITICAL."""
    level = logging.WARNING - 10 * verbose_count + 10 * quiet_count
    return max(logging.DEBUG, min(logging.CRITICAL, level))


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
    epilog=EPILOG,
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help="Raise console verbosity one level above WARNING per repetition.",
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help="Lower console verbosity one level below WARNING per repetition.",
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Debug mode: DEBUG console output with timestamps and source paths.",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="File the flight recorder writes to.",
    default=DEFAULT_LOG_PATH,
    envvar="STAYBOOK_LOG_PATH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--flight-recorder-capacity",
    type=int,
    default=2000,
    hidden=True,
    envvar="STAYBOOK_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Capacity of the flight recorder (in number of log records).",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Keep the last N log records in memory at DEBUG granularity and write "
        "them to --log-path when a WARNING or ERROR is logged."
    ),
    default=True,
    show_envvar=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    is_flag=True,
    help="Also write the flight recorder buffer to --log-path on exit.",
    default=False,
    show_default=True,
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Set the minimum level of specific loggers (NAME=LEVEL). Repeatable, "
        "or a comma/space separated list in STAYBOOK_LOGGER_LEVELS."
    ),
    default=("sqlalchemy=WARNING", "alembic=WARNING"),
    envvar="STAYBOOK_LOGGER_LEVELS",
    show_default=True,
    show_envvar=True,
)
@clickx.pass_context
def staybook(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """STAYBOOK command-line interface."""
    level = console_level(verbose_count, quiet_count)
    handlers: list[Handler] = [
        config_console_handler(level=level, debug_mode=debug, color=ctx.color is not False)
    ]
    if flight_recorder:
        handlers.append(
            config_flight_recorder(
                path=log_path,
                capacity=flight_recorder_capacity,
                flush_on_close=force_flush_flight_recorder,
            )
        )

    # the root logger sees everything; handlers and per-logger levels filter
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    log_startup(
        logger,
        app_version=__version__,
        level=level,
        handlers=handlers,
        log_path=log_path,
        flight_recorder=flight_recorder,
        flight_capacity=flight_recorder_capacity if flight_recorder else None,
        force_flush_fr=force_flush_flight_recorder,
        logger_levels=logger_levels,
    )
    ctx.call_on_close(logging.shutdown)


staybook.add_command(db_group)
staybook.add_command(booking_group)
