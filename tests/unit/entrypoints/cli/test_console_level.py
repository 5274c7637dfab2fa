"""Console threshold from the -v/-q counts."""

import logging

import pytest

from staybook.entrypoints.cli.main import console_level


@pytest.mark.parametrize(
    "verbose, quiet, expected",
    [
        (0, 0, logging.WARNING),
        (1, 0, logging.INFO),
        (2, 0, logging.DEBUG),
        (5, 0, logging.DEBUG),
        (0, 1, logging.ERROR),
        (0, 9, logging.CRITICAL),
        (2, 1, logging.INFO),
    ],
)
def test_console_level(verbose, quiet, expected):
    assert console_level(verbose, quiet) == expected
