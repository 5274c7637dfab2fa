"""What a new user sees first: ``--version``, ``--help`` and the See Also links."""

from __future__ import annotations

import re
from textwrap import dedent

import pytest

import staybook
from staybook.entrypoints.cli import main

ANSI_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")  # strip SGR styling only


def _normalize(s: str) -> str:
    """Collapse whitespace so Click's re-wrapping does not matter."""
    return re.sub(r"\s+", " ", s.strip())


def test_version(runner):
    result = runner.invoke(main.staybook, ["--version"])
    assert result.exit_code == 0
    assert staybook.__version__ in result.output


def test_help_shows_prose_and_commands(runner):
    """The long HELP text, the usual sections and both subcommand groups."""
    result = runner.invoke(main.staybook, ["--help"])
    assert result.exit_code == 0
    text = ANSI_RE.sub("", result.output)
    # pylint: disable=magic-value-comparison
    assert _normalize(dedent(main.HELP)) in _normalize(text)
    assert "Usage:" in text
    assert "Options:" in text
    assert "booking" in text
    assert "db" in text
    assert "Alembic   :" in text
    assert "SQLAlchemy:" in text
    assert "https://alembic.sqlalchemy.org/" in text


@pytest.mark.parametrize(
    "args",
    [["db", "--help"], ["booking", "--help"], ["booking", "create", "--help"]],
)
def test_subcommand_help(runner, args):
    result = runner.invoke(main.staybook, args)
    assert result.exit_code == 0
    assert "Usage:" in result.output

