"""The ``staybook booking`` commands against a seeded SQLite database.

The seeded marketplace is described in ``tests/fixtures/datagen.py``. These
runs use the real clock, so stays are booked a month ahead of today.
"""

from __future__ import annotations

import pytest

from staybook.entrypoints.cli.main import staybook
from tests.fixtures.datagen import (
    CITY,
    GUEST,
    GUEST_2,
    HOST,
    HOST_2,
    PROPERTY,
    UNLISTED_PROPERTY,
)
from tests.helpers.cli import assert_in_output, confirmation_code

# pylint: disable=magic-value-comparison


def _create(runner, env, stay, *extra):
    check_in, check_out = stay
    return runner.invoke(
        staybook,
        [
            "booking",
            "create",
            PROPERTY,
            "--user",
            GUEST,
            "--check-in",
            check_in,
            "--check-out",
            check_out,
            *extra,
        ],
        env=env,
    )


def _availability(runner, env, stay, *extra):
    check_in, check_out = stay
    return runner.invoke(
        staybook,
        [
            "booking",
            "availability",
            PROPERTY,
            "--check-in",
            check_in,
            "--check-out",
            check_out,
            *extra,
        ],
        env=env,
    )


def test_book_list_and_cancel(runner, db_env, stay):
    """A guest books a stay, both sides see it, the guest cancels it."""
    result = _availability(runner, db_env, stay, "--guests", "3")
    assert result.exit_code == 0, result.output
    assert result.output.strip().splitlines()[-1] == "available"

    result = _create(runner, db_env, stay, "--adults", "2", "--children", "1")
    assert result.exit_code == 0, result.output
    assert "Booking confirmed, total 400.00" in result.output
    code = confirmation_code(result.output)

    result = _availability(runner, db_env, stay)
    assert result.output.strip().splitlines()[-1] == "unavailable"

    for who in (["--user", GUEST], ["--host", HOST]):
        result = runner.invoke(staybook, ["booking", "list", *who], env=db_env)
        assert result.exit_code == 0, result.output
        assert_in_output(
            rf"{code}  {PROPERTY}  {stay[0]} -> {stay[1]}  2\+1", result.output
        )
        assert "(active)" in result.output

    result = runner.invoke(
        staybook, ["booking", "cancel", code, "--user", GUEST], env=db_env
    )
    assert result.exit_code == 0, result.output
    assert f"Booking {code} canceled" in result.output

    result = runner.invoke(staybook, ["booking", "list", "--user", GUEST], env=db_env)
    assert f"{code}  {PROPERTY}" in result.output
    assert "(canceled)" in result.output

    # the dates are free again
    result = _availability(runner, db_env, stay)
    assert result.output.strip().splitlines()[-1] == "available"


def test_overlapping_stay_is_refused(runner, db_env, stay):
    assert _create(runner, db_env, stay).exit_code == 0

    result = _create(runner, db_env, stay)
    assert result.exit_code == 1
    assert "[unavailable_property]" in result.output


@pytest.mark.parametrize(
    "extra, error_code",
    [
        (["--coupon", "NOPE"], "coupon_not_found"),
        (["--coupon", "SAVE10"], "coupon_expired"),
        (["--adults", "0"], "invalid_booking_request"),
        (["--adults", "4", "--children", "1"], "unavailable_property"),
    ],
    ids=["unknown-coupon", "expired-coupon", "no-adult", "too-many-guests"],
)
def test_rejected_bookings_report_the_error_code(
    runner, db_env, stay, extra, error_code
):
    """Domain errors exit with 1 and end with their stable code."""
    result = _create(runner, db_env, stay, *extra)
    assert result.exit_code == 1
    assert f"[{error_code}]" in result.output

    # nothing was booked
    result = runner.invoke(staybook, ["booking", "list", "--user", GUEST], env=db_env)
    assert result.exit_code == 0
    assert "(active)" not in result.output


def test_only_guest_or_host_can_cancel(runner, db_env, stay):
    code = confirmation_code(_create(runner, db_env, stay).output)
    for outsider in (GUEST_2, HOST_2):
        result = runner.invoke(
            staybook, ["booking", "cancel", code, "--user", outsider], env=db_env
        )
        assert result.exit_code == 1
        assert "[user_unauthorized]" in result.output

    result = runner.invoke(
        staybook, ["booking", "cancel", code, "--user", HOST], env=db_env
    )
    assert result.exit_code == 0, result.output


def test_unknown_confirmation_code(runner, db_env):
    result = runner.invoke(
        staybook, ["booking", "cancel", "ZZZZZZZZZZ", "--user", GUEST], env=db_env
    )
    assert result.exit_code == 1
    assert "[entity_not_found]" in result.output


@pytest.mark.parametrize(
    "args",
    [["booking", "list"], ["booking", "list", "--user", GUEST, "--host", HOST]],
    ids=["neither", "both"],
)
def test_list_needs_exactly_one_side(runner, db_env, args):
    result = runner.invoke(staybook, args, env=db_env)
    assert result.exit_code == 2
    assert "exactly one of --user or --host" in result.output


def test_booking_needs_a_database(runner, stay):
    result = _create(runner, {"STAYBOOK_DB_URL": ""}, stay)
    assert result.exit_code == 1
    assert "STAYBOOK_DB_URL is not set" in result.output


def _search(runner, env, stay, *extra):
    check_in, check_out = stay
    return runner.invoke(
        staybook,
        [
            "booking",
            "search",
            "--city",
            CITY,
            "--check-in",
            check_in,
            "--check-out",
            check_out,
            *extra,
        ],
        env=env,
    )


def test_search_lists_free_properties(runner, db_env, stay):
    result = _search(runner, db_env, stay, "--guests", "2")
    assert result.exit_code == 0, result.output
    assert_in_output(rf"{PROPERTY}  {CITY}  100(\.0+)?/night  up to 4", result.output)
    assert UNLISTED_PROPERTY not in result.output

    assert _create(runner, db_env, stay).exit_code == 0
    result = _search(runner, db_env, stay)
    assert result.exit_code == 0, result.output
    assert PROPERTY not in result.output
    assert f"No properties available in {CITY}" in result.output


def test_search_rejects_reversed_stay(runner, db_env, stay):
    result = _search(runner, db_env, (stay[1], stay[0]))
    assert result.exit_code == 1
    assert "[invalid_booking_request]" in result.output


def test_host_toggles_listing(runner, db_env, stay):
    result = runner.invoke(
        staybook, ["booking", "toggle", UNLISTED_PROPERTY, "--host", HOST], env=db_env
    )
    assert result.exit_code == 1
    assert "[user_unauthorized]" in result.output

    result = runner.invoke(
        staybook,
        ["booking", "toggle", UNLISTED_PROPERTY, "--host", HOST_2],
        env=db_env,
    )
    assert result.exit_code == 0, result.output
    assert f"Property {UNLISTED_PROPERTY} activated" in result.output

    result = _search(runner, db_env, stay)
    assert f"{UNLISTED_PROPERTY}  {CITY}" in result.output
