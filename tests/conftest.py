"""Root conftest: fixture plugins and the backend-agnostic ``engine`` fixture."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


pytest_plugins = [
    "tests.fixtures.sqlite",
    "tests.fixtures.postgres",
    "tests.fixtures.datagen",
]


@pytest.fixture
def engine(request: pytest.FixtureRequest) -> Engine:
    """The engine fixture named by the indirect parameter.

    Parametrize with ``["sqlite_engine_file", "postgres_engine"]`` and
    ``indirect=True`` to run a test on both migrated backends; the PostgreSQL
    case skips without Docker.
    """
    return request.getfixturevalue(request.param)
