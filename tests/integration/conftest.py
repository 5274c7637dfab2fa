"""Default `integration` mark for tests under `tests/integration/`."""

from pathlib import Path

import pytest

from tests.helpers.markers import mark_items_under

# pylint: disable=unused-argument

INTEGRATION_ROOT = Path(__file__).parent.resolve()


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark everything collected below this directory as `integration`."""
    mark_items_under(INTEGRATION_ROOT, "integration", items)
