"""Default `contract` mark for tests under `tests/contract/`."""

from pathlib import Path

import pytest

from tests.helpers.markers import mark_items_under

# pylint: disable=unused-argument

CONTRACT_ROOT = Path(__file__).parent.resolve()


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark everything collected below this directory as `contract`."""
    mark_items_under(CONTRACT_ROOT, "contract", items)
