"""Default marks for tests under `tests/contract/`."""

from pathlib import Path

import pytest

# pylint: disable=unused-argument

CONTRACT_ROOT = Path(__file__).parent.resolve()


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark every item collected below `tests/contract/` as `contract`."""
    for item in items:
        if CONTRACT_ROOT not in item.path.resolve().parents:
            continue
        if item.get_closest_marker("contract") is None:
            item.add_marker(pytest.mark.contract)
