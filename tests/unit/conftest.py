"""Default marks for tests under `tests/unit/`."""

from pathlib import Path

import pytest

# pylint: disable=unused-argument

UNIT_ROOT = Path(__file__).parent.resolve()


def _is_unit_test(item: pytest.Item) -> bool:
    return UNIT_ROOT in item.path.resolve().parents


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark every item collected from `tests/unit/` as `unit`."""
    for item in items:
        if _is_unit_test(item) and item.get_closest_marker("unit") is None:
            item.add_marker(pytest.mark.unit)
