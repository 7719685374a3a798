"""Default marks for tests under `tests/e2e/`."""

from pathlib import Path

import pytest

# pylint: disable=unused-argument

E2E_ROOT = Path(__file__).parent.resolve()


def _is_e2e_test(item: pytest.Item) -> bool:
    return E2E_ROOT in item.path.resolve().parents


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark every item collected from `tests/e2e/` as `e2e`."""
    for item in items:
        if _is_e2e_test(item) and item.get_closest_marker("e2e") is None:
            item.add_marker(pytest.mark.e2e)
