"""Default marks for tests under `tests/e2e/`."""

from pathlib import Path

import pytest

E2E_ROOT = Path(__file__).parent.resolve()
MARKER_NAME = "e2e"


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]  # pylint: disable=unused-argument
) -> None:
    """Add default `e2e` marks to items in `tests/e2e/`."""
    for item in items:
        path = item.path.resolve()
        if E2E_ROOT in path.parents:
            if not any(marker.name == MARKER_NAME for marker in item.iter_markers()):
                item.add_marker(pytest.mark.e2e)
