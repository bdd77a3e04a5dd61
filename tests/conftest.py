"""Global pytest fixtures for strview."""

import pytest

from strview.config import ENCODING_ENV_VAR


@pytest.fixture(autouse=True)
def default_encoding(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test with the built-in default encoding unless it opts out."""
    monkeypatch.delenv(ENCODING_ENV_VAR, raising=False)
