"""
Root pytest configuration.
"""

from __future__ import annotations

import os
from collections.abc import Generator

import pytest

# Register eventwire testing fixtures for all tests
pytest_plugins = ("eventwire.testing.fixtures",)


@pytest.fixture(autouse=True)
def _isolate_eventwire_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keep EVENTWIRE_* variables from the outer shell out of tests."""
    from eventwire.core.settings import reset_settings_cache

    for key in list(os.environ):
        if key.upper().startswith("EVENTWIRE_"):
            monkeypatch.delenv(key, raising=False)
    reset_settings_cache()
    yield
    reset_settings_cache()
