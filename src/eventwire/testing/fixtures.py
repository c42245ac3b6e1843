"""Pytest fixtures for eventwire; register with ``pytest_plugins``."""

from __future__ import annotations

from typing import Callable, Iterator

import pytest

from ..core.methods import _reset_registry
from ..core.settings import reset_settings_cache
from . import load_sample


@pytest.fixture
def sample_document() -> Callable[[str], bytes]:
    """Return a loader for bundled sample documents by name."""
    return load_sample


@pytest.fixture
def lattice_get_request() -> bytes:
    return load_sample("vpc_lattice_request_get")


@pytest.fixture
def lattice_post_request() -> bytes:
    return load_sample("vpc_lattice_request_post")


@pytest.fixture
def lattice_response() -> bytes:
    return load_sample("vpc_lattice_response")


@pytest.fixture
def fresh_settings() -> Iterator[None]:
    """Re-read EVENTWIRE_* settings around a test that patches the environment."""
    reset_settings_cache()
    yield
    reset_settings_cache()


@pytest.fixture
def clean_method_registry() -> Iterator[None]:
    """Empty the extension-method registry before and after a test."""
    _reset_registry()
    yield
    _reset_registry()
