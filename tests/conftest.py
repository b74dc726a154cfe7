"""Pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest

from transit_feed.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings() -> Iterator[None]:
    """Re-read settings per test so monkeypatched env vars take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
