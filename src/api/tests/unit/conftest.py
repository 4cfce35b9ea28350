"""Unit test fixtures shared across bounded contexts."""

import pytest

from infrastructure.settings import (
    get_access_control_settings,
    get_database_settings,
    get_settings,
)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Reload settings per test so environment overrides take effect."""
    for getter in (get_settings, get_database_settings, get_access_control_settings):
        getter.cache_clear()
    yield
    for getter in (get_settings, get_database_settings, get_access_control_settings):
        getter.cache_clear()
