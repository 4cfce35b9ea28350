"""Unit tests for infrastructure settings."""

import pytest
from pydantic import ValidationError

from infrastructure.settings import (
    AccessControlSettings,
    DatabaseSettings,
    get_access_control_settings,
)


class TestDatabaseSettingsPoolConfiguration:
    """Tests for connection pool configuration."""

    def test_default_pool_settings(self):
        """Should have sensible pool defaults."""
        settings = DatabaseSettings()
        assert settings.pool_min_connections >= 1
        assert settings.pool_max_connections >= settings.pool_min_connections

    def test_pool_max_must_be_greater_than_or_equal_to_min(self):
        """Should validate max >= min."""
        with pytest.raises(ValidationError) as exc_info:
            DatabaseSettings(pool_min_connections=10, pool_max_connections=5)

        assert "pool_max_connections" in str(exc_info.value)

    def test_pool_min_must_be_positive(self):
        with pytest.raises(ValidationError):
            DatabaseSettings(pool_min_connections=0)

    def test_pool_max_respects_upper_limit(self):
        with pytest.raises(ValidationError):
            DatabaseSettings(pool_max_connections=101)

    def test_timeouts_must_be_positive(self):
        with pytest.raises(ValidationError):
            DatabaseSettings(pool_timeout_seconds=0)
        with pytest.raises(ValidationError):
            DatabaseSettings(statement_timeout_seconds=-1)

    def test_connection_string_hides_password(self):
        settings = DatabaseSettings(password="hunter2")

        assert "hunter2" not in settings.connection_string

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("INVENTORY_ACCESS_DB_HOST", "db.internal")

        assert DatabaseSettings().host == "db.internal"


class TestAccessControlSettings:
    """Tests for access-control behaviour settings."""

    def test_defaults(self):
        settings = AccessControlSettings()

        assert settings.transfer_isolation_level == "SERIALIZABLE"
        assert settings.accept_legacy_levels is True

    def test_isolation_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("INVENTORY_ACCESS_TRANSFER_ISOLATION_LEVEL", "REPEATABLE READ")

        assert AccessControlSettings().transfer_isolation_level == "REPEATABLE READ"

    def test_rejects_weaker_isolation(self):
        with pytest.raises(ValidationError):
            AccessControlSettings(transfer_isolation_level="READ COMMITTED")

    def test_getter_is_cached(self):
        assert get_access_control_settings() is get_access_control_settings()
