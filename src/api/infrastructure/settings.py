"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        INVENTORY_ACCESS_DB_HOST: Database host (default: localhost)
        INVENTORY_ACCESS_DB_PORT: Database port (default: 5432)
        INVENTORY_ACCESS_DB_DATABASE: Database name (default: inventory)
        INVENTORY_ACCESS_DB_USERNAME: Database user (default: inventory)
        INVENTORY_ACCESS_DB_PASSWORD: Database password (required in production)
        INVENTORY_ACCESS_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        INVENTORY_ACCESS_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
        INVENTORY_ACCESS_DB_POOL_TIMEOUT_SECONDS: Wait for a pooled connection (default: 10)
        INVENTORY_ACCESS_DB_STATEMENT_TIMEOUT_SECONDS: Statement timeout (default: 30)
    """

    model_config = SettingsConfigDict(
        env_prefix="INVENTORY_ACCESS_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="inventory", description="Database name")
    username: str = Field(default="inventory", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=2,
        description="Minimum connections in pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )
    pool_timeout_seconds: float = Field(
        default=10.0,
        description="Seconds to wait for a pooled connection",
        gt=0,
    )
    statement_timeout_seconds: float = Field(
        default=30.0,
        description="Seconds before a running statement is cancelled",
        gt=0,
    )

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class AccessControlSettings(BaseSettings):
    """Behavioural settings for the access-control engine.

    Environment variables:
        INVENTORY_ACCESS_TRANSFER_ISOLATION_LEVEL: Isolation level used for
            ownership transfers (default: SERIALIZABLE)
        INVENTORY_ACCESS_ACCEPT_LEGACY_LEVELS: Accept the legacy "edit" and
            "full" share levels when parsing (default: true)
    """

    model_config = SettingsConfigDict(
        env_prefix="INVENTORY_ACCESS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    transfer_isolation_level: Literal["SERIALIZABLE", "REPEATABLE READ"] = Field(
        default="SERIALIZABLE",
        description="Transaction isolation level for ownership transfers",
    )
    accept_legacy_levels: bool = Field(
        default=True,
        description="Accept legacy 'edit'/'full' share level names",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(
        default="Inventory Access Control", description="Application name"
    )
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def access(self) -> AccessControlSettings:
        """Get access-control settings."""
        return get_access_control_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings."""
    return DatabaseSettings()


@lru_cache
def get_access_control_settings() -> AccessControlSettings:
    """Get cached access-control settings."""
    return AccessControlSettings()
