"""Async engine for the access-control store.

Permission checks, share and grant mutations and ownership transfers all run
on one asyncpg-backed engine. Its pool and timeouts come from
`DatabaseSettings`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy.engine import URL
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

if TYPE_CHECKING:
    from infrastructure.settings import DatabaseSettings

__all__ = [
    "create_access_engine",
    "build_async_url",
]


def create_access_engine(
    settings: DatabaseSettings, application_name: str | None = None
) -> AsyncEngine:
    """Create the engine shared by every access-control transaction.

    The pool keeps `pool_min_connections` open and grows on demand up to
    `pool_max_connections`. A checkout that waits longer than
    `pool_timeout_seconds` raises, and so does a statement running past
    `statement_timeout_seconds`. Both count as transient failures.

    Args:
        settings: Database connection settings
        application_name: Reported to PostgreSQL in pg_stat_activity

    Returns:
        Configured async engine
    """
    return create_async_engine(
        build_async_url(settings),
        pool_size=settings.pool_min_connections,
        max_overflow=settings.pool_max_connections - settings.pool_min_connections,
        pool_timeout=settings.pool_timeout_seconds,
        pool_pre_ping=True,
        connect_args=_connect_args(settings, application_name),
    )


def _connect_args(
    settings: DatabaseSettings, application_name: str | None
) -> dict[str, Any]:
    connect_args: dict[str, Any] = {
        "command_timeout": settings.statement_timeout_seconds,
    }
    if application_name:
        connect_args["server_settings"] = {"application_name": application_name}
    return connect_args


def build_async_url(settings: DatabaseSettings) -> str:
    """Render the asyncpg URL, percent-encoding the credentials."""
    url = URL.create(
        drivername="postgresql+asyncpg",
        username=settings.username,
        password=settings.password.get_secret_value(),
        host=settings.host,
        port=settings.port,
        database=settings.database,
    )
    return url.render_as_string(hide_password=False)
