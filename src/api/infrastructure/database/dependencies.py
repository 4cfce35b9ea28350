"""Database dependency injection for FastAPI.

Provides the async session factory used by the access-control services, with
explicit transaction management and a shared connection pool.
"""

from __future__ import annotations

import threading
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_access_engine
from infrastructure.observability import DefaultEngineProbe
from infrastructure.settings import get_database_settings, get_settings

# Module-level probe for observability
_probe = DefaultEngineProbe()

# Module-level engine and sessionmaker (created on first use)
_engine: AsyncEngine | None = None
_sessionmaker: async_sessionmaker[AsyncSession] | None = None

# Thread lock for safe engine initialization
_engine_lock = threading.Lock()


def get_engine() -> AsyncEngine:
    """Get the database engine (singleton).

    Creates engine on first call and caches for subsequent calls.
    Uses double-check locking for thread-safe initialization.
    Also creates and caches the sessionmaker for efficient session creation.

    Returns:
        Configured async engine
    """
    global _engine, _sessionmaker
    if _engine is None:
        with _engine_lock:
            # Double-check after acquiring lock
            if _engine is None:
                settings = get_database_settings()
                _engine = create_access_engine(
                    settings, application_name=get_settings().app_name
                )
                _sessionmaker = async_sessionmaker(
                    _engine,
                    expire_on_commit=False,
                    class_=AsyncSession,
                )
                _probe.engine_created(
                    connection=settings.connection_string,
                    pool_size=settings.pool_max_connections,
                )
    return _engine


async def get_write_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a session for access-control operations (FastAPI dependency).

    The session is configured to NOT auto-commit. Services own the
    transaction boundary with `async with session.begin()`, so the permission
    re-check and the mutation it guards run in the same transaction.

    Usage:
        @router.post("/inventories/{inventory_id}/shares")
        async def share(
            service: InventoryShareService = Depends(get_inventory_share_service),
        ):
            ...

    Yields:
        AsyncSession for database operations
    """
    get_engine()
    assert _sessionmaker is not None

    async with _sessionmaker() as session:
        yield session


async def close_database_connections() -> None:
    """Dispose of the engine and its pooled connections.

    Call during application shutdown.
    """
    global _engine, _sessionmaker

    if _engine is not None:
        await _engine.dispose()
        _probe.engine_disposed()
        _engine = None
        _sessionmaker = None
