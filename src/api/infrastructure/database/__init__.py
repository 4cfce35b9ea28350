"""Database infrastructure - shared engine, session and model primitives."""

from infrastructure.database.engines import build_async_url, create_access_engine
from infrastructure.database.models import Base, TimestampMixin
from infrastructure.database.transactions import read_transaction

__all__ = [
    "Base",
    "TimestampMixin",
    "build_async_url",
    "create_access_engine",
    "read_transaction",
]
