"""Transaction scoping for reads on the request session.

One session serves every service of a request. A query run outside
`session.begin()` leaves SQLAlchemy's auto-begun transaction open, and the
next `session.begin()` on that session raises InvalidRequestError.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession


@asynccontextmanager
async def read_transaction(session: AsyncSession) -> AsyncIterator[None]:
    """Scope reads to the caller's transaction, or to one of their own.

    Inside an open transaction the reads join it. Otherwise a transaction is
    begun and closed around them, so the session is idle again afterwards.

    Usage:
        async with read_transaction(self._session):
            shares = await self._share_repository.list_by_inventory(inventory_id)
    """
    if session.in_transaction():
        yield
        return

    async with session.begin():
        yield
