"""PostgreSQL implementation of IIdentityStore.

Reads the admin and active flags of users provisioned by the identity
subsystem.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from access.domain.aggregates import UserAccount
from access.domain.value_objects import UserId
from access.infrastructure.database_errors import unavailable_on_transient
from access.infrastructure.models import UserModel
from access.infrastructure.observability import (
    DefaultIdentityStoreProbe,
    IdentityStoreProbe,
)
from access.ports.repositories import IIdentityStore


class IdentityStore(IIdentityStore):
    """Read-only view of the users table."""

    def __init__(
        self, session: AsyncSession, probe: IdentityStoreProbe | None = None
    ) -> None:
        """Initialize store with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultIdentityStoreProbe()

    async def get_user(self, user_id: UserId) -> UserAccount | None:
        """Retrieve a user by ID.

        Args:
            user_id: The user to look up

        Returns:
            The user with its admin and active flags, or None if not found
        """
        stmt = select(UserModel).where(UserModel.id == user_id.value)
        with unavailable_on_transient("get_user", self._probe):
            result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return UserAccount(
            id=UserId(value=model.id),
            is_admin=model.is_admin,
            is_active=model.is_active,
        )
