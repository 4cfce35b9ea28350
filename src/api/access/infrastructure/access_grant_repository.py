"""PostgreSQL implementation of IAccessGrantRepository."""

from __future__ import annotations

from sqlalchemy import delete, exists, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from access.domain.aggregates import AccessGrant
from access.domain.value_objects import AccessGrantId, UserId
from access.infrastructure.database_errors import unavailable_on_transient
from access.infrastructure.models import AccessGrantModel
from access.infrastructure.observability import (
    AccessGrantRepositoryProbe,
    DefaultAccessGrantRepositoryProbe,
)
from access.ports.exceptions import AlreadyExistsError, SelfGrantError
from access.ports.repositories import IAccessGrantRepository


class AccessGrantRepository(IAccessGrantRepository):
    """PostgreSQL-backed repository for AccessGrant aggregates.

    Uniqueness of (grantor, grantee) and the no-self-grant rule are also
    enforced by table constraints, so a concurrent duplicate insert that
    slips past the service's pre-check still surfaces as AlreadyExistsError.
    """

    def __init__(
        self, session: AsyncSession, probe: AccessGrantRepositoryProbe | None = None
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultAccessGrantRepositoryProbe()

    async def add(self, grant: AccessGrant) -> None:
        """Persist a new grant.

        Args:
            grant: The AccessGrant aggregate to persist

        Raises:
            AlreadyExistsError: If the (grantor, grantee) pair already exists
            SelfGrantError: If the check constraint rejects the row
        """
        model = AccessGrantModel(
            id=grant.id.value,
            grantor_user_id=grant.grantor_id.value,
            grantee_user_id=grant.grantee_id.value,
            created_at=grant.created_at,
            updated_at=grant.updated_at,
        )
        self._session.add(model)

        try:
            with unavailable_on_transient("add_access_grant", self._probe):
                await self._session.flush()
        except IntegrityError as e:
            if "uq_access_grants_grantor_grantee" in str(e):
                self._probe.duplicate_grant(
                    grant.grantor_id.value, grant.grantee_id.value
                )
                raise AlreadyExistsError(
                    f"User {grant.grantor_id} already granted all access to "
                    f"user {grant.grantee_id}"
                ) from e
            if "ck_access_grants_not_self" in str(e):
                raise SelfGrantError(
                    f"User {grant.grantor_id} cannot grant access to themselves"
                ) from e
            raise

        self._probe.grant_saved(
            grant.id.value, grant.grantor_id.value, grant.grantee_id.value
        )

    async def get_by_id(self, grant_id: AccessGrantId) -> AccessGrant | None:
        """Retrieve a grant by ID, or None if not found."""
        stmt = select(AccessGrantModel).where(AccessGrantModel.id == grant_id.value)
        with unavailable_on_transient("get_access_grant", self._probe):
            result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None
        return self._to_domain(model)

    async def exists(self, grantor_id: UserId, grantee_id: UserId) -> bool:
        """Check whether grantor has granted all access to grantee."""
        stmt = select(
            exists().where(
                AccessGrantModel.grantor_user_id == grantor_id.value,
                AccessGrantModel.grantee_user_id == grantee_id.value,
            )
        )
        with unavailable_on_transient("access_grant_exists", self._probe):
            result = await self._session.execute(stmt)
        return bool(result.scalar())

    async def list_by_grantor(self, grantor_id: UserId) -> list[AccessGrant]:
        """List grants given by a user, newest first."""
        stmt = (
            select(AccessGrantModel)
            .where(AccessGrantModel.grantor_user_id == grantor_id.value)
            .order_by(AccessGrantModel.created_at.desc())
        )
        with unavailable_on_transient("list_access_grants_by_grantor", self._probe):
            result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def list_by_grantee(self, grantee_id: UserId) -> list[AccessGrant]:
        """List grants received by a user, newest first."""
        stmt = (
            select(AccessGrantModel)
            .where(AccessGrantModel.grantee_user_id == grantee_id.value)
            .order_by(AccessGrantModel.created_at.desc())
        )
        with unavailable_on_transient("list_access_grants_by_grantee", self._probe):
            result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def delete(self, grant_id: AccessGrantId) -> bool:
        """Delete a grant.

        Returns:
            True if deleted, False if not found
        """
        stmt = select(AccessGrantModel).where(AccessGrantModel.id == grant_id.value)
        with unavailable_on_transient("delete_access_grant", self._probe):
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()

            if model is None:
                return False

            await self._session.delete(model)
            await self._session.flush()

        self._probe.grant_deleted(grant_id.value)
        return True

    async def delete_for_user(self, user_id: UserId) -> int:
        """Delete every grant where the user is grantor or grantee.

        Returns:
            Number of grants deleted
        """
        stmt = delete(AccessGrantModel).where(
            or_(
                AccessGrantModel.grantor_user_id == user_id.value,
                AccessGrantModel.grantee_user_id == user_id.value,
            )
        )
        with unavailable_on_transient("delete_access_grants_for_user", self._probe):
            result = await self._session.execute(stmt)

        count = result.rowcount or 0
        self._probe.grants_deleted_for_user(user_id.value, count)
        return count

    @staticmethod
    def _to_domain(model: AccessGrantModel) -> AccessGrant:
        return AccessGrant(
            id=AccessGrantId(value=model.id),
            grantor_id=UserId(value=model.grantor_user_id),
            grantee_id=UserId(value=model.grantee_user_id),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
