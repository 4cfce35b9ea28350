"""All-access grant application service.

A grant gives the grantee full access to every inventory the grantor owns.
Only the grantor (or an admin acting for them) manages grants originating
from the grantor.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from access.application.observability import (
    AccessGrantServiceProbe,
    DefaultAccessGrantServiceProbe,
)
from access.application.permission_resolver import PermissionResolver
from access.domain.aggregates import AccessGrant, UserAccount
from access.domain.value_objects import AccessGrantId, UserId
from access.ports.exceptions import AccessControlError, AlreadyExistsError, ForbiddenError
from access.ports.repositories import IAccessGrantRepository
from infrastructure.database.transactions import read_transaction


class AccessGrantService:
    """Application service for all-access grants."""

    def __init__(
        self,
        session: AsyncSession,
        resolver: PermissionResolver,
        grant_repository: IAccessGrantRepository,
        probe: AccessGrantServiceProbe | None = None,
    ):
        """Initialize AccessGrantService with dependencies.

        Args:
            session: Database session for transaction management
            resolver: Permission resolver sharing the same session, used to
                load users
            grant_repository: Repository for grant persistence
            probe: Optional domain probe for observability
        """
        self._session = session
        self._resolver = resolver
        self._grant_repository = grant_repository
        self._probe = probe or DefaultAccessGrantServiceProbe()

    async def _subject_for_listing(
        self, acting_user_id: UserId, subject_user_id: UserId | None
    ) -> UserId:
        acting_user = await self._resolver.get_user(acting_user_id)
        subject = subject_user_id or acting_user_id

        if subject != acting_user_id and not acting_user.is_admin:
            self._probe.listing_denied(
                acting_user_id=acting_user_id.value,
                subject_user_id=subject.value,
            )
            raise ForbiddenError(
                f"User {acting_user_id} cannot list grants of user {subject}"
            )
        return subject

    def _ensure_may_manage(self, acting_user: UserAccount, grantor_id: UserId) -> None:
        if acting_user.id != grantor_id and not acting_user.is_admin:
            raise ForbiddenError(
                f"User {acting_user.id} cannot manage grants of user {grantor_id}"
            )

    async def create_grant(
        self,
        acting_user_id: UserId,
        grantee_user_id: UserId,
        grantor_user_id: UserId | None = None,
    ) -> AccessGrant:
        """Grant all access to every inventory the grantor owns.

        Args:
            acting_user_id: The user performing the operation
            grantee_user_id: The user receiving access
            grantor_user_id: The user whose inventories become accessible;
                defaults to the acting user

        Returns:
            The created grant

        Raises:
            ForbiddenError: If a non-admin creates a grant for someone else
            NotFoundError: If the acting user, grantor or grantee is unknown
            SelfGrantError: If grantor and grantee are the same user
            AlreadyExistsError: If the grant already exists
        """
        grantor_id = grantor_user_id or acting_user_id

        try:
            async with self._session.begin():
                acting_user = await self._resolver.get_user(acting_user_id)
                self._ensure_may_manage(acting_user, grantor_id)
                if grantor_id != acting_user_id:
                    await self._resolver.get_user(grantor_id)
                await self._resolver.get_user(grantee_user_id)

                grant = AccessGrant.create(
                    grantor_id=grantor_id, grantee_id=grantee_user_id
                )

                if await self._grant_repository.exists(
                    grantor_id=grantor_id, grantee_id=grantee_user_id
                ):
                    raise AlreadyExistsError(
                        f"User {grantor_id} already granted all access to "
                        f"user {grantee_user_id}"
                    )

                await self._grant_repository.add(grant)
        except AccessControlError as e:
            self._probe.grant_creation_failed(
                grantor_id=grantor_id.value,
                grantee_id=grantee_user_id.value,
                error=str(e),
            )
            raise

        self._probe.grant_created(
            grant_id=grant.id.value,
            grantor_id=grantor_id.value,
            grantee_id=grantee_user_id.value,
            acting_user_id=acting_user_id.value,
        )
        return grant

    async def list_grants_given(
        self, acting_user_id: UserId, grantor_user_id: UserId | None = None
    ) -> list[AccessGrant]:
        """List grants given by a user, newest first.

        Raises:
            ForbiddenError: If a non-admin lists another user's grants
        """
        async with read_transaction(self._session):
            grantor_id = await self._subject_for_listing(
                acting_user_id, grantor_user_id
            )
            return await self._grant_repository.list_by_grantor(grantor_id)

    async def list_grants_received(
        self, acting_user_id: UserId, grantee_user_id: UserId | None = None
    ) -> list[AccessGrant]:
        """List grants received by a user, newest first.

        Raises:
            ForbiddenError: If a non-admin lists another user's grants
        """
        async with read_transaction(self._session):
            grantee_id = await self._subject_for_listing(
                acting_user_id, grantee_user_id
            )
            return await self._grant_repository.list_by_grantee(grantee_id)

    async def revoke_grant(self, grant_id: AccessGrantId, acting_user_id: UserId) -> bool:
        """Revoke a grant.

        Revoking a grant that does not exist is a no-op.

        Returns:
            True if the grant was deleted, False if it did not exist

        Raises:
            ForbiddenError: If the acting user is neither the grantor nor an admin
        """
        async with self._session.begin():
            grant = await self._grant_repository.get_by_id(grant_id)
            if grant is None:
                deleted = False
            else:
                acting_user = await self._resolver.get_user(acting_user_id)
                self._ensure_may_manage(acting_user, grant.grantor_id)
                deleted = await self._grant_repository.delete(grant_id)

        if grant is None or not deleted:
            self._probe.grant_already_absent(
                grant_id=grant_id.value,
                acting_user_id=acting_user_id.value,
            )
            return False

        self._probe.grant_revoked(
            grant_id=grant_id.value,
            grantor_id=grant.grantor_id.value,
            grantee_id=grant.grantee_id.value,
            acting_user_id=acting_user_id.value,
        )
        return True
