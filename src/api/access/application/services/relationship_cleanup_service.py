"""Lifecycle cleanup of grants and shares.

Called by the inventory and user deletion flows before the records
themselves are removed, so no share or grant ever points at a deleted
inventory or user.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from access.application.observability import (
    DefaultRelationshipCleanupProbe,
    RelationshipCleanupProbe,
)
from access.application.permission_resolver import PermissionResolver
from access.domain.value_objects import Capability, InventoryId, UserId
from access.ports.exceptions import ForbiddenError, OwnedInventoriesRemainError
from access.ports.repositories import (
    IAccessGrantRepository,
    IInventoryRegistry,
    IInventoryShareRepository,
)


@dataclass(frozen=True)
class RelationshipCleanupResult:
    """Counts of relationships removed for a user."""

    grants_removed: int
    shares_removed: int


class RelationshipCleanupService:
    """Removes the grants and shares tied to an inventory or a user."""

    def __init__(
        self,
        session: AsyncSession,
        resolver: PermissionResolver,
        inventory_registry: IInventoryRegistry,
        grant_repository: IAccessGrantRepository,
        share_repository: IInventoryShareRepository,
        probe: RelationshipCleanupProbe | None = None,
    ):
        self._session = session
        self._resolver = resolver
        self._inventory_registry = inventory_registry
        self._grant_repository = grant_repository
        self._share_repository = share_repository
        self._probe = probe or DefaultRelationshipCleanupProbe()

    async def remove_inventory_relationships(
        self, inventory_id: InventoryId, acting_user_id: UserId
    ) -> int:
        """Delete every share on an inventory that is about to be deleted.

        Returns:
            Number of shares removed

        Raises:
            ForbiddenError: If the acting user may not delete the inventory
            NotFoundError: If the inventory or acting user is unknown
        """
        async with self._session.begin():
            await self._resolver.require(
                acting_user_id, inventory_id, Capability.DELETE_INVENTORY
            )
            removed = await self._share_repository.delete_for_inventory(inventory_id)

        self._probe.inventory_relationships_removed(
            inventory_id=inventory_id.value,
            shares_removed=removed,
            acting_user_id=acting_user_id.value,
        )
        return removed

    async def remove_user_relationships(
        self, user_id: UserId, acting_user_id: UserId
    ) -> RelationshipCleanupResult:
        """Delete every grant and share involving a user about to be deleted.

        The user must not own any inventory: ownership has to be transferred
        (or the inventories deleted) first.

        Raises:
            ForbiddenError: If the acting user is not an admin
            NotFoundError: If either user is unknown
            OwnedInventoriesRemainError: If the user still owns inventories
        """
        async with self._session.begin():
            acting_user = await self._resolver.get_user(acting_user_id)
            if not acting_user.is_admin:
                raise ForbiddenError(
                    f"User {acting_user_id} cannot remove relationships of {user_id}"
                )
            await self._resolver.get_user(user_id)

            owned = await self._inventory_registry.count_owned_by(user_id)
            if owned:
                self._probe.user_cleanup_blocked(
                    user_id=user_id.value, owned_inventories=owned
                )
                raise OwnedInventoriesRemainError(
                    f"User {user_id} still owns {owned} inventories"
                )

            grants_removed = await self._grant_repository.delete_for_user(user_id)
            shares_removed = await self._share_repository.delete_for_user(user_id)

        self._probe.user_relationships_removed(
            user_id=user_id.value,
            grants_removed=grants_removed,
            shares_removed=shares_removed,
            acting_user_id=acting_user_id.value,
        )
        return RelationshipCleanupResult(
            grants_removed=grants_removed, shares_removed=shares_removed
        )
