"""Inventory share application service.

Manages per-inventory shares. Every mutation re-resolves the acting user's
permissions inside the transaction that performs it.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from access.application.observability import (
    DefaultInventoryShareServiceProbe,
    InventoryShareServiceProbe,
)
from access.application.permission_resolver import PermissionResolver
from access.domain.aggregates import Inventory, InventoryShare
from access.domain.value_objects import (
    Capability,
    InventoryId,
    PermissionLevel,
    ShareId,
    UserId,
)
from access.ports.exceptions import AccessControlError, AlreadyExistsError, NotFoundError
from access.ports.repositories import IInventoryShareRepository
from infrastructure.database.transactions import read_transaction


class InventoryShareService:
    """Application service for per-inventory shares."""

    def __init__(
        self,
        session: AsyncSession,
        resolver: PermissionResolver,
        share_repository: IInventoryShareRepository,
        accept_legacy_levels: bool = True,
        probe: InventoryShareServiceProbe | None = None,
    ):
        """Initialize InventoryShareService with dependencies.

        Args:
            session: Database session for transaction management
            resolver: Permission resolver sharing the same session
            share_repository: Repository for share persistence
            accept_legacy_levels: Accept the "edit" and "full" tier names
            probe: Optional domain probe for observability
        """
        self._session = session
        self._resolver = resolver
        self._share_repository = share_repository
        self._accept_legacy_levels = accept_legacy_levels
        self._probe = probe or DefaultInventoryShareServiceProbe()

    def _parse_level(self, level: PermissionLevel | str) -> PermissionLevel:
        if isinstance(level, PermissionLevel):
            return level
        return PermissionLevel.parse(level, accept_legacy=self._accept_legacy_levels)

    async def _authorize(
        self,
        acting_user_id: UserId,
        inventory_id: InventoryId,
        capability: Capability,
    ) -> Inventory:
        """Resolve the acting user's permissions and insist on a capability.

        Returns:
            The inventory the check was made against
        """
        user = await self._resolver.get_user(acting_user_id)
        inventory = await self._resolver.get_inventory(inventory_id)
        permissions = await self._resolver.resolve_for(user, inventory)
        self._resolver.ensure_allowed(
            permissions, acting_user_id, inventory_id, capability
        )
        return inventory

    async def create_share(
        self,
        inventory_id: InventoryId,
        acting_user_id: UserId,
        target_user_id: UserId,
        level: PermissionLevel | str,
    ) -> InventoryShare:
        """Share an inventory with another user at the given tier.

        Args:
            inventory_id: The inventory to share
            acting_user_id: The user creating the share
            target_user_id: The recipient
            level: The tier to grant

        Returns:
            The created share

        Raises:
            ForbiddenError: If the acting user cannot manage sharing
            NotFoundError: If the inventory, acting user or recipient is unknown
            SelfShareError: If the recipient owns the inventory
            AlreadyExistsError: If the inventory is already shared with them
            ValueError: If `level` is not a known tier name
        """
        permission_level = self._parse_level(level)

        try:
            async with self._session.begin():
                inventory = await self._authorize(
                    acting_user_id, inventory_id, Capability.MANAGE_SHARING
                )
                await self._resolver.get_user(target_user_id)

                share = InventoryShare.create(
                    inventory=inventory,
                    shared_with_user_id=target_user_id,
                    shared_by_user_id=acting_user_id,
                    permission_level=permission_level,
                )

                existing = await self._share_repository.get_for_user(
                    inventory_id=inventory_id, user_id=target_user_id
                )
                if existing is not None:
                    raise AlreadyExistsError(
                        f"Inventory {inventory_id} is already shared with "
                        f"user {target_user_id}"
                    )

                await self._share_repository.add(share)
        except AccessControlError as e:
            self._probe.share_creation_failed(
                inventory_id=inventory_id.value,
                acting_user_id=acting_user_id.value,
                error=str(e),
            )
            raise

        self._probe.share_created(
            share_id=share.id.value,
            inventory_id=inventory_id.value,
            shared_with_user_id=target_user_id.value,
            shared_by_user_id=acting_user_id.value,
            permission_level=permission_level.value,
        )
        return share

    async def list_shares(
        self, inventory_id: InventoryId, acting_user_id: UserId
    ) -> list[InventoryShare]:
        """List the shares on an inventory, newest first.

        Raises:
            ForbiddenError: If the acting user cannot manage sharing
            NotFoundError: If the inventory or acting user is unknown
        """
        async with read_transaction(self._session):
            await self._authorize(
                acting_user_id, inventory_id, Capability.MANAGE_SHARING
            )
            return await self._share_repository.list_by_inventory(inventory_id)

    async def list_received_shares(self, acting_user_id: UserId) -> list[InventoryShare]:
        """List the shares the acting user has received, newest first."""
        async with read_transaction(self._session):
            await self._resolver.get_user(acting_user_id)
            return await self._share_repository.list_by_recipient(acting_user_id)

    async def update_share_tier(
        self,
        share_id: ShareId,
        acting_user_id: UserId,
        level: PermissionLevel | str,
    ) -> InventoryShare:
        """Change the tier of an existing share.

        Setting the tier a share already has is accepted and changes nothing.

        Raises:
            NotFoundError: If the share is unknown
            ForbiddenError: If the acting user cannot manage sharing on the
                share's inventory
            ValueError: If `level` is not a known tier name
        """
        permission_level = self._parse_level(level)

        async with self._session.begin():
            share = await self._share_repository.get_by_id(share_id)
            if share is None:
                raise NotFoundError(f"Share {share_id} not found")

            await self._authorize(
                acting_user_id, share.inventory_id, Capability.MANAGE_SHARING
            )

            old_level = share.permission_level
            if share.change_level(permission_level):
                await self._share_repository.save(share)
                changed = True
            else:
                changed = False

        if changed:
            self._probe.share_tier_updated(
                share_id=share.id.value,
                inventory_id=share.inventory_id.value,
                old_level=old_level.value,
                new_level=permission_level.value,
                acting_user_id=acting_user_id.value,
            )
        return share

    async def revoke_share(self, share_id: ShareId, acting_user_id: UserId) -> bool:
        """Revoke a share.

        Revoking a share that does not exist is a no-op.

        Returns:
            True if the share was deleted, False if it did not exist

        Raises:
            ForbiddenError: If the acting user cannot manage sharing on the
                share's inventory
        """
        async with self._session.begin():
            share = await self._share_repository.get_by_id(share_id)
            if share is None:
                deleted = False
            else:
                await self._authorize(
                    acting_user_id, share.inventory_id, Capability.MANAGE_SHARING
                )
                deleted = await self._share_repository.delete(share_id)

        if share is None or not deleted:
            self._probe.share_already_absent(
                share_id=share_id.value,
                acting_user_id=acting_user_id.value,
            )
            return False

        self._probe.share_revoked(
            share_id=share_id.value,
            inventory_id=share.inventory_id.value,
            acting_user_id=acting_user_id.value,
        )
        return True
