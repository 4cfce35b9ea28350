"""Unit tests for RelationshipCleanupService."""

import pytest

from access.domain.aggregates import AccessGrant, InventoryShare
from access.domain.value_objects import PermissionLevel, UserId
from access.ports.exceptions import (
    ForbiddenError,
    NotFoundError,
    OwnedInventoriesRemainError,
)


async def _share(share_repo, inventory, user, shared_by):
    share = InventoryShare.create(
        inventory=inventory,
        shared_with_user_id=user.id,
        shared_by_user_id=shared_by.id,
        permission_level=PermissionLevel.VIEW,
    )
    await share_repo.add(share)
    return share


class TestRemoveInventoryRelationships:
    @pytest.mark.asyncio
    async def test_owner_removes_all_shares(
        self, cleanup_service, cleanup_probe, share_repo, owner, alice, bob, inventory
    ):
        await _share(share_repo, inventory, alice, owner)
        await _share(share_repo, inventory, bob, owner)

        removed = await cleanup_service.remove_inventory_relationships(
            inventory.id, owner.id
        )

        assert removed == 2
        assert share_repo.shares == {}
        cleanup_probe.inventory_relationships_removed.assert_called_once_with(
            inventory_id="garage", shares_removed=2, acting_user_id="owner"
        )

    @pytest.mark.asyncio
    async def test_edit_inventory_recipient_cannot_remove(
        self, cleanup_service, share_repo, owner, alice, inventory
    ):
        share = InventoryShare.create(
            inventory=inventory,
            shared_with_user_id=alice.id,
            shared_by_user_id=owner.id,
            permission_level=PermissionLevel.EDIT_INVENTORY,
        )
        await share_repo.add(share)

        with pytest.raises(ForbiddenError):
            await cleanup_service.remove_inventory_relationships(inventory.id, alice.id)


class TestRemoveUserRelationships:
    @pytest.mark.asyncio
    async def test_removes_grants_and_shares_on_both_sides(
        self, cleanup_service, grant_repo, share_repo, registry, admin, owner, alice, bob
    ):
        shed = registry.add("shed", bob, name="Shed")
        await grant_repo.add(AccessGrant.create(alice.id, bob.id))
        await grant_repo.add(AccessGrant.create(owner.id, alice.id))
        await grant_repo.add(AccessGrant.create(owner.id, bob.id))
        await _share(share_repo, shed, alice, bob)

        result = await cleanup_service.remove_user_relationships(alice.id, admin.id)

        assert result.grants_removed == 2
        assert result.shares_removed == 1
        assert len(grant_repo.grants) == 1

    @pytest.mark.asyncio
    async def test_refuses_while_user_owns_inventories(
        self, cleanup_service, cleanup_probe, admin, owner, inventory
    ):
        with pytest.raises(OwnedInventoriesRemainError):
            await cleanup_service.remove_user_relationships(owner.id, admin.id)

        cleanup_probe.user_cleanup_blocked.assert_called_once_with(
            user_id="owner", owned_inventories=1
        )

    @pytest.mark.asyncio
    async def test_requires_admin(self, cleanup_service, alice, bob):
        with pytest.raises(ForbiddenError):
            await cleanup_service.remove_user_relationships(bob.id, alice.id)

    @pytest.mark.asyncio
    async def test_unknown_user(self, cleanup_service, admin):
        with pytest.raises(NotFoundError):
            await cleanup_service.remove_user_relationships(UserId("ghost"), admin.id)
