"""Unit tests for EffectivePermissions and evaluate_permissions."""

import pytest

from access.domain.aggregates import Inventory, UserAccount
from access.domain.permissions import EffectivePermissions, evaluate_permissions
from access.domain.value_objects import (
    Capability,
    InventoryId,
    PermissionLevel,
    PermissionSource,
    UserId,
)

OWNER = UserAccount(id=UserId("owner"))
ALICE = UserAccount(id=UserId("alice"))
ADMIN = UserAccount(id=UserId("admin"), is_admin=True)
GARAGE = Inventory(id=InventoryId("garage"), owner_id=OWNER.id, name="Garage")


class TestTierCapabilities:
    """Capability table for per-inventory share tiers."""

    def test_view_tier(self):
        perms = EffectivePermissions.for_level(PermissionLevel.VIEW)

        assert perms.capabilities() == {Capability.VIEW}
        assert perms.permission_source == PermissionSource.INVENTORY_SHARE

    def test_edit_items_tier(self):
        perms = EffectivePermissions.for_level(PermissionLevel.EDIT_ITEMS)

        assert perms.capabilities() == {Capability.VIEW, Capability.EDIT_ITEMS}

    def test_edit_inventory_tier(self):
        perms = EffectivePermissions.for_level(PermissionLevel.EDIT_INVENTORY)

        assert perms.capabilities() == {
            Capability.VIEW,
            Capability.EDIT_ITEMS,
            Capability.ADD_ITEMS,
            Capability.REMOVE_ITEMS,
            Capability.EDIT_INVENTORY,
            Capability.MANAGE_SHARING,
            Capability.MANAGE_ORGANIZERS,
        }
        assert not perms.can_delete_inventory
        assert not perms.can_transfer_ownership

    @pytest.mark.parametrize(
        "lower,higher",
        [
            (PermissionLevel.VIEW, PermissionLevel.EDIT_ITEMS),
            (PermissionLevel.EDIT_ITEMS, PermissionLevel.EDIT_INVENTORY),
        ],
    )
    def test_higher_tier_is_superset(self, lower, higher):
        lower_caps = EffectivePermissions.for_level(lower).capabilities()
        higher_caps = EffectivePermissions.for_level(higher).capabilities()

        assert lower_caps < higher_caps


class TestFullAndNone:
    def test_none_allows_nothing(self):
        perms = EffectivePermissions.none()

        assert perms.capabilities() == frozenset()
        assert perms.permission_source == PermissionSource.NONE

    def test_all_access_is_owner_equivalent_except_transfer(self):
        perms = EffectivePermissions.full(PermissionSource.ALL_ACCESS)

        assert perms.capabilities() == set(Capability) - {Capability.TRANSFER_OWNERSHIP}
        assert perms.has_all_access
        assert not perms.is_owner

    @pytest.mark.parametrize("source", [PermissionSource.OWNER, PermissionSource.ADMIN])
    def test_owner_and_admin_may_transfer(self, source):
        perms = EffectivePermissions.full(source)

        assert perms.allows(Capability.TRANSFER_OWNERSHIP)
        assert not perms.has_all_access


class TestEvaluatePermissions:
    """Precedence: admin, owner, all-access grant, share, none."""

    def test_admin_wins_over_everything(self):
        perms = evaluate_permissions(ADMIN, GARAGE, True, PermissionLevel.VIEW)

        assert perms.permission_source == PermissionSource.ADMIN
        assert perms.capabilities() == set(Capability)
        assert not perms.is_owner

    def test_admin_owner_reports_true_ownership(self):
        inventory = Inventory(id=InventoryId("shed"), owner_id=ADMIN.id)

        perms = evaluate_permissions(ADMIN, inventory, False, None)

        assert perms.permission_source == PermissionSource.ADMIN
        assert perms.is_owner

    def test_owner_ignores_grants_and_shares(self):
        perms = evaluate_permissions(OWNER, GARAGE, True, PermissionLevel.VIEW)

        assert perms.permission_source == PermissionSource.OWNER
        assert perms.is_owner

    def test_grant_wins_over_share(self):
        perms = evaluate_permissions(ALICE, GARAGE, True, PermissionLevel.VIEW)

        assert perms.permission_source == PermissionSource.ALL_ACCESS
        assert perms.can_delete_inventory

    def test_share_tier_applies_without_grant(self):
        perms = evaluate_permissions(ALICE, GARAGE, False, PermissionLevel.EDIT_ITEMS)

        assert perms.permission_source == PermissionSource.INVENTORY_SHARE
        assert perms.can_edit_items
        assert not perms.can_add_items

    def test_no_relationship_means_no_access(self):
        assert evaluate_permissions(ALICE, GARAGE, False, None) == (
            EffectivePermissions.none()
        )

    def test_is_deterministic(self):
        first = evaluate_permissions(ALICE, GARAGE, False, PermissionLevel.VIEW)
        second = evaluate_permissions(ALICE, GARAGE, False, PermissionLevel.VIEW)

        assert first == second
