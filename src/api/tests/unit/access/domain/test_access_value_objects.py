"""Unit tests for access value objects."""

import pytest

from access.domain.value_objects import (
    AccessGrantId,
    Capability,
    InventoryId,
    PermissionLevel,
    PermissionSource,
    ShareId,
    UserId,
)


class TestIdentifiers:
    """Tests for user, inventory, grant and share identifiers."""

    def test_user_id_rejects_blank_values(self):
        with pytest.raises(ValueError):
            UserId.from_string("  ")

    def test_inventory_id_round_trips_opaque_value(self):
        assert str(InventoryId.from_string("inv-42")) == "inv-42"

    def test_generated_grant_ids_are_unique(self):
        assert AccessGrantId.generate() != AccessGrantId.generate()

    def test_grant_id_rejects_non_ulid(self):
        with pytest.raises(ValueError, match="Invalid AccessGrantId"):
            AccessGrantId.from_string("not-a-ulid")

    def test_share_id_accepts_generated_value(self):
        share_id = ShareId.generate()
        assert ShareId.from_string(share_id.value) == share_id


class TestPermissionLevelOrdering:
    """Tiers are totally ordered and each includes the ones below it."""

    def test_ranks_follow_tier_order(self):
        assert (
            PermissionLevel.VIEW.rank
            < PermissionLevel.EDIT_ITEMS.rank
            < PermissionLevel.EDIT_INVENTORY.rank
        )

    @pytest.mark.parametrize("level", list(PermissionLevel))
    def test_every_tier_includes_view(self, level):
        assert level.includes(PermissionLevel.VIEW)

    def test_view_does_not_include_edit_items(self):
        assert not PermissionLevel.VIEW.includes(PermissionLevel.EDIT_ITEMS)


class TestPermissionLevelParse:
    """Tests for parsing tier names."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("view", PermissionLevel.VIEW),
            ("EDIT_ITEMS", PermissionLevel.EDIT_ITEMS),
            (" Edit_Inventory ", PermissionLevel.EDIT_INVENTORY),
        ],
    )
    def test_parses_case_insensitively(self, raw, expected):
        assert PermissionLevel.parse(raw) == expected

    def test_maps_legacy_names(self):
        assert PermissionLevel.parse("edit") == PermissionLevel.EDIT_ITEMS
        assert PermissionLevel.parse("Full") == PermissionLevel.EDIT_INVENTORY

    def test_legacy_names_can_be_refused(self):
        with pytest.raises(ValueError, match="Invalid permission level"):
            PermissionLevel.parse("full", accept_legacy=False)

    def test_rejects_unknown_tier(self):
        with pytest.raises(ValueError, match="Invalid permission level: owner"):
            PermissionLevel.parse("owner")


class TestEnumsSerializeAsStrings:
    def test_permission_source_values(self):
        assert [s.value for s in PermissionSource] == [
            "admin",
            "owner",
            "all_access",
            "inventory_share",
            "none",
        ]

    def test_capability_is_str(self):
        assert Capability.MANAGE_SHARING == "manage_sharing"
