"""Effective permissions and the pure resolution rule.

`evaluate_permissions` is the whole authorization rule. It takes the facts
the stores returned and never performs I/O, so it is deterministic for a
given store state and can be exercised without any repository.
"""

from __future__ import annotations

from dataclasses import dataclass

from access.domain.aggregates import Inventory, UserAccount
from access.domain.value_objects import Capability, PermissionLevel, PermissionSource


@dataclass(frozen=True)
class EffectivePermissions:
    """The computed capability set for a (user, inventory) pair.

    Never persisted and never cached across requests: grants, shares and
    ownership can change between any two calls.
    """

    can_view: bool
    can_edit_items: bool
    can_add_items: bool
    can_remove_items: bool
    can_edit_inventory: bool
    can_delete_inventory: bool
    can_manage_sharing: bool
    can_manage_organizers: bool
    is_owner: bool
    has_all_access: bool
    permission_source: PermissionSource

    @classmethod
    def full(
        cls, source: PermissionSource, is_owner: bool = False
    ) -> EffectivePermissions:
        """Every capability, attributed to `source`."""
        return cls(
            can_view=True,
            can_edit_items=True,
            can_add_items=True,
            can_remove_items=True,
            can_edit_inventory=True,
            can_delete_inventory=True,
            can_manage_sharing=True,
            can_manage_organizers=True,
            is_owner=is_owner,
            has_all_access=source == PermissionSource.ALL_ACCESS,
            permission_source=source,
        )

    @classmethod
    def for_level(cls, level: PermissionLevel) -> EffectivePermissions:
        """Capabilities carried by a per-inventory share tier."""
        edit_inventory = level.includes(PermissionLevel.EDIT_INVENTORY)
        return cls(
            can_view=True,
            can_edit_items=level.includes(PermissionLevel.EDIT_ITEMS),
            can_add_items=edit_inventory,
            can_remove_items=edit_inventory,
            can_edit_inventory=edit_inventory,
            can_delete_inventory=False,
            can_manage_sharing=edit_inventory,
            can_manage_organizers=edit_inventory,
            is_owner=False,
            has_all_access=False,
            permission_source=PermissionSource.INVENTORY_SHARE,
        )

    @classmethod
    def none(cls) -> EffectivePermissions:
        """No capabilities at all."""
        return cls(
            can_view=False,
            can_edit_items=False,
            can_add_items=False,
            can_remove_items=False,
            can_edit_inventory=False,
            can_delete_inventory=False,
            can_manage_sharing=False,
            can_manage_organizers=False,
            is_owner=False,
            has_all_access=False,
            permission_source=PermissionSource.NONE,
        )

    @property
    def can_transfer_ownership(self) -> bool:
        """Only the true owner or an admin may transfer an inventory."""
        return self.permission_source in (
            PermissionSource.OWNER,
            PermissionSource.ADMIN,
        )

    def allows(self, capability: Capability) -> bool:
        """Check a single capability."""
        if capability == Capability.TRANSFER_OWNERSHIP:
            return self.can_transfer_ownership
        return bool(getattr(self, f"can_{capability.value}"))

    def capabilities(self) -> frozenset[Capability]:
        """All capabilities this permission set allows."""
        return frozenset(c for c in Capability if self.allows(c))


def evaluate_permissions(
    user: UserAccount,
    inventory: Inventory,
    has_all_access_grant: bool,
    share_level: PermissionLevel | None,
) -> EffectivePermissions:
    """Combine the facts about a (user, inventory) pair into permissions.

    First match wins: admin, owner, all-access grant from the current owner,
    per-inventory share, then nothing.

    Args:
        user: The acting user
        inventory: The target inventory
        has_all_access_grant: Whether the inventory's current owner granted
            all access to the user
        share_level: The tier of the user's share on the inventory, if any

    Returns:
        The effective permissions
    """
    is_owner = inventory.is_owned_by(user.id)

    if user.is_admin:
        return EffectivePermissions.full(PermissionSource.ADMIN, is_owner=is_owner)

    if is_owner:
        return EffectivePermissions.full(PermissionSource.OWNER, is_owner=True)

    if has_all_access_grant:
        return EffectivePermissions.full(PermissionSource.ALL_ACCESS)

    if share_level is not None:
        return EffectivePermissions.for_level(share_level)

    return EffectivePermissions.none()
