"""InventoryShare aggregate for the access context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from access.domain.aggregates.inventory import Inventory
from access.domain.value_objects import InventoryId, PermissionLevel, ShareId, UserId
from access.ports.exceptions import SelfShareError


@dataclass
class InventoryShare:
    """A per-inventory share giving one user a graduated tier of access.

    Business rules:
    - (inventory_id, shared_with_user_id) is unique (enforced by the repository)
    - the recipient is never the inventory's current owner
    - shared_by_user_id records who created the share, for audit
    """

    id: ShareId
    inventory_id: InventoryId
    shared_with_user_id: UserId
    shared_by_user_id: UserId
    permission_level: PermissionLevel
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create(
        cls,
        inventory: Inventory,
        shared_with_user_id: UserId,
        shared_by_user_id: UserId,
        permission_level: PermissionLevel,
    ) -> InventoryShare:
        """Factory method for sharing an inventory.

        Args:
            inventory: The inventory being shared
            shared_with_user_id: The recipient
            shared_by_user_id: The user creating the share
            permission_level: The tier granted

        Returns:
            A new InventoryShare

        Raises:
            SelfShareError: If the recipient owns the inventory
        """
        if inventory.is_owned_by(shared_with_user_id):
            raise SelfShareError(
                f"Inventory {inventory.id} cannot be shared with its owner"
            )

        return cls(
            id=ShareId.generate(),
            inventory_id=inventory.id,
            shared_with_user_id=shared_with_user_id,
            shared_by_user_id=shared_by_user_id,
            permission_level=permission_level,
        )

    def change_level(self, permission_level: PermissionLevel) -> bool:
        """Change the tier of this share.

        Args:
            permission_level: The new tier

        Returns:
            True if the tier changed, False if it was already set
        """
        if permission_level == self.permission_level:
            return False

        self.permission_level = permission_level
        self.updated_at = datetime.now(UTC)
        return True
