"""Repository protocols (ports) for the access bounded context.

The resolver and the services depend only on these protocols. The
PostgreSQL implementations live in `access.infrastructure`; tests use
in-memory fakes satisfying the same interfaces.

The identity store and the inventory registry belong to collaborating
subsystems; only the narrow slice the access rules need is described here.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from access.domain.aggregates import AccessGrant, Inventory, InventoryShare, UserAccount
from access.domain.value_objects import AccessGrantId, InventoryId, ShareId, UserId


@runtime_checkable
class IIdentityStore(Protocol):
    """Read access to user identities and their authorization flags."""

    async def get_user(self, user_id: UserId) -> UserAccount | None:
        """Retrieve a user by ID.

        Args:
            user_id: The user to look up

        Returns:
            The user with is_admin and is_active flags, or None if not found
        """
        ...


@runtime_checkable
class IInventoryRegistry(Protocol):
    """Access to inventory ownership records."""

    async def get_by_id(self, inventory_id: InventoryId) -> Inventory | None:
        """Retrieve an inventory by ID.

        Returns:
            The inventory with its current owner, or None if not found
        """
        ...

    async def get_many(self, inventory_ids: list[InventoryId]) -> list[Inventory]:
        """Retrieve several inventories by ID, skipping unknown IDs."""
        ...

    async def list_by_owners(self, owner_ids: list[UserId]) -> list[Inventory]:
        """List every inventory currently owned by any of the given users."""
        ...

    async def list_all(self) -> list[Inventory]:
        """List every inventory in the system."""
        ...

    async def count_items(self, inventory_id: InventoryId) -> int:
        """Count the items stored in an inventory."""
        ...

    async def count_owned_by(self, user_id: UserId) -> int:
        """Count the inventories a user currently owns."""
        ...

    async def update_owner(self, inventory_id: InventoryId, owner_id: UserId) -> None:
        """Re-point an inventory to a new owner.

        Only the ownership transfer coordinator calls this, inside its
        transaction.
        """
        ...


@runtime_checkable
class IAccessGrantRepository(Protocol):
    """Persistence for all-access grants."""

    async def add(self, grant: AccessGrant) -> None:
        """Persist a new grant.

        Raises:
            AlreadyExistsError: If a grant for the same (grantor, grantee)
                pair exists, including when a concurrent insert wins the race
        """
        ...

    async def get_by_id(self, grant_id: AccessGrantId) -> AccessGrant | None:
        """Retrieve a grant by ID, or None if not found."""
        ...

    async def exists(self, grantor_id: UserId, grantee_id: UserId) -> bool:
        """Check whether grantor has granted all access to grantee."""
        ...

    async def list_by_grantor(self, grantor_id: UserId) -> list[AccessGrant]:
        """List grants given by a user, newest first."""
        ...

    async def list_by_grantee(self, grantee_id: UserId) -> list[AccessGrant]:
        """List grants received by a user, newest first."""
        ...

    async def delete(self, grant_id: AccessGrantId) -> bool:
        """Delete a grant.

        Returns:
            True if a row was deleted, False if it did not exist
        """
        ...

    async def delete_for_user(self, user_id: UserId) -> int:
        """Delete every grant where the user is grantor or grantee.

        Returns:
            Number of grants deleted
        """
        ...


@runtime_checkable
class IInventoryShareRepository(Protocol):
    """Persistence for per-inventory shares."""

    async def add(self, share: InventoryShare) -> None:
        """Persist a new share.

        Raises:
            AlreadyExistsError: If the inventory is already shared with the
                recipient, including when a concurrent insert wins the race
        """
        ...

    async def save(self, share: InventoryShare) -> None:
        """Persist changes to an existing share (its tier)."""
        ...

    async def get_by_id(self, share_id: ShareId) -> InventoryShare | None:
        """Retrieve a share by ID, or None if not found."""
        ...

    async def get_for_user(
        self, inventory_id: InventoryId, user_id: UserId
    ) -> InventoryShare | None:
        """Retrieve the share of an inventory with a specific user, if any."""
        ...

    async def list_by_inventory(self, inventory_id: InventoryId) -> list[InventoryShare]:
        """List shares on an inventory, newest first."""
        ...

    async def list_by_recipient(self, user_id: UserId) -> list[InventoryShare]:
        """List shares a user has received, newest first."""
        ...

    async def delete(self, share_id: ShareId) -> bool:
        """Delete a share.

        Returns:
            True if a row was deleted, False if it did not exist
        """
        ...

    async def delete_for_recipient(
        self, inventory_id: InventoryId, user_id: UserId
    ) -> int:
        """Delete the share of an inventory with a specific user.

        Returns:
            Number of shares deleted (0 or 1)
        """
        ...

    async def delete_for_inventory(self, inventory_id: InventoryId) -> int:
        """Delete every share on an inventory.

        Returns:
            Number of shares deleted
        """
        ...

    async def delete_for_user(self, user_id: UserId) -> int:
        """Delete every share the user created or received.

        Returns:
            Number of shares deleted
        """
        ...
