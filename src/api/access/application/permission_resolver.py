"""Permission resolver for the access bounded context.

Gathers the facts about a (user, inventory) pair from the stores and hands
them to `evaluate_permissions`. The resolver holds no state between calls and
never caches results.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from access.application.observability import (
    DefaultPermissionResolverProbe,
    PermissionResolverProbe,
)
from access.domain.aggregates import Inventory, UserAccount
from access.domain.permissions import EffectivePermissions, evaluate_permissions
from access.domain.value_objects import (
    Capability,
    InventoryId,
    PermissionLevel,
    PermissionSource,
    UserId,
)
from access.ports.exceptions import ForbiddenError, NotFoundError, UnavailableError
from access.ports.repositories import (
    IAccessGrantRepository,
    IIdentityStore,
    IInventoryRegistry,
    IInventoryShareRepository,
)
from infrastructure.database.transactions import read_transaction


class PermissionResolver:
    """Computes effective permissions of a user on an inventory.

    Precedence, first match wins: admin, owner, all-access grant from the
    inventory's current owner, per-inventory share, none.

    Services call the resolver inside their own transaction so the check and
    the mutation see the same state. Called on its own, `resolve`, `require`
    and `list_accessible_inventories` close the transaction they read in.
    """

    def __init__(
        self,
        session: AsyncSession,
        identity_store: IIdentityStore,
        inventory_registry: IInventoryRegistry,
        grant_repository: IAccessGrantRepository,
        share_repository: IInventoryShareRepository,
        probe: PermissionResolverProbe | None = None,
    ):
        """Initialize PermissionResolver with dependencies.

        Args:
            session: The request session the stores query through
            identity_store: Source of users and their admin flag
            inventory_registry: Source of inventories and their owners
            grant_repository: All-access grant lookups
            share_repository: Per-inventory share lookups
            probe: Optional domain probe for observability
        """
        self._session = session
        self._identity_store = identity_store
        self._inventory_registry = inventory_registry
        self._grant_repository = grant_repository
        self._share_repository = share_repository
        self._probe = probe or DefaultPermissionResolverProbe()

    async def resolve(
        self, user_id: UserId, inventory_id: InventoryId
    ) -> EffectivePermissions:
        """Resolve the effective permissions of a user on an inventory.

        "No access" is not an error: it is reported as permission source
        NONE with every capability false.

        Args:
            user_id: The acting user
            inventory_id: The target inventory

        Returns:
            The effective permissions

        Raises:
            NotFoundError: If the user or the inventory does not exist
            UnavailableError: If a store is temporarily unreachable
        """
        async with read_transaction(self._session):
            user = await self.get_user(user_id)
            inventory = await self.get_inventory(inventory_id)
            return await self.resolve_for(user, inventory)

    async def resolve_for(
        self, user: UserAccount, inventory: Inventory
    ) -> EffectivePermissions:
        """Resolve permissions for an already loaded user and inventory."""
        has_grant = False
        share_level: PermissionLevel | None = None

        # Admins and owners never need the relationship lookups
        if not user.is_admin and not inventory.is_owned_by(user.id):
            has_grant = await self._has_all_access_grant(user, inventory)
            if not has_grant:
                share_level = await self._share_level(user, inventory)

        permissions = evaluate_permissions(
            user=user,
            inventory=inventory,
            has_all_access_grant=has_grant,
            share_level=share_level,
        )

        if permissions.permission_source == PermissionSource.ADMIN:
            self._probe.admin_access_used(
                user_id=user.id.value,
                inventory_id=inventory.id.value,
            )
        self._probe.permissions_resolved(
            user_id=user.id.value,
            inventory_id=inventory.id.value,
            permission_source=permissions.permission_source.value,
            capabilities=sorted(c.value for c in permissions.capabilities()),
        )
        return permissions

    async def require(
        self,
        user_id: UserId,
        inventory_id: InventoryId,
        capability: Capability,
    ) -> EffectivePermissions:
        """Resolve permissions and insist on a capability.

        Returns:
            The effective permissions, which allow `capability`

        Raises:
            ForbiddenError: If the capability is not allowed
            NotFoundError: If the user or the inventory does not exist
        """
        permissions = await self.resolve(user_id, inventory_id)
        self.ensure_allowed(permissions, user_id, inventory_id, capability)
        return permissions

    def ensure_allowed(
        self,
        permissions: EffectivePermissions,
        user_id: UserId,
        inventory_id: InventoryId,
        capability: Capability,
    ) -> None:
        """Raise ForbiddenError unless `permissions` allow `capability`."""
        if permissions.allows(capability):
            return

        self._probe.access_denied(
            user_id=user_id.value,
            inventory_id=inventory_id.value,
            capability=capability.value,
        )
        raise ForbiddenError(
            f"User {user_id} lacks {capability.value} on inventory {inventory_id}"
        )

    async def list_accessible_inventories(self, user_id: UserId) -> list[Inventory]:
        """List every inventory the user can view, ordered by name.

        Admins see every inventory. Everyone else sees what they own, what
        the owners who granted them all access currently own, and what has
        been shared with them.

        Raises:
            NotFoundError: If the user does not exist
        """
        async with read_transaction(self._session):
            user = await self.get_user(user_id)

            if user.is_admin:
                inventories = await self._inventory_registry.list_all()
                return sorted(inventories, key=_by_name)

            grants = await self._grant_repository.list_by_grantee(user.id)
            owner_ids = [user.id, *(grant.grantor_id for grant in grants)]
            accessible = {
                inventory.id: inventory
                for inventory in await self._inventory_registry.list_by_owners(
                    owner_ids
                )
            }

            shares = await self._share_repository.list_by_recipient(user.id)
            shared_ids = [
                share.inventory_id
                for share in shares
                if share.inventory_id not in accessible
            ]
            if shared_ids:
                for inventory in await self._inventory_registry.get_many(shared_ids):
                    accessible[inventory.id] = inventory

        return sorted(accessible.values(), key=_by_name)

    async def get_user_or_none(self, user_id: UserId) -> UserAccount | None:
        """Load a user, or None if the identity store does not know them."""
        return await self._identity_store.get_user(user_id)

    async def get_user(self, user_id: UserId) -> UserAccount:
        """Load a user or raise NotFoundError."""
        user = await self.get_user_or_none(user_id)
        if user is None:
            self._probe.user_not_found(user_id=user_id.value)
            raise NotFoundError(f"User {user_id} not found")
        return user

    async def get_inventory(self, inventory_id: InventoryId) -> Inventory:
        """Load an inventory or raise NotFoundError."""
        inventory = await self._inventory_registry.get_by_id(inventory_id)
        if inventory is None:
            self._probe.inventory_not_found(inventory_id=inventory_id.value)
            raise NotFoundError(f"Inventory {inventory_id} not found")
        return inventory

    async def _has_all_access_grant(
        self, user: UserAccount, inventory: Inventory
    ) -> bool:
        """Check for a grant from the inventory's current owner, failing closed."""
        try:
            return await self._grant_repository.exists(
                grantor_id=inventory.owner_id,
                grantee_id=user.id,
            )
        except UnavailableError:
            raise
        except Exception as e:
            self._probe.lookup_failed(
                lookup="all_access_grant",
                user_id=user.id.value,
                inventory_id=inventory.id.value,
                error=str(e),
            )
            return False

    async def _share_level(
        self, user: UserAccount, inventory: Inventory
    ) -> PermissionLevel | None:
        """Look up the user's share tier on the inventory, failing closed."""
        try:
            share = await self._share_repository.get_for_user(
                inventory_id=inventory.id,
                user_id=user.id,
            )
        except UnavailableError:
            raise
        except Exception as e:
            self._probe.lookup_failed(
                lookup="inventory_share",
                user_id=user.id.value,
                inventory_id=inventory.id.value,
                error=str(e),
            )
            return None

        return share.permission_level if share is not None else None


def _by_name(inventory: Inventory) -> tuple[str, str]:
    return (inventory.name.lower(), inventory.id.value)
