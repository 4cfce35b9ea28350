"""Fixtures for the access bounded context.

In-memory stores satisfy the repository protocols so scenario tests can run
the real resolver and services without a database.
"""

from __future__ import annotations

from dataclasses import replace
from unittest.mock import AsyncMock, MagicMock, create_autospec

import pytest

from access.application.observability import (
    AccessGrantServiceProbe,
    InventoryShareServiceProbe,
    OwnershipTransferProbe,
    PermissionResolverProbe,
    RelationshipCleanupProbe,
)
from access.application.permission_resolver import PermissionResolver
from access.application.services import (
    AccessGrantService,
    InventoryShareService,
    OwnershipTransferService,
    RelationshipCleanupService,
)
from access.domain.aggregates import AccessGrant, Inventory, InventoryShare, UserAccount
from access.domain.value_objects import AccessGrantId, InventoryId, ShareId, UserId
from access.ports.exceptions import AlreadyExistsError


class InMemoryIdentityStore:
    def __init__(self) -> None:
        self.users: dict[UserId, UserAccount] = {}

    def add(
        self, user_id: str, is_admin: bool = False, is_active: bool = True
    ) -> UserAccount:
        user = UserAccount(id=UserId(user_id), is_admin=is_admin, is_active=is_active)
        self.users[user.id] = user
        return user

    async def get_user(self, user_id: UserId) -> UserAccount | None:
        return self.users.get(user_id)


class InMemoryInventoryRegistry:
    def __init__(self) -> None:
        self.inventories: dict[InventoryId, Inventory] = {}
        self.items: dict[InventoryId, int] = {}

    def add(
        self, inventory_id: str, owner: UserAccount, name: str = "", items: int = 0
    ) -> Inventory:
        inventory = Inventory(
            id=InventoryId(inventory_id), owner_id=owner.id, name=name or inventory_id
        )
        self.inventories[inventory.id] = inventory
        self.items[inventory.id] = items
        return inventory

    async def get_by_id(self, inventory_id: InventoryId) -> Inventory | None:
        return self.inventories.get(inventory_id)

    async def get_many(self, inventory_ids: list[InventoryId]) -> list[Inventory]:
        return [self.inventories[i] for i in inventory_ids if i in self.inventories]

    async def list_by_owners(self, owner_ids: list[UserId]) -> list[Inventory]:
        return [i for i in self.inventories.values() if i.owner_id in owner_ids]

    async def list_all(self) -> list[Inventory]:
        return list(self.inventories.values())

    async def count_items(self, inventory_id: InventoryId) -> int:
        return self.items.get(inventory_id, 0)

    async def count_owned_by(self, user_id: UserId) -> int:
        return sum(1 for i in self.inventories.values() if i.owner_id == user_id)

    async def update_owner(self, inventory_id: InventoryId, owner_id: UserId) -> None:
        self.inventories[inventory_id] = replace(
            self.inventories[inventory_id], owner_id=owner_id
        )


class InMemoryAccessGrantRepository:
    def __init__(self) -> None:
        self.grants: dict[AccessGrantId, AccessGrant] = {}
        self.lookup_error: Exception | None = None

    async def add(self, grant: AccessGrant) -> None:
        if await self.exists(grant.grantor_id, grant.grantee_id):
            raise AlreadyExistsError("duplicate grant")
        self.grants[grant.id] = grant

    async def get_by_id(self, grant_id: AccessGrantId) -> AccessGrant | None:
        return self.grants.get(grant_id)

    async def exists(self, grantor_id: UserId, grantee_id: UserId) -> bool:
        if self.lookup_error is not None:
            raise self.lookup_error
        return any(
            g.grantor_id == grantor_id and g.grantee_id == grantee_id
            for g in self.grants.values()
        )

    async def list_by_grantor(self, grantor_id: UserId) -> list[AccessGrant]:
        found = [g for g in self.grants.values() if g.grantor_id == grantor_id]
        return sorted(found, key=lambda g: g.created_at, reverse=True)

    async def list_by_grantee(self, grantee_id: UserId) -> list[AccessGrant]:
        found = [g for g in self.grants.values() if g.grantee_id == grantee_id]
        return sorted(found, key=lambda g: g.created_at, reverse=True)

    async def delete(self, grant_id: AccessGrantId) -> bool:
        return self.grants.pop(grant_id, None) is not None

    async def delete_for_user(self, user_id: UserId) -> int:
        doomed = [
            g.id
            for g in self.grants.values()
            if user_id in (g.grantor_id, g.grantee_id)
        ]
        for grant_id in doomed:
            del self.grants[grant_id]
        return len(doomed)


class InMemoryInventoryShareRepository:
    def __init__(self) -> None:
        self.shares: dict[ShareId, InventoryShare] = {}
        self.lookup_error: Exception | None = None

    async def add(self, share: InventoryShare) -> None:
        for existing in self.shares.values():
            if (
                existing.inventory_id == share.inventory_id
                and existing.shared_with_user_id == share.shared_with_user_id
            ):
                raise AlreadyExistsError("duplicate share")
        self.shares[share.id] = share

    async def save(self, share: InventoryShare) -> None:
        self.shares[share.id] = share

    async def get_by_id(self, share_id: ShareId) -> InventoryShare | None:
        return self.shares.get(share_id)

    async def get_for_user(
        self, inventory_id: InventoryId, user_id: UserId
    ) -> InventoryShare | None:
        if self.lookup_error is not None:
            raise self.lookup_error
        for share in self.shares.values():
            if share.inventory_id == inventory_id and share.shared_with_user_id == user_id:
                return share
        return None

    async def list_by_inventory(self, inventory_id: InventoryId) -> list[InventoryShare]:
        found = [s for s in self.shares.values() if s.inventory_id == inventory_id]
        return sorted(found, key=lambda s: s.created_at, reverse=True)

    async def list_by_recipient(self, user_id: UserId) -> list[InventoryShare]:
        found = [s for s in self.shares.values() if s.shared_with_user_id == user_id]
        return sorted(found, key=lambda s: s.created_at, reverse=True)

    async def delete(self, share_id: ShareId) -> bool:
        return self.shares.pop(share_id, None) is not None

    def _delete_matching(self, predicate) -> int:
        doomed = [s.id for s in self.shares.values() if predicate(s)]
        for share_id in doomed:
            del self.shares[share_id]
        return len(doomed)

    async def delete_for_recipient(
        self, inventory_id: InventoryId, user_id: UserId
    ) -> int:
        return self._delete_matching(
            lambda s: s.inventory_id == inventory_id and s.shared_with_user_id == user_id
        )

    async def delete_for_inventory(self, inventory_id: InventoryId) -> int:
        return self._delete_matching(lambda s: s.inventory_id == inventory_id)

    async def delete_for_user(self, user_id: UserId) -> int:
        return self._delete_matching(
            lambda s: user_id in (s.shared_with_user_id, s.shared_by_user_id)
        )


@pytest.fixture
def mock_session():
    """Create mock async session with transaction support.

    `in_transaction()` follows the `begin()` block, as on a real session.
    """
    session = AsyncMock()
    state = {"in_transaction": False}

    async def enter():
        state["in_transaction"] = True

    async def exit_(*exc_info):
        state["in_transaction"] = False

    mock_transaction = MagicMock()
    mock_transaction.__aenter__ = AsyncMock(side_effect=enter)
    mock_transaction.__aexit__ = AsyncMock(side_effect=exit_)
    session.begin = MagicMock(return_value=mock_transaction)
    session.in_transaction = MagicMock(side_effect=lambda: state["in_transaction"])
    return session


@pytest.fixture
def identity_store() -> InMemoryIdentityStore:
    return InMemoryIdentityStore()


@pytest.fixture
def registry() -> InMemoryInventoryRegistry:
    return InMemoryInventoryRegistry()


@pytest.fixture
def grant_repo() -> InMemoryAccessGrantRepository:
    return InMemoryAccessGrantRepository()


@pytest.fixture
def share_repo() -> InMemoryInventoryShareRepository:
    return InMemoryInventoryShareRepository()


@pytest.fixture
def owner(identity_store) -> UserAccount:
    return identity_store.add("owner")


@pytest.fixture
def alice(identity_store) -> UserAccount:
    return identity_store.add("alice")


@pytest.fixture
def bob(identity_store) -> UserAccount:
    return identity_store.add("bob")


@pytest.fixture
def admin(identity_store) -> UserAccount:
    return identity_store.add("admin", is_admin=True)


@pytest.fixture
def inventory(registry, owner) -> Inventory:
    """Inventory owned by `owner` holding three items."""
    return registry.add("garage", owner, name="Garage", items=3)


@pytest.fixture
def resolver_probe():
    """Create mock permission resolver probe."""
    return create_autospec(PermissionResolverProbe, instance=True)


@pytest.fixture
def resolver(
    mock_session, identity_store, registry, grant_repo, share_repo, resolver_probe
):
    """PermissionResolver over the in-memory stores."""
    return PermissionResolver(
        session=mock_session,
        identity_store=identity_store,
        inventory_registry=registry,
        grant_repository=grant_repo,
        share_repository=share_repo,
        probe=resolver_probe,
    )


@pytest.fixture
def share_probe():
    """Create mock share service probe."""
    return create_autospec(InventoryShareServiceProbe, instance=True)


@pytest.fixture
def share_service(mock_session, resolver, share_repo, share_probe):
    """InventoryShareService over the in-memory stores."""
    return InventoryShareService(
        session=mock_session,
        resolver=resolver,
        share_repository=share_repo,
        probe=share_probe,
    )


@pytest.fixture
def grant_probe():
    """Create mock grant service probe."""
    return create_autospec(AccessGrantServiceProbe, instance=True)


@pytest.fixture
def grant_service(mock_session, resolver, grant_repo, grant_probe):
    """AccessGrantService over the in-memory stores."""
    return AccessGrantService(
        session=mock_session,
        resolver=resolver,
        grant_repository=grant_repo,
        probe=grant_probe,
    )


@pytest.fixture
def transfer_probe():
    """Create mock ownership transfer probe."""
    return create_autospec(OwnershipTransferProbe, instance=True)


@pytest.fixture
def transfer_service(mock_session, resolver, registry, share_repo, transfer_probe):
    """OwnershipTransferService over the in-memory stores."""
    return OwnershipTransferService(
        session=mock_session,
        resolver=resolver,
        inventory_registry=registry,
        share_repository=share_repo,
        probe=transfer_probe,
    )


@pytest.fixture
def cleanup_probe():
    """Create mock relationship cleanup probe."""
    return create_autospec(RelationshipCleanupProbe, instance=True)


@pytest.fixture
def cleanup_service(
    mock_session, resolver, registry, grant_repo, share_repo, cleanup_probe
):
    """RelationshipCleanupService over the in-memory stores."""
    return RelationshipCleanupService(
        session=mock_session,
        resolver=resolver,
        inventory_registry=registry,
        grant_repository=grant_repo,
        share_repository=share_repo,
        probe=cleanup_probe,
    )
