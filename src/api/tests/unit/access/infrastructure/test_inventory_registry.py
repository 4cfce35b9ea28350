"""Unit tests for InventoryRegistry and IdentityStore with a mocked session."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from access.domain.value_objects import InventoryId, UserId
from access.infrastructure.identity_store import IdentityStore
from access.infrastructure.inventory_registry import InventoryRegistry
from access.infrastructure.models import InventoryModel, UserModel
from access.ports.exceptions import NotFoundError, UnavailableError
from access.ports.repositories import IIdentityStore, IInventoryRegistry


@pytest.fixture
def mock_session():
    """Create mock async session."""
    return AsyncMock()


@pytest.fixture
def registry(mock_session):
    return InventoryRegistry(session=mock_session)


@pytest.fixture
def identity_store(mock_session):
    return IdentityStore(session=mock_session)


class TestProtocolCompliance:
    def test_registry_implements_protocol(self, registry):
        assert isinstance(registry, IInventoryRegistry)

    def test_identity_store_implements_protocol(self, identity_store):
        assert isinstance(identity_store, IIdentityStore)


class TestIdentityStore:
    @pytest.mark.asyncio
    async def test_maps_flags(self, identity_store, mock_session):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = UserModel(
            id="admin", username="root", is_admin=True, is_active=True
        )
        mock_session.execute.return_value = mock_result

        user = await identity_store.get_user(UserId("admin"))

        assert user.id == UserId("admin")
        assert user.is_admin
        assert user.is_active

    @pytest.mark.asyncio
    async def test_returns_none_when_missing(self, identity_store, mock_session):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = None
        mock_session.execute.return_value = mock_result

        assert await identity_store.get_user(UserId("ghost")) is None

    @pytest.mark.asyncio
    async def test_pool_timeout_is_unavailable(self, identity_store, mock_session):
        mock_session.execute.side_effect = PoolTimeoutError("QueuePool limit reached")

        with pytest.raises(UnavailableError):
            await identity_store.get_user(UserId("alice"))


class TestInventoryRegistry:
    @pytest.mark.asyncio
    async def test_get_by_id_maps_owner(self, registry, mock_session):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = InventoryModel(
            id="garage", name="Garage", user_id="owner"
        )
        mock_session.execute.return_value = mock_result

        inventory = await registry.get_by_id(InventoryId("garage"))

        assert inventory.owner_id == UserId("owner")
        assert inventory.name == "Garage"

    @pytest.mark.asyncio
    async def test_get_many_skips_query_for_empty_input(self, registry, mock_session):
        assert await registry.get_many([]) == []
        mock_session.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_list_by_owners(self, registry, mock_session):
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = [
            InventoryModel(id="garage", name="Garage", user_id="owner"),
            InventoryModel(id="attic", name="Attic", user_id="bob"),
        ]
        mock_session.execute.return_value = mock_result

        inventories = await registry.list_by_owners([UserId("owner"), UserId("bob")])

        assert {i.id.value for i in inventories} == {"garage", "attic"}

    @pytest.mark.asyncio
    async def test_count_items(self, registry, mock_session):
        mock_result = MagicMock()
        mock_result.scalar_one.return_value = 7
        mock_session.execute.return_value = mock_result

        assert await registry.count_items(InventoryId("garage")) == 7

    @pytest.mark.asyncio
    async def test_update_owner_of_missing_inventory(self, registry, mock_session):
        mock_session.execute.return_value = MagicMock(rowcount=0)

        with pytest.raises(NotFoundError):
            await registry.update_owner(InventoryId("nowhere"), UserId("alice"))

    @pytest.mark.asyncio
    async def test_update_owner(self, registry, mock_session):
        mock_session.execute.return_value = MagicMock(rowcount=1)

        await registry.update_owner(InventoryId("garage"), UserId("alice"))

        mock_session.execute.assert_awaited_once()
