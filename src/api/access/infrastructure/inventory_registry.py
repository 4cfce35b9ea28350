"""PostgreSQL implementation of IInventoryRegistry.

Reads inventory ownership and item counts. The only write is the owner
update performed by an ownership transfer.
"""

from __future__ import annotations

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from access.domain.aggregates import Inventory
from access.domain.value_objects import InventoryId, UserId
from access.infrastructure.database_errors import unavailable_on_transient
from access.infrastructure.models import InventoryModel, ItemModel
from access.infrastructure.observability import (
    DefaultInventoryRegistryProbe,
    InventoryRegistryProbe,
)
from access.ports.exceptions import NotFoundError
from access.ports.repositories import IInventoryRegistry


class InventoryRegistry(IInventoryRegistry):
    """PostgreSQL-backed view of inventories and their owners."""

    def __init__(
        self, session: AsyncSession, probe: InventoryRegistryProbe | None = None
    ) -> None:
        """Initialize registry with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultInventoryRegistryProbe()

    async def get_by_id(self, inventory_id: InventoryId) -> Inventory | None:
        """Retrieve an inventory by ID, or None if not found."""
        stmt = select(InventoryModel).where(InventoryModel.id == inventory_id.value)
        with unavailable_on_transient("get_inventory", self._probe):
            result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None
        return self._to_domain(model)

    async def get_many(self, inventory_ids: list[InventoryId]) -> list[Inventory]:
        """Retrieve several inventories by ID, skipping unknown IDs."""
        if not inventory_ids:
            return []

        stmt = select(InventoryModel).where(
            InventoryModel.id.in_([i.value for i in inventory_ids])
        )
        with unavailable_on_transient("get_inventories", self._probe):
            result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def list_by_owners(self, owner_ids: list[UserId]) -> list[Inventory]:
        """List every inventory currently owned by any of the given users."""
        if not owner_ids:
            return []

        stmt = select(InventoryModel).where(
            InventoryModel.user_id.in_([o.value for o in owner_ids])
        )
        with unavailable_on_transient("list_inventories_by_owners", self._probe):
            result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def list_all(self) -> list[Inventory]:
        """List every inventory in the system."""
        stmt = select(InventoryModel).order_by(InventoryModel.name)
        with unavailable_on_transient("list_all_inventories", self._probe):
            result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def count_items(self, inventory_id: InventoryId) -> int:
        """Count the items stored in an inventory."""
        stmt = (
            select(func.count())
            .select_from(ItemModel)
            .where(ItemModel.inventory_id == inventory_id.value)
        )
        with unavailable_on_transient("count_items", self._probe):
            result = await self._session.execute(stmt)
        return result.scalar_one()

    async def count_owned_by(self, user_id: UserId) -> int:
        """Count the inventories a user currently owns."""
        stmt = (
            select(func.count())
            .select_from(InventoryModel)
            .where(InventoryModel.user_id == user_id.value)
        )
        with unavailable_on_transient("count_owned_inventories", self._probe):
            result = await self._session.execute(stmt)
        return result.scalar_one()

    async def update_owner(self, inventory_id: InventoryId, owner_id: UserId) -> None:
        """Re-point an inventory to a new owner.

        Raises:
            NotFoundError: If the inventory does not exist
        """
        stmt = (
            update(InventoryModel)
            .where(InventoryModel.id == inventory_id.value)
            .values(user_id=owner_id.value)
        )
        with unavailable_on_transient("update_inventory_owner", self._probe):
            result = await self._session.execute(stmt)

        if result.rowcount == 0:
            raise NotFoundError(f"Inventory {inventory_id} not found")

        self._probe.owner_updated(inventory_id.value, owner_id.value)

    @staticmethod
    def _to_domain(model: InventoryModel) -> Inventory:
        return Inventory(
            id=InventoryId(value=model.id),
            owner_id=UserId(value=model.user_id),
            name=model.name,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
