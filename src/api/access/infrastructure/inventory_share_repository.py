"""PostgreSQL implementation of IInventoryShareRepository."""

from __future__ import annotations

from sqlalchemy import Delete, delete, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from access.domain.aggregates import InventoryShare
from access.domain.value_objects import InventoryId, PermissionLevel, ShareId, UserId
from access.infrastructure.database_errors import unavailable_on_transient
from access.infrastructure.models import InventoryShareModel
from access.infrastructure.observability import (
    DefaultInventoryShareRepositoryProbe,
    InventoryShareRepositoryProbe,
)
from access.ports.exceptions import AlreadyExistsError, NotFoundError
from access.ports.repositories import IInventoryShareRepository


class InventoryShareRepository(IInventoryShareRepository):
    """PostgreSQL-backed repository for InventoryShare aggregates.

    Tiers are stored under their canonical names, guarded by a check
    constraint.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: InventoryShareRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultInventoryShareRepositoryProbe()

    async def add(self, share: InventoryShare) -> None:
        """Persist a new share.

        Raises:
            AlreadyExistsError: If the inventory is already shared with the
                recipient
        """
        model = InventoryShareModel(
            id=share.id.value,
            inventory_id=share.inventory_id.value,
            shared_with_user_id=share.shared_with_user_id.value,
            shared_by_user_id=share.shared_by_user_id.value,
            permission_level=share.permission_level.value,
            created_at=share.created_at,
            updated_at=share.updated_at,
        )
        self._session.add(model)

        try:
            with unavailable_on_transient("add_inventory_share", self._probe):
                await self._session.flush()
        except IntegrityError as e:
            if "uq_inventory_shares_inventory_recipient" in str(e):
                self._probe.duplicate_share(
                    share.inventory_id.value, share.shared_with_user_id.value
                )
                raise AlreadyExistsError(
                    f"Inventory {share.inventory_id} is already shared with "
                    f"user {share.shared_with_user_id}"
                ) from e
            raise

        self._probe.share_saved(
            share.id.value, share.inventory_id.value, share.permission_level.value
        )

    async def save(self, share: InventoryShare) -> None:
        """Persist a changed tier on an existing share.

        Raises:
            NotFoundError: If the share no longer exists
        """
        stmt = select(InventoryShareModel).where(InventoryShareModel.id == share.id.value)
        with unavailable_on_transient("save_inventory_share", self._probe):
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()

            if model is None:
                raise NotFoundError(f"Share {share.id} not found")

            model.permission_level = share.permission_level.value
            model.updated_at = share.updated_at
            await self._session.flush()

        self._probe.share_saved(
            share.id.value, share.inventory_id.value, share.permission_level.value
        )

    async def get_by_id(self, share_id: ShareId) -> InventoryShare | None:
        """Retrieve a share by ID, or None if not found."""
        stmt = select(InventoryShareModel).where(InventoryShareModel.id == share_id.value)
        with unavailable_on_transient("get_inventory_share", self._probe):
            result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None
        return self._to_domain(model)

    async def get_for_user(
        self, inventory_id: InventoryId, user_id: UserId
    ) -> InventoryShare | None:
        """Retrieve the share of an inventory with a specific user, if any."""
        stmt = select(InventoryShareModel).where(
            InventoryShareModel.inventory_id == inventory_id.value,
            InventoryShareModel.shared_with_user_id == user_id.value,
        )
        with unavailable_on_transient("get_inventory_share_for_user", self._probe):
            result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None
        return self._to_domain(model)

    async def list_by_inventory(self, inventory_id: InventoryId) -> list[InventoryShare]:
        """List shares on an inventory, newest first."""
        stmt = (
            select(InventoryShareModel)
            .where(InventoryShareModel.inventory_id == inventory_id.value)
            .order_by(InventoryShareModel.created_at.desc())
        )
        with unavailable_on_transient("list_inventory_shares", self._probe):
            result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def list_by_recipient(self, user_id: UserId) -> list[InventoryShare]:
        """List shares a user has received, newest first."""
        stmt = (
            select(InventoryShareModel)
            .where(InventoryShareModel.shared_with_user_id == user_id.value)
            .order_by(InventoryShareModel.created_at.desc())
        )
        with unavailable_on_transient("list_received_inventory_shares", self._probe):
            result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def delete(self, share_id: ShareId) -> bool:
        """Delete a share.

        Returns:
            True if deleted, False if not found
        """
        stmt = select(InventoryShareModel).where(InventoryShareModel.id == share_id.value)
        with unavailable_on_transient("delete_inventory_share", self._probe):
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()

            if model is None:
                return False

            await self._session.delete(model)
            await self._session.flush()

        self._probe.share_deleted(share_id.value)
        return True

    async def delete_for_recipient(
        self, inventory_id: InventoryId, user_id: UserId
    ) -> int:
        """Delete the share of an inventory with a specific user."""
        stmt = delete(InventoryShareModel).where(
            InventoryShareModel.inventory_id == inventory_id.value,
            InventoryShareModel.shared_with_user_id == user_id.value,
        )
        return await self._delete_where(stmt, "recipient", user_id.value)

    async def delete_for_inventory(self, inventory_id: InventoryId) -> int:
        """Delete every share on an inventory."""
        stmt = delete(InventoryShareModel).where(
            InventoryShareModel.inventory_id == inventory_id.value
        )
        return await self._delete_where(stmt, "inventory", inventory_id.value)

    async def delete_for_user(self, user_id: UserId) -> int:
        """Delete every share the user created or received."""
        stmt = delete(InventoryShareModel).where(
            or_(
                InventoryShareModel.shared_with_user_id == user_id.value,
                InventoryShareModel.shared_by_user_id == user_id.value,
            )
        )
        return await self._delete_where(stmt, "user", user_id.value)

    async def _delete_where(self, stmt: Delete, scope: str, scope_id: str) -> int:
        with unavailable_on_transient(f"delete_inventory_shares_for_{scope}", self._probe):
            result = await self._session.execute(stmt)

        count = result.rowcount or 0
        self._probe.shares_deleted(scope, scope_id, count)
        return count

    @staticmethod
    def _to_domain(model: InventoryShareModel) -> InventoryShare:
        return InventoryShare(
            id=ShareId(value=model.id),
            inventory_id=InventoryId(value=model.inventory_id),
            shared_with_user_id=UserId(value=model.shared_with_user_id),
            shared_by_user_id=UserId(value=model.shared_by_user_id),
            permission_level=PermissionLevel(model.permission_level),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
