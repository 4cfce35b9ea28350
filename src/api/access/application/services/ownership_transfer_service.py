"""Ownership transfer coordinator.

Moves an inventory to a new owner as one atomic unit: the owner change, the
removal of the new owner's now-redundant share and the item count all run in
a single serializable transaction.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from access.application.observability import (
    DefaultOwnershipTransferProbe,
    OwnershipTransferProbe,
)
from access.application.permission_resolver import PermissionResolver
from access.domain.value_objects import InventoryId, UserId
from access.ports.exceptions import (
    AccessControlError,
    ErrorKind,
    NoOpTransferError,
    NotOwnerError,
    TargetInactiveError,
    TargetNotFoundError,
    UnavailableError,
)
from access.ports.repositories import IInventoryRegistry, IInventoryShareRepository
from infrastructure.database.exceptions import is_transient_database_error


@dataclass(frozen=True)
class TransferResult:
    """Outcome of a completed ownership transfer."""

    inventory_id: InventoryId
    previous_owner_id: UserId
    new_owner_id: UserId
    items_transferred: int
    shares_removed: int


class OwnershipTransferService:
    """Coordinates ownership transfers of inventories.

    All-access grants are untouched: they follow whoever currently owns an
    inventory, so the previous owner's grantees lose access and the new
    owner's grantees gain it. Shares held by anyone other than the new owner
    survive the transfer.
    """

    def __init__(
        self,
        session: AsyncSession,
        resolver: PermissionResolver,
        inventory_registry: IInventoryRegistry,
        share_repository: IInventoryShareRepository,
        isolation_level: str = "SERIALIZABLE",
        probe: OwnershipTransferProbe | None = None,
    ):
        """Initialize OwnershipTransferService with dependencies.

        Args:
            session: Database session for transaction management
            resolver: Permission resolver sharing the same session, used to
                load users and inventories
            inventory_registry: Registry holding inventory ownership
            share_repository: Repository for share persistence
            isolation_level: Transaction isolation level for transfers
            probe: Optional domain probe for observability
        """
        self._session = session
        self._resolver = resolver
        self._inventory_registry = inventory_registry
        self._share_repository = share_repository
        self._isolation_level = isolation_level
        self._probe = probe or DefaultOwnershipTransferProbe()

    async def transfer_ownership(
        self,
        inventory_id: InventoryId,
        acting_user_id: UserId,
        new_owner_id: UserId,
    ) -> TransferResult:
        """Transfer an inventory to a new owner.

        Preconditions are checked in order inside the transaction; the first
        failing one is reported and nothing is changed.

        Args:
            inventory_id: The inventory to transfer
            acting_user_id: The current owner or an admin
            new_owner_id: The user who will own the inventory

        Returns:
            TransferResult with the previous owner and what was affected

        Raises:
            NotFoundError: If the inventory or the acting user is unknown
            NotOwnerError: If the acting user is neither owner nor admin
            TargetNotFoundError: If the new owner is unknown
            TargetInactiveError: If the new owner is deactivated
            NoOpTransferError: If the new owner already owns the inventory
            UnavailableError: If the store is unreachable or the transaction
                could not be serialized
        """
        try:
            async with self._session.begin():
                await self._session.connection(
                    execution_options={"isolation_level": self._isolation_level}
                )

                inventory = await self._resolver.get_inventory(inventory_id)
                acting_user = await self._resolver.get_user(acting_user_id)
                if not acting_user.is_admin and not inventory.is_owned_by(
                    acting_user_id
                ):
                    raise NotOwnerError(
                        f"User {acting_user_id} does not own inventory {inventory_id}"
                    )

                new_owner = await self._resolver.get_user_or_none(new_owner_id)
                if new_owner is None:
                    raise TargetNotFoundError(f"User {new_owner_id} not found")
                if not new_owner.is_active:
                    raise TargetInactiveError(f"User {new_owner_id} is inactive")
                if inventory.is_owned_by(new_owner_id):
                    raise NoOpTransferError(
                        f"User {new_owner_id} already owns inventory {inventory_id}"
                    )

                await self._inventory_registry.update_owner(inventory_id, new_owner_id)
                shares_removed = await self._share_repository.delete_for_recipient(
                    inventory_id=inventory_id, user_id=new_owner_id
                )
                items_transferred = await self._inventory_registry.count_items(
                    inventory_id
                )
        except AccessControlError as e:
            self._probe.transfer_rejected(
                inventory_id=inventory_id.value,
                acting_user_id=acting_user_id.value,
                reason=e.kind.value,
            )
            raise
        except (SQLAlchemyError, TimeoutError) as e:
            # Serialization conflicts can surface on commit, outside any repository
            if not is_transient_database_error(e):
                raise
            self._probe.transfer_rejected(
                inventory_id=inventory_id.value,
                acting_user_id=acting_user_id.value,
                reason=ErrorKind.UNAVAILABLE.value,
            )
            raise UnavailableError(
                f"Transfer of inventory {inventory_id} could not be completed"
            ) from e

        result = TransferResult(
            inventory_id=inventory_id,
            previous_owner_id=inventory.owner_id,
            new_owner_id=new_owner_id,
            items_transferred=items_transferred,
            shares_removed=shares_removed,
        )
        self._probe.ownership_transferred(
            inventory_id=inventory_id.value,
            previous_owner_id=inventory.owner_id.value,
            new_owner_id=new_owner_id.value,
            acting_user_id=acting_user_id.value,
            items_transferred=items_transferred,
            shares_removed=shares_removed,
        )
        return result
