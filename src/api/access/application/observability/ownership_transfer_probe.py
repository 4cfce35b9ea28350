"""Protocol for ownership transfer observability.

Transfers are irreversible for the previous owner, so every completed or
rejected transfer is recorded as an audit event.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class OwnershipTransferProbe(Protocol):
    """Domain probe for ownership transfer operations."""

    def ownership_transferred(
        self,
        inventory_id: str,
        previous_owner_id: str,
        new_owner_id: str,
        acting_user_id: str,
        items_transferred: int,
        shares_removed: int,
    ) -> None:
        """Record that an inventory changed owner."""
        ...

    def transfer_rejected(
        self, inventory_id: str, acting_user_id: str, reason: str
    ) -> None:
        """Record that a transfer failed a precondition."""
        ...

    def with_context(self, context: ObservationContext) -> OwnershipTransferProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultOwnershipTransferProbe:
    """Default implementation of OwnershipTransferProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultOwnershipTransferProbe:
        """Create a new probe with observation context bound."""
        return DefaultOwnershipTransferProbe(logger=self._logger, context=context)

    def ownership_transferred(
        self,
        inventory_id: str,
        previous_owner_id: str,
        new_owner_id: str,
        acting_user_id: str,
        items_transferred: int,
        shares_removed: int,
    ) -> None:
        """Record that an inventory changed owner."""
        self._logger.info(
            "ownership_transferred",
            inventory_id=inventory_id,
            previous_owner_id=previous_owner_id,
            new_owner_id=new_owner_id,
            acting_user_id=acting_user_id,
            items_transferred=items_transferred,
            shares_removed=shares_removed,
            **self._get_context_kwargs(),
        )

    def transfer_rejected(
        self, inventory_id: str, acting_user_id: str, reason: str
    ) -> None:
        """Record that a transfer failed a precondition."""
        self._logger.warning(
            "ownership_transfer_rejected",
            inventory_id=inventory_id,
            acting_user_id=acting_user_id,
            reason=reason,
            **self._get_context_kwargs(),
        )
