"""Protocol for inventory share service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class InventoryShareServiceProbe(Protocol):
    """Domain probe for share management operations."""

    def share_created(
        self,
        share_id: str,
        inventory_id: str,
        shared_with_user_id: str,
        shared_by_user_id: str,
        permission_level: str,
    ) -> None:
        """Record that an inventory was shared."""
        ...

    def share_creation_failed(
        self, inventory_id: str, acting_user_id: str, error: str
    ) -> None:
        """Record that sharing an inventory failed."""
        ...

    def share_tier_updated(
        self,
        share_id: str,
        inventory_id: str,
        old_level: str,
        new_level: str,
        acting_user_id: str,
    ) -> None:
        """Record that a share's tier changed."""
        ...

    def share_revoked(self, share_id: str, inventory_id: str, acting_user_id: str) -> None:
        """Record that a share was revoked."""
        ...

    def share_already_absent(self, share_id: str, acting_user_id: str) -> None:
        """Record that a revoke targeted a share that does not exist."""
        ...

    def with_context(self, context: ObservationContext) -> InventoryShareServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultInventoryShareServiceProbe:
    """Default implementation of InventoryShareServiceProbe using structlog."""

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
    ) -> DefaultInventoryShareServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultInventoryShareServiceProbe(logger=self._logger, context=context)

    def share_created(
        self,
        share_id: str,
        inventory_id: str,
        shared_with_user_id: str,
        shared_by_user_id: str,
        permission_level: str,
    ) -> None:
        """Record that an inventory was shared."""
        self._logger.info(
            "inventory_share_created",
            share_id=share_id,
            inventory_id=inventory_id,
            shared_with_user_id=shared_with_user_id,
            shared_by_user_id=shared_by_user_id,
            permission_level=permission_level,
            **self._get_context_kwargs(),
        )

    def share_creation_failed(
        self, inventory_id: str, acting_user_id: str, error: str
    ) -> None:
        """Record that sharing an inventory failed."""
        self._logger.warning(
            "inventory_share_creation_failed",
            inventory_id=inventory_id,
            acting_user_id=acting_user_id,
            error=error,
            **self._get_context_kwargs(),
        )

    def share_tier_updated(
        self,
        share_id: str,
        inventory_id: str,
        old_level: str,
        new_level: str,
        acting_user_id: str,
    ) -> None:
        """Record that a share's tier changed."""
        self._logger.info(
            "inventory_share_tier_updated",
            share_id=share_id,
            inventory_id=inventory_id,
            old_level=old_level,
            new_level=new_level,
            acting_user_id=acting_user_id,
            **self._get_context_kwargs(),
        )

    def share_revoked(self, share_id: str, inventory_id: str, acting_user_id: str) -> None:
        """Record that a share was revoked."""
        self._logger.info(
            "inventory_share_revoked",
            share_id=share_id,
            inventory_id=inventory_id,
            acting_user_id=acting_user_id,
            **self._get_context_kwargs(),
        )

    def share_already_absent(self, share_id: str, acting_user_id: str) -> None:
        """Record that a revoke targeted a share that does not exist."""
        self._logger.debug(
            "inventory_share_already_absent",
            share_id=share_id,
            acting_user_id=acting_user_id,
            **self._get_context_kwargs(),
        )
