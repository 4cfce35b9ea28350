"""Protocol for relationship cleanup observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class RelationshipCleanupProbe(Protocol):
    """Domain probe for lifecycle cleanup of grants and shares."""

    def inventory_relationships_removed(
        self, inventory_id: str, shares_removed: int, acting_user_id: str
    ) -> None:
        """Record that an inventory's shares were removed."""
        ...

    def user_relationships_removed(
        self,
        user_id: str,
        grants_removed: int,
        shares_removed: int,
        acting_user_id: str,
    ) -> None:
        """Record that a user's grants and shares were removed."""
        ...

    def user_cleanup_blocked(self, user_id: str, owned_inventories: int) -> None:
        """Record that a user still owns inventories."""
        ...

    def with_context(self, context: ObservationContext) -> RelationshipCleanupProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultRelationshipCleanupProbe:
    """Default implementation of RelationshipCleanupProbe using structlog."""

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
    ) -> DefaultRelationshipCleanupProbe:
        """Create a new probe with observation context bound."""
        return DefaultRelationshipCleanupProbe(logger=self._logger, context=context)

    def inventory_relationships_removed(
        self, inventory_id: str, shares_removed: int, acting_user_id: str
    ) -> None:
        """Record that an inventory's shares were removed."""
        self._logger.info(
            "inventory_relationships_removed",
            inventory_id=inventory_id,
            shares_removed=shares_removed,
            acting_user_id=acting_user_id,
            **self._get_context_kwargs(),
        )

    def user_relationships_removed(
        self,
        user_id: str,
        grants_removed: int,
        shares_removed: int,
        acting_user_id: str,
    ) -> None:
        """Record that a user's grants and shares were removed."""
        self._logger.info(
            "user_relationships_removed",
            user_id=user_id,
            grants_removed=grants_removed,
            shares_removed=shares_removed,
            acting_user_id=acting_user_id,
            **self._get_context_kwargs(),
        )

    def user_cleanup_blocked(self, user_id: str, owned_inventories: int) -> None:
        """Record that a user still owns inventories."""
        self._logger.warning(
            "user_relationship_cleanup_blocked",
            user_id=user_id,
            owned_inventories=owned_inventories,
            **self._get_context_kwargs(),
        )
