"""Domain probes for access repository operations.

Following Domain-Oriented Observability patterns, these probes capture
persistence events for grants and shares, ownership changes in the
inventory registry and database outages seen by any access repository.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class DatabaseAvailabilityProbe(Protocol):
    """Events shared by every access repository."""

    def database_unavailable(self, operation: str, error: str) -> None:
        """Record that a transient database failure interrupted an operation."""
        ...


class AccessGrantRepositoryProbe(DatabaseAvailabilityProbe, Protocol):
    """Domain probe for grant repository operations."""

    def grant_saved(self, grant_id: str, grantor_id: str, grantee_id: str) -> None:
        """Record that a grant was persisted."""
        ...

    def grant_deleted(self, grant_id: str) -> None:
        """Record that a grant was deleted."""
        ...

    def grants_deleted_for_user(self, user_id: str, count: int) -> None:
        """Record that every grant involving a user was deleted."""
        ...

    def duplicate_grant(self, grantor_id: str, grantee_id: str) -> None:
        """Record that the unique constraint rejected a grant."""
        ...

    def with_context(self, context: ObservationContext) -> AccessGrantRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class InventoryShareRepositoryProbe(DatabaseAvailabilityProbe, Protocol):
    """Domain probe for share repository operations."""

    def share_saved(self, share_id: str, inventory_id: str, permission_level: str) -> None:
        """Record that a share was persisted."""
        ...

    def share_deleted(self, share_id: str) -> None:
        """Record that a share was deleted."""
        ...

    def shares_deleted(self, scope: str, scope_id: str, count: int) -> None:
        """Record a bulk share deletion for an inventory, recipient or user."""
        ...

    def duplicate_share(self, inventory_id: str, shared_with_user_id: str) -> None:
        """Record that the unique constraint rejected a share."""
        ...

    def with_context(
        self, context: ObservationContext
    ) -> InventoryShareRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class InventoryRegistryProbe(DatabaseAvailabilityProbe, Protocol):
    """Domain probe for inventory registry operations."""

    def owner_updated(self, inventory_id: str, owner_id: str) -> None:
        """Record that an inventory was re-pointed to a new owner."""
        ...

    def with_context(self, context: ObservationContext) -> InventoryRegistryProbe:
        """Create a new probe with observation context bound."""
        ...


class IdentityStoreProbe(DatabaseAvailabilityProbe, Protocol):
    """Domain probe for identity store reads."""

    def with_context(self, context: ObservationContext) -> IdentityStoreProbe:
        """Create a new probe with observation context bound."""
        ...


class _DefaultRepositoryProbe:
    """Shared structlog plumbing for the default repository probes."""

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

    def with_context(self, context: ObservationContext) -> Any:
        """Create a new probe with observation context bound."""
        return type(self)(logger=self._logger, context=context)

    def database_unavailable(self, operation: str, error: str) -> None:
        """Record that a transient database failure interrupted an operation."""
        self._logger.error(
            "database_unavailable",
            operation=operation,
            error=error,
            **self._get_context_kwargs(),
        )


class DefaultAccessGrantRepositoryProbe(_DefaultRepositoryProbe):
    """Default implementation of AccessGrantRepositoryProbe using structlog."""

    def grant_saved(self, grant_id: str, grantor_id: str, grantee_id: str) -> None:
        """Record that a grant was persisted."""
        self._logger.debug(
            "access_grant_saved",
            grant_id=grant_id,
            grantor_id=grantor_id,
            grantee_id=grantee_id,
            **self._get_context_kwargs(),
        )

    def grant_deleted(self, grant_id: str) -> None:
        """Record that a grant was deleted."""
        self._logger.debug(
            "access_grant_deleted",
            grant_id=grant_id,
            **self._get_context_kwargs(),
        )

    def grants_deleted_for_user(self, user_id: str, count: int) -> None:
        """Record that every grant involving a user was deleted."""
        self._logger.debug(
            "access_grants_deleted_for_user",
            user_id=user_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def duplicate_grant(self, grantor_id: str, grantee_id: str) -> None:
        """Record that the unique constraint rejected a grant."""
        self._logger.warning(
            "duplicate_access_grant",
            grantor_id=grantor_id,
            grantee_id=grantee_id,
            **self._get_context_kwargs(),
        )


class DefaultInventoryShareRepositoryProbe(_DefaultRepositoryProbe):
    """Default implementation of InventoryShareRepositoryProbe using structlog."""

    def share_saved(self, share_id: str, inventory_id: str, permission_level: str) -> None:
        """Record that a share was persisted."""
        self._logger.debug(
            "inventory_share_saved",
            share_id=share_id,
            inventory_id=inventory_id,
            permission_level=permission_level,
            **self._get_context_kwargs(),
        )

    def share_deleted(self, share_id: str) -> None:
        """Record that a share was deleted."""
        self._logger.debug(
            "inventory_share_deleted",
            share_id=share_id,
            **self._get_context_kwargs(),
        )

    def shares_deleted(self, scope: str, scope_id: str, count: int) -> None:
        """Record a bulk share deletion for an inventory, recipient or user."""
        self._logger.debug(
            "inventory_shares_deleted",
            scope=scope,
            scope_id=scope_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def duplicate_share(self, inventory_id: str, shared_with_user_id: str) -> None:
        """Record that the unique constraint rejected a share."""
        self._logger.warning(
            "duplicate_inventory_share",
            inventory_id=inventory_id,
            shared_with_user_id=shared_with_user_id,
            **self._get_context_kwargs(),
        )


class DefaultInventoryRegistryProbe(_DefaultRepositoryProbe):
    """Default implementation of InventoryRegistryProbe using structlog."""

    def owner_updated(self, inventory_id: str, owner_id: str) -> None:
        """Record that an inventory was re-pointed to a new owner."""
        self._logger.debug(
            "inventory_owner_updated",
            inventory_id=inventory_id,
            owner_id=owner_id,
            **self._get_context_kwargs(),
        )


class DefaultIdentityStoreProbe(_DefaultRepositoryProbe):
    """Default implementation of IdentityStoreProbe using structlog."""
