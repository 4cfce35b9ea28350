"""Protocol for permission resolver observability.

Admin-sourced resolutions are logged as audit events so elevated access is
never silent. Fail-closed lookups are logged as errors.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class PermissionResolverProbe(Protocol):
    """Domain probe for permission resolution."""

    def permissions_resolved(
        self,
        user_id: str,
        inventory_id: str,
        permission_source: str,
        capabilities: list[str],
    ) -> None:
        """Record the outcome of a resolution."""
        ...

    def admin_access_used(self, user_id: str, inventory_id: str) -> None:
        """Record that admin status granted access to an inventory."""
        ...

    def user_not_found(self, user_id: str) -> None:
        """Record that the acting user does not exist."""
        ...

    def inventory_not_found(self, inventory_id: str) -> None:
        """Record that the target inventory does not exist."""
        ...

    def lookup_failed(
        self, lookup: str, user_id: str, inventory_id: str, error: str
    ) -> None:
        """Record that a grant or share lookup failed and was treated as absent."""
        ...

    def access_denied(self, user_id: str, inventory_id: str, capability: str) -> None:
        """Record that a required capability was missing."""
        ...

    def with_context(self, context: ObservationContext) -> PermissionResolverProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultPermissionResolverProbe:
    """Default implementation of PermissionResolverProbe using structlog."""

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
    ) -> DefaultPermissionResolverProbe:
        """Create a new probe with observation context bound."""
        return DefaultPermissionResolverProbe(logger=self._logger, context=context)

    def permissions_resolved(
        self,
        user_id: str,
        inventory_id: str,
        permission_source: str,
        capabilities: list[str],
    ) -> None:
        """Record the outcome of a resolution and the capabilities it allows."""
        self._logger.debug(
            "permissions_resolved",
            user_id=user_id,
            inventory_id=inventory_id,
            permission_source=permission_source,
            capabilities=capabilities,
            **self._get_context_kwargs(),
        )

    def admin_access_used(self, user_id: str, inventory_id: str) -> None:
        """Record that admin status granted access to an inventory."""
        self._logger.info(
            "admin_access_used",
            user_id=user_id,
            inventory_id=inventory_id,
            **self._get_context_kwargs(),
        )

    def user_not_found(self, user_id: str) -> None:
        """Record that the acting user does not exist."""
        self._logger.warning(
            "permission_resolution_user_not_found",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def inventory_not_found(self, inventory_id: str) -> None:
        """Record that the target inventory does not exist."""
        self._logger.debug(
            "permission_resolution_inventory_not_found",
            inventory_id=inventory_id,
            **self._get_context_kwargs(),
        )

    def lookup_failed(
        self, lookup: str, user_id: str, inventory_id: str, error: str
    ) -> None:
        """Record that a grant or share lookup failed and was treated as absent."""
        self._logger.error(
            "permission_lookup_failed",
            lookup=lookup,
            user_id=user_id,
            inventory_id=inventory_id,
            error=error,
            **self._get_context_kwargs(),
        )

    def access_denied(self, user_id: str, inventory_id: str, capability: str) -> None:
        """Record that a required capability was missing."""
        self._logger.warning(
            "access_denied",
            user_id=user_id,
            inventory_id=inventory_id,
            capability=capability,
            **self._get_context_kwargs(),
        )
