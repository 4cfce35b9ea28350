"""Protocol for all-access grant service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AccessGrantServiceProbe(Protocol):
    """Domain probe for all-access grant operations."""

    def grant_created(
        self, grant_id: str, grantor_id: str, grantee_id: str, acting_user_id: str
    ) -> None:
        """Record that an all-access grant was created."""
        ...

    def grant_creation_failed(
        self, grantor_id: str, grantee_id: str, error: str
    ) -> None:
        """Record that creating a grant failed."""
        ...

    def grant_revoked(
        self, grant_id: str, grantor_id: str, grantee_id: str, acting_user_id: str
    ) -> None:
        """Record that a grant was revoked."""
        ...

    def grant_already_absent(self, grant_id: str, acting_user_id: str) -> None:
        """Record that a revoke targeted a grant that does not exist."""
        ...

    def listing_denied(self, acting_user_id: str, subject_user_id: str) -> None:
        """Record an attempt to list another user's grants."""
        ...

    def with_context(self, context: ObservationContext) -> AccessGrantServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAccessGrantServiceProbe:
    """Default implementation of AccessGrantServiceProbe using structlog."""

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
    ) -> DefaultAccessGrantServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultAccessGrantServiceProbe(logger=self._logger, context=context)

    def grant_created(
        self, grant_id: str, grantor_id: str, grantee_id: str, acting_user_id: str
    ) -> None:
        """Record that an all-access grant was created."""
        self._logger.info(
            "access_grant_created",
            grant_id=grant_id,
            grantor_id=grantor_id,
            grantee_id=grantee_id,
            acting_user_id=acting_user_id,
            **self._get_context_kwargs(),
        )

    def grant_creation_failed(
        self, grantor_id: str, grantee_id: str, error: str
    ) -> None:
        """Record that creating a grant failed."""
        self._logger.warning(
            "access_grant_creation_failed",
            grantor_id=grantor_id,
            grantee_id=grantee_id,
            error=error,
            **self._get_context_kwargs(),
        )

    def grant_revoked(
        self, grant_id: str, grantor_id: str, grantee_id: str, acting_user_id: str
    ) -> None:
        """Record that a grant was revoked."""
        self._logger.info(
            "access_grant_revoked",
            grant_id=grant_id,
            grantor_id=grantor_id,
            grantee_id=grantee_id,
            acting_user_id=acting_user_id,
            **self._get_context_kwargs(),
        )

    def grant_already_absent(self, grant_id: str, acting_user_id: str) -> None:
        """Record that a revoke targeted a grant that does not exist."""
        self._logger.debug(
            "access_grant_already_absent",
            grant_id=grant_id,
            acting_user_id=acting_user_id,
            **self._get_context_kwargs(),
        )

    def listing_denied(self, acting_user_id: str, subject_user_id: str) -> None:
        """Record an attempt to list another user's grants."""
        self._logger.warning(
            "access_grant_listing_denied",
            acting_user_id=acting_user_id,
            subject_user_id=subject_user_id,
            **self._get_context_kwargs(),
        )
