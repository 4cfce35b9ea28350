"""Domain probes for infrastructure observability.

Domain probes provide a high-level instrumentation API oriented around
domain semantics, keeping infrastructure code clean and testable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class EngineProbe(Protocol):
    """Domain probe for database engine lifecycle events."""

    def engine_created(self, connection: str, pool_size: int) -> None:
        """Record that the database engine was created."""
        ...

    def engine_disposed(self) -> None:
        """Record that the database engine and its pool were disposed."""
        ...

    def with_context(self, context: ObservationContext) -> EngineProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultEngineProbe:
    """Default implementation of EngineProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultEngineProbe:
        """Create a new probe with observation context bound."""
        return DefaultEngineProbe(logger=self._logger, context=context)

    def engine_created(self, connection: str, pool_size: int) -> None:
        """Record that the database engine was created.

        Args:
            connection: Connection string without the password
            pool_size: Maximum pool size
        """
        self._logger.info(
            "database_engine_created",
            connection=connection,
            pool_size=pool_size,
            **self._get_context_kwargs(),
        )

    def engine_disposed(self) -> None:
        """Record that the database engine and its pool were disposed."""
        self._logger.info(
            "database_engine_disposed",
            **self._get_context_kwargs(),
        )
