"""Observation context for domain-oriented observability.

Observation contexts carry request-scoped metadata that every probe event
should include, so access decisions and mutations can be correlated across
the resolver, the services and the repositories.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Attributes:
        request_id: Unique identifier for the current request/operation.
        acting_user_id: The authenticated user performing the operation.
        inventory_id: The inventory the operation targets (if applicable).
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(request_id="req-123", acting_user_id="u-1")
        probe = DefaultPermissionResolverProbe().with_context(context)
    """

    request_id: str | None = None
    acting_user_id: str | None = None
    inventory_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.acting_user_id is not None:
            result["context_user_id"] = self.acting_user_id
        if self.inventory_id is not None:
            result["context_inventory_id"] = self.inventory_id
        result.update(self.extra)
        return result
