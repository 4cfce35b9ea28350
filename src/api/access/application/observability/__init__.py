"""Domain-Oriented Observability for the access application layer.

Probes for the resolver and the application services.
"""

from access.application.observability.access_grant_service_probe import (
    AccessGrantServiceProbe,
    DefaultAccessGrantServiceProbe,
)
from access.application.observability.inventory_share_service_probe import (
    DefaultInventoryShareServiceProbe,
    InventoryShareServiceProbe,
)
from access.application.observability.ownership_transfer_probe import (
    DefaultOwnershipTransferProbe,
    OwnershipTransferProbe,
)
from access.application.observability.permission_resolver_probe import (
    DefaultPermissionResolverProbe,
    PermissionResolverProbe,
)
from access.application.observability.relationship_cleanup_probe import (
    DefaultRelationshipCleanupProbe,
    RelationshipCleanupProbe,
)

__all__ = [
    "AccessGrantServiceProbe",
    "DefaultAccessGrantServiceProbe",
    "InventoryShareServiceProbe",
    "DefaultInventoryShareServiceProbe",
    "OwnershipTransferProbe",
    "DefaultOwnershipTransferProbe",
    "PermissionResolverProbe",
    "DefaultPermissionResolverProbe",
    "RelationshipCleanupProbe",
    "DefaultRelationshipCleanupProbe",
]
