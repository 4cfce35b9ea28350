"""Domain probes for access infrastructure."""

from access.infrastructure.observability.repository_probe import (
    AccessGrantRepositoryProbe,
    DatabaseAvailabilityProbe,
    DefaultAccessGrantRepositoryProbe,
    DefaultIdentityStoreProbe,
    DefaultInventoryRegistryProbe,
    DefaultInventoryShareRepositoryProbe,
    IdentityStoreProbe,
    InventoryRegistryProbe,
    InventoryShareRepositoryProbe,
)

__all__ = [
    "AccessGrantRepositoryProbe",
    "DatabaseAvailabilityProbe",
    "DefaultAccessGrantRepositoryProbe",
    "DefaultIdentityStoreProbe",
    "DefaultInventoryRegistryProbe",
    "DefaultInventoryShareRepositoryProbe",
    "IdentityStoreProbe",
    "InventoryRegistryProbe",
    "InventoryShareRepositoryProbe",
]
