"""Application services for the access bounded context."""

from access.application.services.access_grant_service import AccessGrantService
from access.application.services.inventory_share_service import InventoryShareService
from access.application.services.ownership_transfer_service import (
    OwnershipTransferService,
    TransferResult,
)
from access.application.services.relationship_cleanup_service import (
    RelationshipCleanupResult,
    RelationshipCleanupService,
)

__all__ = [
    "AccessGrantService",
    "InventoryShareService",
    "OwnershipTransferService",
    "TransferResult",
    "RelationshipCleanupResult",
    "RelationshipCleanupService",
]
