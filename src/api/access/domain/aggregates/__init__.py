"""Domain aggregates for the access context.

Aggregates enforce the grant and share invariants without depending on
infrastructure. Users and inventories are read-only views of records owned
by the identity store and the inventory registry.
"""

from access.domain.aggregates.access_grant import AccessGrant
from access.domain.aggregates.inventory import Inventory
from access.domain.aggregates.inventory_share import InventoryShare
from access.domain.aggregates.user import UserAccount

__all__ = [
    "AccessGrant",
    "Inventory",
    "InventoryShare",
    "UserAccount",
]
