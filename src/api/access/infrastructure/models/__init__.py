"""SQLAlchemy ORM models for the access bounded context.

`users`, `inventories` and `items` belong to the identity store and the
inventory registry; they are mapped here only for the columns access rules
read. `access_grants` and `inventory_shares` are owned by this context.
"""

from access.infrastructure.models.access_grant import AccessGrantModel
from access.infrastructure.models.inventory import InventoryModel, ItemModel
from access.infrastructure.models.inventory_share import InventoryShareModel
from access.infrastructure.models.user import UserModel

__all__ = [
    "AccessGrantModel",
    "InventoryModel",
    "InventoryShareModel",
    "ItemModel",
    "UserModel",
]
