"""Inventory record as seen by the access domain."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from access.domain.value_objects import InventoryId, UserId


@dataclass(frozen=True)
class Inventory:
    """An inventory (collection of items) held by the inventory registry.

    Business rules:
    - An inventory has exactly one owner after creation
    - The owner changes only through an ownership transfer
    """

    id: InventoryId
    owner_id: UserId
    name: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_owned_by(self, user_id: UserId) -> bool:
        """Check whether the given user is the current owner."""
        return self.owner_id == user_id
