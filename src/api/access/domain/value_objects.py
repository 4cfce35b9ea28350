"""Value objects for the access domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers, share tiers and permission sources.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from ulid import ULID


@dataclass(frozen=True)
class UserId:
    """Identifier for a user supplied by the identity store.

    The identity store owns the format, so the value is treated as opaque.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def from_string(cls, value: str) -> UserId:
        """Create UserId from string value.

        Raises:
            ValueError: If value is empty
        """
        if not value or not value.strip():
            raise ValueError("UserId cannot be empty")
        return cls(value=value)


@dataclass(frozen=True)
class InventoryId:
    """Identifier for an inventory held by the inventory registry."""

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def from_string(cls, value: str) -> InventoryId:
        """Create InventoryId from string value.

        Raises:
            ValueError: If value is empty
        """
        if not value or not value.strip():
            raise ValueError("InventoryId cannot be empty")
        return cls(value=value)


@dataclass(frozen=True)
class AccessGrantId:
    """Identifier for an AccessGrant.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> AccessGrantId:
        """Generate a new AccessGrantId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> AccessGrantId:
        """Create AccessGrantId from string value.

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid AccessGrantId: {value}") from e

        return cls(value=value)


@dataclass(frozen=True)
class ShareId:
    """Identifier for an InventoryShare.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> ShareId:
        """Generate a new ShareId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> ShareId:
        """Create ShareId from string value.

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid ShareId: {value}") from e

        return cls(value=value)


# Legacy share level names still found in older data and clients
_LEGACY_LEVEL_ALIASES = {
    "edit": "edit_items",
    "full": "edit_inventory",
}


class PermissionLevel(StrEnum):
    """Per-inventory share tiers.

    Tiers are totally ordered: VIEW < EDIT_ITEMS < EDIT_INVENTORY. A higher
    tier carries every capability of a lower one.
    """

    VIEW = "view"
    EDIT_ITEMS = "edit_items"
    EDIT_INVENTORY = "edit_inventory"

    @property
    def rank(self) -> int:
        """Position of this tier in the total order (0 is lowest)."""
        return _LEVEL_ORDER.index(self)

    def includes(self, other: PermissionLevel) -> bool:
        """Check whether this tier carries every capability of `other`."""
        return self.rank >= other.rank

    @classmethod
    def parse(cls, value: str, accept_legacy: bool = True) -> PermissionLevel:
        """Parse a tier name, case-insensitively.

        Args:
            value: The tier name
            accept_legacy: Map the legacy "edit" and "full" names

        Raises:
            ValueError: If the name is not a known tier
        """
        normalized = value.strip().lower()
        if accept_legacy:
            normalized = _LEGACY_LEVEL_ALIASES.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError as e:
            raise ValueError(f"Invalid permission level: {value}") from e


_LEVEL_ORDER = (
    PermissionLevel.VIEW,
    PermissionLevel.EDIT_ITEMS,
    PermissionLevel.EDIT_INVENTORY,
)


class PermissionSource(StrEnum):
    """Where a user's effective permissions on an inventory come from."""

    ADMIN = "admin"
    OWNER = "owner"
    ALL_ACCESS = "all_access"
    INVENTORY_SHARE = "inventory_share"
    NONE = "none"


class Capability(StrEnum):
    """Individual actions gated by effective permissions."""

    VIEW = "view"
    EDIT_ITEMS = "edit_items"
    ADD_ITEMS = "add_items"
    REMOVE_ITEMS = "remove_items"
    EDIT_INVENTORY = "edit_inventory"
    DELETE_INVENTORY = "delete_inventory"
    MANAGE_SHARING = "manage_sharing"
    MANAGE_ORGANIZERS = "manage_organizers"
    TRANSFER_OWNERSHIP = "transfer_ownership"
