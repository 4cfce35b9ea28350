"""User account as seen by the access domain."""

from __future__ import annotations

from dataclasses import dataclass

from access.domain.value_objects import UserId


@dataclass(frozen=True)
class UserAccount:
    """A user supplied by the identity store.

    The access domain never mutates users; it only needs the identifier and
    the two flags that influence authorization.
    """

    id: UserId
    is_admin: bool = False
    is_active: bool = True

    def __str__(self) -> str:
        """Return string representation."""
        return f"UserAccount({self.id})"

    def __eq__(self, other: object) -> bool:
        """Users are equal if they have the same ID (identity-based equality)."""
        if not isinstance(other, UserAccount):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)
