"""AccessGrant aggregate for the access context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from access.domain.value_objects import AccessGrantId, UserId
from access.ports.exceptions import SelfGrantError


@dataclass(frozen=True)
class AccessGrant:
    """An "all access" edge from a grantor to a grantee.

    The grantee gets full access to every inventory the grantor owns, now or
    later. The grant is not pinned to inventories: it follows whoever is the
    current owner, so transferring an inventory moves it out of the old
    owner's grants and into the new owner's without any bookkeeping.

    Business rules:
    - grantor and grantee must differ
    - (grantor, grantee) is unique (enforced by the repository)
    - grants never expire
    """

    id: AccessGrantId
    grantor_id: UserId
    grantee_id: UserId
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create(cls, grantor_id: UserId, grantee_id: UserId) -> AccessGrant:
        """Factory method for creating a new grant.

        Args:
            grantor_id: The user whose inventories become accessible
            grantee_id: The user receiving access

        Returns:
            A new AccessGrant

        Raises:
            SelfGrantError: If grantor and grantee are the same user
        """
        if grantor_id == grantee_id:
            raise SelfGrantError(f"User {grantor_id} cannot grant access to themselves")

        return cls(
            id=AccessGrantId.generate(),
            grantor_id=grantor_id,
            grantee_id=grantee_id,
        )
