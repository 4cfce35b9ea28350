"""FastAPI dependency providers for the access bounded context.

Every provider resolves the request-scoped write session, so FastAPI's
dependency caching hands the same session to the resolver, the repositories
and the service of one request.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from access.application.permission_resolver import PermissionResolver
from access.application.services import (
    AccessGrantService,
    InventoryShareService,
    OwnershipTransferService,
    RelationshipCleanupService,
)
from access.infrastructure.access_grant_repository import AccessGrantRepository
from access.infrastructure.identity_store import IdentityStore
from access.infrastructure.inventory_registry import InventoryRegistry
from access.infrastructure.inventory_share_repository import InventoryShareRepository
from infrastructure.database.dependencies import get_write_session
from infrastructure.settings import AccessControlSettings, get_access_control_settings


def get_identity_store(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> IdentityStore:
    """Get IdentityStore instance."""
    return IdentityStore(session=session)


def get_inventory_registry(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> InventoryRegistry:
    """Get InventoryRegistry instance."""
    return InventoryRegistry(session=session)


def get_access_grant_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> AccessGrantRepository:
    """Get AccessGrantRepository instance."""
    return AccessGrantRepository(session=session)


def get_inventory_share_repository(
    session: Annotated[AsyncSession, Depends(get_write_session)],
) -> InventoryShareRepository:
    """Get InventoryShareRepository instance."""
    return InventoryShareRepository(session=session)


def get_permission_resolver(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    identity_store: Annotated[IdentityStore, Depends(get_identity_store)],
    registry: Annotated[InventoryRegistry, Depends(get_inventory_registry)],
    grant_repo: Annotated[AccessGrantRepository, Depends(get_access_grant_repository)],
    share_repo: Annotated[
        InventoryShareRepository, Depends(get_inventory_share_repository)
    ],
) -> PermissionResolver:
    """Get PermissionResolver instance.

    Args:
        session: The request session, shared with the services
        identity_store: Users and their admin flag
        registry: Inventories and their owners
        grant_repo: All-access grant lookups
        share_repo: Per-inventory share lookups

    Returns:
        PermissionResolver over the request's session
    """
    return PermissionResolver(
        session=session,
        identity_store=identity_store,
        inventory_registry=registry,
        grant_repository=grant_repo,
        share_repository=share_repo,
    )


def get_inventory_share_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    resolver: Annotated[PermissionResolver, Depends(get_permission_resolver)],
    share_repo: Annotated[
        InventoryShareRepository, Depends(get_inventory_share_repository)
    ],
    settings: Annotated[AccessControlSettings, Depends(get_access_control_settings)],
) -> InventoryShareService:
    """Get InventoryShareService instance."""
    return InventoryShareService(
        session=session,
        resolver=resolver,
        share_repository=share_repo,
        accept_legacy_levels=settings.accept_legacy_levels,
    )


def get_access_grant_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    resolver: Annotated[PermissionResolver, Depends(get_permission_resolver)],
    grant_repo: Annotated[AccessGrantRepository, Depends(get_access_grant_repository)],
) -> AccessGrantService:
    """Get AccessGrantService instance."""
    return AccessGrantService(
        session=session,
        resolver=resolver,
        grant_repository=grant_repo,
    )


def get_ownership_transfer_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    resolver: Annotated[PermissionResolver, Depends(get_permission_resolver)],
    registry: Annotated[InventoryRegistry, Depends(get_inventory_registry)],
    share_repo: Annotated[
        InventoryShareRepository, Depends(get_inventory_share_repository)
    ],
    settings: Annotated[AccessControlSettings, Depends(get_access_control_settings)],
) -> OwnershipTransferService:
    """Get OwnershipTransferService instance.

    The transaction isolation level comes from INVENTORY_ACCESS_TRANSFER_ISOLATION_LEVEL.
    """
    return OwnershipTransferService(
        session=session,
        resolver=resolver,
        inventory_registry=registry,
        share_repository=share_repo,
        isolation_level=settings.transfer_isolation_level,
    )


def get_relationship_cleanup_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    resolver: Annotated[PermissionResolver, Depends(get_permission_resolver)],
    registry: Annotated[InventoryRegistry, Depends(get_inventory_registry)],
    grant_repo: Annotated[AccessGrantRepository, Depends(get_access_grant_repository)],
    share_repo: Annotated[
        InventoryShareRepository, Depends(get_inventory_share_repository)
    ],
) -> RelationshipCleanupService:
    """Get RelationshipCleanupService instance."""
    return RelationshipCleanupService(
        session=session,
        resolver=resolver,
        inventory_registry=registry,
        grant_repository=grant_repo,
        share_repository=share_repo,
    )
