"""Unit tests for the access dependency providers."""

from unittest.mock import MagicMock

from sqlalchemy.ext.asyncio import AsyncSession

from access.application.permission_resolver import PermissionResolver
from access.dependencies import (
    get_access_grant_repository,
    get_access_grant_service,
    get_identity_store,
    get_inventory_registry,
    get_inventory_share_repository,
    get_inventory_share_service,
    get_ownership_transfer_service,
    get_permission_resolver,
    get_relationship_cleanup_service,
)
from infrastructure.settings import AccessControlSettings


def _wire():
    session = MagicMock(spec=AsyncSession)
    identity_store = get_identity_store(session)
    registry = get_inventory_registry(session)
    grant_repo = get_access_grant_repository(session)
    share_repo = get_inventory_share_repository(session)
    resolver = get_permission_resolver(
        session, identity_store, registry, grant_repo, share_repo
    )
    return session, registry, grant_repo, share_repo, resolver


def test_resolver_is_built_from_repositories():
    _, _, _, _, resolver = _wire()

    assert isinstance(resolver, PermissionResolver)


def test_share_service_follows_legacy_setting():
    session, _, _, share_repo, resolver = _wire()
    settings = AccessControlSettings(accept_legacy_levels=False)

    service = get_inventory_share_service(session, resolver, share_repo, settings)

    assert service._accept_legacy_levels is False
    assert service._session is session


def test_transfer_service_uses_configured_isolation():
    session, registry, _, share_repo, resolver = _wire()
    settings = AccessControlSettings(transfer_isolation_level="REPEATABLE READ")

    service = get_ownership_transfer_service(
        session, resolver, registry, share_repo, settings
    )

    assert service._isolation_level == "REPEATABLE READ"


def test_grant_and_cleanup_services_share_the_resolver():
    session, registry, grant_repo, share_repo, resolver = _wire()

    grants = get_access_grant_service(session, resolver, grant_repo)
    cleanup = get_relationship_cleanup_service(
        session, resolver, registry, grant_repo, share_repo
    )

    assert grants._resolver is resolver
    assert cleanup._resolver is resolver
