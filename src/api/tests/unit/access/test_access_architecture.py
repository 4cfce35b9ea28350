"""Architecture tests for the access bounded context.

The domain layer holds the permission model and must stay free of
persistence and web concerns. Application services talk to storage only
through the ports; concrete repositories are wired in by the FastAPI
dependency providers.
"""

from pytest_archon import archrule


class TestAccessDomainLayerBoundaries:
    """Tests that the domain layer has no forbidden dependencies."""

    def test_domain_does_not_import_application(self):
        (
            archrule("access_domain_no_application")
            .match("access.domain*")
            .should_not_import("access.application*")
            .check("access")
        )

    def test_domain_does_not_import_infrastructure(self):
        """Permission rules must be evaluable without a database."""
        (
            archrule("access_domain_no_infrastructure")
            .match("access.domain*")
            .should_not_import("access.infrastructure*", "infrastructure*")
            .check("access")
        )

    def test_domain_does_not_import_frameworks(self):
        (
            archrule("access_domain_no_frameworks")
            .match("access.domain*")
            .should_not_import("sqlalchemy*", "fastapi*", "starlette*", "structlog*")
            .check("access")
        )


class TestAccessPortsLayerBoundaries:
    """Tests that ports only describe contracts."""

    def test_ports_do_not_import_implementations(self):
        (
            archrule("access_ports_no_infrastructure")
            .match("access.ports*")
            .should_not_import("access.infrastructure*", "access.application*")
            .check("access")
        )


class TestAccessApplicationLayerBoundaries:
    """Tests that services depend on ports, not repositories."""

    def test_application_does_not_import_repositories(self):
        """Services receive repositories through their port interfaces."""
        (
            archrule("access_application_no_infrastructure")
            .match("access.application*")
            .should_not_import("access.infrastructure*")
            .check("access")
        )

    def test_application_does_not_import_fastapi(self):
        (
            archrule("access_application_no_fastapi")
            .match("access.application*")
            .should_not_import("fastapi*", "starlette*")
            .check("access")
        )
