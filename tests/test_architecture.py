"""Architectural boundary tests using pytest-archon.

These tests verify that the codebase follows clean architecture principles:
- Domain layer has no dependencies on adapters or application services
- Application services don't depend on adapters
- Adapters depend on the domain only, so they can be wired from the entry points
"""

from pytest_archon import archrule


def test_domain_models_have_no_dependencies() -> None:
    """Domain models should not import anything outside the domain models."""
    (
        archrule("domain models", comment="Domain models should be independent")
        .match("nyc_transit_departures.domain.models*")
        .should_not_import("nyc_transit_departures.adapters*")
        .should_not_import("nyc_transit_departures.application*")
        .should_not_import("nyc_transit_departures.domain.ports*")
        .may_import("nyc_transit_departures.domain.models*")
        .check("nyc_transit_departures")
    )


def test_domain_ports_have_no_dependencies() -> None:
    """Domain ports (interfaces) should not import adapters or application."""
    (
        archrule("domain ports", comment="Domain ports should be independent")
        .match("nyc_transit_departures.domain.ports*")
        .should_not_import("nyc_transit_departures.adapters*")
        .should_not_import("nyc_transit_departures.application*")
        .may_import("nyc_transit_departures.domain.ports*")
        .may_import("nyc_transit_departures.domain.models*")
        .check("nyc_transit_departures")
    )


def test_application_services_dont_import_adapters() -> None:
    """Application services should not depend on adapters (infrastructure layer)."""
    (
        archrule(
            "application services", comment="Application services should not depend on adapters"
        )
        .match("nyc_transit_departures.application*")
        .should_not_import("nyc_transit_departures.adapters*")
        .may_import("nyc_transit_departures.domain*")
        .may_import("nyc_transit_departures.application*")
        .check("nyc_transit_departures")
    )


def test_adapters_dont_import_application() -> None:
    """Adapters should not import application services (to avoid cycles)."""
    (
        archrule(
            "adapters independence", comment="Adapters should not depend on application services"
        )
        .match("nyc_transit_departures.adapters*")
        .should_not_import("nyc_transit_departures.application*")
        .may_import("nyc_transit_departures.domain*")
        .may_import("nyc_transit_departures.adapters*")
        .check("nyc_transit_departures", only_direct_imports=True)
    )


def test_cli_dont_import_web_adapters() -> None:
    """CLI should not import web adapters to allow running CLI without web server."""
    (
        archrule("CLI independence", comment="CLI should not depend on web adapters")
        .match("nyc_transit_departures.cli")
        .should_not_import("nyc_transit_departures.adapters.web*")
        .may_import("nyc_transit_departures.domain*")
        .may_import("nyc_transit_departures.application*")
        .may_import("nyc_transit_departures.adapters*")
        .check("nyc_transit_departures")
    )
