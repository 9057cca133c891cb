"""Route and package validation."""
from dataclasses import replace

from tour_pricing.engine.models import PackageCosts, ResourceQuantities, Stop
from tour_pricing.services.validation import validate_package, validate_route


def test_valid_route(walking_route):
    result = validate_route(walking_route)
    assert result.valid
    assert result.errors == []
    assert result.warnings == []


def test_route_requires_name_and_named_stops(walking_route):
    route = replace(walking_route, name="  ", stops=[Stop(id="a", name="Pier"), Stop(id="b", name="")])

    result = validate_route(route)

    assert not result.valid
    assert "Route name is required" in result.errors
    assert "Stop 2 name is required" in result.errors
    assert any("at least 2 named stops" in w for w in result.warnings)


def test_route_rejects_negative_values(walking_route):
    route = replace(
        walking_route,
        person_count=0,
        kilometers=-1,
        quantities=ResourceQuantities(guide=-1, medical=0, transport=0, logistics=0),
    )

    result = validate_route(route)

    assert not result.valid
    assert "Person count must be at least 1" in result.errors
    assert "Quantity for guide cannot be negative" in result.errors
    assert "Kilometers cannot be negative" in result.errors


def test_valid_package(capital_package, walking_route):
    result = validate_package(capital_package, known_route_ids=[walking_route.id])
    assert result.valid
    assert result.warnings == []


def test_package_dangling_routes_are_warnings(capital_package):
    result = validate_package(capital_package, known_route_ids=[])

    assert result.valid
    assert len(result.warnings) == 1


def test_package_rejects_bad_values(capital_package):
    pkg = replace(capital_package, name="", person_count=0, costs=PackageCosts(transport=-5))

    result = validate_package(pkg)

    assert not result.valid
    assert result.errors == [
        "Package name is required",
        "Person count must be at least 1",
        "Transport cost cannot be negative",
    ]
