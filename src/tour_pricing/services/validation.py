"""
Validation for routes and packages before they are saved.

Validation is advisory: the store accepts whatever it is given, and callers
decide whether to save an entity that failed validation.
"""
from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..engine.models import Package, ResourceCategory, Route


@dataclass
class ValidationResult:
    """Result of entity validation."""
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_error(self, error: str):
        self.errors.append(error)
        self.valid = False


def validate_route(route: Route) -> ValidationResult:
    """Validate a route before saving."""
    result = ValidationResult(valid=True)

    if not route.name or not route.name.strip():
        result.add_error("Route name is required")

    for index, stop in enumerate(route.stops, start=1):
        if not stop.is_named:
            result.add_error(f"Stop {index} name is required")

    if route.person_count < 1:
        result.add_error("Person count must be at least 1")

    for category in ResourceCategory:
        if route.quantities.get(category) < 0:
            result.add_error(f"Quantity for {category.key} cannot be negative")

    for label, value in (
        ("Kilometers", route.kilometers),
        ("Duration", route.duration_hours),
        ("Photographer cost", route.photographer_cost),
    ):
        if value < 0:
            result.add_error(f"{label} cannot be negative")

    if sum(1 for stop in route.stops if stop.is_named) < 2:
        result.warnings.append("Routes need at least 2 named stops for automatic estimates")

    return result


def validate_package(pkg: Package, known_route_ids: Optional[Iterable[str]] = None) -> ValidationResult:
    """
    Validate a package before saving.

    References to unknown routes are reported as warnings only.
    """
    result = ValidationResult(valid=True)

    if not pkg.name or not pkg.name.strip():
        result.add_error("Package name is required")

    if pkg.person_count < 1:
        result.add_error("Person count must be at least 1")

    for label, value in (
        ("Transport", pkg.costs.transport),
        ("Lodging", pkg.costs.lodging),
        ("Services", pkg.costs.services),
    ):
        if value < 0:
            result.add_error(f"{label} cost cannot be negative")

    if known_route_ids is not None:
        known = set(known_route_ids)
        for route_id in pkg.route_ids:
            if route_id not in known:
                result.warnings.append(f"Route '{route_id}' not found, it will not add any cost")

    return result
