"""
Pricing Engine - derives route costs and package sell prices.

All functions are pure: they read entity and settings snapshots and never
touch the store or perform I/O. No rounding is applied here; formatting
belongs to whoever renders the figures.

Route cost:
1. Group-scoped categories (guide, transport) are charged once
2. Per-person categories (medical, logistics) are charged per traveler
3. The photographer is charged unless marked optional

Package price:
1. Flat costs per traveler × max(person count, 1)
2. Plus the cost of every referenced route that still exists
3. Marked up by the profit margin percentage
"""
from typing import Iterable

from .models import (
    GROUP_CATEGORIES,
    PER_PERSON_CATEGORIES,
    Package,
    PackageQuote,
    Route,
    RouteQuote,
    UserSettings,
)


def _group_cost(route: Route, settings: UserSettings) -> float:
    total = 0
    for category in GROUP_CATEGORIES:
        total += route.quantities.get(category) * settings.unit_costs.get(category)
    return total


def _per_person_unit_cost(route: Route, settings: UserSettings) -> float:
    total = 0
    for category in PER_PERSON_CATEGORIES:
        total += route.quantities.get(category) * settings.unit_costs.get(category)
    return total


def _photographer_cost(route: Route) -> float:
    return 0 if route.is_photographer_optional else route.photographer_cost


def route_cost(route: Route, settings: UserSettings) -> float:
    """
    Total cost of running a route for its group.

    Returns 0 when the settings carry no unit costs.
    """
    if settings.unit_costs is None:
        return 0
    return (
        _group_cost(route, settings)
        + _photographer_cost(route)
        + _per_person_unit_cost(route, settings) * route.person_count
    )


def _referenced_routes(pkg: Package, all_routes: Iterable[Route]) -> list[Route]:
    wanted = set(pkg.route_ids)
    return [route for route in all_routes if route.id in wanted]


def package_price(pkg: Package, all_routes: Iterable[Route], settings: UserSettings) -> float:
    """
    Sell price of a package including the profit margin.

    Route ids with no matching route contribute nothing.
    """
    route_costs_sum = 0
    for route in _referenced_routes(pkg, all_routes):
        route_costs_sum += route_cost(route, settings)

    flat_cost = pkg.costs.total * max(pkg.person_count, 1)
    base_cost = flat_cost + route_costs_sum
    return base_cost * (1 + settings.profit_margin / 100)


def per_person_price(total: float, person_count: int) -> float:
    """Split a total across travelers; returns the total when nobody is counted."""
    return total / person_count if person_count > 0 else total


def display_amount(usd_amount: float, exchange_rate: float) -> float:
    """Convert a USD amount to the secondary display currency."""
    return usd_amount * exchange_rate


def quote_route(route: Route, settings: UserSettings) -> RouteQuote:
    """
    Calculate a route's cost with a trace of every derivation step.

    `total` is identical to `route_cost(route, settings)`.
    """
    if settings.unit_costs is None:
        quote = RouteQuote(
            route_id=route.id,
            group_cost=0,
            per_person_unit_cost=0,
            photographer_cost=0,
            total=0,
            per_person=0,
            display_total=0,
        )
        quote.add_trace("Unit Costs", "No unit costs configured, cost treated as zero", "$0.00")
        return quote

    group = _group_cost(route, settings)
    per_person_unit = _per_person_unit_cost(route, settings)
    photographer = _photographer_cost(route)
    total = route_cost(route, settings)

    quote = RouteQuote(
        route_id=route.id,
        group_cost=group,
        per_person_unit_cost=per_person_unit,
        photographer_cost=photographer,
        total=total,
        per_person=per_person_price(total, route.person_count),
        display_total=display_amount(total, settings.exchange_rate),
    )
    quote.add_trace("Group Cost", ", ".join(c.key for c in GROUP_CATEGORIES), f"${group:.2f}")
    quote.add_trace(
        "Per-Person Cost",
        f"{', '.join(c.key for c in PER_PERSON_CATEGORIES)} × {route.person_count} travelers",
        f"${per_person_unit * route.person_count:.2f}",
    )
    if route.is_photographer_optional:
        quote.add_trace("Photographer", "Optional, not included", "$0.00")
    else:
        quote.add_trace("Photographer", "Included", f"${photographer:.2f}")
    quote.add_trace("Total", "Route cost", f"${total:.2f}")
    return quote


def quote_package(pkg: Package, all_routes: Iterable[Route], settings: UserSettings) -> PackageQuote:
    """
    Calculate a package's sell price with per-route breakdown and trace.

    Dangling route ids are listed in `missing_route_ids` and produce an
    informational warning; they never change the price.
    """
    all_routes = list(all_routes)
    referenced = _referenced_routes(pkg, all_routes)
    route_costs = {}
    route_costs_sum = 0
    for route in referenced:
        cost = route_cost(route, settings)
        route_costs[route.id] = route_costs.get(route.id, 0) + cost
        route_costs_sum += cost
    found = {route.id for route in referenced}
    missing = [route_id for route_id in pkg.route_ids if route_id not in found]

    flat_cost = pkg.costs.total * max(pkg.person_count, 1)
    base_cost = flat_cost + route_costs_sum
    total = package_price(pkg, all_routes, settings)

    quote = PackageQuote(
        package_id=pkg.id,
        flat_cost=flat_cost,
        route_costs=route_costs,
        base_cost=base_cost,
        margin_amount=total - base_cost,
        total=total,
        per_person=per_person_price(total, pkg.person_count),
        display_total=display_amount(total, settings.exchange_rate),
        missing_route_ids=missing,
    )

    quote.add_trace(
        "Flat Costs",
        f"${pkg.costs.total:.2f} × {max(pkg.person_count, 1)} travelers",
        f"${flat_cost:.2f}",
    )
    for route_id, cost in route_costs.items():
        quote.add_trace("Route", f"Route {route_id}", f"${cost:.2f}")
    for route_id in missing:
        quote.add_trace("Route", f"Route {route_id} not found, no cost added")
        quote.add_warning(f"Package {pkg.id} references missing route {route_id}")
    quote.add_trace("Base Cost", "Flat costs + routes", f"${base_cost:.2f}")
    quote.add_trace("Margin", f"{settings.profit_margin}% profit margin", f"${quote.margin_amount:.2f}")
    quote.add_trace("Total", "Sell price", f"${total:.2f}")
    return quote
