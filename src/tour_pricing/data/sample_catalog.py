"""
Sample Catalog - an example route and package for a fresh installation.

Gives new operators something to price straight away. Only seeded into an
empty catalog, and only when the application asks for it.
"""
import logging

from ..engine.models import Package, PackageCosts, ResourceQuantities, Route, Stop
from ..services.catalog_store import CatalogStore
from ..services.ids import generate_short_id, new_package_id, new_route_id

logger = logging.getLogger(__name__)


def build_sample_route() -> Route:
    return Route(
        id=new_route_id(),
        name="Historic Center Walking Tour",
        description="A 3-hour guided walk through the most iconic landmarks of the city center.",
        stops=[
            Stop(id=generate_short_id(), name="Main Square", description="The heart of the city's history."),
            Stop(id=generate_short_id(), name="National Cathedral", description="A masterpiece of colonial architecture."),
            Stop(id=generate_short_id(), name="Founder's Museum", description="Learn about the origins of the city."),
        ],
        kilometers=5,
        duration_hours=3,
        person_count=15,
        quantities=ResourceQuantities(guide=1, medical=15, transport=0, logistics=15),
        photographer_cost=150,
        is_photographer_optional=True,
    )


def build_sample_package(route_ids: list[str]) -> Package:
    return Package(
        id=new_package_id(),
        name="Capital City Discovery",
        description=(
            "Experience the best of the capital with our comprehensive package, "
            "including a historic tour and all necessary services."
        ),
        image_url="https://images.unsplash.com/photo-1549877452-9c3e87a42e47?q=80&w=2070&auto=format&fit=crop",
        person_count=15,
        costs=PackageCosts(transport=80, lodging=200, services=50),
        route_ids=route_ids,
    )


def seed_sample_catalog(store: CatalogStore) -> bool:
    """
    Add the sample route and package to an empty catalog.

    Returns True when the sample was added.
    """
    if store.routes or store.packages:
        logger.info("Catalog is not empty, skipping sample data")
        return False

    route = build_sample_route()
    store.add_route(route)
    store.add_package(build_sample_package([route.id]))
    logger.info("Seeded sample catalog (route %s)", route.id)
    return True
