import pytest
import sys
import os

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from tour_pricing.engine.models import (
    Package, PackageCosts, ResourceQuantities, Route, Stop, UnitCosts, UserSettings,
)
from tour_pricing.services.catalog_store import CatalogStore
from tour_pricing.services.persistence import MemoryBackend


@pytest.fixture
def settings():
    return UserSettings(
        user_id="user-test0001",
        exchange_rate=36.5,
        profit_margin=25,
        language="en",
        theme="light",
        unit_costs=UnitCosts(guide=150, medical=20, transport=200, logistics=15),
    )


@pytest.fixture
def walking_route():
    """Historic center walk: 15 travelers, one medical and logistics unit each."""
    return Route(
        id="route-walk",
        name="Historic Center Walking Tour",
        description="A 3-hour guided walk.",
        stops=[
            Stop(id="s1", name="Main Square"),
            Stop(id="s2", name="National Cathedral"),
            Stop(id="s3", name="Founder's Museum"),
        ],
        kilometers=5,
        duration_hours=3,
        person_count=15,
        quantities=ResourceQuantities(guide=1, medical=1, transport=0, logistics=1),
        photographer_cost=150,
        is_photographer_optional=True,
    )


@pytest.fixture
def capital_package(walking_route):
    return Package(
        id="pkg-capital",
        name="Capital City Discovery",
        description="The best of the capital.",
        person_count=15,
        costs=PackageCosts(transport=80, lodging=200, services=50),
        route_ids=[walking_route.id],
    )


@pytest.fixture
def backend():
    return MemoryBackend()


@pytest.fixture
def store(backend):
    return CatalogStore(backend)
