"""Catalog store CRUD, persistence and recovery."""
import copy
import logging
from dataclasses import replace

from tour_pricing.config.user_settings import resolve_settings
from tour_pricing.engine.models import Stop
from tour_pricing.engine.pricing_engine import package_price, route_cost
from tour_pricing.services.catalog_store import CatalogStore
from tour_pricing.services.persistence import MemoryBackend


class FailingBackend(MemoryBackend):
    """Loads fine, refuses every write."""

    def __init__(self, state=None, error=None):
        super().__init__(state)
        self.error = error or OSError("disk full")
        self.attempts = 0

    def save(self, state):
        self.attempts += 1
        raise self.error


class BrokenLoadBackend(MemoryBackend):
    def load(self):
        raise ValueError("Expecting value: line 1 column 1 (char 0)")


def test_new_store_starts_empty_with_defaults(store):
    assert store.routes == ()
    assert store.packages == ()
    assert store.settings.profit_margin == 25
    assert store.settings.user_id.startswith("user-")


def test_add_route_persists(store, backend, walking_route):
    store.add_route(walking_route)

    assert store.routes == (walking_route,)
    assert backend.save_count == 1
    assert backend.state['routes'][0]['id'] == walking_route.id


def test_update_route_replaces_by_id(store, walking_route):
    store.add_route(walking_route)
    renamed = replace(walking_route, name="Old Town Walk")

    store.update_route(renamed)

    assert store.get_route(walking_route.id).name == "Old Town Walk"
    assert len(store.routes) == 1


def test_update_unknown_route_is_noop(store, backend, walking_route):
    store.add_route(walking_route)
    before = copy.deepcopy(backend.state['routes'])

    store.update_route(replace(walking_route, id="route-missing", name="Ghost"))

    assert backend.state['routes'] == before
    assert store.routes == (walking_route,)


def test_update_with_same_payload_keeps_cost(store, walking_route):
    store.add_route(walking_route)
    cost_before = route_cost(store.get_route(walking_route.id), store.settings)

    store.update_route(copy.deepcopy(walking_route))

    assert route_cost(store.get_route(walking_route.id), store.settings) == cost_before


def test_delete_route_does_not_cascade(store, walking_route, capital_package):
    store.add_route(walking_route)
    store.add_package(capital_package)

    store.delete_route(walking_route.id)

    assert store.routes == ()
    pkg = store.get_package(capital_package.id)
    assert pkg.route_ids == [walking_route.id]
    # Dangling reference adds nothing
    assert package_price(pkg, store.routes, store.settings) == 4950 * 1.25


def test_delete_unknown_is_noop(store, walking_route, capital_package):
    store.add_route(walking_route)
    store.add_package(capital_package)

    store.delete_route("route-missing")
    store.delete_package("pkg-missing")

    assert store.routes == (walking_route,)
    assert store.packages == (capital_package,)


def test_package_crud(store, capital_package):
    store.add_package(capital_package)
    store.update_package(replace(capital_package, person_count=20))
    assert store.get_package(capital_package.id).person_count == 20

    store.delete_package(capital_package.id)
    assert store.get_package(capital_package.id) is None


def test_set_package_image(store, capital_package):
    store.add_package(capital_package)

    store.set_package_image(capital_package.id, "data:image/jpeg;base64,AAAA")

    pkg = store.get_package(capital_package.id)
    assert pkg.image_url == "data:image/jpeg;base64,AAAA"
    assert pkg.name == capital_package.name


def test_set_settings_merges_and_persists(store, backend):
    user_id = store.settings.user_id

    store.set_settings({'profitMargin': 30, 'unitCosts': {'guide': 175}})

    assert store.settings.profit_margin == 30
    assert store.settings.unit_costs.guide == 175
    assert store.settings.unit_costs.transport == 200
    assert store.settings.user_id == user_id
    assert backend.state['settings']['profitMargin'] == 30


def test_store_loads_persisted_state(walking_route, capital_package):
    first = CatalogStore(MemoryBackend())
    first.add_route(walking_route)
    first.add_package(capital_package)
    first.set_settings({'exchangeRate': 38.0})

    reopened = CatalogStore(MemoryBackend(first.backend.state))

    assert reopened.routes == first.routes
    assert reopened.packages == first.packages
    assert reopened.settings == first.settings


def test_snapshot_round_trip(store, walking_route, capital_package):
    """Serialized state resolves back to identical entities and settings."""
    store.add_route(walking_route)
    store.add_package(replace(capital_package, image_url="https://example.com/a.jpg"))
    snapshot = store.snapshot()

    restored = CatalogStore(MemoryBackend(copy.deepcopy(snapshot)))

    assert restored.snapshot() == snapshot
    assert resolve_settings(snapshot['settings']) == store.settings


def test_missing_settings_in_record_uses_defaults(walking_route):
    backend = MemoryBackend({'routes': [walking_route.to_dict()], 'packages': []})
    store = CatalogStore(backend)

    assert store.routes == (walking_route,)
    assert store.settings.unit_costs.guide == 150


def test_old_settings_record_gains_new_fields():
    backend = MemoryBackend({
        'routes': [],
        'packages': [],
        'settings': {'userId': 'user-legacy01', 'exchangeRate': 35.0, 'profitMargin': 20},
    })
    store = CatalogStore(backend)

    assert store.settings.user_id == 'user-legacy01'
    assert store.settings.exchange_rate == 35.0
    assert store.settings.theme == 'light'
    assert store.settings.unit_costs.logistics == 15


def test_unreadable_state_starts_empty(caplog):
    with caplog.at_level(logging.WARNING):
        store = CatalogStore(BrokenLoadBackend())

    assert store.routes == ()
    assert store.settings.profit_margin == 25
    assert "Could not read stored catalog" in caplog.text


def test_malformed_entity_is_skipped():
    store = CatalogStore(MemoryBackend({'routes': [{'name': 'no id'}], 'packages': []}))
    assert store.routes == ()


def test_non_object_record_starts_empty():
    store = CatalogStore(MemoryBackend(["not", "a", "catalog"]))
    assert store.routes == ()
    assert store.packages == ()


def test_write_failure_keeps_memory_state(walking_route, caplog):
    store = CatalogStore(FailingBackend())

    with caplog.at_level(logging.ERROR):
        store.add_route(walking_route)
        store.update_route(replace(walking_route, stops=[Stop(id="s9", name="Harbor")]))

    assert store.get_route(walking_route.id).stops[0].name == "Harbor"
    assert "Failed to persist catalog" in caplog.text
    # No retry in between, one fresh attempt per mutation
    assert store.backend.attempts == 2


def test_unexpected_write_error_is_logged(walking_route, caplog):
    backend = FailingBackend(error=RuntimeError("storage quota exceeded"))
    store = CatalogStore(backend)

    with caplog.at_level(logging.ERROR):
        store.add_route(walking_route)

    assert store.routes == (walking_route,)
    assert backend.attempts == 1
    assert "Failed to persist catalog" in caplog.text


def test_bad_route_does_not_discard_the_rest(walking_route, capital_package, caplog):
    broken = {**walking_route.to_dict(), 'id': 'route-broken', 'stops': [None]}
    backend = MemoryBackend({
        'routes': [walking_route.to_dict(), broken],
        'packages': [capital_package.to_dict()],
        'settings': {'userId': 'user-keepme01', 'profitMargin': 40},
    })

    with caplog.at_level(logging.WARNING):
        store = CatalogStore(backend)

    assert store.routes == (walking_route,)
    assert store.packages == (capital_package,)
    assert store.settings.user_id == 'user-keepme01'
    assert store.settings.profit_margin == 40
    assert "Skipping stored route #1" in caplog.text


def test_null_collections_read_as_empty(walking_route, capital_package):
    backend = MemoryBackend({
        'routes': [{**walking_route.to_dict(), 'stops': None}],
        'packages': [{**capital_package.to_dict(), 'routeIds': None}],
        'settings': {'userId': 'user-keepme01'},
    })

    store = CatalogStore(backend)

    assert store.get_route(walking_route.id).stops == []
    assert store.get_package(capital_package.id).route_ids == []
    assert store.settings.user_id == 'user-keepme01'


def test_unknown_stored_keys_survive_a_write(walking_route, capital_package):
    backend = MemoryBackend({
        'routes': [{**walking_route.to_dict(), 'color': '#ff8800'}],
        'packages': [{**capital_package.to_dict(), 'season': 'summer'}],
    })
    store = CatalogStore(backend)

    store.set_settings({'profitMargin': 30})

    assert backend.state['routes'][0]['color'] == '#ff8800'
    assert backend.state['packages'][0]['season'] == 'summer'
    assert route_cost(store.get_route(walking_route.id), store.settings) == 675
