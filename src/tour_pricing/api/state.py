"""
Store wiring for the API.

The store is created once per application and kept on `app.state`;
endpoints receive it through the `get_store` dependency.
"""
from fastapi import Request

from ..config.settings import Settings
from ..data.sample_catalog import seed_sample_catalog
from ..services.catalog_store import CatalogStore
from ..services.persistence import JsonFileBackend


def build_store(settings: Settings) -> CatalogStore:
    """Open the catalog stored at the configured data file."""
    store = CatalogStore(JsonFileBackend(settings.data_file))
    if settings.seed_sample_catalog:
        seed_sample_catalog(store)
    return store


def get_store(request: Request) -> CatalogStore:
    return request.app.state.store
