from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tour_pricing import __version__
from tour_pricing.api.catalog_api import dashboard_router, packages_router, routes_router
from tour_pricing.api.settings_api import router as settings_router
from tour_pricing.api.state import build_store
from tour_pricing.config.settings import Settings, get_settings
from tour_pricing.services.catalog_store import CatalogStore


def create_app(store: Optional[CatalogStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Build the API around a store (opened from settings when not given)."""
    settings = settings or get_settings()

    app = FastAPI(
        title="Tour Pricing API",
        description="Backend API for the tour catalog and pricing calculator",
        version=__version__,
    )

    # Enable CORS for frontend development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.store = store if store is not None else build_store(settings)

    app.include_router(routes_router)
    app.include_router(packages_router)
    app.include_router(dashboard_router)
    app.include_router(settings_router)

    @app.get("/")
    async def root():
        current = app.state.store
        return {
            "status": "online",
            "message": "Tour Pricing API Active",
            "routes": len(current.routes),
            "packages": len(current.packages),
        }

    return app
