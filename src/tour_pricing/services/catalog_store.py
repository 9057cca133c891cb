"""
Catalog Store - the single owner of routes, packages and user settings.

Every mutator updates the in-memory catalog first and then writes the full
state through the backend. A failed write is logged and the in-memory state
stays authoritative; the next mutation simply tries again.
"""
import logging
from dataclasses import replace
from typing import Optional

from ..config.user_settings import merge_settings, resolve_settings
from ..engine.models import Package, Route, UserSettings
from .persistence import StateBackend

logger = logging.getLogger(__name__)


class CatalogStore:
    """
    In-memory catalog of routes and packages backed by a StateBackend.

    Callers own the store and pass it to whatever needs it; there is no
    module-level instance.
    """

    def __init__(self, backend: StateBackend):
        self.backend = backend
        self._routes: list[Route] = []
        self._packages: list[Package] = []
        self._settings: UserSettings = None
        self._load()

    def _load(self):
        """
        Load persisted state, falling back to an empty catalog.

        Settings resolve independently of the entities, and a stored route
        or package that cannot be rebuilt is skipped on its own.
        """
        try:
            record = self.backend.load()
        except Exception as e:
            logger.warning("Could not read stored catalog, starting empty: %s", e)
            self._reset()
            return

        if record is None:
            logger.info("No stored catalog found, starting empty")
            self._reset()
            return
        if not isinstance(record, dict):
            logger.warning(
                "Could not read stored catalog, starting empty: stored catalog is a %s, expected an object",
                type(record).__name__,
            )
            self._reset()
            return

        self._routes = self._load_entities(record.get('routes'), Route, 'route')
        self._packages = self._load_entities(record.get('packages'), Package, 'package')
        self._settings = resolve_settings(record.get('settings'))
        logger.info("Loaded catalog: %d routes, %d packages", len(self._routes), len(self._packages))

    @staticmethod
    def _load_entities(items, model, kind: str) -> list:
        if not isinstance(items, list):
            if items is not None:
                logger.warning("Stored %ss are not a list, ignoring them", kind)
            return []

        loaded = []
        for i, item in enumerate(items):
            try:
                loaded.append(model.from_dict(item))
            except Exception as e:
                logger.warning("Skipping stored %s #%d: %s", kind, i, e)
        return loaded

    def _reset(self):
        self._routes = []
        self._packages = []
        self._settings = resolve_settings()

    def _persist(self):
        """Write the full state; failures are logged, never raised."""
        try:
            self.backend.save(self.snapshot())
        except Exception:
            logger.exception("Failed to persist catalog; keeping in-memory state")

    # Read accessors

    @property
    def routes(self) -> tuple[Route, ...]:
        return tuple(self._routes)

    @property
    def packages(self) -> tuple[Package, ...]:
        return tuple(self._packages)

    @property
    def settings(self) -> UserSettings:
        return self._settings

    def get_route(self, route_id: str) -> Optional[Route]:
        """Get a single route by ID."""
        for route in self._routes:
            if route.id == route_id:
                return route
        return None

    def get_package(self, package_id: str) -> Optional[Package]:
        """Get a single package by ID."""
        for pkg in self._packages:
            if pkg.id == package_id:
                return pkg
        return None

    def snapshot(self) -> dict:
        """The persisted record layout of the current state."""
        return {
            'packages': [p.to_dict() for p in self._packages],
            'routes': [r.to_dict() for r in self._routes],
            'settings': self._settings.to_dict(),
        }

    # Routes

    def add_route(self, route: Route):
        """Append a route. The id is assigned by the caller."""
        self._routes.append(route)
        self._persist()

    def update_route(self, route: Route):
        """Replace the route with the same id; unknown ids are ignored."""
        self._routes = [route if r.id == route.id else r for r in self._routes]
        self._persist()

    def delete_route(self, route_id: str):
        """
        Remove a route by id.

        Packages keep referencing the deleted id; those references cost
        nothing when pricing.
        """
        self._routes = [r for r in self._routes if r.id != route_id]
        self._persist()

    # Packages

    def add_package(self, pkg: Package):
        """Append a package. The id is assigned by the caller."""
        self._packages.append(pkg)
        self._persist()

    def update_package(self, pkg: Package):
        """Replace the package with the same id; unknown ids are ignored."""
        self._packages = [pkg if p.id == pkg.id else p for p in self._packages]
        self._persist()

    def delete_package(self, package_id: str):
        self._packages = [p for p in self._packages if p.id != package_id]
        self._persist()

    def set_package_image(self, package_id: str, image_url: str):
        """Replace only the image of a package."""
        self._packages = [
            replace(p, image_url=image_url) if p.id == package_id else p
            for p in self._packages
        ]
        self._persist()

    # Settings

    def set_settings(self, partial: dict):
        """Merge a partial settings record over the current settings."""
        self._settings = merge_settings(self._settings, partial)
        self._persist()
