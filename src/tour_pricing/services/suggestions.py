"""
Content suggestions - applies results of an external suggestion service.

The service (an LLM, a maps API, ...) is a collaborator; this module only
decides when to call it and writes successful results back through the
store. Every call may fail independently, and a failed call leaves the
entity exactly as it was.
"""
import logging
from dataclasses import dataclass, replace
from typing import Optional, Protocol

from ..engine.models import Package, ResourceQuantities, Route
from .catalog_store import CatalogStore

logger = logging.getLogger(__name__)


LANGUAGE_NAMES = {
    'en': 'English',
    'es': 'Spanish',
    'fr': 'French',
    'pt': 'Portuguese',
}


def language_name(code: str) -> str:
    """Prompt-friendly language name; unknown codes fall back to English."""
    return LANGUAGE_NAMES.get(code, 'English')


@dataclass
class RouteEstimate:
    """Distance, duration and resource estimate for an ordered stop list."""
    kilometers: float
    duration_hours: float
    quantities: ResourceQuantities

    @classmethod
    def from_dict(cls, data: dict) -> 'RouteEstimate':
        """Create from a JSON response (camelCase keys)."""
        return cls(
            kilometers=float(data['kilometers']),
            duration_hours=float(data['durationHours']),
            quantities=ResourceQuantities.from_dict(data['quantities']),
        )


class SuggestionService(Protocol):
    """Asynchronous content-suggestion collaborator."""

    async def suggest_title(self, description: str, language: str) -> str: ...

    async def generate_description(self, prompt: str, language: str) -> str: ...

    async def find_points_of_interest(self, location: str) -> str: ...

    async def generate_image(self, prompt: str) -> Optional[str]: ...

    async def edit_image(self, image: str, prompt: str) -> Optional[str]: ...

    async def estimate_route(self, stop_names: list[str], person_count: int) -> Optional[RouteEstimate]: ...


def named_stop_names(route: Route) -> list[str]:
    """Names of the stops that have one, in route order."""
    return [stop.name for stop in route.stops if stop.is_named]


async def apply_route_estimate(store: CatalogStore, route_id: str, service: SuggestionService) -> Optional[Route]:
    """
    Estimate distance, duration and quantities for a stored route.

    Needs at least two named stops and a positive person count; otherwise
    the service is not called. Returns the updated route, or None when
    nothing changed.
    """
    route = store.get_route(route_id)
    if route is None:
        return None

    stop_names = named_stop_names(route)
    if len(stop_names) < 2 or route.person_count <= 0:
        return None

    try:
        estimate = await service.estimate_route(stop_names, route.person_count)
    except Exception as e:
        logger.warning("Route estimate failed for %s: %s", route_id, e)
        return None
    if estimate is None:
        logger.warning("Route estimate returned nothing for %s", route_id)
        return None

    # Re-read: the route may have been edited while the call was pending
    current = store.get_route(route_id)
    if current is None:
        return None
    updated = replace(
        current,
        kilometers=estimate.kilometers,
        duration_hours=estimate.duration_hours,
        quantities=estimate.quantities,
    )
    store.update_route(updated)
    return updated


async def find_points_of_interest(location: str, service: SuggestionService) -> Optional[str]:
    """Free-text list of stops near a location, or None on failure."""
    if not location or not location.strip():
        return None
    try:
        return await service.find_points_of_interest(location.strip())
    except Exception as e:
        logger.warning("Points of interest lookup failed for %r: %s", location, e)
        return None


async def _suggest_text(call, what: str, entity_id: str) -> Optional[str]:
    try:
        text = await call
    except Exception as e:
        logger.warning("%s suggestion failed for %s: %s", what, entity_id, e)
        return None
    if not text or not text.strip():
        logger.warning("%s suggestion for %s was empty", what, entity_id)
        return None
    return text.strip()


async def apply_package_title(store: CatalogStore, package_id: str, service: SuggestionService) -> Optional[Package]:
    """Suggest a package name from its description."""
    pkg = store.get_package(package_id)
    if pkg is None or not pkg.description.strip():
        return None

    language = language_name(store.settings.language)
    title = await _suggest_text(service.suggest_title(pkg.description, language), "Title", package_id)
    title = title.replace('"', '').strip() if title else None
    if not title:
        return None

    current = store.get_package(package_id)
    if current is None:
        return None
    updated = replace(current, name=title)
    store.update_package(updated)
    return updated


async def apply_package_description(store: CatalogStore, package_id: str, service: SuggestionService) -> Optional[Package]:
    """Generate a package description from its name."""
    pkg = store.get_package(package_id)
    if pkg is None or not pkg.name.strip():
        return None

    language = language_name(store.settings.language)
    description = await _suggest_text(service.generate_description(pkg.name, language), "Description", package_id)
    if description is None:
        return None

    current = store.get_package(package_id)
    if current is None:
        return None
    updated = replace(current, description=description)
    store.update_package(updated)
    return updated


async def apply_route_description(store: CatalogStore, route_id: str, service: SuggestionService) -> Optional[Route]:
    """Generate a route description from its name."""
    route = store.get_route(route_id)
    if route is None or not route.name.strip():
        return None

    language = language_name(store.settings.language)
    description = await _suggest_text(service.generate_description(route.name, language), "Description", route_id)
    if description is None:
        return None

    current = store.get_route(route_id)
    if current is None:
        return None
    updated = replace(current, description=description)
    store.update_route(updated)
    return updated


async def apply_package_image(store: CatalogStore, package_id: str, service: SuggestionService) -> Optional[Package]:
    """Generate a promotional image from the package description (or name)."""
    pkg = store.get_package(package_id)
    if pkg is None:
        return None
    prompt = pkg.description.strip() or pkg.name.strip()
    if not prompt:
        return None

    try:
        image_url = await service.generate_image(prompt)
    except Exception as e:
        logger.warning("Image generation failed for %s: %s", package_id, e)
        return None
    if not image_url:
        return None

    store.set_package_image(package_id, image_url)
    return store.get_package(package_id)


async def apply_package_image_edit(
    store: CatalogStore, package_id: str, prompt: str, service: SuggestionService,
) -> Optional[Package]:
    """
    Edit the current package image following a free-text instruction.

    Skipped when the package has no image or the instruction is blank.
    """
    pkg = store.get_package(package_id)
    if pkg is None or not pkg.image_url or not prompt or not prompt.strip():
        return None

    try:
        image_url = await service.edit_image(pkg.image_url, prompt.strip())
    except Exception as e:
        logger.warning("Image edit failed for %s: %s", package_id, e)
        return None
    if not image_url:
        logger.warning("Image edit returned nothing for %s", package_id)
        return None

    store.set_package_image(package_id, image_url)
    return store.get_package(package_id)
