"""
Catalog API - FastAPI routers for routes, packages and their prices.
"""
from fastapi import APIRouter, Depends, HTTPException
from fastapi.encoders import jsonable_encoder

from ..engine.models import Package, Route
from ..engine.pricing_engine import quote_package, quote_route
from ..services.catalog_store import CatalogStore
from ..services.dashboard import package_summary_frame, route_summary_frame
from ..services.ids import generate_short_id, new_package_id, new_route_id
from ..services.validation import validate_package, validate_route
from .schemas import PackageBody, PackageImageBody, RouteBody
from .state import get_store

routes_router = APIRouter(prefix="/api/routes", tags=["routes"])
packages_router = APIRouter(prefix="/api/packages", tags=["packages"])
dashboard_router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


def _route_from_body(body: RouteBody, route_id: str) -> Route:
    data = body.model_dump(by_alias=True)
    data['id'] = route_id
    for stop in data['stops']:
        stop['id'] = stop['id'] or generate_short_id()
    return Route.from_dict(data)


def _package_from_body(body: PackageBody, package_id: str) -> Package:
    data = body.model_dump(by_alias=True)
    data['id'] = package_id
    return Package.from_dict(data)


def _require_route(store: CatalogStore, route_id: str) -> Route:
    route = store.get_route(route_id)
    if route is None:
        raise HTTPException(status_code=404, detail=f"Route '{route_id}' not found")
    return route


def _require_package(store: CatalogStore, package_id: str) -> Package:
    pkg = store.get_package(package_id)
    if pkg is None:
        raise HTTPException(status_code=404, detail=f"Package '{package_id}' not found")
    return pkg


# Routes

@routes_router.get("")
async def list_routes(store: CatalogStore = Depends(get_store)):
    """List all routes."""
    return [route.to_dict() for route in store.routes]


@routes_router.get("/{route_id}")
async def get_route(route_id: str, store: CatalogStore = Depends(get_store)):
    return _require_route(store, route_id).to_dict()


@routes_router.post("", status_code=201)
async def create_route(body: RouteBody, store: CatalogStore = Depends(get_store)):
    """Create a new route."""
    route_id = body.id or new_route_id()
    if store.get_route(route_id):
        raise HTTPException(status_code=409, detail=f"Route with ID '{route_id}' already exists")

    route = _route_from_body(body, route_id)
    validation = validate_route(route)
    if not validation.valid:
        raise HTTPException(status_code=400, detail={"errors": validation.errors})

    store.add_route(route)
    return route.to_dict()


@routes_router.put("/{route_id}")
async def update_route(route_id: str, body: RouteBody, store: CatalogStore = Depends(get_store)):
    """Replace an existing route."""
    _require_route(store, route_id)
    route = _route_from_body(body, route_id)
    validation = validate_route(route)
    if not validation.valid:
        raise HTTPException(status_code=400, detail={"errors": validation.errors})

    store.update_route(route)
    return route.to_dict()


@routes_router.delete("/{route_id}")
async def delete_route(route_id: str, store: CatalogStore = Depends(get_store)):
    """Delete a route. Packages referencing it are left as they are."""
    store.delete_route(route_id)
    return {"success": True, "message": f"Route '{route_id}' deleted"}


@routes_router.get("/{route_id}/quote")
async def get_route_quote(route_id: str, store: CatalogStore = Depends(get_store)):
    """Cost breakdown of a route under the current settings."""
    route = _require_route(store, route_id)
    return jsonable_encoder(quote_route(route, store.settings))


# Packages

@packages_router.get("")
async def list_packages(store: CatalogStore = Depends(get_store)):
    """List all packages."""
    return [pkg.to_dict() for pkg in store.packages]


@packages_router.get("/{package_id}")
async def get_package(package_id: str, store: CatalogStore = Depends(get_store)):
    return _require_package(store, package_id).to_dict()


@packages_router.post("", status_code=201)
async def create_package(body: PackageBody, store: CatalogStore = Depends(get_store)):
    """Create a new package."""
    package_id = body.id or new_package_id()
    if store.get_package(package_id):
        raise HTTPException(status_code=409, detail=f"Package with ID '{package_id}' already exists")

    pkg = _package_from_body(body, package_id)
    validation = validate_package(pkg, known_route_ids=[r.id for r in store.routes])
    if not validation.valid:
        raise HTTPException(status_code=400, detail={"errors": validation.errors})

    store.add_package(pkg)
    return {**pkg.to_dict(), "warnings": validation.warnings}


@packages_router.put("/{package_id}")
async def update_package(package_id: str, body: PackageBody, store: CatalogStore = Depends(get_store)):
    """Replace an existing package."""
    _require_package(store, package_id)
    pkg = _package_from_body(body, package_id)
    validation = validate_package(pkg, known_route_ids=[r.id for r in store.routes])
    if not validation.valid:
        raise HTTPException(status_code=400, detail={"errors": validation.errors})

    store.update_package(pkg)
    return {**pkg.to_dict(), "warnings": validation.warnings}


@packages_router.put("/{package_id}/image")
async def set_package_image(package_id: str, body: PackageImageBody, store: CatalogStore = Depends(get_store)):
    """Replace only the image of a package."""
    _require_package(store, package_id)
    store.set_package_image(package_id, body.image_url)
    return store.get_package(package_id).to_dict()


@packages_router.delete("/{package_id}")
async def delete_package(package_id: str, store: CatalogStore = Depends(get_store)):
    """Delete a package."""
    store.delete_package(package_id)
    return {"success": True, "message": f"Package '{package_id}' deleted"}


@packages_router.get("/{package_id}/quote")
async def get_package_quote(package_id: str, store: CatalogStore = Depends(get_store)):
    """Sell price breakdown of a package under the current settings."""
    pkg = _require_package(store, package_id)
    return jsonable_encoder(quote_package(pkg, store.routes, store.settings))


# Dashboard

@dashboard_router.get("/routes")
async def route_dashboard(store: CatalogStore = Depends(get_store)):
    return route_summary_frame(store).to_dict(orient="records")


@dashboard_router.get("/packages")
async def package_dashboard(store: CatalogStore = Depends(get_store)):
    return package_summary_frame(store).to_dict(orient="records")
