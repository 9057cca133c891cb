"""
Dashboard summaries - tabular price listings of the catalog.

Builds pandas DataFrames of every route and package with the figures the
dashboard shows: total, per-traveler and secondary-currency amounts.
"""
from pathlib import Path

import pandas as pd

from ..engine.pricing_engine import quote_package, quote_route
from .catalog_store import CatalogStore

ROUTE_COLUMNS = [
    'id', 'name', 'stops', 'kilometers', 'duration_hours', 'person_count',
    'total', 'per_person', 'display_total',
]

PACKAGE_COLUMNS = [
    'id', 'name', 'person_count', 'routes', 'missing_routes',
    'total', 'per_person', 'display_total',
]


def route_summary_frame(store: CatalogStore) -> pd.DataFrame:
    """One row per route with its cost figures."""
    rows = []
    for route in store.routes:
        quote = quote_route(route, store.settings)
        rows.append({
            'id': route.id,
            'name': route.name,
            'stops': len(route.stops),
            'kilometers': route.kilometers,
            'duration_hours': route.duration_hours,
            'person_count': route.person_count,
            'total': quote.total,
            'per_person': quote.per_person,
            'display_total': quote.display_total,
        })
    return pd.DataFrame(rows, columns=ROUTE_COLUMNS)


def package_summary_frame(store: CatalogStore) -> pd.DataFrame:
    """One row per package with its sell price figures."""
    rows = []
    for pkg in store.packages:
        quote = quote_package(pkg, store.routes, store.settings)
        rows.append({
            'id': pkg.id,
            'name': pkg.name,
            'person_count': pkg.person_count,
            'routes': len(pkg.route_ids) - len(quote.missing_route_ids),
            'missing_routes': len(quote.missing_route_ids),
            'total': quote.total,
            'per_person': quote.per_person,
            'display_total': quote.display_total,
        })
    return pd.DataFrame(rows, columns=PACKAGE_COLUMNS)


def export_summary_csv(frame: pd.DataFrame, path: Path) -> Path:
    """Write a summary frame to CSV."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(path, index=False)
    return path
