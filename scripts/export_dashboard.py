#!/usr/bin/env python
"""
Export route and package price summaries to CSV.

Usage:
    python scripts/export_dashboard.py [output_dir]
"""
import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from tour_pricing.config.settings import configure_logging, get_settings
from tour_pricing.data.sample_catalog import seed_sample_catalog
from tour_pricing.services.catalog_store import CatalogStore
from tour_pricing.services.dashboard import export_summary_csv, package_summary_frame, route_summary_frame
from tour_pricing.services.persistence import JsonFileBackend


def main():
    settings = get_settings()
    configure_logging(settings.log_level)
    output_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else settings.project_root / 'exports'

    print("=" * 60)
    print("TOUR PRICING DASHBOARD EXPORT")
    print("=" * 60)
    print(f"Catalog: {settings.data_file}")
    print()

    store = CatalogStore(JsonFileBackend(settings.data_file))
    if settings.seed_sample_catalog:
        seed_sample_catalog(store)

    routes = route_summary_frame(store)
    packages = package_summary_frame(store)

    print(f"[1/2] Routes: {len(routes)}")
    export_summary_csv(routes, output_dir / 'routes.csv')
    print(f"[2/2] Packages: {len(packages)}")
    export_summary_csv(packages, output_dir / 'packages.csv')

    if not packages.empty:
        print()
        print(packages[['name', 'total', 'per_person', 'display_total']].to_string(index=False))

    print()
    print(f"✅ Exported to {output_dir}")


if __name__ == "__main__":
    main()
