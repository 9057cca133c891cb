"""Engine subpackage - data models and pure pricing derivations."""
from .pricing_engine import (
    display_amount,
    package_price,
    per_person_price,
    quote_package,
    quote_route,
    route_cost,
)
from .models import Package, Route, Stop, UserSettings

__all__ = [
    'route_cost', 'package_price', 'per_person_price', 'display_amount',
    'quote_route', 'quote_package',
    'Package', 'Route', 'Stop', 'UserSettings',
]
