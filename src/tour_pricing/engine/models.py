"""
Data models for the tour catalog and pricing engine.

Uses dataclasses for structured, type-safe data representation.
Each model converts to/from the persisted camelCase record layout.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class CostScope(Enum):
    """How a resource category scales with the group."""
    GROUP = "group"            # incurred once per route
    PER_PERSON = "per_person"  # incurred once per traveler


class ResourceCategory(Enum):
    """Resource categories priced by the configured unit costs."""
    GUIDE = ("guide", CostScope.GROUP)
    MEDICAL = ("medical", CostScope.PER_PERSON)
    TRANSPORT = ("transport", CostScope.GROUP)
    LOGISTICS = ("logistics", CostScope.PER_PERSON)

    def __init__(self, key: str, scope: CostScope):
        self.key = key
        self.scope = scope


GROUP_CATEGORIES = tuple(c for c in ResourceCategory if c.scope is CostScope.GROUP)
PER_PERSON_CATEGORIES = tuple(c for c in ResourceCategory if c.scope is CostScope.PER_PERSON)


@dataclass
class ResourceQuantities:
    """Resource counts required by a route."""
    guide: float = 0
    medical: float = 0
    transport: float = 0
    logistics: float = 0

    def get(self, category: ResourceCategory) -> float:
        return getattr(self, category.key)

    def to_dict(self) -> dict:
        return {c.key: self.get(c) for c in ResourceCategory}

    @classmethod
    def from_dict(cls, data: dict) -> 'ResourceQuantities':
        return cls(**{c.key: data.get(c.key, 0) for c in ResourceCategory})


@dataclass
class UnitCosts:
    """Configured price per unit of each resource category (USD)."""
    guide: float = 0
    medical: float = 0
    transport: float = 0
    logistics: float = 0

    def get(self, category: ResourceCategory) -> float:
        return getattr(self, category.key)

    def to_dict(self) -> dict:
        return {c.key: self.get(c) for c in ResourceCategory}

    @classmethod
    def from_dict(cls, data: dict) -> 'UnitCosts':
        return cls(**{c.key: data.get(c.key, 0) for c in ResourceCategory})


@dataclass
class Stop:
    """A single visited location on a route."""
    id: str
    name: str
    description: str = ""

    @property
    def is_named(self) -> bool:
        """Stops without a name are ignored for estimates."""
        return bool(self.name and self.name.strip())

    def to_dict(self) -> dict:
        return {'id': self.id, 'name': self.name, 'description': self.description}

    @classmethod
    def from_dict(cls, data: dict) -> 'Stop':
        return cls(
            id=data['id'],
            name=data.get('name', ''),
            description=data.get('description', ''),
        )


ROUTE_KEYS = frozenset({
    'id', 'name', 'description', 'stops', 'kilometers', 'durationHours',
    'personCount', 'quantities', 'photographerCost', 'isPhotographerOptional',
})


@dataclass
class Route:
    """A reusable sequence of stops with its resource requirements."""
    id: str
    name: str
    description: str = ""
    stops: list[Stop] = field(default_factory=list)
    kilometers: float = 0
    duration_hours: float = 0
    person_count: int = 1
    quantities: ResourceQuantities = field(default_factory=ResourceQuantities)
    photographer_cost: float = 0
    is_photographer_optional: bool = False
    # Stored keys this model does not know, written back unchanged
    extra: dict = field(default_factory=dict, repr=False)

    def to_dict(self) -> dict:
        """Convert to the persisted record layout."""
        return {
            **self.extra,
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'stops': [s.to_dict() for s in self.stops],
            'kilometers': self.kilometers,
            'durationHours': self.duration_hours,
            'personCount': self.person_count,
            'quantities': self.quantities.to_dict(),
            'photographerCost': self.photographer_cost,
            'isPhotographerOptional': self.is_photographer_optional,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Route':
        """
        Create Route from a persisted record.

        Null collections read as empty; unrecognized keys are kept in
        `extra` so a later write does not lose them.
        """
        return cls(
            id=data['id'],
            name=data.get('name', ''),
            description=data.get('description', ''),
            stops=[Stop.from_dict(s) for s in data.get('stops') or []],
            kilometers=data.get('kilometers', 0),
            duration_hours=data.get('durationHours', 0),
            person_count=data.get('personCount', 1),
            quantities=ResourceQuantities.from_dict(data.get('quantities') or {}),
            photographer_cost=data.get('photographerCost', 0),
            is_photographer_optional=data.get('isPhotographerOptional', False),
            extra={k: v for k, v in data.items() if k not in ROUTE_KEYS},
        )


@dataclass
class PackageCosts:
    """Flat per-traveler costs of a package (USD)."""
    transport: float = 0
    lodging: float = 0
    services: float = 0

    @property
    def total(self) -> float:
        return self.transport + self.lodging + self.services

    def to_dict(self) -> dict:
        return {'transport': self.transport, 'lodging': self.lodging, 'services': self.services}

    @classmethod
    def from_dict(cls, data: dict) -> 'PackageCosts':
        return cls(
            transport=data.get('transport', 0),
            lodging=data.get('lodging', 0),
            services=data.get('services', 0),
        )


PACKAGE_KEYS = frozenset({
    'id', 'name', 'description', 'imageUrl', 'personCount', 'costs', 'routeIds',
})


@dataclass
class Package:
    """A sellable bundle of flat costs plus referenced routes."""
    id: str
    name: str
    description: str = ""
    image_url: Optional[str] = None
    person_count: int = 1
    costs: PackageCosts = field(default_factory=PackageCosts)
    # May reference routes that were deleted since
    route_ids: list[str] = field(default_factory=list)
    extra: dict = field(default_factory=dict, repr=False)

    def __post_init__(self):
        self.route_ids = list(dict.fromkeys(self.route_ids))

    def to_dict(self) -> dict:
        """Convert to the persisted record layout."""
        data = {
            **self.extra,
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'personCount': self.person_count,
            'costs': self.costs.to_dict(),
            'routeIds': list(self.route_ids),
        }
        if self.image_url is not None:
            data['imageUrl'] = self.image_url
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'Package':
        """Create Package from a persisted record, keeping unknown keys in `extra`."""
        return cls(
            id=data['id'],
            name=data.get('name', ''),
            description=data.get('description', ''),
            image_url=data.get('imageUrl'),
            person_count=data.get('personCount', 1),
            costs=PackageCosts.from_dict(data.get('costs') or {}),
            route_ids=list(data.get('routeIds') or []),
            extra={k: v for k, v in data.items() if k not in PACKAGE_KEYS},
        )


LANGUAGES = ('en', 'es', 'fr', 'pt')
THEMES = ('light', 'dark')


@dataclass
class UserSettings:
    """Operator configuration for pricing and display."""
    user_id: str
    exchange_rate: float
    profit_margin: float  # percent
    language: str = "en"
    theme: str = "light"
    unit_costs: Optional[UnitCosts] = None

    def to_dict(self) -> dict:
        """Convert to the persisted record layout."""
        return {
            'userId': self.user_id,
            'exchangeRate': self.exchange_rate,
            'profitMargin': self.profit_margin,
            'language': self.language,
            'theme': self.theme,
            'unitCosts': self.unit_costs.to_dict() if self.unit_costs else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'UserSettings':
        """Create UserSettings from a fully populated record."""
        unit_costs = data.get('unitCosts')
        return cls(
            user_id=data['userId'],
            exchange_rate=data['exchangeRate'],
            profit_margin=data['profitMargin'],
            language=data.get('language', 'en'),
            theme=data.get('theme', 'light'),
            unit_costs=UnitCosts.from_dict(unit_costs) if unit_costs is not None else None,
        )


@dataclass
class TraceStep:
    """A single step in a price derivation trace."""
    step: str
    description: str
    value: Optional[str] = None


@dataclass
class RouteQuote:
    """Cost breakdown for one route."""
    route_id: str
    group_cost: float
    per_person_unit_cost: float
    photographer_cost: float
    total: float
    per_person: float
    display_total: float
    trace: list[TraceStep] = field(default_factory=list)

    def add_trace(self, step: str, description: str, value: str = None):
        self.trace.append(TraceStep(step=step, description=description, value=value))


@dataclass
class PackageQuote:
    """Complete price breakdown for a package."""
    package_id: str
    flat_cost: float
    route_costs: dict[str, float]
    base_cost: float
    margin_amount: float
    total: float
    per_person: float
    display_total: float
    missing_route_ids: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    trace: list[TraceStep] = field(default_factory=list)

    def add_trace(self, step: str, description: str, value: str = None):
        """Add a step to the package-level trace."""
        self.trace.append(TraceStep(step=step, description=description, value=value))

    def add_warning(self, warning: str):
        self.warnings.append(warning)

    def get_trace_text(self) -> str:
        """Get human-readable trace as formatted text."""
        lines = []
        for t in self.trace:
            if t.value:
                lines.append(f"• {t.step}: {t.description} = {t.value}")
            else:
                lines.append(f"• {t.step}: {t.description}")
        return "\n".join(lines)
