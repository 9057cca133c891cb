"""
Request models for the catalog API.

Field names follow the stored record layout (camelCase on the wire).
"""
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StopBody(CamelModel):
    id: Optional[str] = None
    name: str = ""
    description: str = ""


class QuantitiesBody(CamelModel):
    guide: float = 0
    medical: float = 0
    transport: float = 0
    logistics: float = 0


class RouteBody(CamelModel):
    """Request model for creating or replacing a route."""
    id: Optional[str] = None
    name: str
    description: str = ""
    stops: list[StopBody] = Field(default_factory=list)
    kilometers: float = 0
    duration_hours: float = 0
    person_count: int = 1
    quantities: QuantitiesBody = Field(default_factory=QuantitiesBody)
    photographer_cost: float = 0
    is_photographer_optional: bool = False


class PackageCostsBody(CamelModel):
    transport: float = 0
    lodging: float = 0
    services: float = 0


class PackageBody(CamelModel):
    """Request model for creating or replacing a package."""
    id: Optional[str] = None
    name: str
    description: str = ""
    image_url: Optional[str] = None
    person_count: int = 1
    costs: PackageCostsBody = Field(default_factory=PackageCostsBody)
    route_ids: list[str] = Field(default_factory=list)


class PackageImageBody(CamelModel):
    image_url: str


class UnitCostsPatch(CamelModel):
    guide: Optional[float] = None
    medical: Optional[float] = None
    transport: Optional[float] = None
    logistics: Optional[float] = None


class SettingsPatch(CamelModel):
    """Request model for a partial settings update."""
    exchange_rate: Optional[float] = None
    profit_margin: Optional[float] = None
    language: Optional[Literal["en", "es", "fr", "pt"]] = None
    theme: Optional[Literal["light", "dark"]] = None
    unit_costs: Optional[UnitCostsPatch] = None

    def to_partial(self) -> dict:
        """Only the fields the client actually sent, in stored layout."""
        return self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
