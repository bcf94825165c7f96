from pydantic import BaseModel, Field

from evaapi.schemas.evaporation import ClimateInput, ClimateResponse
from evaengine.models import Region, SupplyVector

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


class RegionInput(BaseModel):
    name: str = Field(max_length=255)
    state: str = Field(min_length=2, max_length=2)
    population: float = Field(ge=0)
    fips: str | None = None
    state_population: float | None = Field(default=None, gt=0)
    climate: ClimateInput | None = None
    has_water_access: bool = False
    existing_nuclear: bool = False

    def to_domain(self) -> Region:
        return Region(
            name=self.name,
            state=self.state,
            population=self.population,
            fips=self.fips,
            state_population=self.state_population,
            climate=self.climate.to_domain() if self.climate else None,
            has_water_access=self.has_water_access,
            existing_nuclear=self.existing_nuclear,
        )


class SupplyInput(BaseModel):
    coal: float = Field(default=0.0, ge=0)
    gas: float = Field(default=0.0, ge=0)
    nuclear: float = Field(default=0.0, ge=0)
    solar: float = Field(default=0.0, ge=0)
    wind: float = Field(default=0.0, ge=0)
    hydro: float = Field(default=0.0, ge=0)
    geothermal: float = Field(default=0.0, ge=0)
    oil: float = Field(default=0.0, ge=0)
    evaporation: float | None = Field(default=None, ge=0)

    def to_domain(self) -> SupplyVector:
        return SupplyVector(**self.model_dump())


class SupplyResponse(SupplyInput):
    renewable: float
    non_renewable: float
    total: float


class RecommendationResponse(BaseModel):
    source_type: str
    priority: str
    message: str
    capacity: float
    score: float | None = None


class MonthlyMetricsResponse(BaseModel):
    month: str
    demand: float
    supply: SupplyResponse
    deficit: float
    price: float
    base_price: float
    pricing_factors: dict[str, float]
    recommendations: list[RecommendationResponse]


class RegionMetricsRequest(BaseModel):
    region: RegionInput
    supply: SupplyInput
    month: str = Field(pattern=MONTH_PATTERN)
    include_evaporation: bool = True


class RegionTimelineRequest(BaseModel):
    region: RegionInput
    start: str = Field(pattern=MONTH_PATTERN)
    end: str = Field(pattern=MONTH_PATTERN)
    climate_history: dict[str, ClimateInput] | None = None
    months_ahead: int = Field(default=60, ge=0, le=240)
    include_evaporation: bool = True


class TimelineMonthResponse(BaseModel):
    month: str
    is_predicted: bool
    climate: ClimateResponse | None
    power_density: float | None
    category: str | None
    metrics: MonthlyMetricsResponse


class RegionTimelineResponse(BaseModel):
    region: str
    supply_source: str
    months: list[TimelineMonthResponse]


class PriceProjectionResponse(BaseModel):
    current_price: float
    years_ahead: float
    scenario: str
    projected_price: float
