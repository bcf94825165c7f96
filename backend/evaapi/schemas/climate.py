from pydantic import BaseModel, Field

from evaapi.schemas.evaporation import ClimateInput, ClimateResponse


class MonthClimateResponse(BaseModel):
    month: str
    climate: ClimateResponse
    power_density: float | None
    category: str
    is_predicted: bool


class ClimateProjectionRequest(BaseModel):
    history: dict[str, ClimateInput] = Field(
        description="Observed monthly climate keyed by 'YYYY-MM'"
    )
    months_ahead: int = Field(default=60, ge=1, le=240)


class ClimateFetchRequest(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    history_years: int | None = Field(default=None, ge=1, le=20)
    months_ahead: int | None = Field(default=None, ge=0, le=240)


class ClimateSeriesResponse(BaseModel):
    months: list[MonthClimateResponse]
    historical_months: int
    projected_months: int


class LocationEstimateResponse(BaseModel):
    latitude: float
    longitude: float
    climate: ClimateResponse
    power_density: float
    category: str
