import math

from pydantic import BaseModel, Field

from evaengine.models import ClimateSample


def finite_or_none(value: float) -> float | None:
    """NaN/inf cannot be encoded as JSON; report them as null."""
    return value if math.isfinite(value) else None


class ClimateInput(BaseModel):
    avg_temp: float = Field(default=15.0, ge=-90, le=60, description="Mean air temperature (°C)")
    avg_humidity: float = Field(default=0.65, ge=0, le=1, description="Relative humidity fraction")
    avg_wind_speed: float = Field(default=3.0, ge=0, description="Mean wind speed (m/s)")
    avg_solar_radiation: float = Field(default=200.0, ge=0, description="Mean shortwave radiation (W/m²)")
    is_predicted: bool = False

    def to_domain(self) -> ClimateSample:
        return ClimateSample(**self.model_dump())


class ClimateResponse(BaseModel):
    avg_temp: float | None
    avg_humidity: float | None
    avg_wind_speed: float | None
    avg_solar_radiation: float | None
    is_predicted: bool

    @classmethod
    def from_domain(cls, sample: ClimateSample) -> "ClimateResponse":
        # Projected months without history for their calendar month carry NaN.
        return cls(
            avg_temp=finite_or_none(sample.avg_temp),
            avg_humidity=finite_or_none(sample.avg_humidity),
            avg_wind_speed=finite_or_none(sample.avg_wind_speed),
            avg_solar_radiation=finite_or_none(sample.avg_solar_radiation),
            is_predicted=sample.is_predicted,
        )


class PowerResponse(BaseModel):
    power_density: float
    category: str
    label: str
    description: str
    evaporation_rate: float
    area_for_1mw_m2: float | None = Field(
        default=None, description="Engine area for 1 MW at 10% efficiency; null when power is zero"
    )


class RequiredAreaRequest(BaseModel):
    target_power_kw: float = Field(gt=0)
    power_density: float = Field(gt=0, description="W/m²")
    efficiency: float = Field(default=0.1, gt=0, le=1)


class RequiredAreaResponse(BaseModel):
    area_m2: float
    area_km2: float
