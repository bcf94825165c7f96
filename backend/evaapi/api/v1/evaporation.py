import math

from fastapi import APIRouter

from evaapi.schemas.evaporation import (
    ClimateInput,
    PowerResponse,
    RequiredAreaRequest,
    RequiredAreaResponse,
)
from evaengine.evaporation import (
    category_info,
    classify_power,
    evaporation_rate,
    max_power_density,
    required_area,
)
from evaengine.evaporation.penman import NET_RADIATION_FRACTION

router = APIRouter()

ONE_MEGAWATT_KW = 1000.0


@router.post(
    "/power",
    response_model=PowerResponse,
    summary="Evaporation power density",
    description="Estimate evaporation-engine power density (W/m²) and its category from monthly climate averages.",
)
async def estimate_power(body: ClimateInput):
    evap = evaporation_rate(
        body.avg_solar_radiation * NET_RADIATION_FRACTION,
        body.avg_temp,
        body.avg_humidity,
        body.avg_wind_speed,
    )
    power = max_power_density(evap, body.avg_temp, body.avg_humidity)
    category = classify_power(power)
    info = category_info(category)

    area = required_area(ONE_MEGAWATT_KW, power)
    return PowerResponse(
        power_density=power,
        category=category,
        label=info["label"],
        description=info["description"],
        evaporation_rate=evap,
        area_for_1mw_m2=None if math.isinf(area) else area,
    )


@router.post(
    "/required-area",
    response_model=RequiredAreaResponse,
    summary="Engine area for a target output",
)
async def compute_required_area(body: RequiredAreaRequest):
    area = required_area(body.target_power_kw, body.power_density, body.efficiency)
    return RequiredAreaResponse(area_m2=area, area_km2=area / 1e6)
