from fastapi import APIRouter, Query

from evaapi.schemas.climate import LocationEstimateResponse
from evaapi.schemas.evaporation import ClimateResponse
from evaengine.climate import estimate_climate_from_location
from evaengine.evaporation import classify_power, power_from_climate_averages

router = APIRouter()


@router.get(
    "/climate-estimate",
    response_model=LocationEstimateResponse,
    summary="Rough climate estimate for a coordinate",
    description="Latitude-band climate with desert, humid, Mediterranean and coastal adjustments. No upstream call is made.",
)
async def climate_estimate(
    lat: float = Query(ge=-90, le=90),
    lon: float = Query(ge=-180, le=180),
):
    climate = estimate_climate_from_location(lat, lon)
    power = power_from_climate_averages(climate)
    return LocationEstimateResponse(
        latitude=lat,
        longitude=lon,
        climate=ClimateResponse.from_domain(climate),
        power_density=power,
        category=classify_power(power),
    )
