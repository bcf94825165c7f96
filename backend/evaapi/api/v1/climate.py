from datetime import date

from fastapi import APIRouter, Request

from evaapi.config import settings
from evaapi.core.rate_limit import weather_limiter
from evaapi.schemas.climate import (
    ClimateFetchRequest,
    ClimateProjectionRequest,
    ClimateSeriesResponse,
    MonthClimateResponse,
)
from evaapi.schemas.evaporation import ClimateResponse, finite_or_none
from evaapi.services.weather_service import fetch_monthly_climate, historical_date_range
from evaengine.climate import combine_and_score_power, merge_history_and_projection
from evaengine.models import ClimateSample
from evaengine.months import MonthKey

router = APIRouter()


def _series_response(series: dict[MonthKey, ClimateSample]) -> ClimateSeriesResponse:
    scored = combine_and_score_power(series)
    months = [
        MonthClimateResponse(
            month=str(key),
            climate=ClimateResponse.from_domain(series[key]),
            power_density=finite_or_none(scored[key].power_density),
            category=scored[key].category,
            is_predicted=scored[key].is_predicted,
        )
        for key in sorted(series)
    ]
    projected = sum(1 for m in months if m.is_predicted)
    return ClimateSeriesResponse(
        months=months,
        historical_months=len(months) - projected,
        projected_months=projected,
    )


@router.post(
    "/projection",
    response_model=ClimateSeriesResponse,
    summary="Project monthly climate",
    description=(
        "Extend an observed monthly climate series with seasonal + linear-trend "
        "projection and score evaporation power for every month. Fewer than "
        "twelve observed months yields no projected months."
    ),
)
async def project_climate(body: ClimateProjectionRequest):
    history = {MonthKey.parse(k): v.to_domain() for k, v in body.history.items()}
    return _series_response(merge_history_and_projection(history, body.months_ahead))


@router.post(
    "/fetch",
    response_model=ClimateSeriesResponse,
    summary="Fetch and project climate for a location",
    description="Download daily weather from the Open-Meteo archive, aggregate it to months and project it forward.",
)
async def fetch_climate(body: ClimateFetchRequest, request: Request):
    weather_limiter.check(request)

    years = body.history_years or settings.history_years
    months_ahead = (
        settings.projection_months if body.months_ahead is None else body.months_ahead
    )
    start, end = historical_date_range(date.today(), years)
    history = await fetch_monthly_climate(body.latitude, body.longitude, start, end)
    return _series_response(merge_history_and_projection(history, months_ahead))
