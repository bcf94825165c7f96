import logging

from fastapi import APIRouter, HTTPException, Request, status

from evaapi.config import settings
from evaapi.core.rate_limit import generation_limiter
from evaapi.schemas.evaporation import ClimateResponse, finite_or_none
from evaapi.schemas.regions import (
    MonthlyMetricsResponse,
    RecommendationResponse,
    RegionMetricsRequest,
    RegionTimelineRequest,
    RegionTimelineResponse,
    SupplyResponse,
    TimelineMonthResponse,
)
from evaapi.services.eia_service import fetch_state_generation
from evaengine.advisor import RecommendationEngine
from evaengine.climate import check_calendar_coverage
from evaengine.demand import DemandEstimator
from evaengine.models import MonthlyMetrics
from evaengine.months import MonthKey
from evaengine.pricing import PriceEstimator
from evaengine.simulation import build_region_timeline, compute_monthly_metrics

logger = logging.getLogger(__name__)

router = APIRouter()

_demand = DemandEstimator()
_pricing = PriceEstimator()
_advisor = RecommendationEngine()

MAX_TIMELINE_MONTHS = 240


def _metrics_response(metrics: MonthlyMetrics) -> MonthlyMetricsResponse:
    return MonthlyMetricsResponse(
        month=str(metrics.month),
        demand=metrics.demand,
        supply=SupplyResponse(**metrics.supply.as_dict()),
        deficit=metrics.deficit,
        price=metrics.price,
        base_price=metrics.pricing.base_price,
        pricing_factors=dict(metrics.pricing.factors),
        recommendations=[
            RecommendationResponse(
                source_type=r.source_type,
                priority=r.priority,
                message=r.message,
                capacity=r.capacity,
                score=r.score,
            )
            for r in metrics.recommendations
        ],
    )


@router.post(
    "/metrics",
    response_model=MonthlyMetricsResponse,
    summary="Demand, price and recommendations for one month",
    description=(
        "Estimate demand, retail price and source recommendations for a region "
        "given its supply mix. With a climate and include_evaporation, a "
        "1 km² evaporation deployment is added to the supply."
    ),
)
async def region_metrics(body: RegionMetricsRequest):
    metrics = compute_monthly_metrics(
        body.region.to_domain(),
        MonthKey.parse(body.month),
        body.supply.to_domain(),
        demand_estimator=_demand,
        price_estimator=_pricing,
        recommendation_engine=_advisor,
        include_evaporation=body.include_evaporation,
    )
    return _metrics_response(metrics)


@router.post(
    "/timeline",
    response_model=RegionTimelineResponse,
    summary="Per-month region timeline",
    description=(
        "Fetch (or estimate) state generation between start and end, share it "
        "to the region by population and compute climate, power and metrics "
        "for every month. region.state_population is required. Optional climate history is projected forward."
    ),
)
async def region_timeline(body: RegionTimelineRequest, request: Request):
    if body.region.state_population is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="region.state_population is required to share state generation",
        )
    start = MonthKey.parse(body.start)
    end = MonthKey.parse(body.end)
    if end < start:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="end must not precede start",
        )
    span = (end.year - start.year) * 12 + (end.month - start.month) + 1
    if span > MAX_TIMELINE_MONTHS:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Timeline limited to {MAX_TIMELINE_MONTHS} months, got {span}",
        )

    history = None
    if body.climate_history:
        history = {MonthKey.parse(k): v.to_domain() for k, v in body.climate_history.items()}
        check_calendar_coverage(history)

    region = body.region.to_domain()
    if settings.eia_api_key:
        generation_limiter.check(request)
    supply, source = await fetch_state_generation(region.state, str(start), str(end))

    timeline = build_region_timeline(
        region,
        supply,
        history,
        body.months_ahead,
        demand_estimator=_demand,
        price_estimator=_pricing,
        recommendation_engine=_advisor,
        include_evaporation=body.include_evaporation,
    )
    logger.info(
        "Built %d-month timeline for %s (%s supply)", len(timeline), region.name, source,
        extra={"region": region.name},
    )

    return RegionTimelineResponse(
        region=region.name,
        supply_source=source,
        months=[
            TimelineMonthResponse(
                month=str(key),
                is_predicted=rm.is_predicted,
                climate=ClimateResponse.from_domain(rm.climate) if rm.climate else None,
                power_density=finite_or_none(rm.power.power_density) if rm.power else None,
                category=rm.power.category if rm.power else None,
                metrics=_metrics_response(rm.metrics),
            )
            for key, rm in timeline.items()
        ],
    )
