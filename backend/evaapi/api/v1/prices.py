from fastapi import APIRouter, Query

from evaapi.schemas.regions import PriceProjectionResponse
from evaengine.pricing import PriceEstimator
from evaengine.pricing.estimator import BASELINE_SCENARIO

router = APIRouter()

_estimator = PriceEstimator()


@router.get(
    "/projection",
    response_model=PriceProjectionResponse,
    summary="Compound a retail price forward",
    description="Scenarios: baseline (2%/yr), renewable_growth (-1%/yr), fossil_dependence (4%/yr). Unknown scenarios use baseline.",
)
async def project_price(
    current_price: float = Query(gt=0, description="cents/kWh"),
    years_ahead: float = Query(default=5, ge=0, le=50),
    scenario: str = Query(default=BASELINE_SCENARIO),
):
    return PriceProjectionResponse(
        current_price=current_price,
        years_ahead=years_ahead,
        scenario=scenario,
        projected_price=_estimator.project_future_price(current_price, years_ahead, scenario),
    )
