"""Region timeline orchestrator.

``RegionTimelineRunner`` wires the climate projector, evaporation model and
the demand, price and recommendation estimators into one per-month record
set for a single region.  Components are called in data-dependency order:
climate history is projected before power is scored, and power and supply
exist before demand, price and recommendations are computed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Mapping, Optional

from evaengine.advisor.recommendations import RecommendationEngine
from evaengine.climate.projection import (
    check_calendar_coverage,
    combine_and_score_power,
    merge_history_and_projection,
)
from evaengine.demand.estimator import DemandEstimator
from evaengine.evaporation.penman import classify_power, power_from_climate_averages
from evaengine.models import (
    ClimateSample,
    MonthlyMetrics,
    PowerEstimate,
    Region,
    SupplyVector,
)
from evaengine.months import MonthKey, as_month_key
from evaengine.pricing.estimator import PriceEstimator
from evaengine.supply.generation import evaporation_supply_mwh, region_share

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, float], None]

DEFAULT_MONTHS_AHEAD = 60


@dataclass(frozen=True)
class RegionMonth:
    """Everything the map layer needs for one region in one month."""

    month: MonthKey
    climate: Optional[ClimateSample]
    power: Optional[PowerEstimate]
    metrics: MonthlyMetrics

    @property
    def is_predicted(self) -> bool:
        return bool(self.climate and self.climate.is_predicted)


# ======================================================================
# Single month
# ======================================================================

def compute_monthly_metrics(
    region: Region,
    month: MonthKey | str,
    supply: SupplyVector,
    *,
    demand_estimator: DemandEstimator | None = None,
    price_estimator: PriceEstimator | None = None,
    recommendation_engine: RecommendationEngine | None = None,
    include_evaporation: bool = True,
) -> MonthlyMetrics:
    """Demand, price and recommendations for *region* in *month*.

    When *include_evaporation* is set and the region carries climate data,
    the evaporation-engine output is added to *supply* before the deficit
    is computed.
    """
    key = as_month_key(month)
    demand_estimator = demand_estimator or DemandEstimator()
    price_estimator = price_estimator or PriceEstimator()
    recommendation_engine = recommendation_engine or RecommendationEngine()

    if include_evaporation and region.climate is not None:
        power = power_from_climate_averages(region.climate)
        supply = supply.with_evaporation(evaporation_supply_mwh(power))

    demand = demand_estimator.estimate_monthly_demand(region, key)
    deficit = demand - supply.total
    pricing = price_estimator.estimate_price(region, supply, demand, key)
    recommendations = recommendation_engine.generate_recommendations(
        region, supply, demand, deficit
    )

    return MonthlyMetrics(
        month=key,
        demand=demand,
        supply=supply,
        pricing=pricing,
        recommendations=tuple(recommendations),
    )


# ======================================================================
# Full timeline
# ======================================================================

class RegionTimelineRunner:
    """Build the per-month record set for one region.

    Parameters
    ----------
    region : Region
        Region to analyse.  If ``state_population`` is set, *supply* is
        treated as state-level and shared by population; otherwise it is
        used as the region's own supply.
    supply : Mapping[MonthKey, SupplyVector]
        Monthly generation.  Defines which months appear in the output.
    climate_history : Mapping[MonthKey, ClimateSample], optional
        Observed monthly climate.  It is extended ``months_ahead`` months
        by seasonal/trend projection; months it does not cover fall back to
        ``region.climate``.  Twelve or more months must include every
        calendar month.
    months_ahead : int
        Projection horizon for *climate_history*.
    progress_callback : callable, optional
        Called as ``callback(step, fraction)``.

    Raises
    ------
    ClimateHistoryError
        If *climate_history* leaves a calendar month uncovered.
    """

    def __init__(
        self,
        region: Region,
        supply: Mapping[MonthKey, SupplyVector],
        climate_history: Optional[Mapping[MonthKey, ClimateSample]] = None,
        months_ahead: int = DEFAULT_MONTHS_AHEAD,
        demand_estimator: DemandEstimator | None = None,
        price_estimator: PriceEstimator | None = None,
        recommendation_engine: RecommendationEngine | None = None,
        include_evaporation: bool = True,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> None:
        self.region = region
        self.supply = dict(supply)
        self.climate_history = dict(climate_history or {})
        check_calendar_coverage(self.climate_history)
        self.months_ahead = months_ahead
        self.demand_estimator = demand_estimator or DemandEstimator()
        self.price_estimator = price_estimator or PriceEstimator(
            tables=self.demand_estimator.tables
        )
        self.recommendation_engine = recommendation_engine or RecommendationEngine(
            tables=self.demand_estimator.tables
        )
        self.include_evaporation = include_evaporation
        self._progress = progress_callback

    def _report(self, step: str, fraction: float) -> None:
        if self._progress is not None:
            try:
                self._progress(step, fraction)
            except Exception:
                logger.warning("Progress callback failed at step %r", step, exc_info=True)
        logger.debug("Timeline step: %s (%.0f %%)", step, fraction * 100)

    def _climate_series(self) -> dict[MonthKey, ClimateSample]:
        if not self.climate_history:
            return {}
        return merge_history_and_projection(self.climate_history, self.months_ahead)

    def run(self) -> dict[MonthKey, RegionMonth]:
        """Compute every month of the supply series, in chronological order."""
        self._report("Projecting climate", 0.0)
        climate_series = self._climate_series()
        power_series = combine_and_score_power(climate_series)

        static_power: Optional[PowerEstimate] = None
        if self.region.climate is not None:
            value = power_from_climate_averages(self.region.climate)
            static_power = PowerEstimate(value, classify_power(value))

        share_state = bool(self.region.state_population)
        months = sorted(self.supply)
        timeline: dict[MonthKey, RegionMonth] = {}

        for i, key in enumerate(months):
            climate = climate_series.get(key, self.region.climate)
            power = power_series.get(key, static_power)
            month_region = replace(self.region, climate=climate)

            supply = self.supply[key]
            if share_state:
                supply = region_share(supply, self.region)

            metrics = compute_monthly_metrics(
                month_region,
                key,
                supply,
                demand_estimator=self.demand_estimator,
                price_estimator=self.price_estimator,
                recommendation_engine=self.recommendation_engine,
                include_evaporation=self.include_evaporation,
            )
            timeline[key] = RegionMonth(month=key, climate=climate, power=power, metrics=metrics)

            self._report(f"Computed {key}", (i + 1) / len(months))

        logger.info(
            "Timeline for %s complete: %d months (%d projected climate months)",
            self.region.name,
            len(timeline),
            sum(1 for rm in timeline.values() if rm.is_predicted),
        )
        return timeline


def build_region_timeline(
    region: Region,
    supply: Mapping[MonthKey, SupplyVector],
    climate_history: Optional[Mapping[MonthKey, ClimateSample]] = None,
    months_ahead: int = DEFAULT_MONTHS_AHEAD,
    **kwargs,
) -> dict[MonthKey, RegionMonth]:
    """Functional wrapper around :class:`RegionTimelineRunner`."""
    return RegionTimelineRunner(
        region, supply, climate_history, months_ahead, **kwargs
    ).run()
