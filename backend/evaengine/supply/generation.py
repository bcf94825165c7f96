"""State generation series and their distribution to regions.

Three supply sources feed the regional model:

* upstream generation records keyed by fuel code (EIA v2 style),
* estimated state generation from built-in energy profiles, used when no
  upstream data is available,
* evaporation-engine output derived from a region's power density.
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence

from evaengine.errors import GenerationPayloadError, InvalidRegionError
from evaengine.models import FUEL_TYPES, Region, SupplyVector
from evaengine.months import MonthKey, months_between
from evaengine.presets import DEFAULT_TABLES, RegionalTables

logger = logging.getLogger(__name__)

# Upstream fuel codes mapped onto the internal fuel vocabulary.
FUEL_CODE_MAP: dict[str, str] = {
    "COW": "coal",
    "NG": "gas",
    "NUC": "nuclear",
    "SUN": "solar",
    "WND": "wind",
    "WAT": "hydro",
    "GEO": "geothermal",
    "PEL": "oil",
    "DFO": "oil",
    "RFO": "oil",
}

# Evaporation deployment assumed when converting W/m2 to monthly MWh.
EVAPORATION_AREA_M2 = 1_000_000.0
EVAPORATION_EFFICIENCY = 0.1
HOURS_PER_MONTH = 24 * 30


@dataclass(frozen=True)
class DisaggregationBoosts:
    """Generation multipliers for regions that host plants of a given type.

    The defaults are heuristic policy knobs rather than physical constants.
    """

    nuclear: float = 5.0
    coal: float = 3.0
    solar: float = 2.0


@dataclass(frozen=True)
class PowerPlant:
    region: str
    plant_type: str


# ======================================================================
# Upstream records
# ======================================================================

def supply_from_generation_records(
    records: Iterable[Mapping[str, Any]],
) -> dict[MonthKey, SupplyVector]:
    """Sum generation records into one :class:`SupplyVector` per month.

    Each record needs ``period`` (``"YYYY-MM"``), ``fueltype`` and
    ``generation``.  Unknown fuel codes are skipped; generation values that
    cannot be parsed count as zero.

    Raises
    ------
    GenerationPayloadError
        If a record has no ``period``.
    """
    totals: dict[MonthKey, dict[str, float]] = defaultdict(
        lambda: {fuel: 0.0 for fuel in FUEL_TYPES}
    )

    for record in records:
        period = record.get("period")
        if not period:
            raise GenerationPayloadError(f"Generation record has no period: {record!r}")
        fuel = FUEL_CODE_MAP.get(str(record.get("fueltype", "")).upper())
        key = MonthKey.parse(period)
        month_totals = totals[key]
        if fuel is None:
            continue
        try:
            generation = float(record.get("generation") or 0.0)
        except (TypeError, ValueError):
            generation = 0.0
        if math.isnan(generation):
            generation = 0.0
        month_totals[fuel] += generation

    return {key: SupplyVector(**totals[key]) for key in sorted(totals)}


# ======================================================================
# Estimated state generation
# ======================================================================

def fossil_seasonal_multiplier(month: int) -> float:
    """Summer peak (AC), winter secondary peak (heating), shoulder dip."""
    if month in (6, 7, 8):
        return 1.25
    if month in (12, 1, 2):
        return 1.15
    return 0.95


def solar_multiplier(month: int) -> float:
    if month in (5, 6, 7):
        return 1.4
    if month in (12, 1, 2):
        return 0.6
    return 1.0


def wind_multiplier(month: int) -> float:
    if month in (3, 4, 10, 11):
        return 1.3
    if month in (7, 8):
        return 0.7
    return 1.0


def hydro_multiplier(month: int) -> float:
    """Snowmelt peak in spring, late-summer low."""
    if month in (4, 5, 6):
        return 1.5
    if month in (8, 9, 10):
        return 0.6
    return 1.0


def estimate_state_generation(
    state: str,
    start: MonthKey | str,
    end: MonthKey | str,
    tables: RegionalTables = DEFAULT_TABLES,
) -> dict[MonthKey, SupplyVector]:
    """Monthly generation estimate for *state* from its energy profile.

    Nuclear and geothermal run flat; fossil fuels follow demand seasonality;
    solar, wind and hydro follow their resource seasons.  States without a
    profile use the default profile.
    """
    profile = tables.energy_profile(state)
    series: dict[MonthKey, SupplyVector] = {}

    for key in months_between(start, end):
        m = key.month
        fossil = fossil_seasonal_multiplier(m)
        series[key] = SupplyVector(
            coal=profile["coal"] * fossil,
            gas=profile["gas"] * fossil,
            nuclear=profile["nuclear"],
            solar=profile["solar"] * solar_multiplier(m),
            wind=profile["wind"] * wind_multiplier(m),
            hydro=profile["hydro"] * hydro_multiplier(m),
            geothermal=profile["geothermal"],
            oil=profile["oil"] * fossil,
        )
    return series


# ======================================================================
# Regional distribution
# ======================================================================

def region_share(state_supply: SupplyVector, region: Region) -> SupplyVector:
    """Population-weighted share of state generation for *region*.

    Raises
    ------
    InvalidRegionError
        If the region has no positive ``state_population``.
    """
    if not region.state_population or region.state_population <= 0:
        raise InvalidRegionError(
            f"Region {region.name!r} needs a positive state_population to share supply"
        )
    return state_supply.scaled(region.population / region.state_population)


def disaggregate_to_regions(
    state_series: Mapping[MonthKey, SupplyVector],
    regions: Sequence[Region],
    plants: Sequence[PowerPlant] = (),
    boosts: DisaggregationBoosts = DisaggregationBoosts(),
) -> dict[str, dict[MonthKey, SupplyVector]]:
    """Distribute state generation to regions by population.

    Regions hosting nuclear, coal or solar plants get their share of that
    fuel multiplied by the matching boost.  Results are keyed by region
    ``fips`` (falling back to the name).

    Raises
    ------
    InvalidRegionError
        If the regions' total population is zero.
    """
    total_population = sum(r.population for r in regions)
    if regions and total_population <= 0:
        raise InvalidRegionError("Cannot disaggregate supply: total population is zero")

    plant_types: dict[str, set[str]] = defaultdict(set)
    for plant in plants:
        plant_types[plant.region].add(plant.plant_type)

    result: dict[str, dict[MonthKey, SupplyVector]] = {}
    for region in regions:
        weight = region.population / total_population
        hosted = plant_types.get(region.name, set())
        monthly: dict[MonthKey, SupplyVector] = {}

        for key, supply in state_series.items():
            share = {fuel: getattr(supply, fuel) * weight for fuel in FUEL_TYPES}
            if "nuclear" in hosted:
                share["nuclear"] *= boosts.nuclear
            if "coal" in hosted:
                share["coal"] *= boosts.coal
            if "solar" in hosted:
                share["solar"] *= boosts.solar
            monthly[key] = SupplyVector(**share)

        result[region.fips or region.name] = monthly
        logger.debug("Disaggregated %d months to %s (weight %.4f)", len(monthly), region.name, weight)

    return result


# ======================================================================
# Evaporation contribution
# ======================================================================

def evaporation_supply_mwh(
    power_density: float,
    area_m2: float = EVAPORATION_AREA_M2,
    efficiency: float = EVAPORATION_EFFICIENCY,
    hours: float = HOURS_PER_MONTH,
) -> float:
    """Monthly energy (MWh) from an evaporation deployment of *area_m2*."""
    return power_density * area_m2 * hours * efficiency / 1_000_000.0
