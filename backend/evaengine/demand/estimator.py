"""Monthly electricity demand for a region from its population.

``demand [MWh] = population * per_capita_kWh * economic * climate / 12 / 1000``
"""

from __future__ import annotations

from dataclasses import dataclass, field

from evaengine.months import SUMMER_MONTHS, WINTER_MONTHS, MonthKey, as_month_key
from evaengine.models import Region
from evaengine.presets import DEFAULT_TABLES, RegionalTables

RURAL_POPULATION = 50_000


@dataclass(frozen=True)
class DemandEstimator:
    """Population-driven demand model with economic and climate adjustments.

    Parameters
    ----------
    tables : RegionalTables
        Industrial-region and hot/cold-state allowlists.
    per_capita_annual_kwh : float
        Annual consumption per resident (kWh).  US average ~11,000.
    annual_growth_rate : float
        Flat demand growth used by :meth:`project_future_demand`.
    """

    tables: RegionalTables = field(default=DEFAULT_TABLES)
    per_capita_annual_kwh: float = 11_000.0
    annual_growth_rate: float = 0.015

    def estimate_monthly_demand(self, region: Region, month: MonthKey | str) -> float:
        """Estimated demand (MWh) of *region* in *month*."""
        key = as_month_key(month)
        annual_kwh = region.population * self.per_capita_annual_kwh
        annual_kwh *= self.economic_multiplier(region)
        climate = self.climate_multiplier(region, key.month)
        return (annual_kwh / 12.0) * climate / 1000.0

    def economic_multiplier(self, region: Region) -> float:
        """1.5 for industrial regions, 0.8 for rural ones, else 1.0."""
        if region.name in self.tables.industrial_regions:
            return 1.5
        if region.population < RURAL_POPULATION:
            return 0.8
        return 1.0

    def climate_multiplier(self, region: Region, month: int) -> float:
        """Heating/cooling load multiplier for month number *month* (1 -- 12)."""
        is_summer = month in SUMMER_MONTHS
        is_winter = month in WINTER_MONTHS

        if region.state in self.tables.demand_hot_states:
            if is_summer:
                return 1.4  # air conditioning
            if is_winter:
                return 0.9
            return 1.0

        if region.state in self.tables.demand_cold_states:
            if is_winter:
                return 1.3  # heating
            if is_summer:
                return 0.9
            return 1.0

        if is_summer or is_winter:
            return 1.15
        return 0.95

    def project_future_demand(
        self,
        historical: dict[MonthKey, float],
        years_ahead: int,
    ) -> dict[MonthKey, float]:
        """Grow every historical month by the annual rate over *years_ahead*.

        Keys move forward by whole years; the month of year is preserved.
        """
        growth = (1.0 + self.annual_growth_rate) ** years_ahead
        return {
            key.shift_years(years_ahead): demand * growth
            for key, demand in sorted(historical.items())
        }
