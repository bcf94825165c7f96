"""Retail electricity price prediction from supply/demand balance.

The price is a state baseline scaled by four independent factors::

    price = base * supply_demand * fuel_mix * seasonal * infrastructure

Long-horizon projections compound a scenario growth rate on top.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from evaengine.models import PriceBreakdown, Region, SupplyVector
from evaengine.months import SUMMER_MONTHS, WINTER_MONTHS, MonthKey, as_month_key
from evaengine.presets import DEFAULT_TABLES, RegionalTables

logger = logging.getLogger(__name__)

BASELINE_SCENARIO = "baseline"


@dataclass(frozen=True)
class PriceEstimator:
    """Multiplicative price model.

    Parameters
    ----------
    tables : RegionalTables
        Baseline prices, hot/cold-state lists and scenario growth rates.
    """

    tables: RegionalTables = field(default=DEFAULT_TABLES)

    def estimate_price(
        self,
        region: Region,
        supply: SupplyVector,
        demand: float,
        month: MonthKey | str,
    ) -> PriceBreakdown:
        """Predicted price (cents/kWh) for *region* in *month*."""
        key = as_month_key(month)
        base_price = self.base_price(region.state)

        factors = {
            "supply_demand": self.supply_demand_factor(supply.total, demand),
            "fuel_mix": self.fuel_mix_factor(supply),
            "seasonal": self.seasonal_factor(region.state, key.month),
            "infrastructure": self.infrastructure_factor(region),
        }

        price = base_price
        for value in factors.values():
            price *= value

        return PriceBreakdown(price=price, base_price=base_price, factors=factors)

    def base_price(self, state: str) -> float:
        return self.tables.baseline_prices.get(state.upper(), self.tables.default_price)

    @staticmethod
    def supply_demand_factor(supply_total: float, demand: float) -> float:
        """Scarcity multiplier from the deficit ratio ``(demand - supply) / demand``.

        Zero or negative demand is treated as a balanced market.
        """
        deficit_ratio = (demand - supply_total) / demand if demand > 0 else 0.0

        if deficit_ratio > 0.2:
            return 1.5
        if deficit_ratio > 0.1:
            return 1.25
        if deficit_ratio > 0:
            return 1.1
        if deficit_ratio < -0.1:
            return 0.9
        return 1.0

    @staticmethod
    def fuel_mix_factor(supply: SupplyVector) -> float:
        """Discount for renewable-heavy grids, premium for fossil-heavy ones."""
        total = supply.total
        renewable_ratio = supply.renewable / total if total > 0 else 0.0

        if renewable_ratio > 0.5:
            return 0.85
        if renewable_ratio > 0.3:
            return 0.95
        if renewable_ratio < 0.1:
            return 1.15
        return 1.0

    def seasonal_factor(self, state: str, month: int) -> float:
        """Peak-season multiplier for month number *month* (1 -- 12)."""
        is_summer = month in SUMMER_MONTHS
        is_winter = month in WINTER_MONTHS

        if state in self.tables.price_hot_states:
            return 1.3 if is_summer else 1.0
        if state in self.tables.price_cold_states:
            return 1.25 if is_winter else 1.0
        if is_summer or is_winter:
            return 1.1
        return 1.0

    @staticmethod
    def infrastructure_factor(region: Region) -> float:
        """Rural transmission premium or urban economy-of-scale discount."""
        if region.population < 50_000:
            return 1.15
        if region.population > 1_000_000:
            return 0.95
        return 1.0

    def project_future_price(
        self,
        current_price: float,
        years_ahead: float,
        scenario: str = BASELINE_SCENARIO,
    ) -> float:
        """Compound *current_price* over *years_ahead* at the scenario rate.

        Unknown scenarios fall back to ``"baseline"``.
        """
        rates = self.tables.price_growth_rates
        if scenario not in rates:
            logger.debug("Unknown price scenario %r, using baseline", scenario)
            scenario = BASELINE_SCENARIO
        return current_price * (1.0 + rates[scenario]) ** years_ahead
