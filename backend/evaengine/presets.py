"""Regional lookup tables used by the demand, price, supply and advisor models.

The tables are bundled into a frozen :class:`RegionalTables` value.  Every
estimator takes a ``tables`` argument defaulting to :data:`DEFAULT_TABLES`,
so alternate tables can be substituted without touching module state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


def _frozen(mapping: dict) -> Mapping:
    return MappingProxyType(dict(mapping))


# ======================================================================
# Demand allowlists
# ======================================================================

# Regions with heavy data-centre / manufacturing load (matched by name).
INDUSTRIAL_REGIONS = frozenset({"Santa Clara", "King", "Cook", "Harris"})

DEMAND_HOT_STATES = frozenset({"AZ", "TX", "FL", "NV", "LA"})
DEMAND_COLD_STATES = frozenset({"ME", "VT", "NH", "MN", "ND", "SD", "WI"})

# ======================================================================
# Price tables
# ======================================================================

# Average retail electricity price by state (cents/kWh).
BASELINE_PRICES: Mapping[str, float] = _frozen({
    "CA": 19.9, "TX": 11.8, "FL": 11.4, "NY": 18.2, "PA": 12.7,
    "IL": 12.3, "OH": 12.5, "NC": 10.9, "MI": 15.3, "GA": 11.9,
    "NJ": 15.6, "VA": 11.5, "WA": 9.7, "AZ": 12.3, "MA": 21.1,
    "TN": 10.6, "IN": 12.0, "MO": 10.7, "MD": 13.0, "WI": 13.5,
})
DEFAULT_PRICE = 13.0  # US average

# Deliberately narrower than the demand cold list (no SD / WI).
PRICE_HOT_STATES = frozenset({"AZ", "TX", "FL", "NV", "LA"})
PRICE_COLD_STATES = frozenset({"ME", "VT", "NH", "MN", "ND"})

PRICE_GROWTH_RATES: Mapping[str, float] = _frozen({
    "baseline": 0.02,
    "renewable_growth": -0.01,
    "fossil_dependence": 0.04,
})

# ======================================================================
# Source suitability allowlists
# ======================================================================

HIGH_SOLAR_STATES = frozenset({"AZ", "NM", "NV", "CA", "TX"})
MODERATE_SOLAR_STATES = frozenset({"CO", "UT", "FL", "GA", "NC"})
HIGH_WIND_STATES = frozenset({"TX", "IA", "OK", "KS", "ND", "SD"})
MODERATE_WIND_STATES = frozenset({"MN", "NE", "WY", "MT"})
GEOTHERMAL_STATES = frozenset({"CA", "NV", "OR", "ID", "UT", "AK", "HI"})
NUCLEAR_FRIENDLY_STATES = frozenset({"IL", "PA", "SC", "NC", "AL"})

# ======================================================================
# State generation profiles (GWh/month averages)
# ======================================================================

STATE_ENERGY_PROFILES: Mapping[str, Mapping[str, float]] = _frozen({
    "TX": _frozen({"coal": 8500, "gas": 21000, "nuclear": 3200, "solar": 1800, "wind": 9500, "hydro": 50, "geothermal": 0, "oil": 20}),
    "CA": _frozen({"coal": 0, "gas": 9500, "nuclear": 1500, "solar": 4200, "wind": 3800, "hydro": 2100, "geothermal": 1200, "oil": 10}),
    "FL": _frozen({"coal": 900, "gas": 18500, "nuclear": 2100, "solar": 1300, "wind": 0, "hydro": 5, "geothermal": 0, "oil": 400}),
    "NY": _frozen({"coal": 20, "gas": 10500, "nuclear": 2700, "solar": 800, "wind": 1400, "hydro": 2200, "geothermal": 0, "oil": 150}),
    "PA": _frozen({"coal": 2800, "gas": 9200, "nuclear": 6500, "solar": 300, "wind": 800, "hydro": 700, "geothermal": 0, "oil": 50}),
    "IL": _frozen({"coal": 2000, "gas": 4800, "nuclear": 8200, "solar": 200, "wind": 1900, "hydro": 10, "geothermal": 0, "oil": 10}),
    "OH": _frozen({"coal": 3100, "gas": 5200, "nuclear": 1200, "solar": 150, "wind": 450, "hydro": 80, "geothermal": 0, "oil": 15}),
    "NC": _frozen({"coal": 1200, "gas": 8600, "nuclear": 2800, "solar": 1100, "wind": 0, "hydro": 350, "geothermal": 0, "oil": 20}),
    "MI": _frozen({"coal": 2700, "gas": 6100, "nuclear": 2200, "solar": 180, "wind": 950, "hydro": 150, "geothermal": 0, "oil": 80}),
    "GA": _frozen({"coal": 1800, "gas": 9800, "nuclear": 2900, "solar": 950, "wind": 0, "hydro": 280, "geothermal": 0, "oil": 35}),
})

DEFAULT_ENERGY_PROFILE: Mapping[str, float] = _frozen({
    "coal": 1000, "gas": 5000, "nuclear": 500, "solar": 200,
    "wind": 300, "hydro": 100, "geothermal": 0, "oil": 50,
})


# ======================================================================
# Bundled tables
# ======================================================================

@dataclass(frozen=True)
class RegionalTables:
    """All regional lookup tables consumed by the estimators.

    Construct with keyword overrides to model a different market, e.g.
    ``RegionalTables(baseline_prices={"XX": 9.0})``.
    """

    industrial_regions: frozenset = INDUSTRIAL_REGIONS
    demand_hot_states: frozenset = DEMAND_HOT_STATES
    demand_cold_states: frozenset = DEMAND_COLD_STATES
    baseline_prices: Mapping[str, float] = field(default_factory=lambda: BASELINE_PRICES)
    default_price: float = DEFAULT_PRICE
    price_hot_states: frozenset = PRICE_HOT_STATES
    price_cold_states: frozenset = PRICE_COLD_STATES
    price_growth_rates: Mapping[str, float] = field(default_factory=lambda: PRICE_GROWTH_RATES)
    high_solar_states: frozenset = HIGH_SOLAR_STATES
    moderate_solar_states: frozenset = MODERATE_SOLAR_STATES
    high_wind_states: frozenset = HIGH_WIND_STATES
    moderate_wind_states: frozenset = MODERATE_WIND_STATES
    geothermal_states: frozenset = GEOTHERMAL_STATES
    nuclear_friendly_states: frozenset = NUCLEAR_FRIENDLY_STATES
    state_energy_profiles: Mapping[str, Mapping[str, float]] = field(
        default_factory=lambda: STATE_ENERGY_PROFILES
    )
    default_energy_profile: Mapping[str, float] = field(
        default_factory=lambda: DEFAULT_ENERGY_PROFILE
    )

    def energy_profile(self, state: str) -> Mapping[str, float]:
        return self.state_energy_profiles.get(state.upper(), self.default_energy_profile)


DEFAULT_TABLES = RegionalTables()
