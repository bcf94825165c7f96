"""Immutable records shared by the engine components.

Every record is a frozen dataclass: a monthly result is computed once and
recomputed from its inputs rather than updated in place.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping, Optional

from evaengine.errors import InvalidRegionError
from evaengine.months import MonthKey

# Fuel vocabulary used by every supply vector.
FUEL_TYPES: tuple[str, ...] = (
    "coal", "gas", "nuclear", "solar", "wind", "hydro", "geothermal", "oil",
)
RENEWABLE_FUELS: tuple[str, ...] = ("solar", "wind", "hydro", "geothermal")
NON_RENEWABLE_FUELS: tuple[str, ...] = ("coal", "gas", "nuclear", "oil")

PRIORITIES = ("low", "medium", "high")


# ======================================================================
# Climate
# ======================================================================

@dataclass(frozen=True)
class ClimateSample:
    """Monthly (or long-term) climate averages for one location.

    Parameters
    ----------
    avg_temp : float
        Mean air temperature (deg C).
    avg_humidity : float
        Mean relative humidity as a fraction (0 -- 1).
    avg_wind_speed : float
        Mean wind speed (m/s).
    avg_solar_radiation : float
        Mean shortwave radiation (W/m2).
    is_predicted : bool
        ``True`` for extrapolated months.
    """

    avg_temp: float = 15.0
    avg_humidity: float = 0.65
    avg_wind_speed: float = 3.0
    avg_solar_radiation: float = 200.0
    is_predicted: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ClimateSample":
        """Build from a dict, accepting snake_case or camelCase keys.

        Absent or ``None`` values fall back to the field defaults.
        """
        aliases = {
            "avg_temp": ("avg_temp", "avgTemp"),
            "avg_humidity": ("avg_humidity", "avgHumidity"),
            "avg_wind_speed": ("avg_wind_speed", "avgWindSpeed"),
            "avg_solar_radiation": ("avg_solar_radiation", "avgSolarRadiation"),
            "is_predicted": ("is_predicted", "isPredicted"),
        }
        kwargs: dict[str, Any] = {}
        for name, keys in aliases.items():
            for key in keys:
                if data.get(key) is not None:
                    kwargs[name] = data[key]
                    break
        return cls(**kwargs)

    def as_predicted(self) -> "ClimateSample":
        return replace(self, is_predicted=True)


@dataclass(frozen=True)
class PowerEstimate:
    """Evaporation-engine power density and its category for one month."""

    power_density: float
    category: str
    is_predicted: bool = False


# ======================================================================
# Regions
# ======================================================================

@dataclass(frozen=True)
class Region:
    """A county-like area for which monthly metrics are computed.

    Parameters
    ----------
    name : str
        Region name (used by the industrial allowlist).
    state : str
        Two-letter jurisdiction code.
    population : float
        Resident population.  Mandatory, must be >= 0.
    fips : str, optional
        Region identifier.
    state_population : float, optional
        Population of the enclosing jurisdiction, used to share
        state-level generation among regions.
    climate : ClimateSample, optional
        Long-term climate averages for the region.
    has_water_access : bool
        Large cooling-water source available.
    existing_nuclear : bool
        Region already hosts nuclear generation.
    """

    name: str
    state: str
    population: float
    fips: Optional[str] = None
    state_population: Optional[float] = None
    climate: Optional[ClimateSample] = None
    has_water_access: bool = False
    existing_nuclear: bool = False

    def __post_init__(self) -> None:
        if self.population is None:
            raise InvalidRegionError(f"Region {self.name!r} has no population")
        if isinstance(self.population, bool) or not isinstance(self.population, numbers.Real):
            raise InvalidRegionError(
                f"Region {self.name!r} population must be numeric, got {self.population!r}"
            )
        if math.isnan(self.population) or self.population < 0:
            raise InvalidRegionError(
                f"Region {self.name!r} population must be >= 0, got {self.population}"
            )
        if not self.state:
            raise InvalidRegionError(f"Region {self.name!r} has no state code")
        object.__setattr__(self, "state", self.state.upper())


# ======================================================================
# Supply
# ======================================================================

@dataclass(frozen=True)
class SupplyVector:
    """Monthly generation by fuel type (MWh).

    ``renewable``, ``non_renewable`` and ``total`` are derived on access, so
    ``total`` always equals the sum of the fuel components.
    """

    coal: float = 0.0
    gas: float = 0.0
    nuclear: float = 0.0
    solar: float = 0.0
    wind: float = 0.0
    hydro: float = 0.0
    geothermal: float = 0.0
    oil: float = 0.0
    evaporation: Optional[float] = None

    @property
    def renewable(self) -> float:
        value = sum(getattr(self, f) for f in RENEWABLE_FUELS)
        if self.evaporation is not None:
            value += self.evaporation
        return value

    @property
    def non_renewable(self) -> float:
        return sum(getattr(self, f) for f in NON_RENEWABLE_FUELS)

    @property
    def total(self) -> float:
        return self.renewable + self.non_renewable

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SupplyVector":
        """Build from a fuel-keyed dict; derived totals in *data* are ignored."""
        kwargs: dict[str, Any] = {f: float(data.get(f) or 0.0) for f in FUEL_TYPES}
        if data.get("evaporation") is not None:
            kwargs["evaporation"] = float(data["evaporation"])
        return cls(**kwargs)

    def scaled(self, weight: float) -> "SupplyVector":
        """Multiply every component (including evaporation) by *weight*."""
        kwargs: dict[str, Any] = {f: getattr(self, f) * weight for f in FUEL_TYPES}
        if self.evaporation is not None:
            kwargs["evaporation"] = self.evaporation * weight
        return SupplyVector(**kwargs)

    def with_evaporation(self, mwh: float) -> "SupplyVector":
        return replace(self, evaporation=mwh)

    def as_dict(self) -> dict[str, float]:
        out = {f.name: getattr(self, f.name) for f in fields(self)}
        if out["evaporation"] is None:
            del out["evaporation"]
        out["renewable"] = self.renewable
        out["non_renewable"] = self.non_renewable
        out["total"] = self.total
        return out


# ======================================================================
# Results
# ======================================================================

@dataclass(frozen=True)
class Recommendation:
    """A prioritised suggestion for closing (or using) a supply gap.

    ``source_type`` is a generation type (``solar``, ``wind`` ...) or one of
    the fixed kinds ``surplus``, ``critical`` and ``mix``.
    """

    source_type: str
    priority: str
    message: str
    capacity: float = 0.0
    score: Optional[float] = None

    def __post_init__(self) -> None:
        if self.priority not in PRIORITIES:
            raise ValueError(
                f"priority must be one of {PRIORITIES}, got {self.priority!r}"
            )


@dataclass(frozen=True)
class PriceBreakdown:
    """Predicted retail price (cents/kWh) and the factors that produced it."""

    price: float
    base_price: float
    factors: Mapping[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class MonthlyMetrics:
    """Demand, supply, price and recommendations for one region-month."""

    month: MonthKey
    demand: float
    supply: SupplyVector
    pricing: PriceBreakdown
    recommendations: tuple[Recommendation, ...] = ()

    @property
    def deficit(self) -> float:
        return self.demand - self.supply.total

    @property
    def price(self) -> float:
        return self.pricing.price
