"""Evaporation-engine power potential from the Penman equation.

An evaporation engine harvests work from water evaporating off a wet
surface into unsaturated air.  The maximum power per unit area is bounded
by the evaporation rate (Penman combination equation) times the free energy
released moving water vapour from the saturated surface (RH ~ 0.975) into
the ambient air:

.. math::

    E = \\frac{\\Delta R_n + 2.6\\,c_t L_v \\rho_w \\gamma (1 + 0.54 u) D_a}
             {\\Delta + \\gamma}

.. math::

    P/A = c_e \\, E \\, R \\, T_{air} \\ln\\!\\left(\\frac{RH_{wet}}{RH_{air}}\\right)

All functions are pure.  The only degenerate case (log of a non-positive
humidity ratio) returns ``0.0`` rather than raising.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

from evaengine.models import ClimateSample

# ======================================================================
# Physical constants
# ======================================================================

C_T = 0.01157          # W m day MJ^-1 mm^-1, unit conversion
C_E = 6.42465e-4       # mol day mm^-1 m^-2, unit conversion
L_V = 2448.0           # MJ/Mg, latent heat of vaporisation
RHO_W = 1.0            # Mg/m3, density of water
GAMMA = 0.067          # kPa/K, psychrometric constant
R_V = 461.5            # J/(kg K), specific gas constant for water vapour
R_GAS = 8.314          # J/(mol K), ideal gas constant
RH_WET = 0.975         # relative humidity at the evaporating surface
KELVIN_OFFSET = 273.15

# Share of incoming shortwave radiation that ends up as net radiation.
NET_RADIATION_FRACTION = 0.65

DEFAULT_CLIMATE = ClimateSample()

# Category thresholds (W/m2), checked in descending order with strict ">".
POWER_CATEGORIES: tuple[tuple[float, str], ...] = (
    (200.0, "excellent"),
    (150.0, "very-good"),
    (100.0, "good"),
    (50.0, "moderate"),
)
LOWEST_CATEGORY = "low"

_CATEGORY_INFO: dict[str, tuple[str, str]] = {
    "excellent": ("Excellent", "Ideal conditions for evaporation engine deployment"),
    "very-good": ("Very Good", "Favorable conditions with high potential"),
    "good": ("Good", "Moderate potential for implementation"),
    "moderate": ("Moderate", "Limited but viable potential"),
    "low": ("Low", "Challenging conditions for deployment"),
}


# ======================================================================
# Thermodynamic helpers
# ======================================================================

def saturation_vapor_pressure(temp_c: float) -> float:
    """Saturation vapour pressure over water (kPa), Buck equation."""
    t = temp_c
    return 0.61121 * math.exp((18.678 - t / 234.5) * (t / (257.14 + t)))


def slope_of_saturation_curve(temp_c: float) -> float:
    """Slope of the saturation vapour pressure curve, Delta (kPa/K).

    Clausius-Clapeyron: ``Delta = L_v * e_s / (R_v * T^2)`` with T in kelvin.
    """
    t_kelvin = temp_c + KELVIN_OFFSET
    e_s = saturation_vapor_pressure(temp_c)
    return (L_V * e_s) / (R_V * t_kelvin * t_kelvin)


def vapor_pressure_deficit(temp_c: float, rh: float) -> float:
    """Vapour pressure deficit (kPa) at relative humidity *rh* (0 -- 1)."""
    return (1.0 - rh) * saturation_vapor_pressure(temp_c)


# ======================================================================
# Penman evaporation and engine power
# ======================================================================

def evaporation_rate(
    net_radiation: float,
    temp_c: float,
    rh: float,
    wind_speed: float,
) -> float:
    """Open-water evaporation rate (mm/day) from the Penman equation.

    Parameters
    ----------
    net_radiation : float
        Net radiation at the surface (R_n).
    temp_c : float
        Mean air temperature (deg C).
    rh : float
        Relative humidity of the air (0 -- 1).
    wind_speed : float
        Wind speed (m/s).

    Returns
    -------
    float
        Evaporation rate, clamped to ``>= 0``.  NaN inputs give NaN.
    """
    delta = slope_of_saturation_curve(temp_c)
    d_a = vapor_pressure_deficit(temp_c, rh)

    numerator = (
        delta * net_radiation
        + 2.6 * C_T * L_V * RHO_W * GAMMA * (1.0 + 0.54 * wind_speed) * d_a
    )
    e_pr = numerator / (delta + GAMMA)
    if math.isnan(e_pr):
        return e_pr
    return max(0.0, e_pr)


def max_power_density(evap_rate: float, temp_c: float, rh_air: float) -> float:
    """Maximum evaporation-engine power per unit area (W/m2).

    Returns exactly ``0.0`` when ``rh_air >= RH_WET`` or ``rh_air <= 0``,
    where the humidity log ratio is undefined or non-positive.
    """
    if rh_air >= RH_WET or rh_air <= 0:
        return 0.0

    t_kelvin = temp_c + KELVIN_OFFSET
    power = C_E * evap_rate * R_GAS * t_kelvin * math.log(RH_WET / rh_air)
    if math.isnan(power):
        return power
    return max(0.0, power)


def _climate_value(climate: Any, attr: str, default: float) -> float:
    if isinstance(climate, Mapping):
        value = climate.get(attr)
    else:
        value = getattr(climate, attr, None)
    return default if value is None else float(value)


def power_from_climate_averages(
    climate: Union[ClimateSample, Mapping[str, Any], None],
) -> float:
    """Estimate power density (W/m2) from climate averages.

    Net radiation is taken as 65 % of the supplied solar radiation.  Missing
    fields fall back to 15 deg C, 0.65 RH, 3 m/s wind and 200 W/m2.
    """
    if isinstance(climate, Mapping):
        climate = ClimateSample.from_mapping(climate)

    temp = _climate_value(climate, "avg_temp", DEFAULT_CLIMATE.avg_temp)
    humidity = _climate_value(climate, "avg_humidity", DEFAULT_CLIMATE.avg_humidity)
    wind = _climate_value(climate, "avg_wind_speed", DEFAULT_CLIMATE.avg_wind_speed)
    solar = _climate_value(
        climate, "avg_solar_radiation", DEFAULT_CLIMATE.avg_solar_radiation
    )

    r_n = solar * NET_RADIATION_FRACTION
    evaporation = evaporation_rate(r_n, temp, humidity, wind)
    return max_power_density(evaporation, temp, humidity)


def classify_power(power: float) -> str:
    """Map a power density (W/m2) to its category.

    Boundary values belong to the lower category: exactly 200.0 is
    ``"very-good"``, anything above is ``"excellent"``.
    """
    for threshold, category in POWER_CATEGORIES:
        if power > threshold:
            return category
    return LOWEST_CATEGORY


def category_info(category: str) -> dict[str, str]:
    """Display label and description for a power category."""
    label, description = _CATEGORY_INFO[category]
    return {"level": category, "label": label, "description": description}


def required_area(
    target_power_kw: float,
    power_density: float,
    efficiency: float = 0.1,
) -> float:
    """Engine surface area (m2) needed to deliver *target_power_kw*.

    The default 10 % efficiency reflects current engine prototypes.  A zero
    effective density yields ``inf``.
    """
    effective = power_density * efficiency
    if effective == 0:
        return math.inf
    return (target_power_kw * 1000.0) / effective


# ======================================================================
# Daily series analysis
# ======================================================================

@dataclass(frozen=True)
class DailyPerformance:
    """Per-day evaporation and power over an analysis period."""

    evaporation: NDArray[np.float64]
    power: NDArray[np.float64]
    avg_power: float
    max_power: float
    min_power: float
    total_days: int


def analyze_daily_performance(
    net_radiation: ArrayLike,
    temperature: ArrayLike,
    humidity: ArrayLike,
    wind_speed: ArrayLike,
) -> DailyPerformance:
    """Vectorised evaporation and power for a series of days.

    Parameters
    ----------
    net_radiation, temperature, humidity, wind_speed : array_like
        Equal-length daily series.  Humidity is a 0 -- 1 fraction.

    Raises
    ------
    ValueError
        If the series are empty or of different lengths.
    """
    r_n = np.asarray(net_radiation, dtype=np.float64)
    t = np.asarray(temperature, dtype=np.float64)
    rh = np.asarray(humidity, dtype=np.float64)
    u = np.asarray(wind_speed, dtype=np.float64)

    if r_n.size == 0:
        raise ValueError("At least one day of weather data is required.")
    if not (r_n.shape == t.shape == rh.shape == u.shape):
        raise ValueError(
            "Daily series must have equal lengths, got "
            f"{r_n.shape}, {t.shape}, {rh.shape}, {u.shape}"
        )

    e_s = 0.61121 * np.exp((18.678 - t / 234.5) * (t / (257.14 + t)))
    t_kelvin = t + KELVIN_OFFSET
    delta = (L_V * e_s) / (R_V * t_kelvin**2)
    d_a = (1.0 - rh) * e_s

    evaporation = (
        delta * r_n + 2.6 * C_T * L_V * RHO_W * GAMMA * (1.0 + 0.54 * u) * d_a
    ) / (delta + GAMMA)
    evaporation = np.maximum(evaporation, 0.0)

    valid = (rh > 0) & (rh < RH_WET)
    ratio = np.where(valid, RH_WET / np.where(valid, rh, 1.0), 1.0)
    power = np.where(valid, C_E * evaporation * R_GAS * t_kelvin * np.log(ratio), 0.0)
    power = np.maximum(power, 0.0)

    return DailyPerformance(
        evaporation=evaporation,
        power=power,
        avg_power=float(np.mean(power)),
        max_power=float(np.max(power)),
        min_power=float(np.min(power)),
        total_days=int(power.size),
    )
