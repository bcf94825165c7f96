"""Seasonal-plus-trend extrapolation of monthly climate series.

Each variable is modelled as its calendar-month mean across the available
years plus a linear drift fitted over the whole history.  Projected month
``i`` (1-based, counted from the last observed month) is::

    value_i = seasonal[month_of_year(i)] + slope * i

The model is deterministic and needs at least twelve observed months.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from evaengine.errors import ClimateHistoryError
from evaengine.evaporation.penman import classify_power, power_from_climate_averages
from evaengine.models import ClimateSample, PowerEstimate
from evaengine.months import MonthKey

logger = logging.getLogger(__name__)

MIN_HISTORY_MONTHS = 12

HUMIDITY_BOUNDS = (0.1, 0.95)

_FIELDS = {
    "temp": "avg_temp",
    "humidity": "avg_humidity",
    "wind_speed": "avg_wind_speed",
    "solar_radiation": "avg_solar_radiation",
}


@dataclass(frozen=True)
class SeasonalPattern:
    """Calendar-month means (index 0 = January) for each climate variable."""

    temp: tuple[float, ...]
    humidity: tuple[float, ...]
    wind_speed: tuple[float, ...]
    solar_radiation: tuple[float, ...]


@dataclass(frozen=True)
class ClimateTrends:
    """Per-month linear drift of each climate variable."""

    temp: float
    humidity: float
    wind_speed: float
    solar_radiation: float


def extract_seasonal_pattern(series: dict[MonthKey, ClimateSample]) -> SeasonalPattern:
    """Average every variable per calendar month across all years.

    Calendar months absent from *series* come out as NaN.
    """
    buckets: dict[str, list[list[float]]] = {
        name: [[] for _ in range(12)] for name in _FIELDS
    }
    for key, sample in series.items():
        for name, attr in _FIELDS.items():
            buckets[name][key.month_index].append(getattr(sample, attr))

    means: dict[str, tuple[float, ...]] = {}
    for name, months in buckets.items():
        means[name] = tuple(
            float(np.mean(values)) if values else float("nan") for values in months
        )
    return SeasonalPattern(**means)


def linear_trend(values: Sequence[float]) -> float:
    """Ordinary least-squares slope of *values* against their index.

    Uses the closed form ``(n*Sxy - Sx*Sy) / (n*Sxx - Sx^2)``.  Returns
    ``0.0`` for fewer than two values.
    """
    n = len(values)
    if n < 2:
        return 0.0

    y = np.asarray(values, dtype=np.float64)
    x = np.arange(n, dtype=np.float64)

    sum_x = float(x.sum())
    sum_y = float(y.sum())
    sum_xy = float((x * y).sum())
    sum_xx = float((x * x).sum())

    denominator = n * sum_xx - sum_x * sum_x
    if denominator == 0:
        return 0.0
    return (n * sum_xy - sum_x * sum_y) / denominator


def calculate_trends(series: dict[MonthKey, ClimateSample]) -> ClimateTrends:
    """Linear trend of each variable over the chronologically sorted series."""
    ordered = [series[key] for key in sorted(series)]
    return ClimateTrends(**{
        name: linear_trend([getattr(sample, attr) for sample in ordered])
        for name, attr in _FIELDS.items()
    })


def project_future_months(
    series: dict[MonthKey, ClimateSample],
    months_ahead: int,
) -> dict[MonthKey, ClimateSample]:
    """Extrapolate *months_ahead* months past the last month of *series*.

    Parameters
    ----------
    series : dict[MonthKey, ClimateSample]
        Observed monthly climate.  Keys need not be contiguous.
    months_ahead : int
        Number of months to project.

    Returns
    -------
    dict[MonthKey, ClimateSample]
        Projected samples flagged ``is_predicted``.  Empty when *series*
        holds fewer than twelve months.  Humidity is clamped to
        [0.1, 0.95]; wind speed and solar radiation to ``>= 0``.  A calendar
        month absent from *series* projects as NaN in every field.
    """
    if len(series) < MIN_HISTORY_MONTHS:
        logger.warning(
            "Not enough climate history for projection: %d months (need %d)",
            len(series),
            MIN_HISTORY_MONTHS,
        )
        return {}

    pattern = extract_seasonal_pattern(series)
    trends = calculate_trends(series)
    last = max(series)
    lo, hi = HUMIDITY_BOUNDS

    projected: dict[MonthKey, ClimateSample] = {}
    for i in range(1, months_ahead + 1):
        key = last.shift(i)
        m = key.month_index
        humidity = pattern.humidity[m] + trends.humidity * i
        projected[key] = ClimateSample(
            avg_temp=pattern.temp[m] + trends.temp * i,
            avg_humidity=float(np.clip(humidity, lo, hi)),
            avg_wind_speed=float(
                np.maximum(0.0, pattern.wind_speed[m] + trends.wind_speed * i)
            ),
            avg_solar_radiation=float(
                np.maximum(0.0, pattern.solar_radiation[m] + trends.solar_radiation * i)
            ),
            is_predicted=True,
        )
    return projected


def check_calendar_coverage(series: dict[MonthKey, ClimateSample]) -> None:
    """Reject a projectable history that leaves calendar months unobserved.

    Histories shorter than :data:`MIN_HISTORY_MONTHS` are not projected and
    always pass.

    Raises
    ------
    ClimateHistoryError
        If *series* is long enough to project but some calendar month has no
        observation.
    """
    if len(series) < MIN_HISTORY_MONTHS:
        return
    missing = sorted(set(range(1, 13)) - {key.month for key in series})
    if missing:
        raise ClimateHistoryError(
            f"Climate history must cover every calendar month, missing {missing}"
        )


def merge_history_and_projection(
    series: dict[MonthKey, ClimateSample],
    months_ahead: int,
) -> dict[MonthKey, ClimateSample]:
    """Observed months followed by their projection, in chronological order."""
    merged = {key: series[key] for key in sorted(series)}
    merged.update(project_future_months(series, months_ahead))
    return merged


def combine_and_score_power(
    series: dict[MonthKey, ClimateSample],
) -> dict[MonthKey, PowerEstimate]:
    """Power density and category for every month, observed or predicted."""
    scored: dict[MonthKey, PowerEstimate] = {}
    for key in sorted(series):
        climate = series[key]
        power = power_from_climate_averages(climate)
        scored[key] = PowerEstimate(
            power_density=power,
            category=classify_power(power),
            is_predicted=climate.is_predicted,
        )
    return scored
