"""Daily weather samples to monthly climate averages.

Daily records come from the Open-Meteo archive (or any source with the same
shape).  Each variable may be missing on a given day; missing values are
dropped before averaging rather than treated as zero.
"""

from __future__ import annotations

import math
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Mapping, Optional

import numpy as np

from evaengine.errors import WeatherPayloadError
from evaengine.models import ClimateSample
from evaengine.months import MonthKey

# Open-Meteo daily variable names.
OPEN_METEO_DAILY_VARIABLES: tuple[str, ...] = (
    "temperature_2m_mean",
    "relative_humidity_2m_mean",
    "wind_speed_10m_mean",
    "shortwave_radiation_sum",
)

_VARIABLES = ("temperature", "humidity", "wind_speed", "solar_radiation")


@dataclass(frozen=True)
class DailyWeather:
    """One day of weather readings.

    Parameters
    ----------
    date : datetime.date
        Observation day.
    temperature : float or None
        Mean air temperature (deg C).
    humidity : float or None
        Mean relative humidity in percent (0 -- 100).
    wind_speed : float or None
        Mean wind speed (m/s).
    solar_radiation : float or None
        Daily shortwave radiation sum (Wh/m2).
    """

    date: date
    temperature: Optional[float] = None
    humidity: Optional[float] = None
    wind_speed: Optional[float] = None
    solar_radiation: Optional[float] = None


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def _mean(values: list[float]) -> float:
    if not values:
        return 0.0
    return float(np.mean(np.asarray(values, dtype=np.float64)))


def aggregate_daily_to_monthly(
    samples: Iterable[DailyWeather],
) -> dict[MonthKey, ClimateSample]:
    """Average daily readings into one :class:`ClimateSample` per month.

    Humidity is converted from percent to a fraction.  The daily solar sum
    (Wh/m2) is divided by 24 to approximate the mean irradiance in W/m2.
    A variable with no valid readings in a month averages to ``0.0``.
    """
    buckets: dict[MonthKey, dict[str, list[float]]] = defaultdict(
        lambda: {name: [] for name in _VARIABLES}
    )

    for sample in samples:
        bucket = buckets[MonthKey.from_date(sample.date)]
        for name in _VARIABLES:
            value = getattr(sample, name)
            if not _is_missing(value):
                bucket[name].append(float(value))

    monthly: dict[MonthKey, ClimateSample] = {}
    for key in sorted(buckets):
        values = buckets[key]
        monthly[key] = ClimateSample(
            avg_temp=_mean(values["temperature"]),
            avg_humidity=_mean(values["humidity"]) / 100.0,
            avg_wind_speed=_mean(values["wind_speed"]),
            avg_solar_radiation=_mean(values["solar_radiation"]) / 24.0,
        )
    return monthly


def daily_from_open_meteo(payload: Mapping[str, Any]) -> list[DailyWeather]:
    """Convert an Open-Meteo archive response into daily records.

    Raises
    ------
    WeatherPayloadError
        If the ``daily`` block or its ``time`` axis is missing, or a variable
        array does not match the time axis length.
    """
    daily = payload.get("daily")
    if not isinstance(daily, Mapping) or "time" not in daily:
        raise WeatherPayloadError("Weather payload has no 'daily.time' block")

    times = daily["time"]
    columns: list[list[Any]] = []
    for name in OPEN_METEO_DAILY_VARIABLES:
        column = daily.get(name)
        if column is None:
            column = [None] * len(times)
        if len(column) != len(times):
            raise WeatherPayloadError(
                f"'{name}' has {len(column)} values for {len(times)} days"
            )
        columns.append(column)

    records: list[DailyWeather] = []
    for i, raw_day in enumerate(times):
        try:
            day = date.fromisoformat(str(raw_day)[:10])
        except ValueError as exc:
            raise WeatherPayloadError(f"Invalid date {raw_day!r} in weather payload") from exc
        records.append(
            DailyWeather(
                date=day,
                temperature=columns[0][i],
                humidity=columns[1][i],
                wind_speed=columns[2][i],
                solar_radiation=columns[3][i],
            )
        )
    return records
