"""Coarse climate estimate for any coordinate, used when no history exists.

A latitude baseline is adjusted for a handful of well-known climate zones
(hot deserts, humid tropics, Mediterranean belt, coastal strips) and then
clamped to plausible ranges.  Good enough to shade a world map; not a
substitute for observed data.
"""

from __future__ import annotations

import math

from evaengine.models import ClimateSample

# (lat_min, lat_max, lon_min, lon_max, d_temp, d_humidity, d_solar, d_wind)
_ZONE_ADJUSTMENTS: tuple[tuple[float, float, float, float, float, float, float, float], ...] = (
    # Sahara
    (15, 35, -15, 40, 8.0, -0.40, 80.0, 1.0),
    # Arabian Peninsula
    (12, 32, 34, 60, 10.0, -0.45, 100.0, 2.0),
    # South-western US deserts
    (25, 40, -120, -100, 5.0, -0.35, 60.0, 0.0),
    # Australian outback
    (-35, -15, 110, 145, 7.0, -0.38, 70.0, 0.0),
    # Atacama
    (-30, -15, -75, -65, 4.0, -0.42, 85.0, 0.0),
    # South-east Asian monsoon belt
    (-10, 30, 90, 140, 2.0, 0.20, -30.0, 0.0),
    # Amazon basin
    (-10, 5, -75, -45, 0.0, 0.25, -40.0, 0.0),
    # Equatorial Africa
    (-10, 10, 5, 40, 0.0, 0.20, -25.0, 0.0),
    # Mediterranean belt
    (30, 45, -10, 40, 3.0, -0.15, 30.0, 0.0),
)


def _is_coastal(lat: float, lon: float) -> bool:
    return (
        (abs(lon) < 20 and abs(lat) < 40)
        or (100 < lon < 130 and lat > 20)
        or (-130 < lon < -110)
    )


def estimate_climate_from_location(lat: float, lon: float) -> ClimateSample:
    """Approximate annual climate averages at (*lat*, *lon*).

    Final values are clamped to temperature [-10, 45] deg C, humidity
    [0.15, 0.95], wind [1, 10] m/s and solar radiation [50, 400] W/m2.
    """
    abs_lat = abs(lat)

    temp = 30.0 - abs_lat * 0.6
    humidity = 0.7 - abs_lat * 0.005
    wind = 2.0 + abs(math.sin(abs_lat * math.pi / 90.0)) * 3.0
    solar = 250.0 - abs_lat * 2.5

    for lat_min, lat_max, lon_min, lon_max, d_t, d_h, d_s, d_w in _ZONE_ADJUSTMENTS:
        if lat_min < lat < lat_max and lon_min < lon < lon_max:
            temp += d_t
            humidity += d_h
            solar += d_s
            wind += d_w

    if _is_coastal(lat, lon):
        humidity += 0.1
        wind += 1.5

    return ClimateSample(
        avg_temp=max(-10.0, min(45.0, temp)),
        avg_humidity=max(0.15, min(0.95, humidity)),
        avg_wind_speed=max(1.0, min(10.0, wind)),
        avg_solar_radiation=max(50.0, min(400.0, solar)),
    )
