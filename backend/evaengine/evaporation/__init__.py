"""Evaporation-engine physics (Penman evaporation and power density)."""

from evaengine.evaporation.penman import (
    DailyPerformance,
    analyze_daily_performance,
    category_info,
    classify_power,
    evaporation_rate,
    max_power_density,
    power_from_climate_averages,
    required_area,
    saturation_vapor_pressure,
    slope_of_saturation_curve,
    vapor_pressure_deficit,
)

__all__ = [
    "DailyPerformance",
    "analyze_daily_performance",
    "category_info",
    "classify_power",
    "evaporation_rate",
    "max_power_density",
    "power_from_climate_averages",
    "required_area",
    "saturation_vapor_pressure",
    "slope_of_saturation_curve",
    "vapor_pressure_deficit",
]
