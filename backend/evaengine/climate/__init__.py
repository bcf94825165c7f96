"""Climate series: daily aggregation, seasonal/trend projection, location estimates."""

from evaengine.climate.aggregation import (
    DailyWeather,
    aggregate_daily_to_monthly,
    daily_from_open_meteo,
)
from evaengine.climate.projection import (
    SeasonalPattern,
    calculate_trends,
    check_calendar_coverage,
    combine_and_score_power,
    extract_seasonal_pattern,
    linear_trend,
    merge_history_and_projection,
    project_future_months,
)
from evaengine.climate.regional import estimate_climate_from_location

__all__ = [
    "DailyWeather",
    "SeasonalPattern",
    "aggregate_daily_to_monthly",
    "calculate_trends",
    "check_calendar_coverage",
    "combine_and_score_power",
    "daily_from_open_meteo",
    "estimate_climate_from_location",
    "extract_seasonal_pattern",
    "linear_trend",
    "merge_history_and_projection",
    "project_future_months",
]
