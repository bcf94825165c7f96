"""Shared test fixtures for EvaMap engine and API tests."""

from __future__ import annotations

import numpy as np
import pytest

from evaengine.models import ClimateSample, Region, SupplyVector
from evaengine.months import MonthKey, months_between


# ======================================================================
# Climate fixtures
# ======================================================================

def _seasonal_wave(month_index: np.ndarray, mean: float, amplitude: float) -> np.ndarray:
    """Cosine seasonal cycle peaking in July (index 6)."""
    return mean + amplitude * np.cos(2 * np.pi * (month_index - 6) / 12)


@pytest.fixture
def monthly_pattern() -> dict[str, np.ndarray]:
    """Twelve calendar-month values per climate variable (index 0 = January)."""
    idx = np.arange(12, dtype=np.float64)
    return {
        "temp": _seasonal_wave(idx, 18.0, 10.0),
        "humidity": _seasonal_wave(idx, 0.55, -0.15),
        "wind_speed": _seasonal_wave(idx, 3.5, 0.5),
        "solar_radiation": _seasonal_wave(idx, 220.0, 90.0),
    }


@pytest.fixture
def climate_history(monthly_pattern) -> dict[MonthKey, ClimateSample]:
    """Two full years (2022-01 .. 2023-12) repeating the same monthly values."""
    series: dict[MonthKey, ClimateSample] = {}
    for key in months_between("2022-01", "2023-12"):
        m = key.month_index
        series[key] = ClimateSample(
            avg_temp=float(monthly_pattern["temp"][m]),
            avg_humidity=float(monthly_pattern["humidity"][m]),
            avg_wind_speed=float(monthly_pattern["wind_speed"][m]),
            avg_solar_radiation=float(monthly_pattern["solar_radiation"][m]),
        )
    return series


@pytest.fixture
def desert_climate() -> ClimateSample:
    """Hot, dry, sunny month (Phoenix in June)."""
    return ClimateSample(
        avg_temp=33.0,
        avg_humidity=0.2,
        avg_wind_speed=3.5,
        avg_solar_radiation=320.0,
    )


# ======================================================================
# Region fixtures
# ======================================================================

@pytest.fixture
def hot_metro() -> Region:
    """Two-million-resident region in a hot state."""
    return Region(name="Maricopa", state="AZ", population=2_000_000, fips="04013")


@pytest.fixture
def small_town() -> Region:
    """Rural region in a state with no special-case tables."""
    return Region(name="Custer", state="ID", population=4_300, fips="16037")


@pytest.fixture
def balanced_supply() -> SupplyVector:
    return SupplyVector(
        coal=100.0,
        gas=300.0,
        nuclear=150.0,
        solar=80.0,
        wind=40.0,
        hydro=20.0,
        geothermal=0.0,
        oil=10.0,
    )
