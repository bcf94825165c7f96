"""Tests for the Penman evaporation and power-density model."""

import math

import numpy as np
import pytest

from evaengine.evaporation import (
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
from evaengine.evaporation.penman import RH_WET
from evaengine.models import ClimateSample


class TestVapourPressure:
    def test_buck_equation_at_freezing(self):
        assert saturation_vapor_pressure(0.0) == pytest.approx(0.61121)

    def test_saturation_pressure_at_25c(self):
        # Standard tables give ~3.17 kPa
        assert saturation_vapor_pressure(25.0) == pytest.approx(3.17, abs=0.01)

    def test_slope_increases_with_temperature(self):
        temps = [0.0, 10.0, 20.0, 30.0, 40.0]
        slopes = [slope_of_saturation_curve(t) for t in temps]
        assert all(b > a for a, b in zip(slopes, slopes[1:]))

    def test_no_deficit_when_saturated(self):
        assert vapor_pressure_deficit(20.0, 1.0) == pytest.approx(0.0)

    def test_deficit_scales_with_dryness(self):
        e_s = saturation_vapor_pressure(20.0)
        assert vapor_pressure_deficit(20.0, 0.4) == pytest.approx(0.6 * e_s)


class TestEvaporationRate:
    def test_non_decreasing_in_net_radiation(self):
        radiation = np.linspace(0.0, 400.0, 41)
        rates = [evaporation_rate(r, 22.0, 0.5, 3.0) for r in radiation]
        assert all(b >= a for a, b in zip(rates, rates[1:]))

    def test_increases_with_wind(self):
        calm = evaporation_rate(150.0, 25.0, 0.4, 0.5)
        windy = evaporation_rate(150.0, 25.0, 0.4, 6.0)
        assert windy > calm

    def test_clamped_at_zero(self):
        # Strongly negative net radiation with saturated air
        assert evaporation_rate(-500.0, 10.0, 1.0, 0.0) == 0.0

    def test_nan_propagates(self):
        assert math.isnan(evaporation_rate(float("nan"), 20.0, 0.5, 2.0))


class TestMaxPowerDensity:
    @pytest.mark.parametrize("rh", [RH_WET, 0.0, 1.0])
    def test_degenerate_humidity_gives_exact_zero(self, rh):
        assert max_power_density(5.0, 25.0, rh) == 0.0

    def test_negative_humidity_gives_zero(self):
        assert max_power_density(5.0, 25.0, -0.2) == 0.0

    def test_drier_air_gives_more_power(self):
        assert max_power_density(5.0, 25.0, 0.2) > max_power_density(5.0, 25.0, 0.6)

    def test_zero_evaporation_gives_zero_power(self):
        assert max_power_density(0.0, 25.0, 0.3) == 0.0


class TestPowerFromClimate:
    def test_defaults_used_for_missing_climate(self):
        assert power_from_climate_averages(None) == pytest.approx(
            power_from_climate_averages(ClimateSample())
        )

    def test_default_climate_is_moderate(self):
        power = power_from_climate_averages(ClimateSample())
        assert 50.0 < power < 100.0
        assert classify_power(power) == "moderate"

    def test_accepts_camel_case_mapping(self):
        mapping = {"avgTemp": 30.0, "avgHumidity": 0.3, "avgWindSpeed": 4.0, "avgSolarRadiation": 280.0}
        sample = ClimateSample(30.0, 0.3, 4.0, 280.0)
        assert power_from_climate_averages(mapping) == pytest.approx(
            power_from_climate_averages(sample)
        )

    def test_partial_mapping_falls_back_per_field(self):
        assert power_from_climate_averages({"avg_temp": 15.0}) == pytest.approx(
            power_from_climate_averages(ClimateSample())
        )

    def test_desert_beats_humid_coast(self, desert_climate):
        humid = ClimateSample(avg_temp=27.0, avg_humidity=0.85, avg_wind_speed=2.0, avg_solar_radiation=180.0)
        assert power_from_climate_averages(desert_climate) > power_from_climate_averages(humid)

    def test_desert_is_excellent(self, desert_climate):
        assert classify_power(power_from_climate_averages(desert_climate)) == "excellent"

    def test_saturated_climate_gives_zero(self):
        wet = ClimateSample(avg_temp=20.0, avg_humidity=0.98)
        assert power_from_climate_averages(wet) == 0.0


class TestClassifyPower:
    @pytest.mark.parametrize(
        "power, expected",
        [
            (200.0001, "excellent"),
            (200.0, "very-good"),
            (150.5, "very-good"),
            (150.0, "good"),
            (100.0, "moderate"),
            (50.0, "low"),
            (0.0, "low"),
        ],
    )
    def test_strict_thresholds(self, power, expected):
        assert classify_power(power) == expected

    def test_category_info(self):
        info = category_info("very-good")
        assert info["level"] == "very-good"
        assert info["label"] == "Very Good"
        assert info["description"]

    def test_unknown_category_raises(self):
        with pytest.raises(KeyError):
            category_info("superb")


class TestRequiredArea:
    def test_one_megawatt_at_100_w_per_m2(self):
        assert required_area(1000.0, 100.0, 0.1) == pytest.approx(100_000.0)

    def test_default_efficiency(self):
        assert required_area(1000.0, 100.0) == pytest.approx(100_000.0)

    def test_zero_density_is_infinite(self):
        assert math.isinf(required_area(1000.0, 0.0))


class TestDailyPerformance:
    def test_summary_statistics(self):
        result = analyze_daily_performance(
            net_radiation=[100.0, 150.0, 200.0],
            temperature=[20.0, 25.0, 30.0],
            humidity=[0.5, 0.4, 0.3],
            wind_speed=[2.0, 3.0, 4.0],
        )
        assert result.total_days == 3
        assert result.power.shape == (3,)
        assert result.evaporation.shape == (3,)
        assert result.min_power <= result.avg_power <= result.max_power
        assert result.max_power == pytest.approx(result.power[2])

    def test_matches_scalar_model(self):
        result = analyze_daily_performance([180.0], [24.0], [0.45], [2.5])
        evap = evaporation_rate(180.0, 24.0, 0.45, 2.5)
        assert result.evaporation[0] == pytest.approx(evap)
        assert result.power[0] == pytest.approx(max_power_density(evap, 24.0, 0.45))

    def test_saturated_days_give_zero_power(self):
        result = analyze_daily_performance([150.0, 150.0], [20.0, 20.0], [0.98, 0.5], [3.0, 3.0])
        assert result.power[0] == 0.0
        assert result.power[1] > 0.0

    def test_empty_input_raises(self):
        with pytest.raises(ValueError, match="At least one day"):
            analyze_daily_performance([], [], [], [])

    def test_mismatched_lengths_raise(self):
        with pytest.raises(ValueError):
            analyze_daily_performance([100.0, 120.0], [20.0], [0.5, 0.5], [2.0, 2.0])
