"""Tests for month keys and the immutable engine records."""

from dataclasses import FrozenInstanceError
from datetime import date

import numpy as np
import pytest

from evaengine.errors import EvaMapError, InvalidMonthKeyError, InvalidRegionError
from evaengine.models import ClimateSample, Recommendation, Region, SupplyVector
from evaengine.months import MonthKey, as_month_key, iter_sorted, months_between


class TestMonthKey:
    def test_str_round_trip(self):
        key = MonthKey.parse("2024-03")
        assert key == MonthKey(2024, 3)
        assert str(key) == "2024-03"

    def test_parse_ignores_day_part(self):
        assert MonthKey.parse("2024-03-15") == MonthKey(2024, 3)

    @pytest.mark.parametrize("value", ["2024", "2024-13", "abcd-ef", "", "2024-00"])
    def test_malformed_keys_raise(self, value):
        with pytest.raises(InvalidMonthKeyError):
            MonthKey.parse(value)

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            MonthKey(2024, 0)
        assert issubclass(InvalidMonthKeyError, EvaMapError)

    def test_ordering_is_chronological(self):
        keys = [MonthKey(2024, 1), MonthKey(2023, 12), MonthKey(2023, 2)]
        assert sorted(keys) == [MonthKey(2023, 2), MonthKey(2023, 12), MonthKey(2024, 1)]

    def test_shift_across_year_boundary(self):
        assert MonthKey(2023, 11).shift(3) == MonthKey(2024, 2)
        assert MonthKey(2024, 2).shift(-3) == MonthKey(2023, 11)
        assert MonthKey(2024, 1).shift(-1) == MonthKey(2023, 12)

    def test_shift_years(self):
        assert MonthKey(2023, 7).shift_years(5) == MonthKey(2028, 7)

    def test_month_index_and_seasons(self):
        assert MonthKey(2024, 1).month_index == 0
        assert MonthKey(2024, 7).is_summer
        assert MonthKey(2024, 12).is_winter
        assert not MonthKey(2024, 4).is_summer

    def test_from_date(self):
        assert MonthKey.from_date(date(2022, 9, 30)) == MonthKey(2022, 9)

    def test_as_month_key_accepts_both_forms(self):
        key = MonthKey(2020, 5)
        assert as_month_key(key) is key
        assert as_month_key("2020-05") == key


class TestMonthsBetween:
    def test_inclusive_range(self):
        keys = months_between("2023-11", "2024-02")
        assert [str(k) for k in keys] == ["2023-11", "2023-12", "2024-01", "2024-02"]

    def test_single_month(self):
        assert months_between("2024-06", "2024-06") == [MonthKey(2024, 6)]

    def test_reversed_range_is_empty(self):
        assert months_between("2024-06", "2024-01") == []

    def test_iter_sorted(self):
        series = {MonthKey(2024, 2): "b", MonthKey(2023, 5): "a"}
        assert [v for _, v in iter_sorted(series)] == ["a", "b"]


class TestClimateSample:
    def test_defaults(self):
        sample = ClimateSample()
        assert sample.avg_temp == 15.0
        assert sample.avg_humidity == 0.65
        assert sample.avg_wind_speed == 3.0
        assert sample.avg_solar_radiation == 200.0
        assert sample.is_predicted is False

    def test_from_mapping_prefers_present_keys(self):
        sample = ClimateSample.from_mapping({"avgTemp": 25.0, "avg_humidity": 0.4, "avgWindSpeed": None})
        assert sample.avg_temp == 25.0
        assert sample.avg_humidity == 0.4
        assert sample.avg_wind_speed == 3.0

    def test_as_predicted(self):
        sample = ClimateSample(avg_temp=20.0)
        predicted = sample.as_predicted()
        assert predicted.is_predicted
        assert predicted.avg_temp == 20.0
        assert not sample.is_predicted

    def test_is_frozen(self):
        with pytest.raises(FrozenInstanceError):
            ClimateSample().avg_temp = 30.0


class TestRegion:
    def test_state_is_upper_cased(self):
        assert Region("Travis", "tx", 1_300_000).state == "TX"

    def test_accepts_numpy_population(self):
        assert Region("Travis", "TX", np.int64(1_300_000)).population == 1_300_000

    @pytest.mark.parametrize("population", [None, -1, float("nan"), "1000", True])
    def test_invalid_population_raises(self, population):
        with pytest.raises(InvalidRegionError):
            Region("Nowhere", "XX", population)

    def test_missing_state_raises(self):
        with pytest.raises(InvalidRegionError):
            Region("Nowhere", "", 100)

    def test_zero_population_allowed(self):
        assert Region("Empty", "AK", 0).population == 0


class TestRecommendation:
    def test_known_priorities(self):
        for priority in ("low", "medium", "high"):
            assert Recommendation("solar", priority, "Add solar").priority == priority

    def test_unknown_priority_raises(self):
        with pytest.raises(ValueError, match="priority"):
            Recommendation("solar", "urgent", "Add solar")


class TestSupplyVector:
    def test_total_is_component_sum(self, balanced_supply):
        components = [
            balanced_supply.coal, balanced_supply.gas, balanced_supply.nuclear,
            balanced_supply.solar, balanced_supply.wind, balanced_supply.hydro,
            balanced_supply.geothermal, balanced_supply.oil,
        ]
        assert balanced_supply.total == pytest.approx(sum(components))

    def test_total_includes_evaporation(self, balanced_supply):
        with_evap = balanced_supply.with_evaporation(50.0)
        assert with_evap.total == pytest.approx(balanced_supply.total + 50.0)
        assert with_evap.renewable == pytest.approx(balanced_supply.renewable + 50.0)
        assert with_evap.non_renewable == pytest.approx(balanced_supply.non_renewable)

    def test_random_vectors_stay_consistent(self):
        rng = np.random.default_rng(11)
        for row in rng.uniform(0, 1000, size=(20, 9)):
            supply = SupplyVector(*row[:8], evaporation=row[8])
            assert supply.total == pytest.approx(row.sum())
            assert supply.renewable + supply.non_renewable == pytest.approx(supply.total)

    def test_renewable_split(self):
        supply = SupplyVector(coal=10, gas=20, nuclear=30, oil=5, solar=1, wind=2, hydro=3, geothermal=4)
        assert supply.renewable == pytest.approx(10.0)
        assert supply.non_renewable == pytest.approx(65.0)

    def test_from_mapping_ignores_derived_totals(self):
        supply = SupplyVector.from_mapping({"coal": 10, "gas": None, "total": 999, "renewable": 5})
        assert supply.total == pytest.approx(10.0)
        assert supply.evaporation is None

    def test_scaled(self, balanced_supply):
        half = balanced_supply.with_evaporation(20.0).scaled(0.5)
        assert half.gas == pytest.approx(150.0)
        assert half.evaporation == pytest.approx(10.0)

    def test_as_dict_omits_absent_evaporation(self, balanced_supply):
        data = balanced_supply.as_dict()
        assert "evaporation" not in data
        assert data["total"] == pytest.approx(balanced_supply.total)
        assert "evaporation" in balanced_supply.with_evaporation(1.0).as_dict()
