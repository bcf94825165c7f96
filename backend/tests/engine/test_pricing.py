"""Tests for the multiplicative retail price model."""

import pytest

from evaengine.models import Region, SupplyVector
from evaengine.pricing import PriceEstimator
from evaengine.presets import DEFAULT_PRICE, RegionalTables


@pytest.fixture
def estimator() -> PriceEstimator:
    return PriceEstimator()


class TestSupplyDemandFactor:
    @pytest.mark.parametrize(
        "supply, demand, expected",
        [
            (700.0, 1000.0, 1.5),   # 30 % short
            (850.0, 1000.0, 1.25),  # 15 % short
            (950.0, 1000.0, 1.1),   # 5 % short
            (1000.0, 1000.0, 1.0),
            (1050.0, 1000.0, 1.0),  # small surplus
            (1200.0, 1000.0, 0.9),  # large surplus
        ],
    )
    def test_bands(self, supply, demand, expected):
        assert PriceEstimator.supply_demand_factor(supply, demand) == expected

    def test_boundary_is_exclusive(self):
        assert PriceEstimator.supply_demand_factor(800.0, 1000.0) == 1.25

    def test_zero_demand_is_balanced(self):
        assert PriceEstimator.supply_demand_factor(500.0, 0.0) == 1.0


class TestFuelMixFactor:
    def test_renewable_heavy(self):
        assert PriceEstimator.fuel_mix_factor(SupplyVector(solar=60, gas=40)) == 0.85

    def test_moderately_renewable(self):
        assert PriceEstimator.fuel_mix_factor(SupplyVector(wind=40, coal=60)) == 0.95

    def test_fossil_heavy(self):
        assert PriceEstimator.fuel_mix_factor(SupplyVector(hydro=5, coal=95)) == 1.15

    def test_middle_band(self):
        assert PriceEstimator.fuel_mix_factor(SupplyVector(hydro=20, gas=80)) == 1.0

    def test_empty_supply_counts_as_fossil(self):
        assert PriceEstimator.fuel_mix_factor(SupplyVector()) == 1.15

    def test_evaporation_counts_as_renewable(self):
        supply = SupplyVector(gas=40, evaporation=60)
        assert PriceEstimator.fuel_mix_factor(supply) == 0.85


class TestSeasonalFactor:
    def test_hot_state_summer(self, estimator):
        assert estimator.seasonal_factor("AZ", 7) == 1.3
        assert estimator.seasonal_factor("AZ", 1) == 1.0

    def test_cold_state_winter(self, estimator):
        assert estimator.seasonal_factor("MN", 1) == 1.25
        assert estimator.seasonal_factor("MN", 7) == 1.0

    def test_price_cold_list_excludes_wisconsin(self, estimator):
        # WI heats in the demand model but prices as a temperate state
        assert estimator.seasonal_factor("WI", 1) == 1.1

    def test_temperate_state(self, estimator):
        assert estimator.seasonal_factor("NC", 8) == 1.1
        assert estimator.seasonal_factor("NC", 4) == 1.0


class TestInfrastructureFactor:
    @pytest.mark.parametrize(
        "population, expected", [(10_000, 1.15), (50_000, 1.0), (1_000_000, 1.0), (1_000_001, 0.95)]
    )
    def test_bands(self, population, expected):
        assert PriceEstimator.infrastructure_factor(Region("X", "NC", population)) == expected


class TestEstimatePrice:
    def test_hot_metro_july_shortfall(self, estimator, hot_metro):
        supply = SupplyVector(gas=500.0, coal=100.0, solar=100.0)
        assert supply.total == pytest.approx(700.0)

        breakdown = estimator.estimate_price(hot_metro, supply, 1000.0, "2024-07")

        assert breakdown.factors["supply_demand"] == 1.5
        assert breakdown.factors["seasonal"] == 1.3
        assert breakdown.factors["infrastructure"] == 0.95
        assert breakdown.base_price == 12.3
        expected = 12.3
        for value in breakdown.factors.values():
            expected *= value
        assert breakdown.price == pytest.approx(expected)

    def test_unknown_state_uses_default_price(self, estimator):
        region = Region("Somewhere", "WY", 300_000)
        breakdown = estimator.estimate_price(region, SupplyVector(wind=100), 100.0, "2024-04")
        assert breakdown.base_price == DEFAULT_PRICE

    def test_injected_baseline_prices(self):
        estimator = PriceEstimator(tables=RegionalTables(baseline_prices={"AZ": 20.0}))
        assert estimator.base_price("az") == 20.0


class TestProjectFuturePrice:
    def test_baseline(self, estimator):
        assert estimator.project_future_price(10.0, 5) == pytest.approx(10.0 * 1.02**5)

    def test_renewable_growth_lowers_price(self, estimator):
        assert estimator.project_future_price(10.0, 5, "renewable_growth") < 10.0

    def test_fossil_dependence(self, estimator):
        assert estimator.project_future_price(10.0, 2, "fossil_dependence") == pytest.approx(10.816)

    def test_unknown_scenario_falls_back_to_baseline(self, estimator):
        assert estimator.project_future_price(10.0, 3, "moonshot") == pytest.approx(
            estimator.project_future_price(10.0, 3, "baseline")
        )
