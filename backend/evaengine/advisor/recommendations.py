"""
Generation-source recommendations for a region-month.

Scores six candidate source types against the region's characteristics,
ranks them and turns the best into capacity suggestions sized as a fixed
fraction of the monthly deficit.

Pure arithmetic; no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from evaengine.evaporation.penman import power_from_climate_averages
from evaengine.models import Recommendation, Region, SupplyVector
from evaengine.presets import DEFAULT_TABLES, RegionalTables

# Share of the deficit each source type is suggested to cover.
CAPACITY_FRACTIONS: dict[str, float] = {
    "solar": 0.3,
    "wind": 0.25,
    "nuclear": 0.4,
    "geothermal": 0.15,
    "evaporation": 0.1,
    "gas": 0.3,
}

# Natural gas is always viable but never preferred.
GAS_SCORE = 0.6

CRITICAL_DEFICIT_RATIO = 0.20
MIX_DEFICIT_RATIO = 0.15
MIN_RECOMMEND_SCORE = 0.5
HIGH_PRIORITY_SCORE = 0.7
TOP_N = 3

_SOURCE_TEXT: dict[str, tuple[str, str]] = {
    "solar": ("Solar PV", "Strong solar potential ({pct}%). Add {cap} MWh/month solar capacity."),
    "wind": ("Wind Turbines", "Good wind resources ({pct}%). Install {cap} MWh/month wind capacity."),
    "nuclear": ("Nuclear", "Nuclear viable ({pct}%). Consider {cap} MWh/month baseload nuclear."),
    "geothermal": ("Geothermal", "Geothermal potential ({pct}%). Develop {cap} MWh/month geothermal."),
    "evaporation": ("Evaporation Engine", "Evaporation engine viable ({pct}%). Deploy {cap} MWh/month capacity."),
    "gas": ("Natural Gas", "Natural gas option ({pct}%). Add {cap} MWh/month gas capacity (transition fuel)."),
}


@dataclass(frozen=True)
class SourceOption:
    source_type: str
    score: float
    capacity: float


@dataclass(frozen=True)
class RecommendationEngine:
    """Ranks candidate generation sources for regions running a deficit."""

    tables: RegionalTables = field(default=DEFAULT_TABLES)

    # ── Suitability scores ────────────────────────────────────

    def solar_score(self, region: Region) -> float:
        if region.state in self.tables.high_solar_states:
            return 0.9
        if region.state in self.tables.moderate_solar_states:
            return 0.7
        return 0.5

    def wind_score(self, region: Region) -> float:
        if region.state in self.tables.high_wind_states:
            return 0.85
        if region.state in self.tables.moderate_wind_states:
            return 0.7
        return 0.4

    def geothermal_score(self, region: Region) -> float:
        if region.state in self.tables.geothermal_states:
            return 0.8
        return 0.1

    def nuclear_score(self, region: Region) -> float:
        """Additive viability: demand, cooling water, existing sites, policy."""
        score = 0.3
        if region.population > 500_000:
            score += 0.3
        if region.has_water_access:
            score += 0.2
        if region.existing_nuclear:
            score += 0.2
        if region.state in self.tables.nuclear_friendly_states:
            score += 0.2
        return min(score, 1.0)

    @staticmethod
    def evaporation_score(region: Region) -> float:
        if region.climate is None:
            return 0.3

        power = power_from_climate_averages(region.climate)
        if power > 200:
            return 0.9
        if power > 150:
            return 0.7
        if power > 100:
            return 0.5
        return 0.3

    def score_sources(self, region: Region) -> dict[str, float]:
        """Suitability (0 -- 1) of every candidate source for *region*."""
        return {
            "solar": self.solar_score(region),
            "wind": self.wind_score(region),
            "nuclear": self.nuclear_score(region),
            "geothermal": self.geothermal_score(region),
            "evaporation": self.evaporation_score(region),
            "gas": GAS_SCORE,
        }

    def rank_sources(self, region: Region, deficit: float) -> list[SourceOption]:
        """Candidates sorted by score, best first (ties keep table order)."""
        options = [
            SourceOption(source_type, score, deficit * CAPACITY_FRACTIONS[source_type])
            for source_type, score in self.score_sources(region).items()
        ]
        options.sort(key=lambda o: o.score, reverse=True)
        return options

    # ── Recommendations ───────────────────────────────────────

    def generate_recommendations(
        self,
        region: Region,
        supply: Optional[SupplyVector],
        demand: float,
        deficit: float,
    ) -> list[Recommendation]:
        """Ordered recommendations for one region-month.

        A non-positive deficit yields a single ``surplus`` entry.  Otherwise
        the output is an optional ``critical`` alert, up to three source
        suggestions and an optional ``mix`` suggestion, in that order.
        """
        if deficit <= 0:
            return [Recommendation(
                source_type="surplus",
                priority="low",
                message=(
                    f"Energy surplus of {abs(deficit):.0f} MWh/month. "
                    "Consider exporting to neighboring regions."
                ),
                capacity=abs(deficit),
            )]

        deficit_ratio = deficit / demand if demand > 0 else 1.0
        recommendations: list[Recommendation] = []

        if deficit_ratio > CRITICAL_DEFICIT_RATIO:
            recommendations.append(Recommendation(
                source_type="critical",
                priority="high",
                message=(
                    f"CRITICAL DEFICIT: {deficit_ratio * 100:.1f}% shortfall. "
                    "Immediate capacity expansion required."
                ),
                capacity=deficit,
            ))

        ranked = self.rank_sources(region, deficit)
        for option in ranked[:TOP_N]:
            if option.score > MIN_RECOMMEND_SCORE:
                recommendations.append(self._format(option))

        if deficit_ratio > MIX_DEFICIT_RATIO:
            top = ", ".join(o.source_type for o in ranked[:TOP_N - 1])
            recommendations.append(Recommendation(
                source_type="mix",
                priority="medium",
                message=(
                    f"Recommend diversified approach: Combine {top}, and "
                    f"{ranked[TOP_N - 1].source_type} for grid stability."
                ),
                capacity=deficit,
            ))

        return recommendations

    @staticmethod
    def _format(option: SourceOption) -> Recommendation:
        name, template = _SOURCE_TEXT[option.source_type]
        body = template.format(pct=f"{option.score * 100:.0f}", cap=f"{option.capacity:.0f}")
        return Recommendation(
            source_type=option.source_type,
            priority="high" if option.score > HIGH_PRIORITY_SCORE else "medium",
            message=f"{name}: {body}",
            capacity=option.capacity,
            score=option.score,
        )
