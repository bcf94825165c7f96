"""Generation supply: upstream records, state estimates, regional shares."""

from evaengine.supply.generation import (
    DisaggregationBoosts,
    PowerPlant,
    disaggregate_to_regions,
    estimate_state_generation,
    evaporation_supply_mwh,
    region_share,
    supply_from_generation_records,
)

__all__ = [
    "DisaggregationBoosts",
    "PowerPlant",
    "disaggregate_to_regions",
    "estimate_state_generation",
    "evaporation_supply_mwh",
    "region_share",
    "supply_from_generation_records",
]
