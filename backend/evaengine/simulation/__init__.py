"""Per-region, per-month orchestration of the engine components."""

from evaengine.simulation.runner import (
    RegionMonth,
    RegionTimelineRunner,
    build_region_timeline,
    compute_monthly_metrics,
)

__all__ = [
    "RegionMonth",
    "RegionTimelineRunner",
    "build_region_timeline",
    "compute_monthly_metrics",
]
