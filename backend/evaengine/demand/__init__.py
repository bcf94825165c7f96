"""Regional electricity demand estimation."""

from evaengine.demand.estimator import DemandEstimator

__all__ = ["DemandEstimator"]
