"""Electricity price prediction."""

from evaengine.pricing.estimator import PriceEstimator

__all__ = ["PriceEstimator"]
