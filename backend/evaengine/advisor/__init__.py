"""Generation-source recommendations."""

from evaengine.advisor.recommendations import RecommendationEngine

__all__ = ["RecommendationEngine"]
