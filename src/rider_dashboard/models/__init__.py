"""Domain records shared across the dashboard."""

from .routes import (
    Activity,
    Badge,
    BadgeMapping,
    RiderProfile,
    Route,
    SyncResult,
)
from .readiness import (
    HrvStatus,
    ReadinessFactors,
    ReadinessResult,
    ReadinessSnapshot,
    WearableMetrics,
)
from .recommendations import (
    RecommendationImpact,
    RecommendationLength,
    RecommendationsResponse,
    RouteRecommendation,
)
from .availability import WorldAvailability

__all__ = [
    "Activity",
    "Badge",
    "BadgeMapping",
    "RiderProfile",
    "Route",
    "SyncResult",
    "HrvStatus",
    "ReadinessFactors",
    "ReadinessResult",
    "ReadinessSnapshot",
    "WearableMetrics",
    "RecommendationImpact",
    "RecommendationLength",
    "RecommendationsResponse",
    "RouteRecommendation",
    "WorldAvailability",
]
