"""Services that wire providers to the pure pipeline."""

from .readiness_service import ReadinessService
from .recommendation_service import RecommendationService
from .sync import fetch_route_catalog, sync_rider_data

__all__ = [
    "ReadinessService",
    "RecommendationService",
    "fetch_route_catalog",
    "sync_rider_data",
]
