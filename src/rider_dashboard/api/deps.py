"""Dependency injection for API routes."""

from functools import lru_cache

from fastapi import Depends

from ..config import get_settings
from ..integrations.garmin import GarminMetricsClient
from ..services.readiness_service import ReadinessService
from ..services.recommendation_service import RecommendationService
from ..worlds.availability import WorldAvailabilityResolver


@lru_cache
def get_availability_resolver() -> WorldAvailabilityResolver:
    """Get the process-wide resolver, which owns the schedule cache."""
    return WorldAvailabilityResolver.from_settings(get_settings())


def get_recommendation_service(
    resolver: WorldAvailabilityResolver = Depends(get_availability_resolver),
) -> RecommendationService:
    return RecommendationService(availability_resolver=resolver)


@lru_cache
def get_metrics_client() -> GarminMetricsClient:
    """Get the Garmin metrics client. Raises ConfigurationError if unconfigured."""
    return GarminMetricsClient.from_settings(get_settings())


def get_readiness_service(
    metrics_client: GarminMetricsClient = Depends(get_metrics_client),
) -> ReadinessService:
    return ReadinessService(metrics_client=metrics_client)
