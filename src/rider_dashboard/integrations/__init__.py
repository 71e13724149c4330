"""External data providers."""

from .base import IntegrationError, RouteDataProvider, StaticRouteDataProvider
from .garmin import GarminMetricsClient, GarminMetricsConfig, MetricEndpoint

__all__ = [
    "IntegrationError",
    "RouteDataProvider",
    "StaticRouteDataProvider",
    "GarminMetricsClient",
    "GarminMetricsConfig",
    "MetricEndpoint",
]
