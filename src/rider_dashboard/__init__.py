"""
Rider Dashboard - readiness scoring and route recommendations for virtual cycling.

Normalizes simulator and wearable payloads, scores readiness, and recommends
short, medium and long routes in the worlds open today.
"""

__version__ = "0.1.0"

from .achievements import map_activities_to_badges
from .catalog import build_catalog, estimate_route_time_minutes
from .normalize import MetricKind, normalize_metric
from .recommendations import assess_readiness, compute_readiness, recommend
from .worlds import WorldAvailabilityResolver, resolve_world_ids

__all__ = [
    "__version__",
    "map_activities_to_badges",
    "build_catalog",
    "estimate_route_time_minutes",
    "MetricKind",
    "normalize_metric",
    "assess_readiness",
    "compute_readiness",
    "recommend",
    "WorldAvailabilityResolver",
    "resolve_world_ids",
]
