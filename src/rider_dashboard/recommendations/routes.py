"""
Route Recommendation Engine

Suggests up to three routes, one per duration bucket (short, medium, long),
from the routes the rider has not completed yet in the worlds that are open
today. Bucket targets stretch or shrink with readiness:

    factor = clamp(0.5 + readiness / 100, 0.5, 1.5)
    targets = 30, 60 and 90 minutes x factor

Selection is greedy per bucket, in fixed order: the unused route whose
estimated time is nearest the target wins, ties going to the shorter route.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Set

from ..models.recommendations import (
    RecommendationImpact,
    RecommendationLength,
    RouteRecommendation,
)
from ..models.routes import Badge, Route
from ..utils.rounding import clamp, round1

logger = logging.getLogger(__name__)


BUCKET_ORDER = (
    RecommendationLength.SHORT,
    RecommendationLength.MEDIUM,
    RecommendationLength.LONG,
)

MIN_READINESS_FACTOR = 0.5
MAX_READINESS_FACTOR = 1.5


def readiness_factor(readiness_score: float) -> float:
    return clamp(0.5 + readiness_score / 100, MIN_READINESS_FACTOR, MAX_READINESS_FACTOR)


def build_targets(readiness_score: float) -> Dict[RecommendationLength, float]:
    """Target minutes for each bucket at the given readiness."""
    factor = readiness_factor(readiness_score)
    return {length: length.base_minutes * factor for length in BUCKET_ORDER}


def _select_best_route(
    candidates: Sequence[Route],
    target_minutes: float,
    used_ids: Set[int],
) -> Optional[Route]:
    available = [route for route in candidates if route.id not in used_ids]
    if not available:
        return None
    # min() keeps the first of equal keys, so input order breaks remaining ties
    return min(
        available,
        key=lambda route: (abs(route.estimated_time_minutes - target_minutes), route.estimated_time_minutes),
    )


def _build_impact(
    route: Route,
    completed_count: int,
    total_route_count: int,
    remaining_minutes: float,
) -> RecommendationImpact:
    badge_percent = round1((completed_count + 1) / max(total_route_count, 1) * 100)
    if remaining_minutes > 0:
        burndown_percent = round1(route.estimated_time_minutes / remaining_minutes * 100)
    else:
        burndown_percent = 0.0
    return RecommendationImpact(
        projected_badge_completion_percent=badge_percent,
        projected_hours_burndown_percent=burndown_percent,
    )


def recommend(
    readiness_score: float,
    routes: Iterable[Route],
    badges: Iterable[Badge],
    available_world_ids: Iterable[int],
) -> List[RouteRecommendation]:
    """
    Recommend routes for today.

    Args:
        readiness_score: 0-100; values outside are clamped via the factor
        routes: Route catalog
        badges: Routes the rider has already completed
        available_world_ids: Worlds open today

    Returns:
        At most one recommendation per bucket, in short/medium/long order.
        Buckets without a candidate are omitted; no open world means no
        recommendations at all.
    """
    routes = list(routes)
    completed_route_ids = {badge.route_id for badge in badges}
    world_ids = set(available_world_ids)

    remaining_routes = [route for route in routes if route.id not in completed_route_ids]
    eligible_routes = [route for route in remaining_routes if route.world_id in world_ids]
    if not eligible_routes:
        logger.debug("No eligible routes in the open worlds")
        return []

    # Computed once, not reduced as buckets consume routes
    remaining_minutes = sum(route.estimated_time_minutes for route in remaining_routes)
    completed_count = len(completed_route_ids)
    targets = build_targets(readiness_score)

    recommendations: List[RouteRecommendation] = []
    used_ids: Set[int] = set()

    for length in BUCKET_ORDER:
        route = _select_best_route(eligible_routes, targets[length], used_ids)
        if route is None:
            continue
        used_ids.add(route.id)
        recommendations.append(
            RouteRecommendation(
                length=length,
                route=route,
                impact=_build_impact(route, completed_count, len(routes), remaining_minutes),
            )
        )

    logger.info(
        f"Recommended {len(recommendations)} routes from {len(eligible_routes)} eligible "
        f"(readiness {readiness_score})"
    )
    return recommendations
