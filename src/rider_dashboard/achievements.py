"""Map an activity history onto route badges."""

import logging
from typing import Dict, Iterable, List

from .models.routes import Activity, Badge, BadgeMapping, Route

logger = logging.getLogger(__name__)


def map_activities_to_badges(
    activities: Iterable[Activity],
    routes: Iterable[Route],
) -> BadgeMapping:
    """
    Derive one badge per completed route.

    Activities are processed in input order, so the first activity that
    references a route is the one credited. Route ids that are not in the
    catalog are collected once each, in the order they were first seen.
    """
    known_route_ids = {route.id for route in routes}
    badges: Dict[int, Badge] = {}
    missing: Dict[int, None] = {}

    for activity in activities:
        route_id = activity.route_id
        if not route_id:
            continue
        if route_id not in known_route_ids:
            missing.setdefault(route_id, None)
            continue
        if route_id not in badges:
            badges[route_id] = Badge(
                route_id=route_id,
                activity_id=activity.id,
                completed_at=activity.start_time,
            )

    missing_routes: List[int] = list(missing)
    if missing_routes:
        logger.debug(f"Activities reference {len(missing_routes)} routes missing from the catalog")

    return BadgeMapping(badges=list(badges.values()), missing_routes=missing_routes)
