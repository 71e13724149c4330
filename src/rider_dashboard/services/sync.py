"""
Simulator data sync.

Pulls profile, activities and routes from a provider concurrently, then runs
the pure normalization pipeline over them.
"""

import asyncio
import logging
from typing import List

from ..achievements import map_activities_to_badges
from ..catalog import build_catalog
from ..integrations.base import RouteDataProvider
from ..models.routes import Route, SyncResult
from ..normalize import normalize_activities, normalize_profile

logger = logging.getLogger(__name__)


async def sync_rider_data(provider: RouteDataProvider) -> SyncResult:
    """
    Fetch and normalize everything needed for recommendations.

    The three fetches are independent and run concurrently; a failure in
    any of them fails the sync.
    """
    profile_raw, activities_raw, routes_raw = await asyncio.gather(
        provider.get_profile(),
        provider.get_activities(),
        provider.get_routes(),
    )

    profile = normalize_profile(profile_raw)
    activities = normalize_activities(activities_raw)
    routes = build_catalog(routes_raw, profile)
    mapping = map_activities_to_badges(activities, routes)

    logger.info(
        f"Synced {provider.provider} data: {len(activities)} activities, "
        f"{len(routes)} routes, {len(mapping.badges)} badges"
    )

    return SyncResult(
        profile=profile,
        activities=activities,
        routes=routes,
        badges=mapping.badges,
        missing_routes=mapping.missing_routes,
    )


async def fetch_route_catalog(provider: RouteDataProvider) -> List[Route]:
    """Route catalog alone, with the default speed model (no rider profile)."""
    return build_catalog(await provider.get_routes())
