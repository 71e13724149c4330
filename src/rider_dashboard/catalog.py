"""
Route catalog builder.

Turns raw provider route payloads into rideable ``Route`` records with an
estimated completion time tuned to the rider's FTP.
"""

import logging
from typing import Any, List, Optional

from .models.routes import RiderProfile, Route
from .normalize import (
    ROUTE_ALIASES,
    as_record,
    normalize_distance,
    normalize_route,
    pick_first,
    to_number,
)
from .utils.rounding import round_half_up

logger = logging.getLogger(__name__)


DEFAULT_SPEED_KPH = 28.0
MAX_SPEED_KPH = 45.0
CLIMB_MINUTES_PER_100M = 2.2
MIN_ROUTE_MINUTES = 5


def estimate_speed_kph(profile: Optional[RiderProfile] = None) -> float:
    """Flat-road speed: ``min(45, 20 + ftp/20)`` with a known FTP, else 28 km/h."""
    ftp = profile.ftp_watts if profile is not None else None
    if ftp:
        return min(MAX_SPEED_KPH, 20 + ftp / 20)
    return DEFAULT_SPEED_KPH


def estimate_route_time_minutes(
    distance_km: float,
    elevation_m: float,
    profile: Optional[RiderProfile] = None,
) -> int:
    """
    Estimate how long a route takes to ride.

    Travel time at the rider's flat speed plus 2.2 minutes per 100 m of
    climbing, never less than 5 minutes.
    """
    speed = estimate_speed_kph(profile)
    travel_minutes = distance_km / speed * 60
    climb_minutes = elevation_m / 100 * CLIMB_MINUTES_PER_100M
    return max(MIN_ROUTE_MINUTES, round_half_up(travel_minutes + climb_minutes))


def build_route(raw: Any, profile: Optional[RiderProfile] = None) -> Route:
    record = as_record(raw)
    distance_km = normalize_distance(record, ROUTE_ALIASES["distance"])
    elevation_m = to_number(pick_first(record, ROUTE_ALIASES["elevation_m"]), 0)
    return normalize_route(
        record,
        estimated_time_minutes=estimate_route_time_minutes(distance_km, elevation_m, profile),
    )


def build_catalog(raw_routes: Any, profile: Optional[RiderProfile] = None) -> List[Route]:
    """
    Build the list of catalog-eligible routes.

    Routes that are private, event-only, unnamed or have a non-positive id
    are dropped. Non-list input yields an empty catalog.
    """
    if not isinstance(raw_routes, list):
        if raw_routes is not None:
            logger.warning(f"Ignoring route payload of type {type(raw_routes).__name__}")
        return []

    routes = [build_route(raw, profile) for raw in raw_routes]
    catalog = [route for route in routes if route.is_catalog_eligible]

    logger.info(f"Built route catalog: {len(catalog)} of {len(routes)} routes eligible")
    return catalog
