"""Route catalog and simulator sync routes."""

from typing import Any, Dict

from fastapi import APIRouter

from ..schemas import RiderDataRequest, RouteCatalogRequest
from ...catalog import build_catalog
from ...integrations.base import StaticRouteDataProvider
from ...normalize import normalize_profile
from ...services.sync import sync_rider_data


router = APIRouter()


@router.post("/routes/catalog")
async def route_catalog(request: RouteCatalogRequest) -> Dict[str, Any]:
    """Rideable routes with time estimates, optionally tuned to a rider's FTP."""
    profile = normalize_profile(request.profile) if request.profile is not None else None
    routes = build_catalog(request.routes, profile)
    return {"routes": [route.to_dict() for route in routes]}


@router.post("/sync")
async def sync(request: RiderDataRequest) -> Dict[str, Any]:
    """Normalize posted simulator data into profile, activities, routes and badges."""
    provider = StaticRouteDataProvider(
        profile=request.profile,
        activities=request.activities,
        routes=request.routes,
    )
    result = await sync_rider_data(provider)
    return result.to_dict()
