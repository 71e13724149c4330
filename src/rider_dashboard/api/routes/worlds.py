"""World availability routes."""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from ..deps import get_availability_resolver
from ..schemas import WorldAvailabilityRequest
from ...worlds.availability import WorldAvailabilityResolver


router = APIRouter()


@router.post("/availability")
async def world_availability(
    request: WorldAvailabilityRequest,
    resolver: WorldAvailabilityResolver = Depends(get_availability_resolver),
) -> Dict[str, Any]:
    """Worlds open on the requested day (default today)."""
    availability = await resolver.resolve_availability(request.date, request.timezone)
    return availability.to_dict()
