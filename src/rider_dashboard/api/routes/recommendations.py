"""Route recommendation routes."""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from ..deps import get_recommendation_service
from ..schemas import RecommendationRequest
from ...integrations.base import StaticRouteDataProvider
from ...services.recommendation_service import RecommendationService


router = APIRouter()


@router.post("/recommendations")
async def recommendations(
    request: RecommendationRequest,
    service: RecommendationService = Depends(get_recommendation_service),
) -> Dict[str, Any]:
    """
    Recommend one short, medium and long route in today's open worlds.

    Buckets without a suitable route are omitted; an empty list is a valid
    answer.
    """
    provider = StaticRouteDataProvider(
        profile=request.profile,
        activities=request.activities,
        routes=request.routes,
    )
    response = await service.build_recommendations(
        provider=provider,
        readiness_score=request.readiness_score,
        date=request.date,
        timezone=request.timezone,
    )
    return response.to_dict()
