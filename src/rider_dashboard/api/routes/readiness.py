"""Readiness scoring routes."""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from ..deps import get_readiness_service
from ..schemas import ReadinessScoreRequest, ReadinessSyncRequest
from ...recommendations.readiness import assess_readiness
from ...services.readiness_service import ReadinessService


router = APIRouter()


@router.post("/score")
async def score_readiness(request: ReadinessScoreRequest) -> Dict[str, Any]:
    """
    Score a bundle of wearable metrics.

    Missing or malformed metrics count as neutral; this never fails.
    """
    return assess_readiness(request.model_dump()).to_dict()


@router.post("/sync")
async def sync_readiness(
    request: ReadinessSyncRequest,
    service: ReadinessService = Depends(get_readiness_service),
) -> Dict[str, Any]:
    """Fetch today's Garmin metrics and return a scored snapshot."""
    snapshot = await service.sync_readiness(
        access_token=request.access_token,
        user_id=request.user_id,
        date=request.date,
    )
    return snapshot.to_dict()
