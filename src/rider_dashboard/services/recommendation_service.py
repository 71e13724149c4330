"""
Recommendation service.

Glue between the providers and the pure engine: resolves today's open worlds,
syncs the rider's simulator data, and asks the engine for routes.
"""

import asyncio
import logging
from typing import Optional

from ..exceptions import ValidationError
from ..integrations.base import RouteDataProvider
from ..models.recommendations import RecommendationsResponse
from ..normalize import to_optional_number
from ..recommendations.routes import recommend
from ..worlds.availability import WorldAvailabilityResolver
from ..worlds.schedule import resolve_world_ids
from .sync import sync_rider_data

logger = logging.getLogger(__name__)


class RecommendationService:
    """Builds route recommendations for one rider and day."""

    def __init__(self, availability_resolver: WorldAvailabilityResolver):
        self.availability_resolver = availability_resolver

    async def build_recommendations(
        self,
        provider: RouteDataProvider,
        readiness_score: Optional[float],
        date: Optional[str] = None,
        timezone: Optional[str] = None,
    ) -> RecommendationsResponse:
        """
        Recommend routes in the worlds open on ``date``.

        Raises:
            ValidationError: Missing or non-numeric readiness score, bad date
            UpstreamServiceError: Schedule or provider fetch failed
        """
        score = to_optional_number(readiness_score)
        if score is None:
            raise ValidationError("readiness_score is required.", field="readiness_score")

        availability, data = await asyncio.gather(
            self.availability_resolver.resolve_availability(date, timezone),
            sync_rider_data(provider),
        )

        world_ids = resolve_world_ids(availability.available_worlds)
        recommendations = recommend(
            readiness_score=score,
            routes=data.routes,
            badges=data.badges,
            available_world_ids=world_ids,
        )

        logger.info(
            f"Built {len(recommendations)} recommendations for {availability.date} "
            f"in worlds {world_ids}"
        )

        return RecommendationsResponse(
            date=availability.date,
            timezone=availability.timezone,
            guest_worlds=availability.guest_worlds,
            available_worlds=availability.available_worlds,
            readiness_score=score,
            recommendations=recommendations,
        )
