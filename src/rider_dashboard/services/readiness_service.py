"""Wearable readiness sync."""

import logging
from typing import Any, Optional

from ..exceptions import ValidationError
from ..integrations.garmin import GarminMetricsClient
from ..models.readiness import ReadinessSnapshot
from ..recommendations.readiness import compute_readiness

logger = logging.getLogger(__name__)


def _require_string(value: Any, label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Missing {label}.", field=label)
    return value


class ReadinessService:
    """
    Fetches today's wearable metrics and scores them.

    Storing the snapshot is left to the caller.
    """

    def __init__(self, metrics_client: GarminMetricsClient):
        self.metrics_client = metrics_client

    async def sync_readiness(
        self,
        access_token: Optional[str],
        user_id: Optional[str],
        date: Optional[str] = None,
    ) -> ReadinessSnapshot:
        """
        Raises:
            ValidationError: Missing access token or user id
            MetricsFetchError: A metric endpoint failed
        """
        access_token = _require_string(access_token, "access_token")
        user_id = _require_string(user_id, "user_id")

        metrics = await self.metrics_client.fetch_metrics(access_token, date)
        score = compute_readiness(metrics)

        logger.info(f"Readiness for user {user_id}: {score}")

        return ReadinessSnapshot(
            user_id=user_id,
            captured_at=metrics.captured_at,
            metrics=metrics,
            readiness_score=score,
        )
