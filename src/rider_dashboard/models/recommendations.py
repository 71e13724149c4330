"""Route recommendation records."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

from .routes import Route


class RecommendationLength(str, Enum):
    """Duration buckets, in the order they are filled."""

    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"

    @property
    def base_minutes(self) -> int:
        """Target minutes at a readiness factor of 1.0."""
        return {
            RecommendationLength.SHORT: 30,
            RecommendationLength.MEDIUM: 60,
            RecommendationLength.LONG: 90,
        }[self]


@dataclass(frozen=True)
class RecommendationImpact:
    """Projected progress if the rider completes the recommended route."""

    projected_badge_completion_percent: float
    projected_hours_burndown_percent: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "projected_badge_completion_percent": self.projected_badge_completion_percent,
            "projected_hours_burndown_percent": self.projected_hours_burndown_percent,
        }


@dataclass(frozen=True)
class RouteRecommendation:
    """One recommended route for one duration bucket."""

    length: RecommendationLength
    route: Route
    impact: RecommendationImpact

    def to_dict(self) -> Dict[str, Any]:
        return {
            "length": self.length.value,
            "route": self.route.to_dict(),
            "impact": self.impact.to_dict(),
        }


@dataclass
class RecommendationsResponse:
    """Recommendations together with the world availability they were filtered by."""

    date: str
    timezone: str
    guest_worlds: List[str]
    available_worlds: List[str]
    readiness_score: float
    recommendations: List[RouteRecommendation] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "timezone": self.timezone,
            "guest_worlds": list(self.guest_worlds),
            "available_worlds": list(self.available_worlds),
            "readiness_score": self.readiness_score,
            "recommendations": [rec.to_dict() for rec in self.recommendations],
        }
