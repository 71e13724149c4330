"""Normalized simulator entities: rider, activities, routes and badges."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class RiderProfile:
    """Rider profile as reported by the cycling simulator."""

    id: str
    display_name: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    country: Optional[str] = None
    level: Optional[float] = None
    ftp_watts: Optional[float] = None  # functional threshold power
    weight_kg: Optional[float] = None
    height_cm: Optional[float] = None
    avatar_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "display_name": self.display_name,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "country": self.country,
            "level": self.level,
            "ftp_watts": self.ftp_watts,
            "weight_kg": self.weight_kg,
            "height_cm": self.height_cm,
            "avatar_url": self.avatar_url,
        }


@dataclass
class Activity:
    """A single completed ride or run. Read-only evidence for badges."""

    id: str
    name: str
    distance_km: float
    duration_sec: float
    elevation_m: float
    start_time: str                   # ISO-8601
    world_id: Optional[int] = None
    route_id: Optional[int] = None
    sport: Optional[str] = None
    is_event: bool = False
    average_speed_kph: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "distance_km": self.distance_km,
            "duration_sec": self.duration_sec,
            "elevation_m": self.elevation_m,
            "start_time": self.start_time,
            "world_id": self.world_id,
            "route_id": self.route_id,
            "sport": self.sport,
            "is_event": self.is_event,
            "average_speed_kph": self.average_speed_kph,
        }


@dataclass(frozen=True)
class Route:
    """A rideable route. Immutable once built; identity is ``id``."""

    id: int
    world_id: int
    name: str
    distance_km: float
    elevation_m: float
    estimated_time_minutes: int
    is_event_only: bool = False
    is_public: bool = True
    lead_in_distance_km: Optional[float] = None
    lead_in_elevation_m: Optional[float] = None
    image_url: Optional[str] = None
    signature: Optional[str] = None

    @property
    def is_catalog_eligible(self) -> bool:
        """Public, not event-only, positive id and a name."""
        return self.id > 0 and bool(self.name) and self.is_public and not self.is_event_only

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "world_id": self.world_id,
            "name": self.name,
            "distance_km": self.distance_km,
            "elevation_m": self.elevation_m,
            "lead_in_distance_km": self.lead_in_distance_km,
            "lead_in_elevation_m": self.lead_in_elevation_m,
            "image_url": self.image_url,
            "signature": self.signature,
            "is_event_only": self.is_event_only,
            "is_public": self.is_public,
            "estimated_time_minutes": self.estimated_time_minutes,
        }


@dataclass(frozen=True)
class Badge:
    """Evidence that a route has been completed at least once."""

    route_id: int
    activity_id: str
    completed_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "route_id": self.route_id,
            "activity_id": self.activity_id,
            "completed_at": self.completed_at,
        }


@dataclass
class BadgeMapping:
    """Badges earned plus route ids referenced by activities but absent from the catalog."""

    badges: List[Badge] = field(default_factory=list)
    missing_routes: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "badges": [badge.to_dict() for badge in self.badges],
            "missing_routes": list(self.missing_routes),
        }


@dataclass
class SyncResult:
    """Everything pulled from the simulator for one rider, normalized."""

    profile: RiderProfile
    activities: List[Activity]
    routes: List[Route]
    badges: List[Badge]
    missing_routes: List[int]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "profile": self.profile.to_dict(),
            "activities": [activity.to_dict() for activity in self.activities],
            "routes": [route.to_dict() for route in self.routes],
            "badges": [badge.to_dict() for badge in self.badges],
            "missing_routes": list(self.missing_routes),
        }
