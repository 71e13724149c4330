"""
Normalization of free-form provider payloads.

Third-party payloads name the same field many ways (``distanceKm``,
``distance``, ``distanceInMeters`` ...) and are unreliable about types. Each
logical field has a static, ordered tuple of alias keys; the first present,
non-null value wins and is coerced to a canonical type.

Coercion never raises. Unparsable input degrades to the caller's default:
- numbers: default (0 unless stated)
- booleans: default
- timestamps: the current UTC time
"""

import math
import re
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from .models.readiness import HrvStatus
from .models.routes import Activity, RiderProfile, Route
from .utils.timestamps import format_iso


UnknownRecord = Mapping[str, Any]

# Raw distances above this are assumed to be meters, whatever the unit hint.
# Real rides longer than 300 km get misread; kept for provider compatibility.
METERS_HEURISTIC_THRESHOLD = 300

DEFAULT_DISPLAY_NAME = "Zwift Rider"
DEFAULT_ACTIVITY_NAME = "Zwift Activity"

# "+0000" style offsets; fromisoformat only accepts "+00:00" before 3.11
_COMPACT_OFFSET_RE = re.compile(r"(T.*[+-])(\d{2})(\d{2})$")


class MetricKind(str, Enum):
    """Canonical types a raw field can be coerced to."""

    NUMBER = "number"
    DISTANCE = "distance"
    BOOLEAN = "boolean"
    STRING = "string"
    TIMESTAMP = "timestamp"


PROFILE_ALIASES: Dict[str, Tuple[str, ...]] = {
    "id": ("id", "playerId", "riderId", "profileId"),
    "first_name": ("firstName", "firstname", "givenName"),
    "last_name": ("lastName", "lastname", "surname"),
    "display_name": ("displayName", "name", "fullName"),
    "country": ("country", "countryCode"),
    "level": ("level", "currentLevel"),
    "ftp_watts": ("ftp", "ftpWatts"),
    "weight_kg": ("weightKg", "weight"),
    "height_cm": ("heightCm", "height"),
    "avatar_url": ("avatar", "avatarUrl", "profileImage"),
}

ACTIVITY_ALIASES: Dict[str, Tuple[str, ...]] = {
    "id": ("id", "activityId", "rideId"),
    "name": ("name", "activityName"),
    "distance": ("distanceKm", "distance", "distanceInMeters", "totalDistance", "distanceMeters"),
    "duration_sec": ("durationSec", "duration", "movingTime", "elapsedTime"),
    "elevation_m": ("elevationM", "elevationGain", "totalElevation"),
    "start_time": ("startTime", "startDate", "startedAt"),
    "world_id": ("worldId", "mapId"),
    "route_id": ("routeId", "route", "mapRouteId"),
    "sport": ("sport", "activityType"),
    "is_event": ("isEvent", "event", "eventRide"),
    "average_speed_kph": ("averageSpeedKph", "avgSpeed", "averageSpeed"),
}

ROUTE_ALIASES: Dict[str, Tuple[str, ...]] = {
    "id": ("id", "routeId", "route_id"),
    "world_id": ("worldId", "mapId"),
    "name": ("name", "routeName"),
    "distance": ("distanceKm", "distance", "distanceInMeters", "distanceMeters", "routeDistance"),
    "elevation_m": ("elevationM", "elevationGain", "climb", "totalElevation"),
    "lead_in_distance": ("leadInDistanceKm", "leadInDistance", "leadInDistanceMeters"),
    "lead_in_elevation_m": ("leadInElevationM", "leadInElevation", "leadInElevationGain"),
    "image_url": ("imageUrl", "image", "mapImage"),
    "signature": ("signature", "routeSignature"),
    "is_event_only": ("isEventOnly", "eventOnly", "onlyEvent"),
    "is_public": ("isPublic", "public", "visible"),
}

METRICS_ALIASES: Dict[str, Tuple[str, ...]] = {
    "body_battery": ("bodyBattery", "body_battery"),
    "sleep_score": ("sleepScore", "sleep_score"),
    "hrv_status": ("hrvStatus", "hrv_status"),
    "training_load": ("trainingLoad", "training_load"),
    "recovery_time_hours": ("recoveryTimeHours", "recovery_time_hours"),
    "captured_at": ("capturedAt", "captured_at"),
}


def as_record(value: Any) -> UnknownRecord:
    """Treat anything that is not a mapping as an empty record."""
    return value if isinstance(value, Mapping) else {}


def pick_first_with_key(
    record: UnknownRecord, keys: Sequence[str]
) -> Tuple[Optional[str], Any]:
    """Return ``(key, value)`` for the first alias with a non-null value."""
    for key in keys:
        value = record.get(key)
        if value is not None:
            return key, value
    return None, None


def pick_first(record: UnknownRecord, keys: Sequence[str]) -> Any:
    """Return the first present, non-null value among ``keys``."""
    return pick_first_with_key(record, keys)[1]


# ----------------------------------------------------------------------------
# Scalar coercion
# ----------------------------------------------------------------------------

def to_optional_number(value: Any) -> Optional[float]:
    """Finite number from a number or numeric string, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            parsed = float(value)
        except ValueError:
            return None
        return parsed if math.isfinite(parsed) else None
    return None


def to_number(value: Any, default: float = 0) -> float:
    """Finite number from a number or numeric string, else ``default``."""
    parsed = to_optional_number(value)
    return default if parsed is None else parsed


def to_optional_int(value: Any) -> Optional[int]:
    parsed = to_optional_number(value)
    return None if parsed is None else int(parsed)


def to_boolean(value: Any, default: bool = False) -> bool:
    """Booleans pass through; "true"/"false" in any case; else ``default``."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    return default


def to_string(value: Any, default: str = "") -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return default


def _parse_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, bool):
        return None
    elif isinstance(value, (int, float)):
        # Numbers are epoch milliseconds
        if not math.isfinite(value):
            return None
        try:
            parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text[-1] in ("Z", "z"):
            text = text[:-1] + "+00:00"
        text = _COMPACT_OFFSET_RE.sub(r"\1\2:\3", text)
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def to_iso_string(value: Any) -> str:
    """Any parseable date representation as ISO-8601; the current time otherwise."""
    parsed = _parse_datetime(value)
    if parsed is None:
        parsed = datetime.now(timezone.utc)
    return format_iso(parsed)


def to_distance_km(value: Any, unit_hint: Optional[str] = None) -> float:
    """
    Convert a raw distance to kilometers.

    A unit hint mentioning meters divides by 1000. Without it, raw values
    above ``METERS_HEURISTIC_THRESHOLD`` are still treated as meters.
    """
    raw = to_number(value, 0)
    if not raw:
        return 0.0
    if unit_hint and "meter" in unit_hint.lower():
        return raw / 1000
    if raw > METERS_HEURISTIC_THRESHOLD:
        return raw / 1000
    return float(raw)


def _distance_hint(key: Optional[str]) -> str:
    # Only a km-suffixed key is trusted to be in kilometers
    if key is not None and key.lower().endswith("km"):
        return "km"
    return "meters"


def normalize_distance(record: UnknownRecord, aliases: Sequence[str]) -> float:
    key, value = pick_first_with_key(record, aliases)
    return to_distance_km(value, _distance_hint(key))


def normalize_metric(
    record: Any,
    aliases: Sequence[str],
    kind: MetricKind = MetricKind.NUMBER,
    default: Any = None,
) -> Any:
    """
    Resolve a logical field from a raw record and coerce it.

    Args:
        record: Raw provider payload (non-mappings count as empty)
        aliases: Candidate keys, in priority order
        kind: Target type
        default: Fallback for numbers, booleans and strings

    Returns:
        The canonical value; never raises on malformed input.
    """
    record = as_record(record)
    kind = MetricKind(kind)

    if kind is MetricKind.DISTANCE:
        return normalize_distance(record, aliases)

    value = pick_first(record, aliases)
    if kind is MetricKind.NUMBER:
        return to_number(value, 0 if default is None else default)
    if kind is MetricKind.BOOLEAN:
        return to_boolean(value, False if default is None else default)
    if kind is MetricKind.STRING:
        return to_string(value, "" if default is None else default)
    return to_iso_string(value)


# ----------------------------------------------------------------------------
# Entity normalizers
# ----------------------------------------------------------------------------

def normalize_profile(raw: Any) -> RiderProfile:
    """Normalize a simulator rider profile payload."""
    record = as_record(raw)
    aliases = PROFILE_ALIASES

    first_name = to_string(pick_first(record, aliases["first_name"]))
    last_name = to_string(pick_first(record, aliases["last_name"]))
    display_name = (
        to_string(pick_first(record, aliases["display_name"]))
        or f"{first_name} {last_name}".strip()
        or DEFAULT_DISPLAY_NAME
    )

    return RiderProfile(
        id=to_string(pick_first(record, aliases["id"])),
        display_name=display_name,
        first_name=first_name or None,
        last_name=last_name or None,
        country=to_string(pick_first(record, aliases["country"])) or None,
        level=to_optional_number(pick_first(record, aliases["level"])),
        ftp_watts=to_optional_number(pick_first(record, aliases["ftp_watts"])),
        weight_kg=to_optional_number(pick_first(record, aliases["weight_kg"])),
        height_cm=to_optional_number(pick_first(record, aliases["height_cm"])),
        avatar_url=to_string(pick_first(record, aliases["avatar_url"])) or None,
    )


def normalize_activity(raw: Any) -> Activity:
    """Normalize a single simulator activity payload."""
    record = as_record(raw)
    aliases = ACTIVITY_ALIASES

    return Activity(
        id=to_string(pick_first(record, aliases["id"])),
        name=to_string(pick_first(record, aliases["name"])) or DEFAULT_ACTIVITY_NAME,
        distance_km=normalize_distance(record, aliases["distance"]),
        duration_sec=to_number(pick_first(record, aliases["duration_sec"]), 0),
        elevation_m=to_number(pick_first(record, aliases["elevation_m"]), 0),
        start_time=to_iso_string(pick_first(record, aliases["start_time"])),
        world_id=to_optional_int(pick_first(record, aliases["world_id"])),
        route_id=to_optional_int(pick_first(record, aliases["route_id"])),
        sport=to_string(pick_first(record, aliases["sport"])) or None,
        is_event=to_boolean(pick_first(record, aliases["is_event"]), False),
        average_speed_kph=to_optional_number(pick_first(record, aliases["average_speed_kph"])),
    )


def normalize_activities(raw: Any) -> list[Activity]:
    if not isinstance(raw, list):
        return []
    return [normalize_activity(item) for item in raw]


def normalize_route(raw: Any, estimated_time_minutes: int) -> Route:
    """Normalize a route payload; the time estimate is computed by the catalog builder."""
    record = as_record(raw)
    aliases = ROUTE_ALIASES

    lead_in_key, lead_in_distance = pick_first_with_key(record, aliases["lead_in_distance"])
    lead_in_elevation = pick_first(record, aliases["lead_in_elevation_m"])

    return Route(
        id=int(to_number(pick_first(record, aliases["id"]), 0)),
        world_id=int(to_number(pick_first(record, aliases["world_id"]), 0)),
        name=to_string(pick_first(record, aliases["name"])),
        distance_km=normalize_distance(record, aliases["distance"]),
        elevation_m=to_number(pick_first(record, aliases["elevation_m"]), 0),
        lead_in_distance_km=(
            to_distance_km(lead_in_distance, _distance_hint(lead_in_key))
            if lead_in_distance is not None
            else None
        ),
        lead_in_elevation_m=(
            to_number(lead_in_elevation, 0) if lead_in_elevation is not None else None
        ),
        image_url=to_string(pick_first(record, aliases["image_url"])) or None,
        signature=to_string(pick_first(record, aliases["signature"])) or None,
        is_event_only=to_boolean(pick_first(record, aliases["is_event_only"]), False),
        is_public=to_boolean(pick_first(record, aliases["is_public"]), True),
        estimated_time_minutes=estimated_time_minutes,
    )


def parse_hrv_status(value: Any) -> Optional[HrvStatus]:
    """Map a provider HRV label onto ``HrvStatus`` by substring."""
    if isinstance(value, HrvStatus):
        return value
    if not isinstance(value, str):
        return None
    lowered = value.lower()
    if "low" in lowered:
        return HrvStatus.LOW
    if "balanced" in lowered:
        return HrvStatus.BALANCED
    if "high" in lowered:
        return HrvStatus.HIGH
    return HrvStatus.UNKNOWN
