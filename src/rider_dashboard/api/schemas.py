"""
API request schemas.

Provider payloads are passed through as loose dicts: the normalizer is
responsible for making sense of them, and malformed values degrade instead
of being rejected here.
"""

from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ErrorDetail(BaseModel):
    """Error detail for API responses."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: ErrorDetail

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": {
                    "code": "VALIDATION_ERROR",
                    "message": "Date must be in YYYY-MM-DD format.",
                    "details": {"field": "date"},
                }
            }
        }
    )


class ReadinessScoreRequest(BaseModel):
    """
    Wearable metrics to score. Any field may be missing or malformed.

    Fields accept snake_case or the camelCase names wearable clients send.
    """

    body_battery: Any = Field(
        None,
        validation_alias=AliasChoices("body_battery", "bodyBattery"),
        description="Body Battery, 0-100",
    )
    sleep_score: Any = Field(
        None,
        validation_alias=AliasChoices("sleep_score", "sleepScore"),
        description="Sleep score, 0-100",
    )
    hrv_status: Any = Field(
        None,
        validation_alias=AliasChoices("hrv_status", "hrvStatus"),
        description="HRV status label (low/balanced/high)",
    )
    training_load: Any = Field(
        None,
        validation_alias=AliasChoices("training_load", "trainingLoad"),
        description="Acute training load",
    )
    recovery_time_hours: Any = Field(
        None,
        validation_alias=AliasChoices("recovery_time_hours", "recoveryTimeHours"),
        description="Hours of recovery still needed",
    )


class ReadinessSyncRequest(BaseModel):
    access_token: Optional[str] = Field(None, description="Garmin OAuth access token")
    user_id: Optional[str] = Field(None, description="Dashboard user id")
    date: Optional[str] = Field(None, description="Metrics day, YYYY-MM-DD")


class WorldAvailabilityRequest(BaseModel):
    date: Optional[str] = Field(None, description="Day to check, YYYY-MM-DD; defaults to today")
    timezone: Optional[str] = Field(None, description="IANA time zone; unknown zones fall back to UTC")


class RouteCatalogRequest(BaseModel):
    routes: List[Any] = Field(default_factory=list, description="Raw provider route payloads")
    profile: Optional[Dict[str, Any]] = Field(None, description="Raw rider profile, for FTP-based estimates")


class RiderDataRequest(BaseModel):
    """Simulator payloads already fetched by the client."""

    profile: Optional[Dict[str, Any]] = None
    activities: List[Any] = Field(default_factory=list)
    routes: List[Any] = Field(default_factory=list)


class RecommendationRequest(RiderDataRequest):
    readiness_score: Any = Field(None, description="Readiness 0-100, required")
    date: Optional[str] = Field(None, description="Day to plan for, YYYY-MM-DD")
    timezone: Optional[str] = Field(None, description="IANA time zone")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "readiness_score": 72,
                "timezone": "Europe/Madrid",
                "profile": {"id": 1, "ftp": 250},
                "activities": [{"id": "a1", "routeId": 3, "startTime": "2024-01-15T10:00:00Z"}],
                "routes": [{"id": 3, "worldId": 1, "name": "Volcano Flat", "distanceKm": 12.3}],
            }
        }
    )
