"""
Custom exceptions for the Rider Dashboard.

Each exception carries:
- A descriptive message
- An error code for API responses
- HTTP status code mapping
- Optional details for debugging

Malformed provider values never raise; they degrade to documented defaults
in ``rider_dashboard.normalize``. The errors below are for caller contract
violations, missing configuration and failed upstream calls.
"""

from typing import Any, Dict, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for consistent API error responses."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Upstream errors
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    SCHEDULE_FETCH_FAILED = "SCHEDULE_FETCH_FAILED"
    METRICS_FETCH_FAILED = "METRICS_FETCH_FAILED"


class RiderDashboardError(Exception):
    """
    Base exception for all Rider Dashboard errors.

    Attributes:
        message: Human-readable error message
        code: Error code from ErrorCode enum
        status_code: HTTP status code for API responses
        details: Optional dictionary with additional error details
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API response."""
        result: Dict[str, Any] = {
            "error": {
                "code": self.code.value,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


# ============================================================================
# Validation Errors (400)
# ============================================================================

class ValidationError(RiderDashboardError):
    """Raised when a caller omits a required identifier or sends bad input."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(
            message=message,
            code=ErrorCode.VALIDATION_ERROR,
            status_code=400,
            details=error_details,
        )


# ============================================================================
# Configuration Errors (500)
# ============================================================================

class ConfigurationError(RiderDashboardError):
    """Raised when a required setting is missing."""

    def __init__(self, setting: str, details: Optional[Dict[str, Any]] = None) -> None:
        error_details = details or {}
        error_details["setting"] = setting
        super().__init__(
            message=f"Missing {setting.upper()} environment variable.",
            code=ErrorCode.CONFIGURATION_ERROR,
            status_code=500,
            details=error_details,
        )


# ============================================================================
# Upstream Errors (502)
# ============================================================================

class UpstreamServiceError(RiderDashboardError):
    """Raised when a provider or the schedule source answers with a non-2xx status."""

    def __init__(
        self,
        message: str,
        upstream_status: Optional[int] = None,
        upstream_text: Optional[str] = None,
        code: ErrorCode = ErrorCode.UPSTREAM_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.upstream_status = upstream_status
        self.upstream_text = upstream_text
        error_details = details or {}
        if upstream_status is not None:
            error_details["upstream_status"] = upstream_status
        if upstream_text:
            error_details["upstream_text"] = upstream_text[:500]
        super().__init__(
            message=message,
            code=code,
            status_code=502,
            details=error_details,
        )


class ScheduleFetchError(UpstreamServiceError):
    """Raised when the world schedule page cannot be fetched."""

    def __init__(
        self,
        upstream_status: Optional[int] = None,
        upstream_text: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message="Failed to fetch Zwift Insider schedule.",
            upstream_status=upstream_status,
            upstream_text=upstream_text,
            code=ErrorCode.SCHEDULE_FETCH_FAILED,
            details=details,
        )


class MetricsFetchError(UpstreamServiceError):
    """Raised when a wearable metric request fails."""

    def __init__(
        self,
        upstream_status: Optional[int] = None,
        upstream_text: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        reason = upstream_text or (str(upstream_status) if upstream_status is not None else "unknown error")
        super().__init__(
            message=f"Garmin metric request failed: {reason}",
            upstream_status=upstream_status,
            upstream_text=upstream_text,
            code=ErrorCode.METRICS_FETCH_FAILED,
            details=details,
        )
