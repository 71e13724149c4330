"""Wearable metric bundles and readiness results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from ..utils.timestamps import utc_now_iso


class HrvStatus(str, Enum):
    """Categorical HRV status reported by the wearable."""

    LOW = "low"
    BALANCED = "balanced"
    HIGH = "high"
    UNKNOWN = "unknown"


@dataclass
class WearableMetrics:
    """Raw-ish wearable signals. Any of them may be missing."""

    body_battery: Optional[float] = None     # 0-100
    sleep_score: Optional[float] = None      # 0-100
    hrv_status: Optional[HrvStatus] = None
    training_load: Optional[float] = None    # acute load, 0-200 meaningful
    recovery_time_hours: Optional[float] = None
    captured_at: str = field(default_factory=utc_now_iso)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "captured_at": self.captured_at,
            "body_battery": self.body_battery,
            "sleep_score": self.sleep_score,
            "hrv_status": self.hrv_status.value if self.hrv_status else None,
            "training_load": self.training_load,
            "recovery_time_hours": self.recovery_time_hours,
        }


@dataclass
class ReadinessFactors:
    """Per-component scores (0-100) that went into a readiness score."""

    body_battery: float = 50.0
    sleep: float = 50.0
    hrv: float = 50.0
    training_load: float = 50.0
    recovery_time: float = 50.0

    def to_dict(self) -> Dict[str, float]:
        return {
            "body_battery": self.body_battery,
            "sleep": self.sleep,
            "hrv": self.hrv,
            "training_load": self.training_load,
            "recovery_time": self.recovery_time,
        }


@dataclass
class ReadinessResult:
    """Complete readiness assessment."""

    score: int                               # 0-100
    factors: ReadinessFactors
    zone: str                                # 'green', 'yellow', 'red'
    recommendation: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "readiness_score": self.score,
            "factors": self.factors.to_dict(),
            "zone": self.zone,
            "recommendation": self.recommendation,
        }


@dataclass
class ReadinessSnapshot:
    """A scored metrics capture, ready to be handed to a persistence layer."""

    user_id: str
    captured_at: str
    metrics: WearableMetrics
    readiness_score: int
    created_at: str = field(default_factory=utc_now_iso)
    source: str = "garmin"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "captured_at": self.captured_at,
            "metrics": self.metrics.to_dict(),
            "readiness_score": self.readiness_score,
            "created_at": self.created_at,
            "source": self.source,
        }
