"""
Readiness Score Calculation

Combines five wearable signals into a 0-100 readiness score:
- Body Battery and sleep score, taken as-is
- HRV status (categorical)
- Acute training load and hours of recovery still needed (inverted)

A missing signal never fails the calculation. It contributes the neutral
midpoint (50) at its normal weight, so a rider with no data at all reads 50.
"""

import logging
from dataclasses import fields
from typing import Any, Dict, Mapping, Optional, Union

from ..models.readiness import HrvStatus, ReadinessFactors, ReadinessResult, WearableMetrics
from ..normalize import METRICS_ALIASES, parse_hrv_status, pick_first, to_optional_number
from ..utils.rounding import clamp, round_half_up

logger = logging.getLogger(__name__)


MetricsInput = Union[WearableMetrics, Mapping[str, Any], None]

NEUTRAL_SCORE = 50.0

# Default weights for readiness calculation
DEFAULT_WEIGHTS = {
    "body_battery": 0.30,
    "sleep": 0.25,
    "hrv": 0.20,
    "training_load": 0.15,
    "recovery_time": 0.10,
}

HRV_STATUS_SCORES = {
    HrvStatus.LOW: 40.0,
    HrvStatus.BALANCED: 60.0,
    HrvStatus.HIGH: 70.0,
    HrvStatus.UNKNOWN: 50.0,
}

MAX_TRAINING_LOAD = 200.0
MAX_RECOVERY_HOURS = 72.0


def coerce_metrics(metrics: MetricsInput) -> WearableMetrics:
    """
    Accept a ``WearableMetrics`` or a raw mapping with camelCase or
    snake_case keys. Non-numeric values are treated as absent.
    """
    if isinstance(metrics, WearableMetrics):
        return metrics
    if not isinstance(metrics, Mapping):
        return WearableMetrics()

    values: Dict[str, Any] = {}
    for name in ("body_battery", "sleep_score", "training_load", "recovery_time_hours"):
        values[name] = to_optional_number(pick_first(metrics, METRICS_ALIASES[name]))
    values["hrv_status"] = parse_hrv_status(pick_first(metrics, METRICS_ALIASES["hrv_status"]))

    captured_at = pick_first(metrics, METRICS_ALIASES["captured_at"])
    if isinstance(captured_at, str) and captured_at:
        values["captured_at"] = captured_at
    return WearableMetrics(**values)


def calculate_body_battery_score(body_battery: Optional[float]) -> float:
    if body_battery is None:
        return NEUTRAL_SCORE
    return clamp(body_battery, 0, 100)


def calculate_sleep_score(sleep_score: Optional[float]) -> float:
    if sleep_score is None:
        return NEUTRAL_SCORE
    return clamp(sleep_score, 0, 100)


def calculate_hrv_score(hrv_status: Optional[Any]) -> float:
    """Categorical HRV: low 40, balanced 60, high 70, anything else 50."""
    status = parse_hrv_status(hrv_status)
    if status is None:
        return NEUTRAL_SCORE
    return HRV_STATUS_SCORES[status]


def calculate_training_load_score(training_load: Optional[float]) -> float:
    """
    Higher acute load means less readiness.

    Load is clamped to [0, 200] and mapped linearly so that 0 reads 100 and
    200 reads 0.
    """
    if training_load is None:
        return NEUTRAL_SCORE
    load = clamp(training_load, 0, MAX_TRAINING_LOAD)
    return clamp(100 - load / 2, 0, 100)


def calculate_recovery_time_score(recovery_time_hours: Optional[float]) -> float:
    """More recovery still needed means less readiness; 72h or more reads 0."""
    if recovery_time_hours is None:
        return NEUTRAL_SCORE
    hours = clamp(recovery_time_hours, 0, MAX_RECOVERY_HOURS)
    return 100 - (hours / MAX_RECOVERY_HOURS) * 100


def calculate_factors(metrics: MetricsInput) -> ReadinessFactors:
    bundle = coerce_metrics(metrics)
    return ReadinessFactors(
        body_battery=calculate_body_battery_score(bundle.body_battery),
        sleep=calculate_sleep_score(bundle.sleep_score),
        hrv=calculate_hrv_score(bundle.hrv_status),
        training_load=calculate_training_load_score(bundle.training_load),
        recovery_time=calculate_recovery_time_score(bundle.recovery_time_hours),
    )


def _score_factors(factors: ReadinessFactors, weights: Dict[str, float]) -> int:
    weighted_sum = 0.0
    total_weight = 0.0
    for factor in fields(ReadinessFactors):
        weight = weights.get(factor.name, 0.0)
        weighted_sum += getattr(factors, factor.name) * weight
        total_weight += weight

    if total_weight <= 0:
        return int(NEUTRAL_SCORE)
    return round_half_up(clamp(weighted_sum / total_weight, 0, 100))


def compute_readiness(
    metrics: MetricsInput,
    weights: Optional[Dict[str, float]] = None,
) -> int:
    """
    Calculate the readiness score for a metrics bundle.

    Args:
        metrics: ``WearableMetrics`` or a raw mapping of wearable values
        weights: Optional custom weights per factor

    Returns:
        Integer score in [0, 100]
    """
    return _score_factors(calculate_factors(metrics), weights or DEFAULT_WEIGHTS)


def _determine_zone(score: float) -> str:
    """Determine readiness zone from score."""
    if score >= 67:
        return "green"
    elif score >= 34:
        return "yellow"
    else:
        return "red"


def _generate_quick_recommendation(score: float, zone: str, factors: ReadinessFactors) -> str:
    """Generate a brief ride recommendation."""
    if zone == "red":
        return "Rest or a very easy spin recommended"
    elif zone == "yellow":
        if factors.training_load < 40:
            return "Easy ride - training load is elevated"
        elif factors.sleep < 50:
            return "Short endurance ride - prioritize sleep recovery"
        else:
            return "Moderate ride OK, avoid race efforts"
    else:  # green
        if score >= 85:
            return "Great day for a long route or a hard workout"
        else:
            return "Good day for a solid endurance ride"


def assess_readiness(
    metrics: MetricsInput,
    weights: Optional[Dict[str, float]] = None,
) -> ReadinessResult:
    """
    Full readiness assessment: score, per-factor breakdown, zone and a
    one-line recommendation.
    """
    factors = calculate_factors(metrics)
    score = _score_factors(factors, weights or DEFAULT_WEIGHTS)
    zone = _determine_zone(score)

    logger.debug(f"Readiness {score} ({zone}) from factors {factors.to_dict()}")

    return ReadinessResult(
        score=score,
        factors=factors,
        zone=zone,
        recommendation=_generate_quick_recommendation(score, zone, factors),
    )
