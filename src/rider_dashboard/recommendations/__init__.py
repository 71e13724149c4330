"""Readiness scoring and route recommendations."""

from .readiness import (
    DEFAULT_WEIGHTS,
    assess_readiness,
    calculate_factors,
    compute_readiness,
)
from .routes import build_targets, recommend

__all__ = [
    "DEFAULT_WEIGHTS",
    "assess_readiness",
    "calculate_factors",
    "compute_readiness",
    "build_targets",
    "recommend",
]
