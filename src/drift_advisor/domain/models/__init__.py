"""Domain models package."""

from drift_advisor.domain.models.base import (
    utc_now,
    ValueObject,
)
from drift_advisor.domain.models.drift import (
    AttributeDifference,
    DriftResult,
)
from drift_advisor.domain.models.recommendation import (
    ActionableRecommendation,
    DriftPattern,
    PatternType,
    RecommendationConfig,
    RecommendationPriority,
    RecommendationSummary,
    RecommendationType,
)
from drift_advisor.domain.models.severity import (
    max_severity,
    SeverityLevel,
)


__all__ = [
    "ActionableRecommendation",
    "AttributeDifference",
    "DriftPattern",
    "DriftResult",
    "PatternType",
    "RecommendationConfig",
    "RecommendationPriority",
    "RecommendationSummary",
    "RecommendationType",
    "SeverityLevel",
    "ValueObject",
    "max_severity",
    "utc_now",
]
