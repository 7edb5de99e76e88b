"""Recommendation domain models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import Field, field_validator

from drift_advisor.domain.models.base import utc_now, ValueObject
from drift_advisor.domain.models.severity import SeverityLevel


class PatternType(str, Enum):
    """Kind of cross-resource drift pattern."""

    COMMON_ATTRIBUTE = "common_attribute_drift"
    RESOURCE_TYPE = "resource_type_drift"
    HIGH_SEVERITY_CLUSTER = "high_severity_drift"


class RecommendationType(str, Enum):
    """What the operator is asked to do."""

    UPDATE = "update"
    REVIEW = "review"
    INVESTIGATE = "investigate"
    IGNORE = "ignore"
    ALERT = "alert"


class RecommendationPriority(str, Enum):
    """Urgency of a recommendation. Lower rank is more urgent."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK: dict[RecommendationPriority, int] = {
    RecommendationPriority.CRITICAL: 0,
    RecommendationPriority.HIGH: 1,
    RecommendationPriority.MEDIUM: 2,
    RecommendationPriority.LOW: 3,
}


class DriftPattern(ValueObject):
    """A commonality observed across several drifted resources."""

    pattern_type: PatternType
    affected_resources: tuple[str, ...]
    common_attributes: tuple[str, ...] = ()
    category: str = ""
    severity: SeverityLevel = SeverityLevel.NONE

    @property
    def frequency(self) -> int:
        return len(self.affected_resources)


class ActionableRecommendation(ValueObject):
    """A single, actionable remediation suggestion."""

    id: str
    title: str
    description: str
    type: RecommendationType
    priority: RecommendationPriority
    severity: SeverityLevel

    affected_resources: tuple[str, ...] = ()
    resource_count: int = 0

    commands: tuple[str, ...] = ()
    manual_steps: tuple[str, ...] = ()
    documentation_url: str = ""

    estimated_time: str = ""
    risk_level: str = ""
    category: str = ""
    tags: tuple[str, ...] = ()
    created_at: datetime = Field(default_factory=utc_now)

    depends_on: tuple[str, ...] = ()
    blocks: tuple[str, ...] = ()

    @field_validator("tags")
    @classmethod
    def unique_tags(cls, tags: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(dict.fromkeys(tags))


class RecommendationSummary(ValueObject):
    """Prioritized recommendations plus aggregate counts.

    ``model_dump(mode="json")`` is the payload handed to report renderers.
    """

    total_recommendations: int = 0
    by_priority: dict[RecommendationPriority, int] = Field(default_factory=dict)
    by_type: dict[RecommendationType, int] = Field(default_factory=dict)
    by_severity: dict[SeverityLevel, int] = Field(default_factory=dict)
    by_category: dict[str, int] = Field(default_factory=dict)
    estimated_total_time: str = "0 minutes"
    highest_priority: RecommendationPriority | None = None
    most_common_category: str = ""
    recommendations: list[ActionableRecommendation] = Field(default_factory=list)


class RecommendationConfig(ValueObject):
    """Options for a single recommendation run.

    The ``with_*`` helpers return a new config and leave the receiver
    untouched, so one config can be shared between engines safely.
    """

    include_actions: bool = True
    include_priority: bool = True
    include_time_estimate: bool = True
    group_by_severity: bool = True
    group_by_resource_type: bool = True
    min_severity: SeverityLevel = SeverityLevel.LOW
    max_recommendations: int = 10
    include_preventive: bool = False

    @field_validator("min_severity", mode="before")
    @classmethod
    def parse_min_severity(cls, value: object) -> object:
        if isinstance(value, str) and not isinstance(value, SeverityLevel):
            return SeverityLevel.parse(value)
        return value

    def with_actions(self, include: bool) -> RecommendationConfig:
        return self._with(include_actions=include)

    def with_priority(self, include: bool) -> RecommendationConfig:
        return self._with(include_priority=include)

    def with_time_estimate(self, include: bool) -> RecommendationConfig:
        return self._with(include_time_estimate=include)

    def with_group_by_severity(self, group: bool) -> RecommendationConfig:
        return self._with(group_by_severity=group)

    def with_group_by_resource_type(self, group: bool) -> RecommendationConfig:
        return self._with(group_by_resource_type=group)

    def with_min_severity(self, severity: SeverityLevel | str) -> RecommendationConfig:
        return self._with(min_severity=severity)

    def with_max_recommendations(self, limit: int) -> RecommendationConfig:
        return self._with(max_recommendations=limit)

    def with_preventive(self, include: bool) -> RecommendationConfig:
        return self._with(include_preventive=include)

    def _with(self, **changes: object) -> RecommendationConfig:
        # Validated copy; severity labels are parsed like in the constructor.
        return RecommendationConfig.model_validate({**self.model_dump(), **changes})

    @property
    def is_unbounded(self) -> bool:
        return self.max_recommendations <= 0
