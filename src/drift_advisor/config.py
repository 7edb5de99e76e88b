"""Application configuration using pydantic-settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from drift_advisor.domain.models.recommendation import RecommendationConfig
from drift_advisor.domain.models.severity import SeverityLevel


class RecommendationSettings(BaseSettings):
    """Recommendation engine defaults, overridable from the environment."""

    include_actions: bool = Field(default=True, alias="RECOMMENDATION_INCLUDE_ACTIONS")
    include_priority: bool = Field(default=True, alias="RECOMMENDATION_INCLUDE_PRIORITY")
    include_time_estimate: bool = Field(
        default=True, alias="RECOMMENDATION_INCLUDE_TIME_ESTIMATE"
    )
    group_by_severity: bool = Field(default=True, alias="RECOMMENDATION_GROUP_BY_SEVERITY")
    group_by_resource_type: bool = Field(
        default=True, alias="RECOMMENDATION_GROUP_BY_RESOURCE_TYPE"
    )
    min_severity: SeverityLevel = Field(
        default=SeverityLevel.LOW, alias="RECOMMENDATION_MIN_SEVERITY"
    )
    max_recommendations: int = Field(default=10, alias="RECOMMENDATION_MAX_RECOMMENDATIONS")
    include_preventive: bool = Field(default=False, alias="RECOMMENDATION_INCLUDE_PREVENTIVE")

    model_config = {
        "env_prefix": "RECOMMENDATION_",
        "extra": "ignore",
        "populate_by_name": True,
    }

    @field_validator("min_severity", mode="before")
    @classmethod
    def parse_min_severity(cls, value: object) -> object:
        if isinstance(value, str) and not isinstance(value, SeverityLevel):
            return SeverityLevel.parse(value)
        return value

    def to_config(self) -> RecommendationConfig:
        return RecommendationConfig(
            include_actions=self.include_actions,
            include_priority=self.include_priority,
            include_time_estimate=self.include_time_estimate,
            group_by_severity=self.group_by_severity,
            group_by_resource_type=self.group_by_resource_type,
            min_severity=self.min_severity,
            max_recommendations=self.max_recommendations,
            include_preventive=self.include_preventive,
        )


class ObservabilitySettings(BaseSettings):
    """Observability configuration."""

    service_name: str = Field(default="drift-advisor", alias="SERVICE_NAME")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    json_logs: bool = Field(default=True, alias="JSON_LOGS")
    metrics_enabled: bool = Field(default=True, alias="METRICS_ENABLED")
    tracing_enabled: bool = Field(default=False, alias="TRACING_ENABLED")

    model_config = {"env_prefix": "OBS_", "extra": "ignore", "populate_by_name": True}


class Settings(BaseSettings):
    """Main application settings."""

    recommendations: RecommendationSettings = Field(default_factory=RecommendationSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    model_config = {"env_prefix": "", "extra": "ignore", "populate_by_name": True}


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
