"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from drift_advisor.config import ObservabilitySettings, RecommendationSettings, Settings
from drift_advisor.dependencies import ServiceContainer
from drift_advisor.domain.models.drift import AttributeDifference, DriftResult
from drift_advisor.domain.models.recommendation import RecommendationConfig
from drift_advisor.domain.models.severity import SeverityLevel
from drift_advisor.domain.services.pattern_analyzer import DriftPatternAnalyzer
from drift_advisor.domain.services.prioritizer import DefaultRecommendationPrioritizer
from drift_advisor.domain.services.recommendation_service import RecommendationEngine
from drift_advisor.domain.services.recommendation_synthesizer import (
    RuleBasedRecommendationSynthesizer,
)


ResultFactory = Callable[..., DriftResult]


@pytest.fixture(autouse=True)
def reset_container() -> None:
    """Drop the shared container before each test."""
    ServiceContainer.reset()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        recommendations=RecommendationSettings(),
        observability=ObservabilitySettings(metrics_enabled=False),
    )


@pytest.fixture
def make_result() -> ResultFactory:
    """Build a DriftResult from ``(attribute, severity)`` pairs."""

    def _make(
        resource_id: str, *diffs: tuple[str, SeverityLevel], instance_id: str = ""
    ) -> DriftResult:
        return DriftResult(
            resource_id=resource_id,
            instance_id=instance_id,
            resource_type=resource_id.partition(".")[0],
            differences=tuple(
                AttributeDifference(
                    attribute_name=attribute,
                    expected_value=f"expected-{attribute}",
                    actual_value=f"actual-{attribute}",
                    severity=severity,
                )
                for attribute, severity in diffs
            ),
        )

    return _make


@pytest.fixture
def unbounded_config() -> RecommendationConfig:
    return RecommendationConfig(max_recommendations=0)


@pytest.fixture
def analyzer() -> DriftPatternAnalyzer:
    return DriftPatternAnalyzer()


@pytest.fixture
def synthesizer() -> RuleBasedRecommendationSynthesizer:
    return RuleBasedRecommendationSynthesizer()


@pytest.fixture
def prioritizer() -> DefaultRecommendationPrioritizer:
    return DefaultRecommendationPrioritizer()


@pytest.fixture
def engine(unbounded_config: RecommendationConfig) -> RecommendationEngine:
    return RecommendationEngine(config=unbounded_config)


@pytest.fixture
def mixed_results(make_result: ResultFactory) -> dict[str, DriftResult]:
    """Three drifted EC2 instances, one drifted bucket and one clean instance."""
    results = [
        make_result(
            "aws_instance.web-1",
            ("instance_type", SeverityLevel.MEDIUM),
            ("security_groups", SeverityLevel.CRITICAL),
        ),
        make_result("aws_instance.web-2", ("instance_type", SeverityLevel.MEDIUM)),
        make_result(
            "aws_instance.web-3",
            ("instance_type", SeverityLevel.LOW),
            ("tags", SeverityLevel.HIGH),
        ),
        make_result("aws_s3_bucket.logs", ("tags", SeverityLevel.LOW)),
        make_result("aws_instance.clean"),
    ]
    return {result.resource_id: result for result in results}
