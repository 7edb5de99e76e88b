"""Unit tests for recommendation synthesis."""

from __future__ import annotations

import pytest

from drift_advisor.domain.models.drift import DriftResult
from drift_advisor.domain.models.recommendation import (
    DriftPattern,
    PatternType,
    RecommendationConfig,
    RecommendationPriority,
    RecommendationType,
)
from drift_advisor.domain.models.severity import SeverityLevel
from drift_advisor.domain.services.pattern_analyzer import DriftPatternAnalyzer
from drift_advisor.domain.services.recommendation_synthesizer import (
    assess_risk_level,
    assess_risk_level_for_resource,
    estimate_time_for_resources,
    RuleBasedRecommendationSynthesizer,
)


@pytest.fixture
def recommendations(
    analyzer: DriftPatternAnalyzer,
    synthesizer: RuleBasedRecommendationSynthesizer,
    mixed_results: dict[str, DriftResult],
) -> dict:
    patterns = analyzer.analyze(mixed_results)
    recs = synthesizer.synthesize(patterns, mixed_results, RecommendationConfig())
    return {rec.id: rec for rec in recs}


class TestPriorityPolicy:
    @pytest.mark.parametrize(
        ("frequency", "priority"),
        [
            (1, RecommendationPriority.LOW),
            (2, RecommendationPriority.MEDIUM),
            (4, RecommendationPriority.MEDIUM),
            (5, RecommendationPriority.HIGH),
            (9, RecommendationPriority.HIGH),
            (10, RecommendationPriority.CRITICAL),
            (250, RecommendationPriority.CRITICAL),
        ],
    )
    def test_priority_from_frequency(
        self,
        synthesizer: RuleBasedRecommendationSynthesizer,
        frequency: int,
        priority: RecommendationPriority,
    ) -> None:
        assert synthesizer.priority_from_frequency(frequency) == priority

    def test_custom_frequency_ladder(self) -> None:
        synthesizer = RuleBasedRecommendationSynthesizer(
            frequency_ladder=[
                (2, RecommendationPriority.HIGH),
                (3, RecommendationPriority.CRITICAL),
            ],
        )
        assert synthesizer.priority_from_frequency(3) == RecommendationPriority.CRITICAL
        assert synthesizer.priority_from_frequency(2) == RecommendationPriority.HIGH
        assert synthesizer.priority_from_frequency(1) == RecommendationPriority.LOW

    @pytest.mark.parametrize(
        ("severity", "priority", "rec_type"),
        [
            (SeverityLevel.CRITICAL, RecommendationPriority.CRITICAL, RecommendationType.UPDATE),
            (SeverityLevel.HIGH, RecommendationPriority.HIGH, RecommendationType.REVIEW),
            (SeverityLevel.MEDIUM, RecommendationPriority.MEDIUM, RecommendationType.REVIEW),
            (SeverityLevel.LOW, RecommendationPriority.LOW, RecommendationType.IGNORE),
            (SeverityLevel.NONE, RecommendationPriority.LOW, RecommendationType.IGNORE),
        ],
    )
    def test_severity_mappings(
        self,
        synthesizer: RuleBasedRecommendationSynthesizer,
        severity: SeverityLevel,
        priority: RecommendationPriority,
        rec_type: RecommendationType,
    ) -> None:
        assert synthesizer.priority_from_severity(severity) == priority
        assert synthesizer.recommendation_type_from_severity(severity) == rec_type


class TestEstimates:
    @pytest.mark.parametrize(
        ("count", "estimate"),
        [(1, "15-30 minutes"), (5, "1-2 hours"), (10, "2-4 hours"), (11, "4+ hours")],
    )
    def test_estimate_time_for_resources(self, count: int, estimate: str) -> None:
        assert estimate_time_for_resources(count) == estimate

    def test_assess_risk_level(self) -> None:
        assert assess_risk_level("security", 1) == "high"
        assert assess_risk_level("critical", 1) == "high"
        assert assess_risk_level("compute", 11) == "medium"
        assert assess_risk_level("compute", 10) == "low"

    def test_assess_risk_level_for_resource(self) -> None:
        assert assess_risk_level_for_resource("aws_instance", SeverityLevel.CRITICAL) == "high"
        assert assess_risk_level_for_resource("aws_iam_role", SeverityLevel.LOW) == "medium"
        assert assess_risk_level_for_resource("aws_instance", SeverityLevel.HIGH) == "low"


class TestSynthesize:
    def test_one_recommendation_per_pattern_and_resource(self, recommendations: dict) -> None:
        assert sorted(recommendations) == sorted([
            "attr-drift-0",
            "attr-drift-1",
            "type-drift-2",
            "high-severity-3",
            "resource-aws_instance-web-1",
            "resource-aws_instance-web-2",
            "resource-aws_instance-web-3",
            "resource-aws_s3_bucket-logs",
        ])

    def test_attribute_pattern_recommendation(self, recommendations: dict) -> None:
        rec = recommendations["attr-drift-0"]
        assert rec.type == RecommendationType.REVIEW
        assert rec.priority == RecommendationPriority.MEDIUM
        assert rec.severity == SeverityLevel.MEDIUM
        assert rec.commands == ("terraform plan", "terraform apply")
        assert rec.resource_count == 3
        assert rec.category == "configuration"
        assert rec.estimated_time == "1-2 hours"
        assert rec.risk_level == "low"
        assert rec.tags == ("bulk-fix", "attribute-drift", "instance_type")

    def test_resource_type_pattern_recommendation(self, recommendations: dict) -> None:
        rec = recommendations["type-drift-2"]
        assert rec.type == RecommendationType.INVESTIGATE
        assert rec.title == "Address drift in aws_instance resources"
        assert rec.commands[0] == (
            "terraform plan -target=aws_instance.web-1 "
            "-target=aws_instance.web-2 -target=aws_instance.web-3"
        )
        assert rec.category == "compute"

    def test_high_severity_recommendation(self, recommendations: dict) -> None:
        rec = recommendations["high-severity-3"]
        assert rec.type == RecommendationType.UPDATE
        assert rec.priority == RecommendationPriority.CRITICAL
        assert rec.severity == SeverityLevel.CRITICAL
        assert rec.estimated_time == "1-2 hours"
        assert rec.risk_level == "high"
        assert rec.category == "critical"
        assert rec.affected_resources == ("aws_instance.web-1", "aws_instance.web-3")

    def test_resource_recommendation(self, recommendations: dict) -> None:
        rec = recommendations["resource-aws_instance-web-1"]
        assert rec.type == RecommendationType.UPDATE
        assert rec.priority == RecommendationPriority.CRITICAL
        assert rec.severity == SeverityLevel.CRITICAL
        assert rec.affected_resources == ("aws_instance.web-1",)
        assert rec.resource_count == 1
        assert rec.commands == (
            "terraform plan -target=aws_instance.web-1",
            "terraform apply -target=aws_instance.web-1",
        )
        assert rec.manual_steps == (
            "Review the current configuration for aws_instance.web-1",
            "Compare with the desired state in your Terraform files",
            "Update instance_type from 'actual-instance_type' to 'expected-instance_type'",
            "Update security_groups from 'actual-security_groups' to 'expected-security_groups'",
            "Apply the changes using terraform apply",
            "Verify the resource is in the expected state",
        )
        assert rec.estimated_time == "30 minutes"
        assert rec.risk_level == "high"
        assert rec.category == "compute"
        assert rec.tags == ("single-resource", "aws_instance", "critical")

    def test_low_severity_resource_is_ignorable(self, recommendations: dict) -> None:
        rec = recommendations["resource-aws_s3_bucket-logs"]
        assert rec.type == RecommendationType.IGNORE
        assert rec.priority == RecommendationPriority.LOW
        assert rec.category == "storage"
        assert rec.estimated_time == "15 minutes"

    def test_patterns_only_from_caller(
        self, synthesizer: RuleBasedRecommendationSynthesizer
    ) -> None:
        pattern = DriftPattern(
            pattern_type=PatternType.COMMON_ATTRIBUTE,
            affected_resources=tuple(f"aws_instance.r{i}" for i in range(12)),
            common_attributes=("subnet_id",),
            category="networking",
        )
        recs = synthesizer.synthesize([pattern], {}, RecommendationConfig())
        assert len(recs) == 1
        assert recs[0].priority == RecommendationPriority.CRITICAL
        assert recs[0].risk_level == "medium"
        assert recs[0].estimated_time == "4+ hours"


class TestOutputOptions:
    def test_actions_omitted(
        self,
        analyzer: DriftPatternAnalyzer,
        synthesizer: RuleBasedRecommendationSynthesizer,
        mixed_results: dict[str, DriftResult],
    ) -> None:
        config = RecommendationConfig().with_actions(False)
        recs = synthesizer.synthesize(analyzer.analyze(mixed_results), mixed_results, config)
        assert all(rec.commands == () and rec.manual_steps == () for rec in recs)

    def test_time_estimates_omitted(
        self,
        analyzer: DriftPatternAnalyzer,
        synthesizer: RuleBasedRecommendationSynthesizer,
        mixed_results: dict[str, DriftResult],
    ) -> None:
        config = RecommendationConfig().with_time_estimate(False)
        recs = synthesizer.synthesize(analyzer.analyze(mixed_results), mixed_results, config)
        assert all(rec.estimated_time == "" for rec in recs)
        assert all(rec.commands for rec in recs)

    def test_preventive_recommendations(
        self,
        synthesizer: RuleBasedRecommendationSynthesizer,
        mixed_results: dict[str, DriftResult],
    ) -> None:
        config = RecommendationConfig().with_preventive(True)
        recs = synthesizer.synthesize([], mixed_results, config)
        preventive = {rec.id: rec for rec in recs if rec.id.startswith("preventive-")}
        assert set(preventive) == {"preventive-monitoring", "preventive-state-locking"}
        assert preventive["preventive-monitoring"].type == RecommendationType.ALERT
        assert preventive["preventive-state-locking"].priority == RecommendationPriority.HIGH

    def test_no_preventive_without_drift(
        self, synthesizer: RuleBasedRecommendationSynthesizer
    ) -> None:
        config = RecommendationConfig().with_preventive(True)
        assert synthesizer.synthesize([], {}, config) == []
