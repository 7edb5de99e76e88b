"""Rule-based recommendation synthesis."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import ClassVar

import structlog

from drift_advisor.domain.models.drift import DriftResult
from drift_advisor.domain.models.recommendation import (
    ActionableRecommendation,
    DriftPattern,
    PatternType,
    RecommendationConfig,
    RecommendationPriority,
    RecommendationType,
)
from drift_advisor.domain.models.severity import SeverityLevel
from drift_advisor.domain.ports.services import RecommendationSynthesizer
from drift_advisor.domain.services.classification import (
    categorize_resource_type,
    extract_resource_type,
)


logger = structlog.get_logger(__name__)


class RuleBasedRecommendationSynthesizer(RecommendationSynthesizer):
    """Maps drift patterns and drifted resources to recommendations.

    Every pattern yields one recommendation and, independently, every
    drifted resource yields one resource-specific recommendation. The
    output is unordered; prioritization happens downstream.
    """

    # (minimum frequency, priority), checked from the top
    DEFAULT_FREQUENCY_LADDER: ClassVar[tuple[tuple[int, RecommendationPriority], ...]] = (
        (10, RecommendationPriority.CRITICAL),
        (5, RecommendationPriority.HIGH),
        (2, RecommendationPriority.MEDIUM),
    )

    SEVERITY_PRIORITY: ClassVar[dict[SeverityLevel, RecommendationPriority]] = {
        SeverityLevel.CRITICAL: RecommendationPriority.CRITICAL,
        SeverityLevel.HIGH: RecommendationPriority.HIGH,
        SeverityLevel.MEDIUM: RecommendationPriority.MEDIUM,
    }

    SEVERITY_TYPE: ClassVar[dict[SeverityLevel, RecommendationType]] = {
        SeverityLevel.CRITICAL: RecommendationType.UPDATE,
        SeverityLevel.HIGH: RecommendationType.REVIEW,
        SeverityLevel.MEDIUM: RecommendationType.REVIEW,
    }

    def __init__(
        self,
        frequency_ladder: Sequence[tuple[int, RecommendationPriority]] | None = None,
    ) -> None:
        ladder = frequency_ladder or self.DEFAULT_FREQUENCY_LADDER
        self._frequency_ladder = tuple(sorted(ladder, key=lambda step: step[0], reverse=True))

    def synthesize(
        self,
        patterns: Sequence[DriftPattern],
        results: Mapping[str, DriftResult],
        config: RecommendationConfig,
    ) -> list[ActionableRecommendation]:
        recommendations: list[ActionableRecommendation] = []

        for index, pattern in enumerate(patterns):
            if pattern.pattern_type == PatternType.COMMON_ATTRIBUTE:
                recommendations.append(self._attribute_drift_recommendation(pattern, index))
            elif pattern.pattern_type == PatternType.RESOURCE_TYPE:
                recommendations.append(self._resource_type_recommendation(pattern, index))
            elif pattern.pattern_type == PatternType.HIGH_SEVERITY_CLUSTER:
                recommendations.append(self._high_severity_recommendation(pattern, index))

        drifted_ids = [rid for rid in sorted(results) if results[rid].has_drift]
        recommendations.extend(
            self._resource_recommendation(resource_id, results[resource_id])
            for resource_id in drifted_ids
        )

        if config.include_preventive and drifted_ids:
            recommendations.extend(self._preventive_recommendations())

        logger.debug(
            "recommendations_synthesized",
            pattern_count=len(patterns),
            resource_count=len(drifted_ids),
            recommendation_count=len(recommendations),
        )
        return [self._apply_output_options(rec, config) for rec in recommendations]

    # Priority and type policy

    def priority_from_frequency(self, frequency: int) -> RecommendationPriority:
        for threshold, priority in self._frequency_ladder:
            if frequency >= threshold:
                return priority
        return RecommendationPriority.LOW

    def priority_from_severity(self, severity: SeverityLevel) -> RecommendationPriority:
        return self.SEVERITY_PRIORITY.get(severity, RecommendationPriority.LOW)

    def recommendation_type_from_severity(self, severity: SeverityLevel) -> RecommendationType:
        return self.SEVERITY_TYPE.get(severity, RecommendationType.IGNORE)

    # Pattern recommendations

    def _attribute_drift_recommendation(
        self, pattern: DriftPattern, index: int
    ) -> ActionableRecommendation:
        attribute = pattern.common_attributes[0]
        count = pattern.frequency
        return ActionableRecommendation(
            id=f"attr-drift-{index}",
            title=f"Fix {attribute} attribute drift across {count} resources",
            description=(
                f"Multiple resources have drift in the '{attribute}' attribute. "
                "This suggests a systematic configuration issue."
            ),
            type=RecommendationType.REVIEW,
            priority=self.priority_from_frequency(count),
            severity=SeverityLevel.MEDIUM,
            affected_resources=pattern.affected_resources,
            resource_count=count,
            commands=["terraform plan", "terraform apply"],
            manual_steps=[
                f"Review the '{attribute}' attribute configuration in your Terraform files",
                "Check if this attribute should be consistent across resources",
                "Update the configuration to match the desired state",
                "Apply changes using terraform apply",
            ],
            estimated_time=estimate_time_for_resources(count),
            risk_level=assess_risk_level(pattern.category, count),
            category=pattern.category,
            tags=["bulk-fix", "attribute-drift", attribute],
        )

    def _resource_type_recommendation(
        self, pattern: DriftPattern, index: int
    ) -> ActionableRecommendation:
        resource_type = extract_resource_type(pattern.affected_resources[0])
        count = pattern.frequency
        targets = " ".join(f"-target={rid}" for rid in pattern.affected_resources)
        return ActionableRecommendation(
            id=f"type-drift-{index}",
            title=f"Address drift in {resource_type} resources",
            description=(
                f"{count} {resource_type} resources have configuration drift. "
                "Consider reviewing the module or configuration template."
            ),
            type=RecommendationType.INVESTIGATE,
            priority=self.priority_from_frequency(count),
            severity=SeverityLevel.MEDIUM,
            affected_resources=pattern.affected_resources,
            resource_count=count,
            commands=[f"terraform plan {targets}", "terraform apply"],
            manual_steps=[
                f"Review the {resource_type} resource configuration",
                "Check if there's a common module or template causing the drift",
                "Update the configuration to prevent future drift",
                "Consider using terraform modules for consistency",
            ],
            estimated_time=estimate_time_for_resources(count),
            risk_level=assess_risk_level(pattern.category, count),
            category=pattern.category,
            tags=["resource-type", "investigation", resource_type],
        )

    def _high_severity_recommendation(
        self, pattern: DriftPattern, index: int
    ) -> ActionableRecommendation:
        # Always escalated, whatever the cluster size.
        return ActionableRecommendation(
            id=f"high-severity-{index}",
            title="URGENT: Address critical/high severity drift",
            description=(
                f"{pattern.frequency} resources have critical or high severity drift "
                "that requires immediate attention."
            ),
            type=RecommendationType.UPDATE,
            priority=RecommendationPriority.CRITICAL,
            severity=SeverityLevel.CRITICAL,
            affected_resources=pattern.affected_resources,
            resource_count=pattern.frequency,
            commands=["terraform plan", "terraform apply"],
            manual_steps=[
                "Immediately review the affected resources",
                "Assess the security and operational impact",
                "Create a backup or snapshot if necessary",
                "Apply fixes during the next maintenance window",
                "Monitor the resources after applying changes",
            ],
            estimated_time="1-2 hours",
            risk_level="high",
            category="critical",
            tags=["urgent", "high-severity", "immediate-action"],
        )

    # Resource recommendations

    def _resource_recommendation(
        self, resource_id: str, result: DriftResult
    ) -> ActionableRecommendation:
        resource_type = extract_resource_type(resource_id)
        severity = result.overall_severity
        return ActionableRecommendation(
            id=f"resource-{resource_id.replace('.', '-')}",
            title=f"Fix drift in {resource_id}",
            description=(
                f"Resource {resource_id} has {len(result.differences)} configuration "
                "differences that need to be addressed."
            ),
            type=self.recommendation_type_from_severity(severity),
            priority=self.priority_from_severity(severity),
            severity=severity,
            affected_resources=(resource_id,),
            resource_count=1,
            commands=[
                f"terraform plan -target={resource_id}",
                f"terraform apply -target={resource_id}",
            ],
            manual_steps=self._manual_steps_for_resource(resource_id, result),
            estimated_time=estimate_time_for_single_resource(result),
            risk_level=assess_risk_level_for_resource(resource_type, severity),
            category=categorize_resource_type(resource_type),
            tags=["single-resource", resource_type, severity.value],
        )

    def _manual_steps_for_resource(self, resource_id: str, result: DriftResult) -> list[str]:
        steps = [
            f"Review the current configuration for {resource_id}",
            "Compare with the desired state in your Terraform files",
        ]
        steps.extend(
            f"Update {diff.attribute_name} from '{diff.actual_value}' to '{diff.expected_value}'"
            for diff in result.differences
        )
        steps.append("Apply the changes using terraform apply")
        steps.append("Verify the resource is in the expected state")
        return steps

    def _preventive_recommendations(self) -> list[ActionableRecommendation]:
        return [
            ActionableRecommendation(
                id="preventive-monitoring",
                title="Implement regular drift detection",
                description="Set up automated drift detection to catch configuration changes early.",
                type=RecommendationType.ALERT,
                priority=RecommendationPriority.MEDIUM,
                severity=SeverityLevel.LOW,
                commands=[
                    "# Add to CI/CD pipeline:",
                    "terraform plan -detailed-exitcode",
                    "# Schedule regular drift checks",
                ],
                manual_steps=[
                    "Set up a scheduled job to run drift detection daily",
                    "Configure alerts for when drift is detected",
                    "Document the drift detection process for your team",
                    "Consider using Terraform Cloud or similar for automated checks",
                ],
                estimated_time="2-4 hours",
                risk_level="low",
                category="automation",
                tags=["preventive", "monitoring", "automation"],
            ),
            ActionableRecommendation(
                id="preventive-state-locking",
                title="Implement Terraform state locking",
                description="Use remote state with locking to prevent concurrent modifications.",
                type=RecommendationType.ALERT,
                priority=RecommendationPriority.HIGH,
                severity=SeverityLevel.MEDIUM,
                manual_steps=[
                    "Configure remote state backend (S3, Azure Storage, etc.)",
                    "Enable state locking (DynamoDB for S3, etc.)",
                    "Update team procedures to use shared state",
                    "Train team members on proper Terraform workflows",
                ],
                estimated_time="4-6 hours",
                risk_level="medium",
                category="infrastructure",
                tags=["preventive", "state-management", "collaboration"],
            ),
        ]

    def _apply_output_options(
        self, recommendation: ActionableRecommendation, config: RecommendationConfig
    ) -> ActionableRecommendation:
        update: dict[str, object] = {}
        if not config.include_actions:
            update["commands"] = ()
            update["manual_steps"] = ()
        if not config.include_time_estimate:
            update["estimated_time"] = ""
        if not update:
            return recommendation
        return recommendation.model_copy(update=update)


def estimate_time_for_resources(count: int) -> str:
    if count == 1:
        return "15-30 minutes"
    if count <= 5:
        return "1-2 hours"
    if count <= 10:
        return "2-4 hours"
    return "4+ hours"


def estimate_time_for_single_resource(result: DriftResult) -> str:
    diff_count = len(result.differences)
    if diff_count == 1:
        return "15 minutes"
    if diff_count <= 3:
        return "30 minutes"
    return "1 hour"


def assess_risk_level(category: str, resource_count: int) -> str:
    """Risk of a bulk change touching ``resource_count`` resources."""
    if category in ("security", "critical"):
        return "high"
    _large_change = 10
    if resource_count > _large_change:
        return "medium"
    return "low"


def assess_risk_level_for_resource(resource_type: str, severity: SeverityLevel) -> str:
    if severity == SeverityLevel.CRITICAL:
        return "high"
    if "security" in resource_type or "iam" in resource_type:
        return "medium"
    return "low"
