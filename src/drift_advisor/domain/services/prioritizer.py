"""Recommendation filtering, ordering and summarization."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

import structlog

from drift_advisor.domain.models.recommendation import (
    ActionableRecommendation,
    RecommendationConfig,
    RecommendationSummary,
)
from drift_advisor.domain.ports.services import RecommendationPrioritizer


logger = structlog.get_logger(__name__)


def recommendation_sort_key(rec: ActionableRecommendation) -> tuple[int, int, int]:
    """Most urgent first: priority, then severity, then blast radius."""
    return (rec.priority.rank, -rec.severity.rank, -rec.resource_count)


def estimate_total_time(count: int) -> str:
    """Coarse effort estimate from the number of recommendations."""
    if count == 0:
        return "0 minutes"
    if count <= 5:
        return "2-4 hours"
    if count <= 10:
        return "4-8 hours"
    return "1-2 days"


class DefaultRecommendationPrioritizer(RecommendationPrioritizer):
    """Filters by minimum severity, sorts, truncates and aggregates."""

    def prioritize_and_summarize(
        self,
        recommendations: Sequence[ActionableRecommendation],
        config: RecommendationConfig,
    ) -> RecommendationSummary:
        filtered = self.filter_by_severity(recommendations, config)
        logger.info(
            "recommendations_filtered",
            before=len(recommendations),
            after=len(filtered),
            min_severity=config.min_severity.value,
        )

        ordered = self.sort(filtered)

        limited = self.truncate(ordered, config)
        if len(limited) < len(ordered):
            logger.info(
                "recommendations_limited",
                before=len(ordered),
                after=len(limited),
                max_recommendations=config.max_recommendations,
            )

        return self.summarize(limited)

    def filter_by_severity(
        self,
        recommendations: Sequence[ActionableRecommendation],
        config: RecommendationConfig,
    ) -> list[ActionableRecommendation]:
        return [rec for rec in recommendations if rec.severity >= config.min_severity]

    def sort(
        self, recommendations: Sequence[ActionableRecommendation]
    ) -> list[ActionableRecommendation]:
        # sorted() is stable, so residual ties keep their synthesis order.
        return sorted(recommendations, key=recommendation_sort_key)

    def truncate(
        self,
        recommendations: list[ActionableRecommendation],
        config: RecommendationConfig,
    ) -> list[ActionableRecommendation]:
        if config.is_unbounded or len(recommendations) <= config.max_recommendations:
            return recommendations
        return recommendations[: config.max_recommendations]

    def summarize(
        self, recommendations: list[ActionableRecommendation]
    ) -> RecommendationSummary:
        by_priority = Counter(rec.priority for rec in recommendations)
        by_type = Counter(rec.type for rec in recommendations)
        by_severity = Counter(rec.severity for rec in recommendations)
        by_category = Counter(rec.category for rec in recommendations)

        highest_priority = min(
            by_priority, key=lambda priority: priority.rank, default=None
        )

        most_common_category = ""
        if by_category:
            top_count = max(by_category.values())
            most_common_category = min(
                category for category, count in by_category.items() if count == top_count
            )

        return RecommendationSummary(
            total_recommendations=len(recommendations),
            by_priority=dict(by_priority),
            by_type=dict(by_type),
            by_severity=dict(by_severity),
            by_category=dict(by_category),
            estimated_total_time=estimate_total_time(len(recommendations)),
            highest_priority=highest_priority,
            most_common_category=most_common_category,
            recommendations=recommendations,
        )
