"""Domain service that turns drift results into prioritized recommendations."""

from __future__ import annotations

import time
import uuid
from collections.abc import Mapping
from contextlib import nullcontext
from enum import Enum
from typing import Any

import structlog

from drift_advisor.domain.models.drift import DriftResult
from drift_advisor.domain.models.recommendation import (
    DriftPattern,
    PatternType,
    RecommendationConfig,
    RecommendationSummary,
)
from drift_advisor.domain.ports.services import (
    PatternAnalyzer,
    RecommendationPrioritizer,
    RecommendationRunRecorder,
    RecommendationSynthesizer,
)
from drift_advisor.domain.services.pattern_analyzer import DriftPatternAnalyzer
from drift_advisor.domain.services.prioritizer import DefaultRecommendationPrioritizer
from drift_advisor.domain.services.recommendation_synthesizer import (
    RuleBasedRecommendationSynthesizer,
)


logger = structlog.get_logger(__name__)


class RecommendationEngine:
    """Analyzes one snapshot of drift results and recommends actions.

    A run is analysis, synthesis, then prioritization and summarization,
    performed synchronously. The engine keeps no state between runs apart
    from its collaborators and the config it was built with, so one
    instance can be reused for any number of sequential calls.
    """

    def __init__(
        self,
        config: RecommendationConfig | None = None,
        analyzer: PatternAnalyzer | None = None,
        synthesizer: RecommendationSynthesizer | None = None,
        prioritizer: RecommendationPrioritizer | None = None,
        recorder: RecommendationRunRecorder | None = None,
    ) -> None:
        self._config = config or RecommendationConfig()
        self._analyzer = analyzer or DriftPatternAnalyzer()
        self._synthesizer = synthesizer or RuleBasedRecommendationSynthesizer()
        self._prioritizer = prioritizer or DefaultRecommendationPrioritizer()
        self._recorder = recorder

    @property
    def config(self) -> RecommendationConfig:
        return self._config

    def with_config(self, config: RecommendationConfig) -> RecommendationEngine:
        """Return an engine sharing these collaborators but using ``config``."""
        return RecommendationEngine(
            config=config,
            analyzer=self._analyzer,
            synthesizer=self._synthesizer,
            prioritizer=self._prioritizer,
            recorder=self._recorder,
        )

    def generate_recommendations(
        self, results: Mapping[str, DriftResult] | None
    ) -> RecommendationSummary:
        """Generate a prioritized recommendation summary.

        Raises:
            InvalidInputError: If ``results`` is None.
        """
        if results is None:
            logger.error("recommendation_input_invalid", reason="results is None")
            if self._recorder is not None:
                self._recorder.record_rejected()
            raise InvalidInputError("results cannot be None")

        config = self._config
        run_id = str(uuid.uuid4())
        started = time.perf_counter()
        tracked = (
            self._recorder.track_run(len(results))
            if self._recorder is not None
            else nullcontext()
        )

        with structlog.contextvars.bound_contextvars(run_id=run_id), tracked:
            logger.info("recommendation_generation_started", result_count=len(results))

            patterns = self._enabled_patterns(self._analyzer.analyze(results), config)
            logger.info("drift_patterns_analyzed", pattern_count=len(patterns))

            recommendations = self._synthesizer.synthesize(patterns, results, config)
            logger.info(
                "recommendations_generated", recommendation_count=len(recommendations)
            )

            summary = self._prioritizer.prioritize_and_summarize(recommendations, config)

            logger.info(
                "recommendation_generation_completed",
                total_recommendations=summary.total_recommendations,
                highest_priority=(
                    summary.highest_priority.value if summary.highest_priority else None
                ),
                most_common_category=summary.most_common_category,
            )

            if self._recorder is not None:
                self._recorder.record_completed(
                    results, patterns, summary, time.perf_counter() - started
                )
        return summary

    def _enabled_patterns(
        self, patterns: list[DriftPattern], config: RecommendationConfig
    ) -> list[DriftPattern]:
        disabled: set[PatternType] = set()
        if not config.group_by_resource_type:
            disabled.add(PatternType.RESOURCE_TYPE)
        if not config.group_by_severity:
            disabled.add(PatternType.HIGH_SEVERITY_CLUSTER)
        if not disabled:
            return patterns
        return [p for p in patterns if p.pattern_type not in disabled]


class ErrorType(str, Enum):
    """Classification of recommendation engine failures."""

    INVALID_INPUT = "invalid_input"


class RecommendationError(Exception):
    """Base error raised by the recommendation engine."""

    def __init__(
        self, error_type: ErrorType, message: str, context: dict[str, Any] | None = None
    ) -> None:
        super().__init__(message)
        self.error_type = error_type
        self.message = message
        self.context = dict(context or {})

    def __str__(self) -> str:
        return f"recommendation error [{self.error_type.value}]: {self.message}"


class InvalidInputError(RecommendationError):
    """Raised when the engine is called with unusable input."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorType.INVALID_INPUT, message, context)
