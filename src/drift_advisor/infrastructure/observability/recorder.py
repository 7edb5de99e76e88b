"""Engine run recorder backed by Prometheus and OpenTelemetry."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager

from opentelemetry import trace

from drift_advisor.domain.models.drift import DriftResult
from drift_advisor.domain.models.recommendation import DriftPattern, RecommendationSummary
from drift_advisor.domain.ports.services import RecommendationRunRecorder
from drift_advisor.infrastructure.observability.metrics import (
    DRIFT_PATTERNS_FOUND,
    DRIFTED_RESOURCES_ANALYZED,
    RECOMMENDATION_RUN_DURATION,
    RECOMMENDATION_RUNS_TOTAL,
    RECOMMENDATIONS_EMITTED,
)
from drift_advisor.infrastructure.observability.tracing import get_tracer


class ObservabilityRunRecorder(RecommendationRunRecorder):
    """Wraps each run in a span and, when enabled, updates Prometheus metrics."""

    def __init__(self, metrics_enabled: bool = True) -> None:
        self._metrics_enabled = metrics_enabled
        self._tracer = get_tracer()

    @contextmanager
    def track_run(self, result_count: int) -> Iterator[None]:
        with self._tracer.start_as_current_span(
            "generate_recommendations",
            attributes={"drift_advisor.result_count": result_count},
        ):
            yield

    def record_rejected(self) -> None:
        if self._metrics_enabled:
            RECOMMENDATION_RUNS_TOTAL.labels(result="invalid_input").inc()

    def record_completed(
        self,
        results: Mapping[str, DriftResult],
        patterns: Sequence[DriftPattern],
        summary: RecommendationSummary,
        elapsed: float,
    ) -> None:
        trace.get_current_span().set_attribute(
            "drift_advisor.recommendation_count", summary.total_recommendations
        )
        if not self._metrics_enabled:
            return

        drifted = [result for result in results.values() if result.has_drift]
        RECOMMENDATION_RUNS_TOTAL.labels(
            result="drift_detected" if drifted else "clean"
        ).inc()
        RECOMMENDATION_RUN_DURATION.observe(elapsed)
        for result in drifted:
            DRIFTED_RESOURCES_ANALYZED.labels(severity=result.overall_severity.value).inc()
        for pattern in patterns:
            DRIFT_PATTERNS_FOUND.labels(pattern_type=pattern.pattern_type.value).inc()
        for rec in summary.recommendations:
            RECOMMENDATIONS_EMITTED.labels(
                priority=rec.priority.value, category=rec.category
            ).inc()
