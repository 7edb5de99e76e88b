"""Prometheus metrics configuration."""

from __future__ import annotations

from prometheus_client import (
    Counter,
    Histogram,
    Info,
)


# Application info
APP_INFO = Info("drift_advisor", "Drift recommendation engine info")
APP_INFO.info({
    "version": "1.0.0",
    "service": "drift-advisor",
})

# Engine metrics
RECOMMENDATION_RUNS_TOTAL = Counter(
    "drift_advisor_recommendation_runs_total",
    "Total number of recommendation runs",
    ["result"],  # "clean", "drift_detected", "invalid_input"
)

RECOMMENDATION_RUN_DURATION = Histogram(
    "drift_advisor_recommendation_run_duration_seconds",
    "Time taken to generate a recommendation summary",
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
)

DRIFTED_RESOURCES_ANALYZED = Counter(
    "drift_advisor_drifted_resources_analyzed_total",
    "Total number of drifted resources analyzed",
    ["severity"],
)

DRIFT_PATTERNS_FOUND = Counter(
    "drift_advisor_drift_patterns_found_total",
    "Total number of cross-resource drift patterns found",
    ["pattern_type"],
)

RECOMMENDATIONS_EMITTED = Counter(
    "drift_advisor_recommendations_emitted_total",
    "Total number of recommendations returned to callers",
    ["priority", "category"],
)
