"""Service port interfaces (hexagonal architecture)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from contextlib import AbstractContextManager

from drift_advisor.domain.models.drift import DriftResult
from drift_advisor.domain.models.recommendation import (
    ActionableRecommendation,
    DriftPattern,
    RecommendationConfig,
    RecommendationSummary,
)


class PatternAnalyzer(ABC):
    """Port for cross-resource drift pattern analysis."""

    @abstractmethod
    def analyze(self, results: Mapping[str, DriftResult]) -> list[DriftPattern]:
        """Find patterns shared by several drifted resources."""


class RecommendationSynthesizer(ABC):
    """Port for turning patterns and drift results into recommendations."""

    @abstractmethod
    def synthesize(
        self,
        patterns: Sequence[DriftPattern],
        results: Mapping[str, DriftResult],
        config: RecommendationConfig,
    ) -> list[ActionableRecommendation]:
        """Build one recommendation per pattern and per drifted resource."""


class RecommendationPrioritizer(ABC):
    """Port for filtering, ordering and summarizing recommendations."""

    @abstractmethod
    def prioritize_and_summarize(
        self,
        recommendations: Sequence[ActionableRecommendation],
        config: RecommendationConfig,
    ) -> RecommendationSummary:
        """Filter, sort and truncate recommendations, then aggregate them."""


class RecommendationRunRecorder(ABC):
    """Port for observing engine runs (metrics, traces)."""

    @abstractmethod
    def track_run(self, result_count: int) -> AbstractContextManager[None]:
        """Context wrapping one run, entered before analysis starts."""

    @abstractmethod
    def record_rejected(self) -> None:
        """Record a run refused because of invalid input."""

    @abstractmethod
    def record_completed(
        self,
        results: Mapping[str, DriftResult],
        patterns: Sequence[DriftPattern],
        summary: RecommendationSummary,
        elapsed: float,
    ) -> None:
        """Record a finished run. Called inside ``track_run``."""
