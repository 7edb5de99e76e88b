"""Composition root for the recommendation engine."""

from __future__ import annotations

from drift_advisor.config import get_settings, Settings
from drift_advisor.domain.ports.services import (
    PatternAnalyzer,
    RecommendationPrioritizer,
    RecommendationSynthesizer,
)
from drift_advisor.domain.services.pattern_analyzer import DriftPatternAnalyzer
from drift_advisor.domain.services.prioritizer import DefaultRecommendationPrioritizer
from drift_advisor.domain.services.recommendation_service import RecommendationEngine
from drift_advisor.domain.services.recommendation_synthesizer import (
    RuleBasedRecommendationSynthesizer,
)
from drift_advisor.infrastructure.observability.logging import setup_logging
from drift_advisor.infrastructure.observability.recorder import ObservabilityRunRecorder
from drift_advisor.infrastructure.observability.tracing import setup_tracing


class ServiceContainer:
    """Simple dependency injection container.

    Assembles the engine's collaborators once from settings; callers that
    need a different config derive engines with ``with_config``.
    """

    _instance: ServiceContainer | None = None

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._analyzer = DriftPatternAnalyzer()
        self._synthesizer = RuleBasedRecommendationSynthesizer()
        self._prioritizer = DefaultRecommendationPrioritizer()
        self._engine: RecommendationEngine | None = None

    @classmethod
    def get_instance(cls) -> ServiceContainer:
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        cls._instance = None

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def pattern_analyzer(self) -> PatternAnalyzer:
        return self._analyzer

    @property
    def synthesizer(self) -> RecommendationSynthesizer:
        return self._synthesizer

    @property
    def prioritizer(self) -> RecommendationPrioritizer:
        return self._prioritizer

    @property
    def recommendation_engine(self) -> RecommendationEngine:
        if self._engine is None:
            self._engine = build_recommendation_engine(
                self._settings,
                analyzer=self._analyzer,
                synthesizer=self._synthesizer,
                prioritizer=self._prioritizer,
            )
        return self._engine


def build_recommendation_engine(
    settings: Settings,
    analyzer: PatternAnalyzer | None = None,
    synthesizer: RecommendationSynthesizer | None = None,
    prioritizer: RecommendationPrioritizer | None = None,
) -> RecommendationEngine:
    """Build an engine configured from ``settings``."""
    return RecommendationEngine(
        config=settings.recommendations.to_config(),
        analyzer=analyzer,
        synthesizer=synthesizer,
        prioritizer=prioritizer,
        recorder=ObservabilityRunRecorder(
            metrics_enabled=settings.observability.metrics_enabled
        ),
    )


def bootstrap(settings: Settings | None = None) -> ServiceContainer:
    """Configure logging and tracing, then return the shared container."""
    settings = settings or get_settings()
    setup_logging(settings.observability.log_level, settings.observability.json_logs)
    setup_tracing(settings.observability)
    ServiceContainer._instance = ServiceContainer(settings)
    return ServiceContainer._instance
