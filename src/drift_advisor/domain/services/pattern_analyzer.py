"""Cross-resource drift pattern analysis."""

from __future__ import annotations

from collections.abc import Mapping

import structlog

from drift_advisor.domain.models.drift import DriftResult
from drift_advisor.domain.models.recommendation import DriftPattern, PatternType
from drift_advisor.domain.models.severity import SeverityLevel
from drift_advisor.domain.ports.services import PatternAnalyzer
from drift_advisor.domain.services.classification import (
    categorize_attribute,
    categorize_resource_type,
    extract_resource_type,
)


logger = structlog.get_logger(__name__)

_MIN_GROUP_SIZE = 2
HIGH_SEVERITY_CATEGORY = "critical"


class DriftPatternAnalyzer(PatternAnalyzer):
    """Groups drifted resources by shared attribute, type and severity.

    Resource IDs are visited in sorted order and groups are emitted in
    sorted key order, so the same input always yields the same patterns.
    A resource may belong to several patterns at once.
    """

    def analyze(self, results: Mapping[str, DriftResult]) -> list[DriftPattern]:
        drifted = [
            (resource_id, results[resource_id])
            for resource_id in sorted(results)
            if results[resource_id].has_drift
        ]

        patterns = [
            *self._common_attribute_patterns(drifted),
            *self._resource_type_patterns(drifted),
            *self._high_severity_patterns(drifted),
        ]
        logger.debug(
            "drift_patterns_found",
            drifted_resources=len(drifted),
            pattern_count=len(patterns),
        )
        return patterns

    def _common_attribute_patterns(
        self, drifted: list[tuple[str, DriftResult]]
    ) -> list[DriftPattern]:
        groups: dict[str, list[str]] = {}
        for resource_id, result in drifted:
            for diff in result.differences:
                members = groups.setdefault(diff.attribute_name, [])
                if resource_id not in members:
                    members.append(resource_id)

        return [
            DriftPattern(
                pattern_type=PatternType.COMMON_ATTRIBUTE,
                affected_resources=tuple(groups[attribute]),
                common_attributes=(attribute,),
                category=categorize_attribute(attribute),
            )
            for attribute in sorted(groups)
            if len(groups[attribute]) >= _MIN_GROUP_SIZE
        ]

    def _resource_type_patterns(
        self, drifted: list[tuple[str, DriftResult]]
    ) -> list[DriftPattern]:
        groups: dict[str, list[str]] = {}
        for resource_id, _ in drifted:
            groups.setdefault(extract_resource_type(resource_id), []).append(resource_id)

        return [
            DriftPattern(
                pattern_type=PatternType.RESOURCE_TYPE,
                affected_resources=tuple(groups[resource_type]),
                common_attributes=("resource_type",),
                category=categorize_resource_type(resource_type),
            )
            for resource_type in sorted(groups)
            if len(groups[resource_type]) >= _MIN_GROUP_SIZE
        ]

    def _high_severity_patterns(
        self, drifted: list[tuple[str, DriftResult]]
    ) -> list[DriftPattern]:
        affected = [
            resource_id
            for resource_id, result in drifted
            if result.overall_severity >= SeverityLevel.HIGH
        ]
        if not affected:
            return []
        return [
            DriftPattern(
                pattern_type=PatternType.HIGH_SEVERITY_CLUSTER,
                affected_resources=tuple(affected),
                common_attributes=("severity",),
                category=HIGH_SEVERITY_CATEGORY,
                severity=SeverityLevel.HIGH,
            )
        ]
