"""Drift detection domain models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field, model_validator

from drift_advisor.domain.models.base import utc_now, ValueObject
from drift_advisor.domain.models.severity import max_severity, SeverityLevel


class AttributeDifference(ValueObject):
    """A single attribute whose actual value differs from the declared one."""

    attribute_name: str
    expected_value: Any = None
    actual_value: Any = None
    severity: SeverityLevel = SeverityLevel.LOW
    difference_type: str = ""
    description: str = ""

    def __str__(self) -> str:
        return (
            f"{self.attribute_name}: expected '{self.expected_value}', "
            f"got '{self.actual_value}' ({self.difference_type})"
        )


class DriftResult(ValueObject):
    """Drift snapshot for one resource.

    ``has_drift`` defaults to whether any differences were recorded, and
    ``overall_severity`` is always derived from the differences: the
    highest difference severity when the resource drifted, otherwise
    ``SeverityLevel.NONE``. A caller-supplied ``overall_severity`` is
    ignored.
    """

    resource_id: str
    instance_id: str = ""
    resource_type: str = ""
    has_drift: bool | None = None
    differences: tuple[AttributeDifference, ...] = ()
    checked_attributes: tuple[str, ...] = ()
    detection_time: datetime = Field(default_factory=utc_now)
    error_message: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)
    overall_severity: SeverityLevel = SeverityLevel.NONE

    @model_validator(mode="after")
    def derive_severity(self) -> DriftResult:
        has_drift = self.has_drift
        if has_drift is None:
            has_drift = len(self.differences) > 0
        severity = (
            max_severity([diff.severity for diff in self.differences])
            if has_drift
            else SeverityLevel.NONE
        )
        object.__setattr__(self, "has_drift", has_drift)
        object.__setattr__(self, "overall_severity", severity)
        return self

    def with_difference(self, difference: AttributeDifference) -> DriftResult:
        """Return a copy of this result with one more recorded difference."""
        data = self.model_dump()
        data["differences"] = (*self.differences, difference)
        data["has_drift"] = True
        return DriftResult.model_validate(data)

    @property
    def drifted_attributes(self) -> list[str]:
        return [diff.attribute_name for diff in self.differences]

    @property
    def drifted_count(self) -> int:
        return len(self.differences)

    def summary(self) -> str:
        """Human-readable one-line summary."""
        if not self.has_drift:
            return (
                f"No drift detected for resource {self.resource_id} "
                f"(checked {len(self.checked_attributes)} attributes)"
            )

        counts: dict[SeverityLevel, int] = {}
        for diff in self.differences:
            counts[diff.severity] = counts.get(diff.severity, 0) + 1

        parts = [
            f"{counts[severity]} {severity.value}"
            for severity in sorted(counts, reverse=True)
            if severity > SeverityLevel.NONE
        ]
        return (
            f"Drift detected for resource {self.resource_id}: "
            f"{', '.join(parts)} differences across "
            f"{len(self.drifted_attributes)} attributes"
        )

    def __str__(self) -> str:
        if not self.has_drift:
            return (
                f"DriftResult(resource_id={self.resource_id}, has_drift=False, "
                f"checked_attributes={len(self.checked_attributes)})"
            )
        return (
            f"DriftResult(resource_id={self.resource_id}, has_drift=True, "
            f"differences={len(self.differences)}, "
            f"severity={self.overall_severity.value})"
        )
