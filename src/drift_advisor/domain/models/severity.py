"""Drift severity levels and their ordering."""

from __future__ import annotations

from enum import Enum
from typing import Any


class SeverityLevel(str, Enum):
    """Severity of a detected drift.

    Members compare by rank (``none < low < medium < high < critical``),
    not by their string labels, so ``max()`` and ``>=`` behave as expected
    when filtering and escalating.
    """

    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    @classmethod
    def parse(cls, label: str) -> SeverityLevel:
        """Parse a case-insensitive severity label."""
        try:
            return cls(label.strip().lower())
        except ValueError:
            valid = ", ".join(member.value for member in cls)
            raise ValueError(
                f"Unknown severity '{label}', expected one of: {valid}"
            ) from None

    def _coerce(self, other: Any) -> SeverityLevel | None:
        # Plain labels compare by rank too, never lexically.
        if isinstance(other, SeverityLevel):
            return other
        if isinstance(other, str):
            return SeverityLevel.parse(other)
        return None

    def __lt__(self, other: Any) -> bool:
        level = self._coerce(other)
        if level is None:
            return NotImplemented
        return self.rank < level.rank

    def __le__(self, other: Any) -> bool:
        level = self._coerce(other)
        if level is None:
            return NotImplemented
        return self.rank <= level.rank

    def __gt__(self, other: Any) -> bool:
        level = self._coerce(other)
        if level is None:
            return NotImplemented
        return self.rank > level.rank

    def __ge__(self, other: Any) -> bool:
        level = self._coerce(other)
        if level is None:
            return NotImplemented
        return self.rank >= level.rank

    def __str__(self) -> str:
        return self.value


_SEVERITY_RANK: dict[SeverityLevel, int] = {
    SeverityLevel.NONE: 0,
    SeverityLevel.LOW: 1,
    SeverityLevel.MEDIUM: 2,
    SeverityLevel.HIGH: 3,
    SeverityLevel.CRITICAL: 4,
}


def max_severity(severities: list[SeverityLevel]) -> SeverityLevel:
    """Return the highest severity, or NONE for an empty list."""
    return max(severities, default=SeverityLevel.NONE)
