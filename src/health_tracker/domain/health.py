"""Health analysis domain models."""

from dataclasses import dataclass
from enum import Enum


class HealthLevel(str, Enum):
    """Qualitative bucket for a health score."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"

    @classmethod
    def from_score(cls, score: int) -> "HealthLevel":
        """Map a 0-100 score to its level."""
        if score >= 70:
            return cls.EXCELLENT
        if score >= 50:
            return cls.GOOD
        if score >= 30:
            return cls.FAIR
        return cls.POOR

    @property
    def label(self) -> str:
        return _LEVEL_LABELS[self]

    @property
    def color(self) -> str:
        return _LEVEL_COLORS[self]


_LEVEL_LABELS = {
    HealthLevel.EXCELLENT: "Excellent Choice!",
    HealthLevel.GOOD: "Good Choice",
    HealthLevel.FAIR: "Fair Choice",
    HealthLevel.POOR: "Consider Alternatives",
}

_LEVEL_COLORS = {
    HealthLevel.EXCELLENT: "#22c55e",
    HealthLevel.GOOD: "#84cc16",
    HealthLevel.FAIR: "#f59e0b",
    HealthLevel.POOR: "#ef4444",
}


@dataclass(frozen=True)
class HealthReport:
    """Heuristic health assessment of a food portion."""

    score: int
    level: HealthLevel
    warnings: tuple[str, ...] = ()
    highlights: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()
    alternatives: tuple[str, ...] = ()
