"""
Structured analysis results.

The report boundary exposes flat strings; these records keep the domain,
severity and priority alongside each message for callers that want them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .measurements import MetricDomain


class Severity(Enum):
    """Finding severity levels."""

    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class RecommendationPriority(Enum):
    """Recommendation priority groups, highest first."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class Finding:
    """A detected optimization opportunity."""

    domain: MetricDomain
    severity: Severity
    metric: str
    message: str
    value: float | None = None
    threshold: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "domain": self.domain.value,
            "severity": self.severity.value,
            "metric": self.metric,
            "message": self.message,
            "value": self.value,
            "threshold": self.threshold,
        }


@dataclass(frozen=True)
class PrioritizedRecommendation:
    """A recommendation string with its priority group."""

    priority: RecommendationPriority
    action: str

    def to_dict(self) -> dict[str, Any]:
        return {"priority": self.priority.value, "action": self.action}
