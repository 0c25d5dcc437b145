"""
Scenario-level metric aggregates and the report entity.

ScenarioMetrics is the unit of work: it is created on the first recording for
a scenario and updated domain by domain afterwards. PerformanceReport is the
engine's only externally visible output and is frozen once built.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from perf_insight.domain.value_objects.findings import Finding, PrioritizedRecommendation
from perf_insight.domain.value_objects.measurements import (
    InferenceMetrics,
    LoadMetrics,
    MetricDomain,
    NetworkMetrics,
    ResourceMetrics,
)


@dataclass
class Measurements:
    """The four independently optional measurement domains."""

    load: LoadMetrics | None = None
    inference: InferenceMetrics | None = None
    resource: ResourceMetrics | None = None
    network: NetworkMetrics | None = None

    def present_domains(self) -> list[MetricDomain]:
        """Domains that have been recorded, in analysis order."""
        present = []
        if self.load is not None:
            present.append(MetricDomain.LOAD)
        if self.inference is not None:
            present.append(MetricDomain.INFERENCE)
        if self.resource is not None:
            present.append(MetricDomain.RESOURCE)
        if self.network is not None:
            present.append(MetricDomain.NETWORK)
        return present

    def is_empty(self) -> bool:
        return not self.present_domains()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.load is not None:
            data["load"] = self.load.to_dict()
        if self.inference is not None:
            data["inference"] = self.inference.to_dict()
        if self.resource is not None:
            data["resource"] = self.resource.to_dict()
        if self.network is not None:
            data["network"] = self.network.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Measurements:
        return cls(
            load=LoadMetrics.from_dict(data["load"]) if data.get("load") is not None else None,
            inference=(
                InferenceMetrics.from_dict(data["inference"])
                if data.get("inference") is not None
                else None
            ),
            resource=(
                ResourceMetrics.from_dict(data["resource"])
                if data.get("resource") is not None
                else None
            ),
            network=(
                NetworkMetrics.from_dict(data["network"])
                if data.get("network") is not None
                else None
            ),
        )


@dataclass
class ScenarioMetrics:
    """All metrics recorded for one scenario."""

    scenario: str
    timestamp: str
    measurements: Measurements = field(default_factory=Measurements)

    def copy(self) -> ScenarioMetrics:
        """Return an independent deep copy."""
        return copy.deepcopy(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "scenario": self.scenario,
            "measurements": self.measurements.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScenarioMetrics:
        return cls(
            scenario=data["scenario"],
            timestamp=data.get("timestamp", ""),
            measurements=Measurements.from_dict(data.get("measurements") or {}),
        )


@dataclass(frozen=True)
class MetricsComparison:
    """Percentage changes against a baseline, split by direction. Both maps are read-only."""

    improvement: Mapping[str, float] = field(default_factory=dict)
    regression: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "improvement", MappingProxyType(dict(self.improvement)))
        object.__setattr__(self, "regression", MappingProxyType(dict(self.regression)))

    @property
    def has_changes(self) -> bool:
        return bool(self.improvement or self.regression)

    def to_dict(self) -> dict[str, Any]:
        return {"improvement": dict(self.improvement), "regression": dict(self.regression)}


@dataclass(frozen=True)
class PerformanceReport:
    """
    Performance analysis report for one scenario.

    Fields cannot be reassigned and the comparison maps are read-only.
    metrics and baseline are copies taken when the report was built, so
    changing them never reaches the engine or other reports.
    """

    session_id: str
    timestamp: str
    scenario: str
    metrics: ScenarioMetrics
    optimization_opportunities: tuple[str, ...]
    recommendations: tuple[str, ...]
    score: int
    performance_level: str
    baseline: ScenarioMetrics | None = None
    comparison: MetricsComparison | None = None
    findings: tuple[Finding, ...] = ()
    prioritized_recommendations: tuple[PrioritizedRecommendation, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready mapping."""
        return {
            "session_id": self.session_id,
            "timestamp": self.timestamp,
            "scenario": self.scenario,
            "metrics": self.metrics.to_dict(),
            "optimization_opportunities": list(self.optimization_opportunities),
            "recommendations": list(self.recommendations),
            "score": self.score,
            "performance_level": self.performance_level,
            "baseline": self.baseline.to_dict() if self.baseline else None,
            "comparison": self.comparison.to_dict() if self.comparison else None,
            "findings": [finding.to_dict() for finding in self.findings],
            "prioritized_recommendations": [
                rec.to_dict() for rec in self.prioritized_recommendations
            ],
        }
