"""
Performance score calculation.

Folds all four domains into a single 0-100 score. Each domain owns a share of
the points (load 30, inference 25, resource 25, network 20) and loses them in
steps as its metrics cross warning and opportunity thresholds.
"""

from dataclasses import dataclass
from enum import Enum

from perf_insight.domain.entities.scenario_metrics import ScenarioMetrics
from perf_insight.domain.value_objects.measurements import (
    InferenceMetrics,
    LoadMetrics,
    MetricDomain,
    NetworkMetrics,
    ResourceMetrics,
)

MAX_SCORE = 100

DOMAIN_WEIGHTS = {
    MetricDomain.LOAD: 30,
    MetricDomain.INFERENCE: 25,
    MetricDomain.RESOURCE: 25,
    MetricDomain.NETWORK: 20,
}


class PerformanceLevel(Enum):
    """Score bands."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    NEEDS_IMPROVEMENT = "needs_improvement"
    POOR = "poor"


# Lower bound of each band, checked top-down
SCORE_BANDS = (
    (90, PerformanceLevel.EXCELLENT),
    (80, PerformanceLevel.GOOD),
    (70, PerformanceLevel.FAIR),
    (60, PerformanceLevel.NEEDS_IMPROVEMENT),
)

INTERPRETATIONS = {
    PerformanceLevel.EXCELLENT: "Excellent! Performance is optimal with minimal issues.",
    PerformanceLevel.GOOD: "Good. Performance is acceptable with minor optimization opportunities.",
    PerformanceLevel.FAIR: "Fair. Performance is adequate but has room for improvement.",
    PerformanceLevel.NEEDS_IMPROVEMENT: (
        "Needs Improvement. Several performance issues should be addressed."
    ),
    PerformanceLevel.POOR: "Poor. Significant performance issues require immediate attention.",
}


@dataclass(frozen=True)
class Penalty:
    """Stepped deduction: `severe` points past `severe_at`, else `mild` points past `mild_at`."""

    mild_at: float
    mild: int
    severe_at: float
    severe: int

    def apply(self, value: float) -> int:
        if value > self.severe_at:
            return self.severe
        if value > self.mild_at:
            return self.mild
        return 0


TOTAL_LOAD = Penalty(mild_at=5000, mild=8, severe_at=7500, severe=15)
INJECTION = Penalty(mild_at=500, mild=2, severe_at=750, severe=5)
ARTICLE_PROCESSING = Penalty(mild_at=3000, mild=3, severe_at=4500, severe=7)
UI_RENDERING = Penalty(mild_at=1000, mild=1, severe_at=1500, severe=3)

API_RESPONSE = Penalty(mild_at=2000, mild=5, severe_at=3000, severe=10)
OFFSCREEN = Penalty(mild_at=4000, mild=4, severe_at=6000, severe=8)
BOTTLENECK_COUNT = Penalty(mild_at=0, mild=3, severe_at=2, severe=7)

HEAP_PERCENT = Penalty(mild_at=60, mild=5, severe_at=80, severe=10)
STORAGE_PERCENT = Penalty(mild_at=60, mild=4, severe_at=80, severe=8)
LEAK_PENALTY = 2

FAILED_REQUESTS = Penalty(mild_at=0, mild=5, severe_at=5, severe=10)
SLOW_REQUESTS = Penalty(mild_at=2, mild=3, severe_at=5, severe=6)
NETWORK_OVERHEAD = Penalty(mild_at=5000, mild=2, severe_at=10000, severe=4)


class ScoreCalculator:
    """Calculates the weighted 0-100 performance score."""

    def calculate_score(self, metrics: ScenarioMetrics) -> int:
        """Calculate overall performance score (0-100)."""
        measurements = metrics.measurements
        score = MAX_SCORE

        if measurements.load is not None:
            score -= self._capped(MetricDomain.LOAD, self._load_penalty(measurements.load))
        if measurements.inference is not None:
            score -= self._capped(
                MetricDomain.INFERENCE, self._inference_penalty(measurements.inference)
            )
        if measurements.resource is not None:
            score -= self._capped(
                MetricDomain.RESOURCE, self._resource_penalty(measurements.resource)
            )
        if measurements.network is not None:
            score -= self._capped(MetricDomain.NETWORK, self._network_penalty(measurements.network))

        return max(0, min(MAX_SCORE, score))

    def domain_breakdown(self, metrics: ScenarioMetrics) -> dict[str, int]:
        """Points kept per recorded domain, out of its weight."""
        measurements = metrics.measurements
        penalties = {
            MetricDomain.LOAD: (measurements.load, self._load_penalty),
            MetricDomain.INFERENCE: (measurements.inference, self._inference_penalty),
            MetricDomain.RESOURCE: (measurements.resource, self._resource_penalty),
            MetricDomain.NETWORK: (measurements.network, self._network_penalty),
        }

        breakdown = {}
        for domain, (record, penalty) in penalties.items():
            if record is None:
                continue
            breakdown[domain.value] = DOMAIN_WEIGHTS[domain] - self._capped(domain, penalty(record))
        return breakdown

    @staticmethod
    def _capped(domain: MetricDomain, penalty: int) -> int:
        return min(penalty, DOMAIN_WEIGHTS[domain])

    @staticmethod
    def _load_penalty(load: LoadMetrics) -> int:
        return (
            TOTAL_LOAD.apply(load.total_load_time)
            + INJECTION.apply(load.content_script_injection_time)
            + ARTICLE_PROCESSING.apply(load.article_processing_duration)
            + UI_RENDERING.apply(load.ui_rendering_time)
        )

    @staticmethod
    def _inference_penalty(inference: InferenceMetrics) -> int:
        return (
            API_RESPONSE.apply(inference.api_response_time)
            + OFFSCREEN.apply(inference.offscreen_processing_duration)
            + BOTTLENECK_COUNT.apply(len(inference.bottlenecks))
        )

    @staticmethod
    def _resource_penalty(resource: ResourceMetrics) -> int:
        penalty = 0

        heap_percent = resource.heap_usage_percent
        if heap_percent is not None:
            penalty += HEAP_PERCENT.apply(heap_percent)

        penalty += STORAGE_PERCENT.apply(resource.storage_quota.percent_used)

        hit_rate = resource.cache.hit_rate
        if hit_rate < 0.4:
            penalty += 5
        elif hit_rate < 0.6:
            penalty += 2

        if resource.potential_leaks:
            penalty += LEAK_PENALTY

        return penalty

    @staticmethod
    def _network_penalty(network: NetworkMetrics) -> int:
        return (
            FAILED_REQUESTS.apply(network.failed_requests)
            + SLOW_REQUESTS.apply(len(network.slow_requests))
            + NETWORK_OVERHEAD.apply(network.total_overhead)
        )


def performance_level(score: float) -> PerformanceLevel:
    """Map a score onto its band."""
    for lower_bound, level in SCORE_BANDS:
        if score >= lower_bound:
            return level
    return PerformanceLevel.POOR


def score_interpretation(score: float) -> str:
    """One-line description of the score's band."""
    return INTERPRETATIONS[performance_level(score)]


def calculate_score(metrics: ScenarioMetrics) -> int:
    """Convenience wrapper around ScoreCalculator.calculate_score."""
    return ScoreCalculator().calculate_score(metrics)
