"""
Recommendation generation.

Maps detected problems to actionable guidance. Thresholds here are set
independently of (and more conservatively than) the opportunity thresholds,
so a scenario can have recommendations without opportunities and vice versa.
"""

from perf_insight.domain.entities.scenario_metrics import ScenarioMetrics
from perf_insight.domain.value_objects.findings import (
    PrioritizedRecommendation,
    RecommendationPriority,
)
from perf_insight.domain.value_objects.measurements import (
    InferenceMetrics,
    LoadMetrics,
    NetworkMetrics,
    ResourceMetrics,
)
from perf_insight.domain.value_objects.thresholds import DEFAULT_THRESHOLDS, AnalysisThresholds

PROGRESSIVE_LOADING = "Implement progressive loading to improve perceived performance"
CODE_SPLITTING = "Consider code splitting to reduce initial bundle size"
RESULT_CACHING = "Implement result caching for frequently processed content"
STREAMING_RESPONSES = "Consider using streaming responses for better UX"
WORKER_PARALLELIZATION = "Optimize offscreen document processing with Web Workers"
MEMORY_CLEANUP = "Implement memory cleanup routines"
REFERENCE_RETENTION = "Review object retention and remove unnecessary references"
LRU_EVICTION = "Implement LRU cache eviction strategy"
QUOTA_MONITORING = "Add storage quota monitoring and cleanup"
BACKOFF_RETRY = "Implement exponential backoff retry strategy"
OFFLINE_FALLBACK = "Add offline fallback mechanisms"
REQUEST_TIMEOUT = "Implement request timeout and cancellation"
REQUEST_CACHING = "Consider using service worker for request caching"

BOTTLENECK_TEMPLATE = "Investigate processing bottleneck: {}"
LEAK_TEMPLATE = "Investigate potential memory leak: {}"

HIGH_PRIORITY_KEYWORDS = ("memory leak", "failed", "critical", "retry")
MEDIUM_PRIORITY_KEYWORDS = ("slow", "high", "optimize", "bottleneck")


def unique(items: list[str]) -> list[str]:
    """Set-deduplicate while keeping first-seen order."""
    return list(dict.fromkeys(items))


class RecommendationGenerator:
    """Generates actionable recommendations from scenario metrics."""

    def __init__(self, thresholds: AnalysisThresholds = DEFAULT_THRESHOLDS) -> None:
        self.thresholds = thresholds

    def generate_recommendations(self, metrics: ScenarioMetrics) -> list[str]:
        """Generate performance recommendations."""
        recommendations: list[str] = []
        measurements = metrics.measurements

        if measurements.load is not None:
            recommendations.extend(self._load_recommendations(measurements.load))
        if measurements.inference is not None:
            recommendations.extend(self._inference_recommendations(measurements.inference))
        if measurements.resource is not None:
            recommendations.extend(self._resource_recommendations(measurements.resource))
        if measurements.network is not None:
            recommendations.extend(self._network_recommendations(measurements.network))

        return unique(recommendations)

    def _load_recommendations(self, load: LoadMetrics) -> list[str]:
        if load.total_load_time > self.thresholds.total_load_ms:
            return [PROGRESSIVE_LOADING, CODE_SPLITTING]
        return []

    def _inference_recommendations(self, inference: InferenceMetrics) -> list[str]:
        recommendations = []

        if inference.api_response_time > self.thresholds.api_response_ms:
            recommendations.extend([RESULT_CACHING, STREAMING_RESPONSES])

        if inference.offscreen_processing_duration > self.thresholds.offscreen_processing_ms:
            recommendations.append(WORKER_PARALLELIZATION)

        # The same bottleneck is often reported by several instrumentation passes
        recommendations.extend(
            BOTTLENECK_TEMPLATE.format(bottleneck) for bottleneck in unique(inference.bottlenecks)
        )

        return recommendations

    def _resource_recommendations(self, resource: ResourceMetrics) -> list[str]:
        recommendations = []

        if resource.used_heap > resource.heap_limit * self.thresholds.heap_usage_ratio:
            recommendations.extend([MEMORY_CLEANUP, REFERENCE_RETENTION])

        if resource.storage_quota.percent_used > self.thresholds.storage_percent_used:
            recommendations.extend([LRU_EVICTION, QUOTA_MONITORING])

        recommendations.extend(
            LEAK_TEMPLATE.format(leak) for leak in unique(resource.potential_leaks)
        )

        return recommendations

    def _network_recommendations(self, network: NetworkMetrics) -> list[str]:
        recommendations = []

        if network.failed_requests > 0:
            recommendations.extend([BACKOFF_RETRY, OFFLINE_FALLBACK])

        if len(network.slow_requests) > self.thresholds.slow_request_count:
            recommendations.extend([REQUEST_TIMEOUT, REQUEST_CACHING])

        return recommendations


def classify_priority(recommendation: str) -> RecommendationPriority:
    """Assign a priority group by keyword."""
    text = recommendation.lower()

    if any(keyword in text for keyword in HIGH_PRIORITY_KEYWORDS):
        return RecommendationPriority.HIGH
    if any(keyword in text for keyword in MEDIUM_PRIORITY_KEYWORDS):
        return RecommendationPriority.MEDIUM
    return RecommendationPriority.LOW


def prioritize_recommendations(recommendations: list[str]) -> list[PrioritizedRecommendation]:
    """
    Group recommendations by priority, highest first.

    Order within each group follows the input order.
    """
    tagged = [PrioritizedRecommendation(classify_priority(rec), rec) for rec in recommendations]
    order = list(RecommendationPriority)
    return sorted(tagged, key=lambda rec: order.index(rec.priority))


def generate_recommendations(
    metrics: ScenarioMetrics, thresholds: AnalysisThresholds = DEFAULT_THRESHOLDS
) -> list[str]:
    """Convenience wrapper around RecommendationGenerator.generate_recommendations."""
    return RecommendationGenerator(thresholds).generate_recommendations(metrics)
