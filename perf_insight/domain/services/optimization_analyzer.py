"""
Optimization opportunity detection.

Inspects a scenario's combined metrics against fixed thresholds and reports
every condition worth optimizing. Domains are checked in a fixed order (load,
inference, resource, network) and a domain that was never recorded
contributes nothing.
"""

from perf_insight.domain.entities.scenario_metrics import ScenarioMetrics
from perf_insight.domain.value_objects.findings import Finding, Severity
from perf_insight.domain.value_objects.measurements import (
    InferenceMetrics,
    LoadMetrics,
    MetricDomain,
    NetworkMetrics,
    ResourceMetrics,
)
from perf_insight.domain.value_objects.thresholds import DEFAULT_THRESHOLDS, AnalysisThresholds

# Values this far past a threshold are reported as critical
CRITICAL_FACTOR = 1.5
NEAR_FULL_PERCENT = 95.0


def _severity_above(value: float, threshold: float) -> Severity:
    return Severity.CRITICAL if value > threshold * CRITICAL_FACTOR else Severity.WARNING


def _severity_below(value: float, threshold: float) -> Severity:
    return Severity.CRITICAL if value < threshold / 2 else Severity.WARNING


def _severity_near_full(percent: float) -> Severity:
    # Percentages cap at 100, so the 1.5x rule cannot apply
    return Severity.CRITICAL if percent >= NEAR_FULL_PERCENT else Severity.WARNING


class OptimizationAnalyzer:
    """Detects optimization opportunities in recorded scenario metrics."""

    def __init__(self, thresholds: AnalysisThresholds = DEFAULT_THRESHOLDS) -> None:
        self.thresholds = thresholds

    def analyze(self, metrics: ScenarioMetrics) -> list[Finding]:
        """Return structured findings in domain order."""
        findings: list[Finding] = []
        measurements = metrics.measurements

        if measurements.load is not None:
            findings.extend(self._analyze_load(measurements.load))
        if measurements.inference is not None:
            findings.extend(self._analyze_inference(measurements.inference))
        if measurements.resource is not None:
            findings.extend(self._analyze_resource(measurements.resource))
        if measurements.network is not None:
            findings.extend(self._analyze_network(measurements.network))

        return findings

    def identify_opportunities(self, metrics: ScenarioMetrics) -> list[str]:
        """Return the human-readable opportunity strings."""
        return [finding.message for finding in self.analyze(metrics)]

    def _analyze_load(self, load: LoadMetrics) -> list[Finding]:
        t = self.thresholds
        findings = []

        if load.content_script_injection_time > t.content_script_injection_ms:
            findings.append(
                Finding(
                    domain=MetricDomain.LOAD,
                    severity=_severity_above(
                        load.content_script_injection_time, t.content_script_injection_ms
                    ),
                    metric="content_script_injection_time",
                    message=(
                        "Content script injection is slow "
                        f"(>{_seconds(t.content_script_injection_ms)}). "
                        "Consider lazy loading or code splitting."
                    ),
                    value=load.content_script_injection_time,
                    threshold=t.content_script_injection_ms,
                )
            )

        if load.article_processing_duration > t.article_processing_ms:
            findings.append(
                Finding(
                    domain=MetricDomain.LOAD,
                    severity=_severity_above(
                        load.article_processing_duration, t.article_processing_ms
                    ),
                    metric="article_processing_duration",
                    message=(
                        f"Article processing is slow (>{_seconds(t.article_processing_ms)}). "
                        "Consider batch processing or caching."
                    ),
                    value=load.article_processing_duration,
                    threshold=t.article_processing_ms,
                )
            )

        if load.ui_rendering_time > t.ui_rendering_ms:
            findings.append(
                Finding(
                    domain=MetricDomain.LOAD,
                    severity=_severity_above(load.ui_rendering_time, t.ui_rendering_ms),
                    metric="ui_rendering_time",
                    message=(
                        f"UI rendering is slow (>{_seconds(t.ui_rendering_ms)}). "
                        "Consider virtual scrolling or progressive rendering."
                    ),
                    value=load.ui_rendering_time,
                    threshold=t.ui_rendering_ms,
                )
            )

        return findings

    def _analyze_inference(self, inference: InferenceMetrics) -> list[Finding]:
        t = self.thresholds
        findings = []

        if inference.api_response_time > t.api_response_ms:
            findings.append(
                Finding(
                    domain=MetricDomain.INFERENCE,
                    severity=_severity_above(inference.api_response_time, t.api_response_ms),
                    metric="api_response_time",
                    message=(
                        f"Inference API response is slow (>{_seconds(t.api_response_ms)}). "
                        "Consider implementing request caching."
                    ),
                    value=inference.api_response_time,
                    threshold=t.api_response_ms,
                )
            )

        average_item = inference.batch_performance.average_item_duration
        if average_item > t.batch_item_ms:
            findings.append(
                Finding(
                    domain=MetricDomain.INFERENCE,
                    severity=_severity_above(average_item, t.batch_item_ms),
                    metric="batch_performance.average_item_duration",
                    message=(
                        f"Batch processing is slow (>{t.batch_item_ms:g}ms per item). "
                        "Consider parallel processing."
                    ),
                    value=average_item,
                    threshold=t.batch_item_ms,
                )
            )

        if inference.bottlenecks:
            findings.append(
                Finding(
                    domain=MetricDomain.INFERENCE,
                    severity=Severity.WARNING,
                    metric="bottlenecks",
                    message=f"Processing bottlenecks detected: {', '.join(inference.bottlenecks)}",
                    value=len(inference.bottlenecks),
                )
            )

        return findings

    def _analyze_resource(self, resource: ResourceMetrics) -> list[Finding]:
        t = self.thresholds
        findings = []

        # A zero heap limit leaves the ratio undefined
        heap_percent = resource.heap_usage_percent
        if heap_percent is not None and heap_percent > t.heap_usage_ratio * 100:
            findings.append(
                Finding(
                    domain=MetricDomain.RESOURCE,
                    severity=_severity_near_full(heap_percent),
                    metric="heap_usage_percent",
                    message=(
                        f"High memory usage ({heap_percent:.1f}%). "
                        "Consider memory optimization."
                    ),
                    value=heap_percent,
                    threshold=t.heap_usage_ratio * 100,
                )
            )

        percent_used = resource.storage_quota.percent_used
        if percent_used > t.storage_percent_used:
            findings.append(
                Finding(
                    domain=MetricDomain.RESOURCE,
                    severity=_severity_near_full(percent_used),
                    metric="storage_quota.percent_used",
                    message=(
                        f"Storage quota nearly full ({percent_used:.1f}%). "
                        "Implement cleanup strategy."
                    ),
                    value=percent_used,
                    threshold=t.storage_percent_used,
                )
            )

        hit_rate = resource.cache.hit_rate
        if hit_rate < t.cache_hit_rate_min:
            findings.append(
                Finding(
                    domain=MetricDomain.RESOURCE,
                    severity=_severity_below(hit_rate, t.cache_hit_rate_min),
                    metric="cache.hit_rate",
                    message=f"Low cache hit rate ({hit_rate * 100:.1f}%). Review caching strategy.",
                    value=hit_rate,
                    threshold=t.cache_hit_rate_min,
                )
            )

        if resource.potential_leaks:
            findings.append(
                Finding(
                    domain=MetricDomain.RESOURCE,
                    severity=Severity.WARNING,
                    metric="potential_leaks",
                    message=(
                        f"Potential memory leaks detected: {', '.join(resource.potential_leaks)}"
                    ),
                    value=len(resource.potential_leaks),
                )
            )

        return findings

    def _analyze_network(self, network: NetworkMetrics) -> list[Finding]:
        t = self.thresholds
        findings = []

        if network.failed_requests > 0:
            findings.append(
                Finding(
                    domain=MetricDomain.NETWORK,
                    severity=Severity.CRITICAL,
                    metric="failed_requests",
                    message=(
                        f"{network.failed_requests} failed network requests. "
                        "Implement retry logic."
                    ),
                    value=network.failed_requests,
                    threshold=0,
                )
            )

        if network.slow_requests:
            findings.append(
                Finding(
                    domain=MetricDomain.NETWORK,
                    severity=Severity.WARNING,
                    metric="slow_requests",
                    message=(
                        f"{len(network.slow_requests)} slow network requests detected. "
                        "Consider request optimization."
                    ),
                    value=len(network.slow_requests),
                    threshold=0,
                )
            )

        if network.total_overhead > t.network_overhead_ms:
            findings.append(
                Finding(
                    domain=MetricDomain.NETWORK,
                    severity=_severity_above(network.total_overhead, t.network_overhead_ms),
                    metric="total_overhead",
                    message="High network overhead. Consider request batching or caching.",
                    value=network.total_overhead,
                    threshold=t.network_overhead_ms,
                )
            )

        return findings


def _seconds(milliseconds: float) -> str:
    """Format a millisecond threshold the way the messages quote it, e.g. 1000 -> '1s'."""
    return f"{milliseconds / 1000:g}s"


def identify_opportunities(
    metrics: ScenarioMetrics, thresholds: AnalysisThresholds = DEFAULT_THRESHOLDS
) -> list[str]:
    """Convenience wrapper around OptimizationAnalyzer.identify_opportunities."""
    return OptimizationAnalyzer(thresholds).identify_opportunities(metrics)
