"""
Folds raw instrumentation passes into metric records.

The instrumentation layer usually samples a scenario several times (before
and after GC, per batch, per page). Each pass arrives as a plain dict; the
aggregator merges them into one record per domain before it is recorded.
Scalar fields are last-write-wins, list fields are concatenated and
deduplicated.
"""

from typing import Any

from perf_insight.domain.value_objects.measurements import (
    ApiCall,
    BatchPerformance,
    CacheStats,
    InferenceMetrics,
    LoadMetrics,
    NetworkMetrics,
    ResourceMetrics,
    SlowRequest,
    StorageQuota,
)

SLOW_REQUEST_MS = 2000
FAILED_STATUS = 400
API_URL_MARKERS = ("/api/", "api.", ".json")

LOAD_FIELDS = (
    "extension_install_time",
    "content_script_injection_time",
    "article_processing_duration",
    "ui_rendering_time",
    "total_load_time",
)

TIMING_FIELDS = ("navigation_start", "dom_content_loaded", "load_complete")


def _dedupe(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


def is_api_call(url: str) -> bool:
    lowered = url.lower()
    return any(marker in lowered for marker in API_URL_MARKERS)


class SampleAggregator:
    """Merges instrumentation passes into per-domain metric records."""

    @staticmethod
    def merge_load_samples(samples: list[dict[str, Any]]) -> LoadMetrics:
        """Merge page-load passes. Later passes overwrite earlier values."""
        metrics = LoadMetrics()

        for sample in samples:
            for name in LOAD_FIELDS:
                if sample.get(name) is not None:
                    setattr(metrics, name, sample[name])

            timing = sample.get("performance_timing")
            if timing:
                for name in TIMING_FIELDS:
                    setattr(metrics, name, timing.get(name) or 0)

        return metrics

    @staticmethod
    def merge_inference_samples(samples: list[dict[str, Any]]) -> InferenceMetrics:
        """Merge inference passes, deduplicating bottlenecks."""
        metrics = InferenceMetrics()
        bottlenecks: list[str] = []

        for sample in samples:
            if sample.get("api_response_time") is not None:
                metrics.api_response_time = sample["api_response_time"]
            if sample.get("offscreen_processing_duration") is not None:
                metrics.offscreen_processing_duration = sample["offscreen_processing_duration"]
            if sample.get("batch_performance"):
                metrics.batch_performance = BatchPerformance.from_dict(sample["batch_performance"])
            if isinstance(sample.get("bottlenecks"), list):
                bottlenecks.extend(sample["bottlenecks"])

        metrics.bottlenecks = _dedupe(bottlenecks)
        return metrics

    @staticmethod
    def merge_resource_samples(samples: list[dict[str, Any]]) -> ResourceMetrics:
        """Merge memory passes, preferring post-GC heap readings and deduplicating leaks."""
        metrics = ResourceMetrics()
        leaks: list[str] = []

        for sample in samples:
            heap = sample.get("after_gc") or sample.get("current")
            if heap:
                metrics.used_heap = heap.get("used_heap") or 0
                metrics.total_heap = heap.get("total_heap") or 0
                metrics.heap_limit = heap.get("heap_limit") or 0

            if sample.get("storage_quota"):
                metrics.storage_quota = StorageQuota.from_dict(sample["storage_quota"])

            if sample.get("cache"):
                metrics.cache = CacheStats.from_dict(sample["cache"])

            if isinstance(sample.get("potential_leaks"), list):
                leaks.extend(sample["potential_leaks"])

        metrics.potential_leaks = _dedupe(leaks)
        return metrics

    @staticmethod
    def merge_network_samples(
        samples: list[dict[str, Any]], requests: list[dict[str, Any]] | None = None
    ) -> NetworkMetrics:
        """
        Merge network passes with an optional raw request log.

        The request log seeds the totals; per-pass analyses can only raise
        them. Slow requests are deduplicated by URL keeping the longest, API
        calls by URL keeping the first seen.
        """
        metrics = NetworkMetrics()
        slow_requests: list[SlowRequest] = []
        api_calls: list[ApiCall] = []

        if requests:
            metrics.total_requests = len(requests)
            metrics.failed_requests = sum(
                1 for req in requests if (req.get("status") or 0) >= FAILED_STATUS
            )
            slow_requests.extend(
                SlowRequest(
                    url=req.get("url") or "",
                    duration=req.get("duration") or 0,
                    status=req.get("status") or 0,
                )
                for req in requests
                if (req.get("duration") or 0) > SLOW_REQUEST_MS
            )
            metrics.total_overhead = sum(req.get("duration") or 0 for req in requests)
            api_calls.extend(
                ApiCall(
                    url=req.get("url") or "",
                    duration=req.get("duration") or 0,
                    success=req["status"] < FAILED_STATUS if req.get("status") else True,
                )
                for req in requests
                if is_api_call(req.get("url") or "")
            )

        for sample in samples:
            analysis = sample.get("analysis")
            if analysis:
                if analysis.get("total_requests"):
                    metrics.total_requests = max(metrics.total_requests, analysis["total_requests"])
                if isinstance(analysis.get("slow_requests"), list):
                    slow_requests.extend(
                        SlowRequest(
                            url=req.get("url", ""),
                            duration=req.get("duration", 0),
                            status=req.get("status", 0),
                        )
                        for req in analysis["slow_requests"]
                    )
                if analysis.get("total_duration"):
                    metrics.total_overhead = max(metrics.total_overhead, analysis["total_duration"])
                if isinstance(analysis.get("api_calls"), list):
                    api_calls.extend(
                        ApiCall(
                            url=call.get("url", ""),
                            duration=call.get("duration", 0),
                            success=call.get("success", True),
                        )
                        for call in analysis["api_calls"]
                    )

            if sample.get("failed_requests") is not None:
                metrics.failed_requests = max(metrics.failed_requests, sample["failed_requests"])

        slowest: dict[str, SlowRequest] = {}
        for req in slow_requests:
            if req.url not in slowest or slowest[req.url].duration < req.duration:
                slowest[req.url] = req
        metrics.slow_requests = list(slowest.values())

        first_calls: dict[str, ApiCall] = {}
        for call in api_calls:
            first_calls.setdefault(call.url, call)
        metrics.api_calls = list(first_calls.values())

        return metrics
