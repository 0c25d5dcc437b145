"""
Metric record value objects.

One record type per measurement domain (load timing, inference processing,
memory/resource usage, network activity). Records are plain structured data:
the instrumentation layer is trusted to fill them, so nothing here validates
ranges or cross-field consistency.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any


class MetricDomain(Enum):
    """Measurement domains, in analysis order."""

    LOAD = "load"
    INFERENCE = "inference"
    RESOURCE = "resource"
    NETWORK = "network"


@dataclass
class LoadMetrics:
    """Page/startup timing, all durations in milliseconds."""

    extension_install_time: float = 0
    content_script_injection_time: float = 0
    article_processing_duration: float = 0
    ui_rendering_time: float = 0
    total_load_time: float = 0
    navigation_start: float = 0
    dom_content_loaded: float = 0
    load_complete: float = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LoadMetrics:
        return cls(
            extension_install_time=data.get("extension_install_time", 0),
            content_script_injection_time=data.get("content_script_injection_time", 0),
            article_processing_duration=data.get("article_processing_duration", 0),
            ui_rendering_time=data.get("ui_rendering_time", 0),
            total_load_time=data.get("total_load_time", 0),
            navigation_start=data.get("navigation_start", 0),
            dom_content_loaded=data.get("dom_content_loaded", 0),
            load_complete=data.get("load_complete", 0),
        )


@dataclass
class BatchPerformance:
    """Batch processing timing. average_item_duration is supplied, not derived."""

    total_items: int = 0
    total_duration: float = 0
    average_item_duration: float = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BatchPerformance:
        return cls(
            total_items=data.get("total_items", 0),
            total_duration=data.get("total_duration", 0),
            average_item_duration=data.get("average_item_duration", 0),
        )


@dataclass
class InferenceMetrics:
    """Inference-processing timing in milliseconds."""

    api_response_time: float = 0
    offscreen_processing_duration: float = 0
    batch_performance: BatchPerformance = field(default_factory=BatchPerformance)
    bottlenecks: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InferenceMetrics:
        return cls(
            api_response_time=data.get("api_response_time", 0),
            offscreen_processing_duration=data.get("offscreen_processing_duration", 0),
            batch_performance=BatchPerformance.from_dict(data.get("batch_performance") or {}),
            bottlenecks=list(data.get("bottlenecks") or []),
        )


@dataclass
class StorageQuota:
    """Storage usage in bytes; percent_used is on a 0-100 scale."""

    used: float = 0
    quota: float = 0
    percent_used: float = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StorageQuota:
        return cls(
            used=data.get("used", 0),
            quota=data.get("quota", 0),
            percent_used=data.get("percent_used", 0),
        )


@dataclass
class CacheStats:
    """Cache statistics. Rates are 0-1 and need not sum to 1."""

    size: int = 0
    hit_rate: float = 0
    miss_rate: float = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CacheStats:
        return cls(
            size=data.get("size", 0),
            hit_rate=data.get("hit_rate", 0),
            miss_rate=data.get("miss_rate", 0),
        )


@dataclass
class ResourceMetrics:
    """Heap, storage and cache usage. Heap sizes in bytes."""

    used_heap: float = 0
    total_heap: float = 0
    heap_limit: float = 0
    storage_quota: StorageQuota = field(default_factory=StorageQuota)
    cache: CacheStats = field(default_factory=CacheStats)
    potential_leaks: list[str] = field(default_factory=list)

    @property
    def heap_usage_percent(self) -> float | None:
        """Used heap as a percentage of the limit, None when the limit is 0."""
        if not self.heap_limit:
            return None
        return self.used_heap / self.heap_limit * 100

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ResourceMetrics:
        return cls(
            used_heap=data.get("used_heap", 0),
            total_heap=data.get("total_heap", 0),
            heap_limit=data.get("heap_limit", 0),
            storage_quota=StorageQuota.from_dict(data.get("storage_quota") or {}),
            cache=CacheStats.from_dict(data.get("cache") or {}),
            potential_leaks=list(data.get("potential_leaks") or []),
        )


@dataclass
class SlowRequest:
    url: str
    duration: float
    status: int = 0


@dataclass
class ApiCall:
    url: str
    duration: float
    success: bool = True


@dataclass
class NetworkMetrics:
    """Network activity for one scenario. total_overhead is in milliseconds."""

    total_requests: int = 0
    failed_requests: int = 0
    slow_requests: list[SlowRequest] = field(default_factory=list)
    total_overhead: float = 0
    api_calls: list[ApiCall] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NetworkMetrics:
        return cls(
            total_requests=data.get("total_requests", 0),
            failed_requests=data.get("failed_requests", 0),
            slow_requests=[
                SlowRequest(
                    url=req.get("url", ""),
                    duration=req.get("duration", 0),
                    status=req.get("status", 0),
                )
                for req in data.get("slow_requests") or []
            ],
            total_overhead=data.get("total_overhead", 0),
            api_calls=[
                ApiCall(
                    url=call.get("url", ""),
                    duration=call.get("duration", 0),
                    success=call.get("success", True),
                )
                for call in data.get("api_calls") or []
            ],
        )
