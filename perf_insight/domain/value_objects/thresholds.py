"""
Analysis thresholds.

Two independent sets live here: opportunity thresholds (fine-grained, one per
metric) and recommendation thresholds (coarser). They intentionally do not
line up; total load time, for example, only has a recommendation threshold.
"""

from dataclasses import dataclass, fields


@dataclass(frozen=True)
class AnalysisThresholds:
    """Threshold values used by the analyzer and the recommendation generator."""

    # Opportunity thresholds
    content_script_injection_ms: float = 1000
    article_processing_ms: float = 5000
    ui_rendering_ms: float = 2000
    api_response_ms: float = 3000
    batch_item_ms: float = 500
    heap_usage_ratio: float = 0.80
    storage_percent_used: float = 80
    cache_hit_rate_min: float = 0.5
    network_overhead_ms: float = 10000

    # Recommendation thresholds
    total_load_ms: float = 10000
    offscreen_processing_ms: float = 5000
    slow_request_count: int = 3

    @classmethod
    def field_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]


DEFAULT_THRESHOLDS = AnalysisThresholds()
