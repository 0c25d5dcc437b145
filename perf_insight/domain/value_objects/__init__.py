"""Value objects for metric records and analysis thresholds."""

from .findings import Finding, PrioritizedRecommendation, RecommendationPriority, Severity
from .measurements import (
    ApiCall,
    BatchPerformance,
    CacheStats,
    InferenceMetrics,
    LoadMetrics,
    MetricDomain,
    NetworkMetrics,
    ResourceMetrics,
    SlowRequest,
    StorageQuota,
)
from .thresholds import DEFAULT_THRESHOLDS, AnalysisThresholds

__all__ = [
    "ApiCall",
    "BatchPerformance",
    "CacheStats",
    "InferenceMetrics",
    "LoadMetrics",
    "MetricDomain",
    "NetworkMetrics",
    "ResourceMetrics",
    "SlowRequest",
    "StorageQuota",
    "Finding",
    "PrioritizedRecommendation",
    "RecommendationPriority",
    "Severity",
    "AnalysisThresholds",
    "DEFAULT_THRESHOLDS",
]
