"""
Performance metrics analysis engine.

Ingests load, inference, resource and network measurements per scenario,
detects optimization opportunities, produces recommendations, scores overall
health and compares against baselines.
"""

from perf_insight.application.config import EngineConfig, LoggingConfig
from perf_insight.application.services.performance_engine import PerformanceAnalysisEngine
from perf_insight.domain.entities.scenario_metrics import (
    Measurements,
    MetricsComparison,
    PerformanceReport,
    ScenarioMetrics,
)
from perf_insight.domain.exceptions import (
    ConfigurationError,
    DomainException,
    ScenarioNotFoundError,
)
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
from perf_insight.domain.value_objects.thresholds import AnalysisThresholds

__version__ = "0.1.0"

__all__ = [
    "PerformanceAnalysisEngine",
    "EngineConfig",
    "LoggingConfig",
    "AnalysisThresholds",
    "Measurements",
    "MetricsComparison",
    "PerformanceReport",
    "ScenarioMetrics",
    "LoadMetrics",
    "InferenceMetrics",
    "BatchPerformance",
    "ResourceMetrics",
    "StorageQuota",
    "CacheStats",
    "NetworkMetrics",
    "SlowRequest",
    "ApiCall",
    "DomainException",
    "ScenarioNotFoundError",
    "ConfigurationError",
]
