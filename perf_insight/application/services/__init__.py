"""Application services."""

from .metrics_recorder import MetricsRecorder, iso_timestamp
from .performance_engine import PerformanceAnalysisEngine, configure_logging, generate_session_id

__all__ = [
    "MetricsRecorder",
    "PerformanceAnalysisEngine",
    "configure_logging",
    "generate_session_id",
    "iso_timestamp",
]
