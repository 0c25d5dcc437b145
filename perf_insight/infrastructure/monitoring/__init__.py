"""Logging and observability for the analysis engine."""

from .logging import (
    AnalysisJSONFormatter,
    AnalysisLogFilter,
    AnalysisLogRecord,
    LogSampler,
    LogSamplingConfig,
    correlation_context,
    generate_correlation_id,
    get_correlation_id,
    log_analysis_operation,
    scenario_context,
    session_context,
    setup_structured_logging,
)

__all__ = [
    "AnalysisJSONFormatter",
    "AnalysisLogFilter",
    "AnalysisLogRecord",
    "LogSampler",
    "LogSamplingConfig",
    "correlation_context",
    "generate_correlation_id",
    "get_correlation_id",
    "log_analysis_operation",
    "scenario_context",
    "session_context",
    "setup_structured_logging",
]
