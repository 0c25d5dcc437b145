"""Domain entities."""

from .scenario_metrics import Measurements, MetricsComparison, PerformanceReport, ScenarioMetrics

__all__ = ["Measurements", "MetricsComparison", "PerformanceReport", "ScenarioMetrics"]
