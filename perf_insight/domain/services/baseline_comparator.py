"""
Baseline comparison.

Diffs current metrics against a stored baseline for three tracked dimensions
and splits the percentage changes into improvements and regressions. All
tracked dimensions are lower-is-better.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from perf_insight.domain.entities.scenario_metrics import (
    Measurements,
    MetricsComparison,
    ScenarioMetrics,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackedDimension:
    """A scalar pulled from one measurement domain, or None when absent."""

    name: str
    extract: Callable[[Measurements], float | None]


def _total_load_time(measurements: Measurements) -> float | None:
    return measurements.load.total_load_time if measurements.load is not None else None


def _api_response_time(measurements: Measurements) -> float | None:
    return measurements.inference.api_response_time if measurements.inference is not None else None


def _used_heap(measurements: Measurements) -> float | None:
    return measurements.resource.used_heap if measurements.resource is not None else None


TRACKED_DIMENSIONS: tuple[TrackedDimension, ...] = (
    TrackedDimension("pageLoadTime", _total_load_time),
    TrackedDimension("aiResponseTime", _api_response_time),
    TrackedDimension("memoryUsage", _used_heap),
)


def percent_delta(current: float, baseline: float) -> float:
    """Signed percentage change from baseline. Caller guarantees baseline != 0."""
    return (current - baseline) / baseline * 100


class BaselineComparator:
    """Compares scenario metrics against a baseline."""

    def __init__(self, dimensions: tuple[TrackedDimension, ...] = TRACKED_DIMENSIONS) -> None:
        self.dimensions = dimensions

    def compare(self, current: ScenarioMetrics, baseline: ScenarioMetrics) -> MetricsComparison:
        """
        Compare current metrics against a baseline.

        A dimension is skipped when either side lacks its domain or when the
        baseline value is 0. Unchanged dimensions appear in neither map.
        """
        improvement: dict[str, float] = {}
        regression: dict[str, float] = {}

        for dimension in self.dimensions:
            current_value = dimension.extract(current.measurements)
            baseline_value = dimension.extract(baseline.measurements)

            if current_value is None or baseline_value is None:
                continue

            if baseline_value == 0:
                logger.debug(
                    f"Skipping {dimension.name} comparison for {current.scenario}: baseline is 0"
                )
                continue

            diff = percent_delta(current_value, baseline_value)
            if diff < 0:
                improvement[dimension.name] = abs(diff)
            elif diff > 0:
                regression[dimension.name] = diff

        return MetricsComparison(improvement=improvement, regression=regression)


def compare(current: ScenarioMetrics, baseline: ScenarioMetrics) -> MetricsComparison:
    """Convenience wrapper around BaselineComparator.compare."""
    return BaselineComparator().compare(current, baseline)
