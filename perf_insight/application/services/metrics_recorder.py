"""
Per-scenario metric accumulation.

One ScenarioMetrics entry per scenario, one record per domain within it.
Recording a domain replaces that domain only; the other domains and the
entry's creation timestamp are left alone.
"""

import copy
import logging
from collections.abc import Callable
from datetime import datetime

from perf_insight.domain.entities.scenario_metrics import ScenarioMetrics
from perf_insight.domain.value_objects.measurements import (
    InferenceMetrics,
    LoadMetrics,
    MetricDomain,
    NetworkMetrics,
    ResourceMetrics,
)

logger = logging.getLogger(__name__)


def iso_timestamp(moment: datetime) -> str:
    """ISO-8601 with millisecond precision and a Z suffix for UTC."""
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class MetricsRecorder:
    """Keyed store of scenario metrics. Not thread-safe; callers serialize access."""

    def __init__(self, clock: Callable[[], datetime]) -> None:
        self._clock = clock
        self._metrics: dict[str, ScenarioMetrics] = {}

    def record_load(self, scenario: str, metrics: LoadMetrics) -> None:
        """Record page load metrics."""
        self._entry(scenario).measurements.load = copy.deepcopy(metrics)
        self._log_recorded(scenario, MetricDomain.LOAD)

    def record_inference(self, scenario: str, metrics: InferenceMetrics) -> None:
        """Record inference processing metrics."""
        self._entry(scenario).measurements.inference = copy.deepcopy(metrics)
        self._log_recorded(scenario, MetricDomain.INFERENCE)

    def record_resource(self, scenario: str, metrics: ResourceMetrics) -> None:
        """Record memory and resource metrics."""
        self._entry(scenario).measurements.resource = copy.deepcopy(metrics)
        self._log_recorded(scenario, MetricDomain.RESOURCE)

    def record_network(self, scenario: str, metrics: NetworkMetrics) -> None:
        """Record network metrics."""
        self._entry(scenario).measurements.network = copy.deepcopy(metrics)
        self._log_recorded(scenario, MetricDomain.NETWORK)

    def get(self, scenario: str) -> ScenarioMetrics | None:
        """Return a copy of the scenario's metrics, or None if never recorded."""
        entry = self._metrics.get(scenario)
        return entry.copy() if entry is not None else None

    def all_metrics(self) -> list[ScenarioMetrics]:
        """Copies of every entry, in first-recorded order."""
        return [entry.copy() for entry in self._metrics.values()]

    @property
    def scenarios(self) -> list[str]:
        return list(self._metrics)

    def __contains__(self, scenario: object) -> bool:
        return scenario in self._metrics

    def __len__(self) -> int:
        return len(self._metrics)

    def _entry(self, scenario: str) -> ScenarioMetrics:
        entry = self._metrics.get(scenario)
        if entry is None:
            entry = ScenarioMetrics(scenario=scenario, timestamp=iso_timestamp(self._clock()))
            self._metrics[scenario] = entry
            logger.debug(f"Created metrics entry for scenario {scenario}")
        return entry

    @staticmethod
    def _log_recorded(scenario: str, domain: MetricDomain) -> None:
        logger.debug(
            f"Recorded {domain.value} metrics for {scenario}",
            extra={"operation_type": "metrics_recording", "domain": domain.value},
        )
