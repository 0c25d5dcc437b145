"""
Performance analysis engine.

Owns the metrics store and the baseline store for one analysis session and
assembles the analysis services into immutable per-scenario reports.
Synchronous and single-threaded: every call is an in-memory computation, and
callers running in a concurrent context must serialize calls themselves.
"""

import json
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from perf_insight.application.config import EngineConfig, LoggingConfig
from perf_insight.application.services.metrics_recorder import MetricsRecorder, iso_timestamp
from perf_insight.domain.entities.scenario_metrics import PerformanceReport, ScenarioMetrics
from perf_insight.domain.exceptions import ScenarioNotFoundError
from perf_insight.domain.services.baseline_comparator import BaselineComparator
from perf_insight.domain.services.optimization_analyzer import OptimizationAnalyzer
from perf_insight.domain.services.recommendation_generator import (
    RecommendationGenerator,
    prioritize_recommendations,
)
from perf_insight.domain.services.score_calculator import ScoreCalculator, performance_level
from perf_insight.domain.value_objects.measurements import (
    InferenceMetrics,
    LoadMetrics,
    NetworkMetrics,
    ResourceMetrics,
)
from perf_insight.infrastructure.monitoring.logging import (
    log_analysis_operation,
    scenario_context,
    session_context,
    setup_structured_logging,
)

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


def generate_session_id(moment: datetime, prefix: str = "perf") -> str:
    """Compact session id, e.g. perf-20261019-142530z."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(UTC)
    return f"{prefix}-{moment:%Y%m%d-%H%M%S}z"


def configure_logging(config: LoggingConfig) -> None:
    """Install structured logging from a LoggingConfig."""
    setup_structured_logging(
        level=config.level,
        format_type=config.format_type,
        enable_sampling=config.enable_sampling,
        log_file=config.file,
    )


class PerformanceAnalysisEngine:
    """
    Records scenario metrics and produces performance reports.

    Provides:
    - Per-domain metric recording (load, inference, resource, network)
    - Baseline storage and comparison
    - Optimization opportunity detection
    - Actionable recommendations
    - Weighted 0-100 performance score
    - Snapshot export for archival
    """

    def __init__(
        self,
        session_id: str | None = None,
        config: EngineConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self._clock = clock or _utc_now
        self.session_id = session_id or generate_session_id(
            self._clock(), self.config.session_prefix
        )

        self._recorder = MetricsRecorder(self._clock)
        self._baselines: dict[str, ScenarioMetrics] = {}

        thresholds = self.config.thresholds
        self.analyzer = OptimizationAnalyzer(thresholds)
        self.recommendation_generator = RecommendationGenerator(thresholds)
        self.comparator = BaselineComparator()
        self.score_calculator = ScoreCalculator()

    # Recording

    def record_load(self, scenario: str, metrics: LoadMetrics) -> None:
        """Record page load metrics."""
        self._recorder.record_load(scenario, metrics)

    def record_inference(self, scenario: str, metrics: InferenceMetrics) -> None:
        """Record inference processing metrics."""
        self._recorder.record_inference(scenario, metrics)

    def record_resource(self, scenario: str, metrics: ResourceMetrics) -> None:
        """Record memory and resource metrics."""
        self._recorder.record_resource(scenario, metrics)

    def record_network(self, scenario: str, metrics: NetworkMetrics) -> None:
        """Record network metrics."""
        self._recorder.record_network(scenario, metrics)

    # Baselines

    def set_baseline(self, scenario: str, metrics: ScenarioMetrics) -> None:
        """Set baseline metrics for comparison, replacing any previous baseline."""
        self._baselines[scenario] = metrics.copy()
        logger.info(
            f"Baseline set for scenario {scenario}",
            extra={"operation_type": "baseline_update"},
        )

    def get_baseline(self, scenario: str) -> ScenarioMetrics | None:
        baseline = self._baselines.get(scenario)
        return baseline.copy() if baseline is not None else None

    def load_baselines(self, snapshot: dict[str, Any]) -> list[str]:
        """
        Install baselines from a previously exported snapshot.

        The snapshot's recorded metrics become baselines; a snapshot without
        metrics falls back to its baselines. Returns the scenarios loaded.
        """
        entries = snapshot.get("metrics") or snapshot.get("baselines") or []
        loaded = []

        for entry in entries:
            metrics = ScenarioMetrics.from_dict(entry)
            self.set_baseline(metrics.scenario, metrics)
            loaded.append(metrics.scenario)

        logger.info(
            f"Loaded {len(loaded)} baselines from session {snapshot.get('session_id', 'unknown')}"
        )
        return loaded

    # Queries

    def get_metrics(self, scenario: str) -> ScenarioMetrics | None:
        """Get metrics for a scenario."""
        return self._recorder.get(scenario)

    @property
    def scenarios(self) -> list[str]:
        return self._recorder.scenarios

    def identify_opportunities(self, scenario: str) -> list[str]:
        """Optimization opportunities for a recorded scenario."""
        return self.analyzer.identify_opportunities(self._require_metrics(scenario))

    def generate_recommendations(self, scenario: str) -> list[str]:
        """Recommendations for a recorded scenario."""
        return self.recommendation_generator.generate_recommendations(
            self._require_metrics(scenario)
        )

    def calculate_score(self, scenario: str) -> int:
        """Performance score for a recorded scenario."""
        return self.score_calculator.calculate_score(self._require_metrics(scenario))

    # Reports

    @log_analysis_operation("report_generation")
    def generate_report(self, scenario: str) -> PerformanceReport:
        """
        Generate a performance report for a scenario.

        Raises:
            ScenarioNotFoundError: if nothing was recorded for the scenario
        """
        with session_context(self.session_id), scenario_context(scenario):
            metrics = self._require_metrics(scenario)
            baseline = self.get_baseline(scenario)

            findings = self.analyzer.analyze(metrics)
            recommendations = self.recommendation_generator.generate_recommendations(metrics)
            comparison = self.comparator.compare(metrics, baseline) if baseline else None
            score = self.score_calculator.calculate_score(metrics)

            report = PerformanceReport(
                session_id=self.session_id,
                timestamp=iso_timestamp(self._clock()),
                scenario=scenario,
                metrics=metrics,
                optimization_opportunities=tuple(finding.message for finding in findings),
                recommendations=tuple(recommendations),
                score=score,
                performance_level=performance_level(score).value,
                baseline=baseline,
                comparison=comparison,
                findings=tuple(findings),
                prioritized_recommendations=tuple(prioritize_recommendations(recommendations)),
            )

            logger.info(
                f"Generated report for {scenario}: {len(findings)} opportunities, "
                f"{len(recommendations)} recommendations, score {score}",
                extra={"operation_type": "report_generation", "score": score},
            )
            if comparison and comparison.regression:
                logger.warning(
                    f"Regressions against baseline for {scenario}: "
                    + ", ".join(
                        f"{name} +{percent:.1f}%" for name, percent in comparison.regression.items()
                    ),
                    extra={"regression": dict(comparison.regression)},
                )

            return report

    def export_snapshot(self) -> dict[str, Any]:
        """All recorded metrics and baselines, for archival by the caller."""
        return {
            "session_id": self.session_id,
            "timestamp": iso_timestamp(self._clock()),
            "metrics": [entry.to_dict() for entry in self._recorder.all_metrics()],
            "baselines": [baseline.to_dict() for baseline in self._baselines.values()],
        }

    def export_json(self, indent: int | None = 2) -> str:
        """Export the snapshot as a JSON string."""
        return json.dumps(self.export_snapshot(), indent=indent)

    def _require_metrics(self, scenario: str) -> ScenarioMetrics:
        metrics = self._recorder.get(scenario)
        if metrics is None:
            known_scenarios = self._recorder.scenarios
            logger.error(
                f"No metrics found for scenario: {scenario}",
                extra={"operation_type": "error", "known_scenarios": known_scenarios},
            )
            raise ScenarioNotFoundError(scenario, known_scenarios)
        return metrics
