"""
Tests for scenario metric aggregates and the report entity.
"""

from dataclasses import FrozenInstanceError

import pytest

from perf_insight.domain.entities import (
    Measurements,
    MetricsComparison,
    PerformanceReport,
    ScenarioMetrics,
)
from perf_insight.domain.value_objects import (
    Finding,
    LoadMetrics,
    MetricDomain,
    NetworkMetrics,
    PrioritizedRecommendation,
    RecommendationPriority,
    Severity,
)


class TestMeasurements:
    """Test the four-domain container."""

    def test_empty_by_default(self):
        """Test a new container has no domains."""
        measurements = Measurements()

        assert measurements.is_empty()
        assert measurements.present_domains() == []
        assert measurements.to_dict() == {}

    def test_present_domains_in_analysis_order(self):
        """Test present domains follow load, inference, resource, network."""
        measurements = Measurements(network=NetworkMetrics(), load=LoadMetrics())

        assert measurements.present_domains() == [MetricDomain.LOAD, MetricDomain.NETWORK]

    def test_to_dict_omits_absent_domains(self):
        """Test absent domains are left out rather than serialized as empty."""
        data = Measurements(load=LoadMetrics(total_load_time=100)).to_dict()

        assert list(data) == ["load"]
        assert data["load"]["total_load_time"] == 100

    def test_from_dict_keeps_absent_domains_absent(self):
        """Test missing domains stay None."""
        measurements = Measurements.from_dict({"network": {"failed_requests": 2}})

        assert measurements.load is None
        assert measurements.inference is None
        assert measurements.resource is None
        assert measurements.network.failed_requests == 2


class TestScenarioMetrics:
    """Test ScenarioMetrics entity."""

    def test_copy_is_independent(self, healthy_metrics):
        """Test copy does not share nested records."""
        clone = healthy_metrics.copy()

        clone.measurements.load.total_load_time = 99999
        clone.measurements.inference.bottlenecks.append("tokenizer")

        assert healthy_metrics.measurements.load.total_load_time == 2500
        assert healthy_metrics.measurements.inference.bottlenecks == []

    def test_dict_round_trip(self, healthy_metrics):
        """Test to_dict/from_dict preserves every domain."""
        restored = ScenarioMetrics.from_dict(healthy_metrics.to_dict())

        assert restored == healthy_metrics

    def test_from_dict_without_measurements(self):
        """Test an entry with no measurements yields an empty container."""
        restored = ScenarioMetrics.from_dict({"scenario": "idle", "timestamp": "t"})

        assert restored.scenario == "idle"
        assert restored.measurements.is_empty()


class TestMetricsComparison:
    """Test MetricsComparison."""

    def test_has_changes(self):
        """Test has_changes reflects either map."""
        assert not MetricsComparison().has_changes
        assert MetricsComparison(regression={"memoryUsage": 12.5}).has_changes

    def test_to_dict_copies_maps(self):
        """Test to_dict returns independent maps."""
        comparison = MetricsComparison(improvement={"pageLoadTime": 20.0})
        data = comparison.to_dict()

        data["improvement"]["pageLoadTime"] = 0

        assert comparison.improvement["pageLoadTime"] == 20.0

    def test_maps_are_read_only(self):
        """Test the maps reject writes and do not alias the caller's dicts."""
        regression = {"memoryUsage": 12.5}
        comparison = MetricsComparison(regression=regression)

        regression["memoryUsage"] = 99.0

        assert comparison.regression == {"memoryUsage": 12.5}
        with pytest.raises(TypeError):
            comparison.regression["memoryUsage"] = 0
        with pytest.raises(TypeError):
            del comparison.regression["memoryUsage"]
        with pytest.raises(FrozenInstanceError):
            comparison.improvement = {}


class TestPerformanceReport:
    """Test the frozen report entity."""

    @pytest.fixture
    def report(self, healthy_metrics):
        return PerformanceReport(
            session_id="perf-20261019-142530z",
            timestamp="2026-10-19T14:25:30.123Z",
            scenario=healthy_metrics.scenario,
            metrics=healthy_metrics,
            optimization_opportunities=("Low cache hit rate (30.0%). Review caching strategy.",),
            recommendations=("Implement exponential backoff retry strategy",),
            score=88,
            performance_level="good",
            findings=(
                Finding(
                    domain=MetricDomain.RESOURCE,
                    severity=Severity.CRITICAL,
                    metric="cache.hit_rate",
                    message="Low cache hit rate (30.0%). Review caching strategy.",
                    value=0.1,
                    threshold=0.5,
                ),
            ),
            prioritized_recommendations=(
                PrioritizedRecommendation(
                    RecommendationPriority.HIGH, "Implement exponential backoff retry strategy"
                ),
            ),
        )

    def test_report_is_frozen(self, report):
        """Test report fields cannot be reassigned."""
        with pytest.raises(FrozenInstanceError):
            report.score = 10  # type: ignore[misc]

    def test_to_dict(self, report):
        """Test JSON-ready serialization."""
        data = report.to_dict()

        assert data["session_id"] == "perf-20261019-142530z"
        assert data["optimization_opportunities"] == [
            "Low cache hit rate (30.0%). Review caching strategy."
        ]
        assert data["baseline"] is None
        assert data["comparison"] is None
        assert data["findings"][0]["severity"] == "critical"
        assert data["prioritized_recommendations"][0]["priority"] == "high"
        assert data["metrics"]["scenario"] == report.scenario
