"""
Tests for BaselineComparator.
"""

import logging

import pytest

from perf_insight.domain.services.baseline_comparator import (
    TRACKED_DIMENSIONS,
    BaselineComparator,
    compare,
    percent_delta,
)
from perf_insight.domain.value_objects import InferenceMetrics, LoadMetrics, ResourceMetrics


@pytest.fixture
def comparator():
    return BaselineComparator()


class TestPercentDelta:
    """Test the percentage change helper."""

    def test_signed_change(self):
        """Test increases are positive and decreases negative."""
        assert percent_delta(6000, 5000) == pytest.approx(20.0)
        assert percent_delta(4000, 5000) == pytest.approx(-20.0)


class TestCompare:
    """Test baseline comparison."""

    def test_tracked_dimension_names(self):
        """Test the three tracked dimensions."""
        assert [d.name for d in TRACKED_DIMENSIONS] == [
            "pageLoadTime",
            "aiResponseTime",
            "memoryUsage",
        ]

    def test_faster_load_is_improvement(self, comparator, metrics_factory):
        """Test 4000ms against a 5000ms baseline is a 20% improvement."""
        current = metrics_factory(load=LoadMetrics(total_load_time=4000))
        baseline = metrics_factory(load=LoadMetrics(total_load_time=5000))

        comparison = comparator.compare(current, baseline)

        assert comparison.improvement == {"pageLoadTime": pytest.approx(20.0)}
        assert comparison.regression == {}

    def test_regressions(self, comparator, metrics_factory):
        """Test slower responses and more memory are regressions."""
        current = metrics_factory(
            inference=InferenceMetrics(api_response_time=3000),
            resource=ResourceMetrics(used_heap=150),
        )
        baseline = metrics_factory(
            inference=InferenceMetrics(api_response_time=2000),
            resource=ResourceMetrics(used_heap=100),
        )

        comparison = comparator.compare(current, baseline)

        assert comparison.improvement == {}
        assert comparison.regression == {
            "aiResponseTime": pytest.approx(50.0),
            "memoryUsage": pytest.approx(50.0),
        }

    def test_unchanged_dimension_omitted(self, comparator, metrics_factory):
        """Test equal values appear in neither map."""
        current = metrics_factory(load=LoadMetrics(total_load_time=5000))
        baseline = metrics_factory(load=LoadMetrics(total_load_time=5000))

        comparison = comparator.compare(current, baseline)

        assert not comparison.has_changes

    def test_zero_baseline_is_skipped(self, comparator, metrics_factory, caplog):
        """Test a zero baseline value is omitted without raising."""
        current = metrics_factory(
            load=LoadMetrics(total_load_time=4000),
            inference=InferenceMetrics(api_response_time=1000),
        )
        baseline = metrics_factory(
            load=LoadMetrics(total_load_time=0),
            inference=InferenceMetrics(api_response_time=2000),
        )

        with caplog.at_level(logging.DEBUG):
            comparison = comparator.compare(current, baseline)

        assert "pageLoadTime" not in comparison.improvement
        assert "pageLoadTime" not in comparison.regression
        assert comparison.improvement == {"aiResponseTime": pytest.approx(50.0)}
        assert "baseline is 0" in caplog.text

    def test_missing_domain_on_either_side(self, comparator, metrics_factory):
        """Test a dimension is skipped when either side lacks its domain."""
        current = metrics_factory(
            load=LoadMetrics(total_load_time=4000), resource=ResourceMetrics(used_heap=10)
        )
        baseline = metrics_factory(
            inference=InferenceMetrics(api_response_time=2000),
            resource=ResourceMetrics(used_heap=20),
        )

        comparison = comparator.compare(current, baseline)

        assert comparison.improvement == {"memoryUsage": pytest.approx(50.0)}
        assert comparison.regression == {}

    def test_module_function(self, metrics_factory):
        """Test the module-level helper."""
        current = metrics_factory(load=LoadMetrics(total_load_time=6000))
        baseline = metrics_factory(load=LoadMetrics(total_load_time=5000))

        assert compare(current, baseline).regression == {"pageLoadTime": pytest.approx(20.0)}
