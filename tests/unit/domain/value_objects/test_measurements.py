"""
Tests for metric record value objects, thresholds and findings.
"""

from dataclasses import FrozenInstanceError

import pytest

from perf_insight.domain.value_objects import (
    DEFAULT_THRESHOLDS,
    AnalysisThresholds,
    Finding,
    MetricDomain,
    PrioritizedRecommendation,
    RecommendationPriority,
    Severity,
)
from perf_insight.domain.value_objects.measurements import (
    ApiCall,
    InferenceMetrics,
    LoadMetrics,
    NetworkMetrics,
    ResourceMetrics,
    SlowRequest,
    StorageQuota,
)


class TestLoadMetrics:
    """Test LoadMetrics record."""

    def test_defaults_are_zero(self):
        """Test every timing defaults to 0."""
        load = LoadMetrics()

        assert all(value == 0 for value in load.to_dict().values())

    def test_from_dict_fills_missing_fields(self):
        """Test from_dict tolerates partial input."""
        load = LoadMetrics.from_dict({"total_load_time": 4200, "ui_rendering_time": 300})

        assert load.total_load_time == 4200
        assert load.ui_rendering_time == 300
        assert load.content_script_injection_time == 0


class TestInferenceMetrics:
    """Test InferenceMetrics record."""

    def test_from_dict_nested_batch(self):
        """Test nested batch performance is parsed."""
        inference = InferenceMetrics.from_dict(
            {
                "api_response_time": 3500,
                "batch_performance": {"total_items": 4, "average_item_duration": 650},
                "bottlenecks": ["tokenizer"],
            }
        )

        assert inference.api_response_time == 3500
        assert inference.batch_performance.total_items == 4
        assert inference.batch_performance.average_item_duration == 650
        assert inference.batch_performance.total_duration == 0
        assert inference.bottlenecks == ["tokenizer"]

    def test_bottleneck_lists_are_not_shared(self):
        """Test default list fields are per instance."""
        first = InferenceMetrics()
        second = InferenceMetrics()

        first.bottlenecks.append("x")

        assert second.bottlenecks == []


class TestResourceMetrics:
    """Test ResourceMetrics record."""

    def test_heap_usage_percent(self):
        """Test heap usage percentage."""
        resource = ResourceMetrics(used_heap=85, heap_limit=100)

        assert resource.heap_usage_percent == pytest.approx(85.0)

    def test_heap_usage_percent_zero_limit(self):
        """Test zero heap limit gives no percentage."""
        assert ResourceMetrics(used_heap=50, heap_limit=0).heap_usage_percent is None

    def test_round_trip_keeps_nested_records(self):
        """Test to_dict/from_dict preserves nested storage and cache."""
        resource = ResourceMetrics(
            used_heap=10,
            heap_limit=20,
            storage_quota=StorageQuota(used=1, quota=4, percent_used=25),
            potential_leaks=["detached-dom-nodes"],
        )

        assert ResourceMetrics.from_dict(resource.to_dict()) == resource


class TestNetworkMetrics:
    """Test NetworkMetrics record."""

    def test_from_dict_builds_request_records(self):
        """Test slow requests and API calls become records."""
        network = NetworkMetrics.from_dict(
            {
                "total_requests": 12,
                "slow_requests": [{"url": "https://a/slow", "duration": 2600, "status": 200}],
                "api_calls": [{"url": "https://a/api/x", "duration": 100}],
            }
        )

        assert network.slow_requests == [SlowRequest("https://a/slow", 2600, 200)]
        assert network.api_calls == [ApiCall("https://a/api/x", 100, True)]
        assert network.failed_requests == 0


class TestAnalysisThresholds:
    """Test threshold defaults."""

    def test_opportunity_defaults(self):
        """Test opportunity thresholds."""
        t = DEFAULT_THRESHOLDS

        assert t.content_script_injection_ms == 1000
        assert t.article_processing_ms == 5000
        assert t.ui_rendering_ms == 2000
        assert t.api_response_ms == 3000
        assert t.batch_item_ms == 500
        assert t.heap_usage_ratio == 0.80
        assert t.storage_percent_used == 80
        assert t.cache_hit_rate_min == 0.5
        assert t.network_overhead_ms == 10000

    def test_recommendation_defaults(self):
        """Test recommendation thresholds."""
        assert DEFAULT_THRESHOLDS.total_load_ms == 10000
        assert DEFAULT_THRESHOLDS.offscreen_processing_ms == 5000
        assert DEFAULT_THRESHOLDS.slow_request_count == 3

    def test_thresholds_are_frozen(self):
        """Test thresholds cannot be mutated."""
        with pytest.raises(FrozenInstanceError):
            DEFAULT_THRESHOLDS.total_load_ms = 1  # type: ignore[misc]

    def test_field_names(self):
        """Test field_names lists every threshold."""
        names = AnalysisThresholds.field_names()

        assert "slow_request_count" in names
        assert len(names) == 12


class TestFindings:
    """Test structured finding records."""

    def test_finding_to_dict(self):
        """Test Finding serializes enums by value."""
        finding = Finding(
            domain=MetricDomain.LOAD,
            severity=Severity.CRITICAL,
            metric="ui_rendering_time",
            message="UI rendering is slow",
            value=3500,
            threshold=2000,
        )

        assert finding.to_dict() == {
            "domain": "load",
            "severity": "critical",
            "metric": "ui_rendering_time",
            "message": "UI rendering is slow",
            "value": 3500,
            "threshold": 2000,
        }

    def test_prioritized_recommendation_to_dict(self):
        """Test PrioritizedRecommendation serialization."""
        rec = PrioritizedRecommendation(RecommendationPriority.HIGH, "Add retry")

        assert rec.to_dict() == {"priority": "high", "action": "Add retry"}
