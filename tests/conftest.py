"""Global pytest configuration and fixtures."""

# Standard library imports
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

# Load test environment variables
from dotenv import load_dotenv

test_env_path = Path(__file__).parent.parent / ".env.test"
if test_env_path.exists():
    load_dotenv(test_env_path, override=True)

# Third-party imports
import pytest

# Make the package importable without an install
sys.path.insert(0, str(Path(__file__).parent.parent))

# Local imports
from perf_insight.application.services.performance_engine import PerformanceAnalysisEngine
from perf_insight.domain.entities.scenario_metrics import Measurements, ScenarioMetrics
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

FIXED_NOW = datetime(2026, 10, 19, 14, 25, 30, 123000, tzinfo=UTC)
MB = 1024 * 1024


@pytest.fixture
def fixed_clock():
    """Clock that always returns the same instant."""
    return lambda: FIXED_NOW


@pytest.fixture
def engine(fixed_clock) -> PerformanceAnalysisEngine:
    """Engine with a fixed clock and default configuration."""
    return PerformanceAnalysisEngine(clock=fixed_clock)


@pytest.fixture
def healthy_load() -> LoadMetrics:
    """Load metrics below every threshold."""
    return LoadMetrics(
        extension_install_time=300,
        content_script_injection_time=200,
        article_processing_duration=1500,
        ui_rendering_time=400,
        total_load_time=2500,
        navigation_start=0,
        dom_content_loaded=800,
        load_complete=1200,
    )


@pytest.fixture
def healthy_inference() -> InferenceMetrics:
    """Inference metrics below every threshold."""
    return InferenceMetrics(
        api_response_time=1200,
        offscreen_processing_duration=1800,
        batch_performance=BatchPerformance(
            total_items=10, total_duration=2000, average_item_duration=200
        ),
        bottlenecks=[],
    )


@pytest.fixture
def healthy_resource() -> ResourceMetrics:
    """Resource metrics below every threshold."""
    return ResourceMetrics(
        used_heap=40 * MB,
        total_heap=60 * MB,
        heap_limit=100 * MB,
        storage_quota=StorageQuota(used=2 * MB, quota=10 * MB, percent_used=20),
        cache=CacheStats(size=120, hit_rate=0.85, miss_rate=0.15),
        potential_leaks=[],
    )


@pytest.fixture
def healthy_network() -> NetworkMetrics:
    """Network metrics below every threshold."""
    return NetworkMetrics(
        total_requests=25,
        failed_requests=0,
        slow_requests=[],
        total_overhead=3000,
        api_calls=[ApiCall(url="https://example.com/api/translate", duration=400, success=True)],
    )


@pytest.fixture
def degraded_network() -> NetworkMetrics:
    """Network metrics with failures and many slow requests."""
    return NetworkMetrics(
        total_requests=40,
        failed_requests=2,
        slow_requests=[
            SlowRequest(url=f"https://example.com/slow/{i}", duration=2500 + i, status=200)
            for i in range(4)
        ],
        total_overhead=15000,
        api_calls=[],
    )


@pytest.fixture
def healthy_metrics(healthy_load, healthy_inference, healthy_resource, healthy_network):
    """ScenarioMetrics with all four domains healthy."""
    return ScenarioMetrics(
        scenario="article-processing-workflow",
        timestamp="2026-10-19T14:25:30.123Z",
        measurements=Measurements(
            load=healthy_load,
            inference=healthy_inference,
            resource=healthy_resource,
            network=healthy_network,
        ),
    )


def make_metrics(scenario: str = "article-processing-workflow", **domains) -> ScenarioMetrics:
    """Build ScenarioMetrics from keyword domains (load=, inference=, resource=, network=)."""
    return ScenarioMetrics(
        scenario=scenario,
        timestamp="2026-10-19T14:25:30.123Z",
        measurements=Measurements(**domains),
    )


@pytest.fixture
def metrics_factory():
    """Factory for ScenarioMetrics with selected domains."""
    return make_metrics


@pytest.fixture
def restore_logging():
    """Undo setup_structured_logging: record factory, its handlers and the root level."""
    root_logger = logging.getLogger()
    saved_factory = logging.getLogRecordFactory()
    saved_level = root_logger.level

    yield

    # pytest's capture handlers are subclasses and are reinstalled per phase
    for handler in root_logger.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(saved_level)
    logging.setLogRecordFactory(saved_factory)
