"""Domain services for analysis logic that spans metric records."""

from .baseline_comparator import TRACKED_DIMENSIONS, BaselineComparator, TrackedDimension, compare
from .optimization_analyzer import OptimizationAnalyzer, identify_opportunities
from .recommendation_generator import (
    RecommendationGenerator,
    classify_priority,
    generate_recommendations,
    prioritize_recommendations,
)
from .sample_aggregator import SampleAggregator
from .score_calculator import (
    DOMAIN_WEIGHTS,
    PerformanceLevel,
    ScoreCalculator,
    calculate_score,
    performance_level,
    score_interpretation,
)

__all__ = [
    "BaselineComparator",
    "TrackedDimension",
    "TRACKED_DIMENSIONS",
    "compare",
    "OptimizationAnalyzer",
    "identify_opportunities",
    "RecommendationGenerator",
    "generate_recommendations",
    "classify_priority",
    "prioritize_recommendations",
    "SampleAggregator",
    "ScoreCalculator",
    "PerformanceLevel",
    "DOMAIN_WEIGHTS",
    "calculate_score",
    "performance_level",
    "score_interpretation",
]
