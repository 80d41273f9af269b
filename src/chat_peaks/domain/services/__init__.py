"""Domain services - the pure chat peak analysis pipeline."""

from .analysis_engine import PeakAnalysis, PeakAnalysisEngine, rank_peaks
from .baseline_estimator import BaselineEstimator
from .content_scorer import ContentScorer, content_score, normalize_text
from .peak_detector import PeakDetector, calculate_intensity, minimum_peak_distance
from .peak_merger import PeakMerger
from .stats_aggregator import StatsAggregator
from .timeline_builder import TimelineBuilder

__all__ = [
    "BaselineEstimator",
    "ContentScorer",
    "PeakAnalysis",
    "PeakAnalysisEngine",
    "PeakDetector",
    "PeakMerger",
    "StatsAggregator",
    "TimelineBuilder",
    "calculate_intensity",
    "content_score",
    "minimum_peak_distance",
    "normalize_text",
    "rank_peaks",
]
