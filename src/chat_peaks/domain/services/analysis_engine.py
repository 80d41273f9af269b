"""
Peak analysis engine.

Composes timeline construction, baseline estimation, per-width peak
detection, cross-width merging and summary statistics into one
synchronous, deterministic computation over an immutable chat log.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, TypeVar

from structlog import get_logger

from ..models.analysis import SummaryStats
from ..models.baseline import Baseline
from ..models.chat import ChatLog
from ..models.config import AnalysisConfig
from ..models.peak import Peak
from ..models.timeline import WindowPoint
from .baseline_estimator import BaselineEstimator
from .content_scorer import ContentScorer
from .peak_detector import PeakDetector
from .peak_merger import PeakMerger
from .stats_aggregator import StatsAggregator
from .timeline_builder import TimelineBuilder

logger = get_logger()

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class PeakAnalysis:
    """Everything the engine computes for one chat log."""

    timelines_by_window_size: dict[float, tuple[WindowPoint, ...]]
    baseline: Baseline
    peaks: tuple[Peak, ...]
    summary_stats: SummaryStats


def rank_peaks(peaks: Sequence[Peak]) -> tuple[Peak, ...]:
    """Order peaks by class, then combined score; earlier peaks first on ties."""
    return tuple(
        sorted(
            peaks,
            key=lambda p: (
                -p.classification.rank,
                -p.combined_score,
                p.timestamp_seconds,
            ),
        )
    )


class PeakAnalysisEngine:
    """
    Runs the full peak analysis for a chat log.

    With multi-window analysis enabled the engine works in two stages: it
    first collects candidates at every configured width and merges them,
    then runs the final detection pass on the primary width using the
    merged candidates as corroboration. Per-width work may be spread over a
    thread pool; results are always collected in width order.
    """

    def __init__(
        self,
        max_workers: int = 1,
        timeline_builder: Optional[TimelineBuilder] = None,
        baseline_estimator: Optional[BaselineEstimator] = None,
        peak_detector: Optional[PeakDetector] = None,
        peak_merger: Optional[PeakMerger] = None,
        stats_aggregator: Optional[StatsAggregator] = None,
    ):
        content_scorer = ContentScorer()
        self.max_workers = max(1, max_workers)
        self.timeline_builder = timeline_builder or TimelineBuilder(content_scorer)
        self.baseline_estimator = baseline_estimator or BaselineEstimator()
        self.peak_detector = peak_detector or PeakDetector()
        self.peak_merger = peak_merger or PeakMerger()
        self.stats_aggregator = stats_aggregator or StatsAggregator(content_scorer)

    def analyze(self, chat_log: ChatLog, config: AnalysisConfig) -> PeakAnalysis:
        """
        Analyze a chat log.

        Raises:
            InvalidInputError: The chat log or a window width is malformed
        """
        widths = config.configured_window_sizes
        primary = config.primary_window_size
        self.timeline_builder.validate(chat_log, widths)

        baseline = self.baseline_estimator.estimate(chat_log)

        timelines = dict(
            zip(
                widths,
                self._map(
                    lambda width: self.timeline_builder.build_one(
                        chat_log,
                        width,
                        config.excitement_keywords,
                        config.disallowed_terms,
                    ),
                    widths,
                ),
            )
        )

        if len(widths) > 1:
            peaks = self._detect_multi_window(timelines, baseline, config, widths)
        else:
            peaks = self.peak_detector.detect(timelines[primary], baseline, config)

        summary_stats = self.stats_aggregator.aggregate(chat_log, config)

        logger.debug(
            "Analyzed chat log",
            recording_id=chat_log.recording_id,
            window_sizes=list(widths),
            peaks=len(peaks),
        )

        return PeakAnalysis(
            timelines_by_window_size=timelines,
            baseline=baseline,
            peaks=rank_peaks(peaks),
            summary_stats=summary_stats,
        )

    def _detect_multi_window(
        self,
        timelines: dict[float, tuple[WindowPoint, ...]],
        baseline: Baseline,
        config: AnalysisConfig,
        widths: Sequence[float],
    ) -> list[Peak]:
        primary = config.primary_window_size

        # Stage one: candidates at every width, before content gating, merged
        per_width = self._map(
            lambda width: self.peak_detector.find_candidates(
                timelines[width], baseline, config
            ),
            widths,
        )
        candidates = [peak for peaks in per_width for peak in peaks]
        merged = self.peak_merger.merge(candidates, widths)

        # Stage two: final pass on the primary width with merged context
        final = self.peak_detector.detect(
            timelines[primary], baseline, config, corroborating_peaks=merged
        )

        supported = []
        for peak in final:
            group = self._matching_group(peak, merged, tolerance=primary)
            if group is None:
                supported.append(
                    peak.with_support(
                        supporting_window_sizes=frozenset({primary}),
                        confidence=1 / len(widths),
                        multi_window_supported=False,
                    )
                )
            else:
                supported.append(
                    peak.with_support(
                        supporting_window_sizes=group.supporting_window_sizes,
                        confidence=group.confidence,
                        multi_window_supported=group.multi_window_supported,
                    )
                )
        return supported

    @staticmethod
    def _matching_group(
        peak: Peak, merged: Sequence[Peak], tolerance: float
    ) -> Optional[Peak]:
        """Nearest merged peak within tolerance of the given peak, if any."""
        best: Optional[Peak] = None
        best_gap = tolerance
        for group in merged:
            gap = abs(group.timestamp_seconds - peak.timestamp_seconds)
            if gap <= best_gap and (best is None or gap < best_gap):
                best, best_gap = group, gap
        return best

    def _map(self, func: Callable[[T], R], items: Sequence[T]) -> list[R]:
        """Apply func to every item in order, on a thread pool when configured."""
        if self.max_workers == 1 or len(items) < 2:
            return [func(item) for item in items]

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            return list(pool.map(func, items))
