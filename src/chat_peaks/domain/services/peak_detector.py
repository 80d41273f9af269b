"""
Peak detection over a single window timeline.

Finds local maxima in per-window message counts that clear thresholds
scaled to the recording's own baseline, scores their intensity, classifies
them and keeps accepted peaks a minimum distance apart.
"""

from typing import Optional, Sequence

from structlog import get_logger

from ..models.baseline import Baseline
from ..models.config import AnalysisConfig
from ..models.peak import Peak, PeakClassification
from ..models.timeline import WindowPoint
from ...utils.scoring_utils import centered_moving_average, safe_ratio
from .content_scorer import content_score

logger = get_logger()

# Acceptance gates applied when content analysis is enabled
MIN_CONTENT_SCORE = 0.1
MAX_SPAM_RATIO = 0.5

# Chat faster than this many messages per second is hard to read
UNREADABLE_MPS = 10.0
UNREADABLE_PENALTY = 0.8


def minimum_peak_distance(config: AnalysisConfig, baseline: Baseline) -> float:
    """
    Spacing required between accepted peaks, adapted to chat activity.

    Busy chats allow closer peaks, quiet chats require wider spacing. The
    result never crosses the configured base in the wrong direction.
    """
    base = float(config.minimum_peak_distance)
    avg = baseline.avg_messages_per_minute

    if avg > 100:
        return min(base, max(60.0, base * 0.7))
    elif avg < 20:
        return max(base, min(300.0, base * 1.5))
    return base


def calculate_intensity(
    point: WindowPoint, trend: float, baseline: Baseline, content: float
) -> float:
    """Multiplicative intensity score for a window."""
    count = point.message_count
    per_message = max(count, 1)

    relative_to_trend = count / max(trend, 1.0)
    relative_to_baseline = count / max(baseline.avg_messages_per_minute, 1.0)
    emote_factor = 1 + point.emote_count / per_message
    diversity_factor = 1 + point.unique_user_count / per_message
    subscriber_factor = 1 + point.subscriber_message_count / per_message
    content_factor = 1 + content
    velocity_factor = 1 + min(point.messages_per_second / 2, 1.0)
    readability_factor = (
        UNREADABLE_PENALTY if point.messages_per_second > UNREADABLE_MPS else 1.0
    )

    return (
        relative_to_trend
        * relative_to_baseline
        * emote_factor
        * diversity_factor
        * subscriber_factor
        * content_factor
        * velocity_factor
        * readability_factor
    )


class PeakDetector:
    """Scans one timeline for interaction peaks.

    Detection runs in two steps. ``find_candidates`` keeps every local
    maximum that clears the message floor and the intensity threshold;
    ``detect`` then applies the content gate and minimum spacing.
    """

    def find_candidates(
        self,
        timeline: Sequence[WindowPoint],
        baseline: Baseline,
        config: AnalysisConfig,
    ) -> list[Peak]:
        """
        Intensity-qualified local maxima of a timeline, before content gating.

        Candidates are not spaced apart. Their content score is filled in
        when content analysis is enabled but never used to reject them.

        Returns:
            Candidate peaks in timestamp order
        """
        if len(timeline) < 3:
            return []

        counts = [p.message_count for p in timeline]
        trend = centered_moving_average(counts, half_window=1)

        thresholds = config.thresholds
        if config.use_adaptive_thresholds:
            message_floor = max(
                baseline.message_count_percentiles.get(thresholds.message_percentile),
                config.message_threshold * 0.5,
            )
        else:
            message_floor = float(config.message_threshold)

        candidates: list[Peak] = []
        for i in range(1, len(timeline) - 1):
            count = counts[i]
            if not (count > counts[i - 1] and count > counts[i + 1]):
                continue
            if count < message_floor:
                continue

            point = timeline[i]
            content = (
                content_score(point.content) if config.content_analysis else 0.0
            )
            intensity = calculate_intensity(point, float(trend[i]), baseline, content)
            if intensity <= thresholds.intensity:
                continue

            candidates.append(
                Peak(
                    timestamp_seconds=point.window_start,
                    window_size_seconds=point.window_size_seconds,
                    message_count=point.message_count,
                    emote_count=point.emote_count,
                    unique_user_count=point.unique_user_count,
                    subscriber_message_count=point.subscriber_message_count,
                    intensity=intensity,
                    content_score=content,
                    classification=PeakClassification.from_score(intensity + content),
                    normalized_intensity=safe_ratio(
                        intensity, max(baseline.avg_messages_per_minute, 1.0)
                    ),
                    supporting_window_sizes=frozenset({point.window_size_seconds}),
                )
            )
        return candidates

    def detect(
        self,
        timeline: Sequence[WindowPoint],
        baseline: Baseline,
        config: AnalysisConfig,
        corroborating_peaks: Optional[Sequence[Peak]] = None,
    ) -> list[Peak]:
        """
        Detect peaks in a timeline.

        Args:
            timeline: Windows of a single width, ordered by start
            baseline: Stream-wide activity baseline
            config: Analysis configuration
            corroborating_peaks: Merged candidates from every width; a
                candidate near one that is multi-window supported skips the
                content gate

        Returns:
            Accepted peaks in timestamp order
        """
        candidates = self.find_candidates(timeline, baseline, config)
        signals = {p.window_start: p.content for p in timeline}

        distance = minimum_peak_distance(config, baseline)
        tolerance = config.primary_window_size
        supported = [p for p in (corroborating_peaks or ()) if p.multi_window_supported]

        accepted: list[Peak] = []
        for candidate in candidates:
            if config.content_analysis:
                corroborated = any(
                    abs(p.timestamp_seconds - candidate.timestamp_seconds) <= tolerance
                    for p in supported
                )
                passes = corroborated or (
                    candidate.content_score > MIN_CONTENT_SCORE
                    and signals[candidate.timestamp_seconds].spam_ratio < MAX_SPAM_RATIO
                )
                if not passes:
                    continue

            if (
                accepted
                and candidate.timestamp_seconds - accepted[-1].timestamp_seconds
                < distance
            ):
                continue

            accepted.append(candidate)

        logger.debug(
            "Detected peaks",
            window_size_seconds=timeline[0].window_size_seconds if timeline else None,
            candidates=len(candidates),
            peaks=len(accepted),
            min_distance=distance,
        )
        return accepted
