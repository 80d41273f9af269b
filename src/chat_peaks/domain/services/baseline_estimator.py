"""
Baseline estimation - stream-wide per-minute activity levels.
"""

import numpy as np
from structlog import get_logger

from ..models.baseline import Baseline, MessagePercentiles
from ..models.chat import ChatLog
from ...utils.scoring_utils import nearest_rank_percentile

logger = get_logger()

SECONDS_PER_MINUTE = 60


class BaselineEstimator:
    """Computes per-minute message and emote statistics for a chat log."""

    def estimate(self, chat_log: ChatLog) -> Baseline:
        """
        Estimate the activity baseline of a recording.

        Minutes are zero-filled from minute 0 up to the last occupied minute,
        so quiet stretches pull the averages and percentiles down.

        Returns:
            Baseline; all zeros with an empty activity series for an empty log
        """
        if chat_log.is_empty:
            return Baseline()

        minutes = np.array(
            [int(e.timestamp_seconds // SECONDS_PER_MINUTE) for e in chat_log.events]
        )
        emotes = np.array([e.emote_count for e in chat_log.events])

        messages_per_minute = np.bincount(minutes)
        emotes_per_minute = np.bincount(minutes, weights=emotes)

        sorted_counts = np.sort(messages_per_minute)
        percentiles = MessagePercentiles(
            p50=nearest_rank_percentile(sorted_counts, 50),
            p75=nearest_rank_percentile(sorted_counts, 75),
            p90=nearest_rank_percentile(sorted_counts, 90),
            p95=nearest_rank_percentile(sorted_counts, 95),
        )

        baseline = Baseline(
            avg_messages_per_minute=float(np.mean(messages_per_minute)),
            avg_emotes_per_minute=float(np.mean(emotes_per_minute)),
            message_count_percentiles=percentiles,
            per_minute_activity=tuple(int(c) for c in messages_per_minute),
        )

        logger.debug(
            "Estimated baseline",
            recording_id=chat_log.recording_id,
            minutes=len(messages_per_minute),
            avg_messages_per_minute=baseline.avg_messages_per_minute,
        )
        return baseline
