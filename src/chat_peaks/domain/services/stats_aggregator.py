"""
Recording-level chat statistics.

These numbers describe the whole chat replay and do not depend on which
peaks were detected.
"""

from collections import Counter

import numpy as np
from structlog import get_logger

from ..models.analysis import (
    ChatVelocity,
    EmoteCount,
    SummaryStats,
    UserActivity,
)
from ..models.chat import ChatLog
from ..models.config import AnalysisConfig
from ..models.timeline import ContentSignal
from ...utils.scoring_utils import (
    calculate_weighted_score,
    normalize_score,
    safe_ratio,
)
from .content_scorer import ContentScorer

logger = get_logger()

TOP_EMOTE_LIMIT = 10
ACTIVE_CHATTER_MIN_MESSAGES = 5  # strictly more than this

# Upper bounds on mean messages per minute, with the readability they map to
READABILITY_STEPS = [(10, 1.0), (30, 0.8), (60, 0.6), (120, 0.4)]
READABILITY_FLOOR = 0.2

ENGAGEMENT_WEIGHTS = {"diversity": 0.4, "emotes": 0.3, "excitement": 0.3}


def readability_score(mean_per_minute: float) -> float:
    """How easy the chat is to follow at its average pace, 0.2 to 1.0."""
    for limit, score in READABILITY_STEPS:
        if mean_per_minute <= limit:
            return score
    return READABILITY_FLOOR


def excitement_level(content: ContentSignal) -> float:
    """Whole-log excitement on a 0 to 10 scale."""
    raw = 10 * (
        2 * content.excitement_score
        - 2 * content.disallowed_score
        - content.spam_ratio
    ) + min(30 * content.caps_ratio, 2.0)
    return normalize_score(raw, 0.0, 10.0)


def engagement_quality(
    diversity: float, emote_ratio: float, excitement: float, content: ContentSignal
) -> float:
    """Blend of user diversity, emote use and excitement on a 0 to 10 scale."""
    blended = calculate_weighted_score(
        {
            "diversity": diversity,
            "emotes": min(emote_ratio, 1.0),
            "excitement": excitement / 10,
        },
        ENGAGEMENT_WEIGHTS,
    )
    raw = 10 * blended - 5 * (content.disallowed_score + content.spam_ratio)
    return normalize_score(raw, 0.0, 10.0)


class StatsAggregator:
    """Computes summary statistics for a whole chat log."""

    def __init__(self, content_scorer: ContentScorer | None = None):
        self.content_scorer = content_scorer or ContentScorer()

    def aggregate(self, chat_log: ChatLog, config: AnalysisConfig) -> SummaryStats:
        """
        Aggregate recording-level statistics.

        An empty log yields all-zero statistics.
        """
        events = chat_log.events
        total_messages = len(events)
        if total_messages == 0:
            return SummaryStats()

        messages_per_user = Counter(e.user_id for e in events)
        unique_users = len(messages_per_user)
        total_emotes = sum(e.emote_count for e in events)
        subscriber_messages = sum(1 for e in events if e.is_subscriber)
        moderator_messages = sum(1 for e in events if e.is_moderator)

        # most_common keeps first-seen order among equal counts
        emote_frequency = Counter(emote for e in events for emote in e.emote_tokens)
        top_emotes = tuple(
            EmoteCount(emote=emote, count=count)
            for emote, count in emote_frequency.most_common(TOP_EMOTE_LIMIT)
        )

        minutes = [int(e.timestamp_seconds // 60) for e in events]
        distribution = dict(sorted(Counter(minutes).items()))
        per_minute = np.bincount(np.array(minutes))

        mean_per_minute = float(np.mean(per_minute))
        velocity = ChatVelocity(
            mean_per_minute=mean_per_minute,
            peak_per_minute=int(np.max(per_minute)),
            variance=float(np.var(per_minute)),
            spike_minutes=int(np.sum(per_minute > 2 * mean_per_minute)),
        )

        user_activity = UserActivity(
            avg_messages_per_user=total_messages / unique_users,
            active_chatters=sum(
                1
                for count in messages_per_user.values()
                if count > ACTIVE_CHATTER_MIN_MESSAGES
            ),
            lurker_ratio=safe_ratio(
                sum(1 for count in messages_per_user.values() if count == 1),
                unique_users,
            ),
        )

        content = self.content_scorer.score(
            events, config.excitement_keywords, config.disallowed_terms
        )
        emote_ratio = total_emotes / total_messages
        excitement = excitement_level(content)

        stats = SummaryStats(
            total_messages=total_messages,
            unique_users=unique_users,
            total_emotes=total_emotes,
            subscriber_messages=subscriber_messages,
            moderator_messages=moderator_messages,
            subscriber_ratio=subscriber_messages / total_messages,
            emote_ratio=emote_ratio,
            # Averaged over minutes 0 .. last occupied minute
            avg_messages_per_minute=total_messages / len(per_minute),
            top_emotes=top_emotes,
            chat_activity_distribution=distribution,
            user_activity=user_activity,
            chat_velocity=velocity,
            readability_score=readability_score(mean_per_minute),
            excitement_level=excitement,
            engagement_quality=engagement_quality(
                unique_users / total_messages, emote_ratio, excitement, content
            ),
            content=content,
        )

        logger.debug(
            "Aggregated chat stats",
            recording_id=chat_log.recording_id,
            total_messages=total_messages,
            unique_users=unique_users,
        )
        return stats
