"""
Content scoring for groups of chat messages.

Cheap keyword, capitalization and repetition heuristics that tell an excited
burst of chat apart from a flood of copy-pasted spam.
"""

import re
from collections import Counter
from typing import Iterable, Sequence

from ..models.chat import ChatEvent
from ..models.timeline import ContentSignal
from ...utils.scoring_utils import safe_ratio

# A message repeated more than this many times within a group counts as spam
SPAM_REPEAT_LIMIT = 3

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Lowercase, collapse whitespace runs and trim."""
    return _WHITESPACE_RUN.sub(" ", text.lower()).strip()


def content_score(signal: ContentSignal) -> float:
    """
    Collapse a content signal into a single non-negative score.

    Excitement raises the score, disallowed terms and spam lower it, and a
    little shouting adds at most one point.
    """
    score = (
        2.0 * signal.excitement_score
        - 2.0 * signal.disallowed_score
        + min(3.0 * signal.caps_ratio, 1.0)
        - signal.spam_ratio
    )
    return max(0.0, score)


class ContentScorer:
    """Scores chat message groups for excitement, disallowed terms, caps and spam."""

    def score(
        self,
        events: Sequence[ChatEvent],
        excitement_keywords: Iterable[str],
        disallowed_terms: Iterable[str],
    ) -> ContentSignal:
        """
        Compute the content signal for a group of events.

        Args:
            events: Messages to score, in timestamp order
            excitement_keywords: Case-insensitive substrings marking excitement
            disallowed_terms: Case-insensitive substrings that penalize the group

        Returns:
            ContentSignal; all zeros for an empty group
        """
        n = len(events)
        if n == 0:
            return ContentSignal()

        keywords = [k.lower() for k in excitement_keywords if k]
        disallowed = [t.lower() for t in disallowed_terms if t]

        excited = 0
        flagged = 0
        upper_chars = 0
        total_chars = 0
        spam = 0
        seen: Counter[str] = Counter()

        for event in events:
            lowered = event.text.lower()
            if any(keyword in lowered for keyword in keywords):
                excited += 1
            if any(term in lowered for term in disallowed):
                flagged += 1

            total_chars += len(event.text)
            upper_chars += sum(1 for ch in event.text if ch.isupper())

            # Running count, so the first three copies of a message are not spam
            normalized = normalize_text(event.text)
            seen[normalized] += 1
            if seen[normalized] > SPAM_REPEAT_LIMIT:
                spam += 1

        return ContentSignal(
            excitement_score=excited / n,
            disallowed_score=flagged / n,
            caps_ratio=safe_ratio(upper_chars, total_chars),
            spam_ratio=spam / n,
            avg_message_length=total_chars / n,
        )
