"""
Timeline construction - buckets a chat log into fixed-width windows.
"""

import math
from typing import Iterable, Sequence

from structlog import get_logger

from ..exceptions import InvalidInputError
from ..models.chat import ChatEvent, ChatLog
from ..models.timeline import WindowPoint
from .content_scorer import ContentScorer

logger = get_logger()


class TimelineBuilder:
    """Builds per-window activity series for one or more window widths."""

    def __init__(self, content_scorer: ContentScorer | None = None):
        self.content_scorer = content_scorer or ContentScorer()

    def build(
        self,
        chat_log: ChatLog,
        window_sizes: Iterable[float],
        excitement_keywords: Sequence[str] = (),
        disallowed_terms: Sequence[str] = (),
    ) -> dict[float, tuple[WindowPoint, ...]]:
        """
        Build a timeline for every requested width.

        Window k covers [k*w, k*w + w) for k = 0 .. ceil(duration / w) - 1.
        Events at or past the end of the last window are folded into it, so
        every event is counted exactly once per width.

        Raises:
            InvalidInputError: Bad duration, width or event timestamp
        """
        widths = [float(w) for w in window_sizes]
        self.validate(chat_log, widths)

        return {
            width: self.build_one(
                chat_log, width, excitement_keywords, disallowed_terms
            )
            for width in widths
        }

    def build_one(
        self,
        chat_log: ChatLog,
        width: float,
        excitement_keywords: Sequence[str] = (),
        disallowed_terms: Sequence[str] = (),
    ) -> tuple[WindowPoint, ...]:
        """Build the timeline for a single, already validated width."""
        window_count = max(1, math.ceil(chat_log.duration_seconds / width))
        buckets: list[list[ChatEvent]] = [[] for _ in range(window_count)]

        for event in chat_log.events:
            index = min(int(event.timestamp_seconds // width), window_count - 1)
            buckets[index].append(event)

        points = tuple(
            self._aggregate(
                k * width, width, bucket, excitement_keywords, disallowed_terms
            )
            for k, bucket in enumerate(buckets)
        )

        logger.debug(
            "Built timeline",
            recording_id=chat_log.recording_id,
            window_size_seconds=width,
            windows=len(points),
        )
        return points

    def validate(self, chat_log: ChatLog, window_sizes: Iterable[float] = ()) -> None:
        """Reject logs and widths the engine cannot bucket."""
        for width in window_sizes:
            if not math.isfinite(width) or width <= 0:
                raise InvalidInputError(
                    "Window width must be a positive number",
                    field_name="window_size_seconds",
                    invalid_value=width,
                    recording_id=chat_log.recording_id,
                )

        duration = chat_log.duration_seconds
        if not math.isfinite(duration) or duration <= 0:
            raise InvalidInputError(
                "Recording duration must be a positive number",
                field_name="duration_seconds",
                invalid_value=duration,
                recording_id=chat_log.recording_id,
            )

        for event in chat_log.events:
            t = event.timestamp_seconds
            if not math.isfinite(t) or t < 0:
                raise InvalidInputError(
                    "Chat event timestamp must be a non-negative number",
                    field_name="timestamp_seconds",
                    invalid_value=t,
                    recording_id=chat_log.recording_id,
                )

    def _aggregate(
        self,
        window_start: float,
        width: float,
        events: list[ChatEvent],
        excitement_keywords: Sequence[str],
        disallowed_terms: Sequence[str],
    ) -> WindowPoint:
        message_count = len(events)
        return WindowPoint(
            window_start=window_start,
            window_size_seconds=width,
            message_count=message_count,
            emote_count=sum(e.emote_count for e in events),
            unique_user_count=len({e.user_id for e in events}),
            subscriber_message_count=sum(1 for e in events if e.is_subscriber),
            messages_per_second=message_count / width,
            content=self.content_scorer.score(
                events, excitement_keywords, disallowed_terms
            ),
        )
