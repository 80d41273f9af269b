"""Peak domain model - a detected high-engagement moment."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any


class PeakClassification(str, Enum):
    """Severity classes for interaction peaks."""

    MINOR = "minor"
    MODERATE = "moderate"
    MAJOR = "major"
    MASSIVE = "massive"
    EPIC = "epic"

    @classmethod
    def from_score(cls, combined_score: float) -> "PeakClassification":
        """Classify a peak by its combined intensity and content score."""
        if combined_score > 8:
            return cls.EPIC
        elif combined_score > 6:
            return cls.MASSIVE
        elif combined_score > 4:
            return cls.MAJOR
        elif combined_score > 2:
            return cls.MODERATE
        else:
            return cls.MINOR

    @property
    def rank(self) -> int:
        """Ordinal position, MINOR == 0."""
        return list(PeakClassification).index(self)


@dataclass(frozen=True)
class Peak:
    """An interaction peak detected in a recording's chat.

    The timestamp is the start of the window the peak was detected in.
    Intensity and content score are unitless; confidence is in [0, 1] and
    reflects how many window widths agreed on the moment.
    """

    timestamp_seconds: float
    window_size_seconds: float
    message_count: int
    emote_count: int
    unique_user_count: int
    subscriber_message_count: int
    intensity: float
    content_score: float
    classification: PeakClassification
    normalized_intensity: float = 0.0
    multi_window_supported: bool = False
    supporting_window_sizes: frozenset[float] = field(default_factory=frozenset)
    confidence: float = 1.0

    @property
    def combined_score(self) -> float:
        """Score used for classification and ranking."""
        return self.intensity + self.content_score

    def with_support(
        self,
        supporting_window_sizes: frozenset[float],
        confidence: float,
        multi_window_supported: bool,
    ) -> "Peak":
        """Return a copy carrying multi-window corroboration details."""
        return replace(
            self,
            supporting_window_sizes=frozenset(supporting_window_sizes),
            confidence=min(1.0, max(0.0, confidence)),
            multi_window_supported=multi_window_supported,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp_seconds": self.timestamp_seconds,
            "window_size_seconds": self.window_size_seconds,
            "message_count": self.message_count,
            "emote_count": self.emote_count,
            "unique_user_count": self.unique_user_count,
            "subscriber_message_count": self.subscriber_message_count,
            "intensity": self.intensity,
            "content_score": self.content_score,
            "classification": self.classification.value,
            "normalized_intensity": self.normalized_intensity,
            "multi_window_supported": self.multi_window_supported,
            "supporting_window_sizes": sorted(self.supporting_window_sizes),
            "confidence": self.confidence,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Peak":
        return cls(
            timestamp_seconds=float(data["timestamp_seconds"]),
            window_size_seconds=float(data["window_size_seconds"]),
            message_count=int(data["message_count"]),
            emote_count=int(data["emote_count"]),
            unique_user_count=int(data["unique_user_count"]),
            subscriber_message_count=int(data["subscriber_message_count"]),
            intensity=float(data["intensity"]),
            content_score=float(data["content_score"]),
            classification=PeakClassification(data["classification"]),
            normalized_intensity=float(data.get("normalized_intensity", 0.0)),
            multi_window_supported=bool(data.get("multi_window_supported", False)),
            supporting_window_sizes=frozenset(
                float(w) for w in data.get("supporting_window_sizes", [])
            ),
            confidence=float(data.get("confidence", 1.0)),
        )
