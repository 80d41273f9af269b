"""Timeline domain models - per-window chat aggregates."""

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class ContentSignal:
    """Heuristic content signals for a group of chat messages.

    All values are 0.0 for an empty group.
    """

    excitement_score: float = 0.0
    disallowed_score: float = 0.0
    caps_ratio: float = 0.0  # 0.0 to 1.0
    spam_ratio: float = 0.0  # 0.0 to 1.0
    avg_message_length: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ContentSignal":
        return cls(
            excitement_score=float(data.get("excitement_score", 0.0)),
            disallowed_score=float(data.get("disallowed_score", 0.0)),
            caps_ratio=float(data.get("caps_ratio", 0.0)),
            spam_ratio=float(data.get("spam_ratio", 0.0)),
            avg_message_length=float(data.get("avg_message_length", 0.0)),
        )


@dataclass(frozen=True)
class WindowPoint:
    """Aggregated chat activity for one fixed-width window.

    The window covers [window_start, window_start + window_size_seconds).
    """

    window_start: float
    window_size_seconds: float
    message_count: int = 0
    emote_count: int = 0
    unique_user_count: int = 0
    subscriber_message_count: int = 0
    messages_per_second: float = 0.0
    content: ContentSignal = field(default_factory=ContentSignal)

    @property
    def window_end(self) -> float:
        """End of the window (exclusive)."""
        return self.window_start + self.window_size_seconds

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["content"] = self.content.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WindowPoint":
        return cls(
            window_start=float(data["window_start"]),
            window_size_seconds=float(data["window_size_seconds"]),
            message_count=int(data.get("message_count", 0)),
            emote_count=int(data.get("emote_count", 0)),
            unique_user_count=int(data.get("unique_user_count", 0)),
            subscriber_message_count=int(data.get("subscriber_message_count", 0)),
            messages_per_second=float(data.get("messages_per_second", 0.0)),
            content=ContentSignal.from_dict(data.get("content", {})),
        )
