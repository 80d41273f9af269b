"""Analysis result domain models."""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from .baseline import Baseline
from .config import AnalysisConfig
from .peak import Peak
from .timeline import ContentSignal, WindowPoint


@dataclass(frozen=True)
class EmoteCount:
    """An emote and how many times it was used."""

    emote: str
    count: int


@dataclass(frozen=True)
class UserActivity:
    """How messages are distributed across chatters."""

    avg_messages_per_user: float = 0.0
    active_chatters: int = 0  # users with more than 5 messages
    lurker_ratio: float = 0.0  # share of users with a single message


@dataclass(frozen=True)
class ChatVelocity:
    """Per-minute message rate statistics."""

    mean_per_minute: float = 0.0
    peak_per_minute: int = 0
    variance: float = 0.0
    spike_minutes: int = 0  # minutes above twice the mean


@dataclass(frozen=True)
class SummaryStats:
    """Recording-level chat statistics, independent of peak detection."""

    total_messages: int = 0
    unique_users: int = 0
    total_emotes: int = 0
    subscriber_messages: int = 0
    moderator_messages: int = 0
    subscriber_ratio: float = 0.0
    emote_ratio: float = 0.0
    avg_messages_per_minute: float = 0.0
    top_emotes: tuple[EmoteCount, ...] = ()
    chat_activity_distribution: dict[int, int] = field(default_factory=dict)
    user_activity: UserActivity = field(default_factory=UserActivity)
    chat_velocity: ChatVelocity = field(default_factory=ChatVelocity)
    readability_score: float = 0.0
    excitement_level: float = 0.0  # 0 to 10
    engagement_quality: float = 0.0  # 0 to 10
    content: ContentSignal = field(default_factory=ContentSignal)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["top_emotes"] = [asdict(e) for e in self.top_emotes]
        # JSON object keys are strings
        data["chat_activity_distribution"] = {
            str(minute): count
            for minute, count in self.chat_activity_distribution.items()
        }
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SummaryStats":
        return cls(
            total_messages=int(data.get("total_messages", 0)),
            unique_users=int(data.get("unique_users", 0)),
            total_emotes=int(data.get("total_emotes", 0)),
            subscriber_messages=int(data.get("subscriber_messages", 0)),
            moderator_messages=int(data.get("moderator_messages", 0)),
            subscriber_ratio=float(data.get("subscriber_ratio", 0.0)),
            emote_ratio=float(data.get("emote_ratio", 0.0)),
            avg_messages_per_minute=float(data.get("avg_messages_per_minute", 0.0)),
            top_emotes=tuple(
                EmoteCount(emote=e["emote"], count=int(e["count"]))
                for e in data.get("top_emotes", [])
            ),
            chat_activity_distribution={
                int(minute): int(count)
                for minute, count in data.get("chat_activity_distribution", {}).items()
            },
            user_activity=UserActivity(**data.get("user_activity", {})),
            chat_velocity=ChatVelocity(**data.get("chat_velocity", {})),
            readability_score=float(data.get("readability_score", 0.0)),
            excitement_level=float(data.get("excitement_level", 0.0)),
            engagement_quality=float(data.get("engagement_quality", 0.0)),
            content=ContentSignal.from_dict(data.get("content", {})),
        )


@dataclass(frozen=True)
class AnalysisResult:
    """The outcome of analyzing one recording's chat.

    Stored by recording id; a new analysis for the same id replaces the
    previous one.
    """

    recording_id: str
    recording_title: str
    timelines_by_window_size: dict[float, tuple[WindowPoint, ...]]
    peaks: tuple[Peak, ...]
    baseline: Baseline
    summary_stats: SummaryStats
    config: AnalysisConfig
    analyzed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def primary_timeline(self) -> tuple[WindowPoint, ...]:
        """Timeline at the configured primary window width."""
        return self.timelines_by_window_size.get(
            self.config.primary_window_size, ()
        )

    @property
    def top_peak(self) -> Optional[Peak]:
        return self.peaks[0] if self.peaks else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "recording_id": self.recording_id,
            "recording_title": self.recording_title,
            "primary_timeline": [p.to_dict() for p in self.primary_timeline],
            "timelines_by_window_size": {
                _width_key(width): [p.to_dict() for p in points]
                for width, points in self.timelines_by_window_size.items()
            },
            "peaks": [p.to_dict() for p in self.peaks],
            "baseline": self.baseline.to_dict(),
            "summary_stats": self.summary_stats.to_dict(),
            "config": self.config.model_dump(mode="json"),
            "analyzed_at": self.analyzed_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnalysisResult":
        analyzed_at = data.get("analyzed_at")
        if isinstance(analyzed_at, str):
            analyzed_at = datetime.fromisoformat(analyzed_at)
        return cls(
            recording_id=data["recording_id"],
            recording_title=data.get("recording_title", ""),
            timelines_by_window_size={
                float(width): tuple(WindowPoint.from_dict(p) for p in points)
                for width, points in data.get("timelines_by_window_size", {}).items()
            },
            peaks=tuple(Peak.from_dict(p) for p in data.get("peaks", [])),
            baseline=Baseline.from_dict(data.get("baseline", {})),
            summary_stats=SummaryStats.from_dict(data.get("summary_stats", {})),
            config=AnalysisConfig.model_validate(data.get("config", {})),
            analyzed_at=analyzed_at or datetime.now(timezone.utc),
        )


def _width_key(width: float) -> str:
    # 30.0 -> "30", 12.5 -> "12.5"
    return f"{width:g}"
