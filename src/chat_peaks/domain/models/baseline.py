"""Baseline domain model - stream-wide activity levels."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class MessagePercentiles:
    """Nearest-rank percentiles of per-minute message counts.

    Always monotonic: p50 <= p75 <= p90 <= p95.
    """

    p50: float = 0.0
    p75: float = 0.0
    p90: float = 0.0
    p95: float = 0.0

    def get(self, key: str) -> float:
        """Get a percentile by its name ("p50", "p75", "p90" or "p95")."""
        if key not in ("p50", "p75", "p90", "p95"):
            raise KeyError(key)
        return getattr(self, key)

    def to_dict(self) -> dict[str, float]:
        return {"p50": self.p50, "p75": self.p75, "p90": self.p90, "p95": self.p95}


@dataclass(frozen=True)
class Baseline:
    """Per-minute activity statistics for a whole recording.

    Used to scale peak thresholds to the recording's own activity level,
    so a quiet stream and a busy one can share the same sensitivity mode.
    """

    avg_messages_per_minute: float = 0.0
    avg_emotes_per_minute: float = 0.0
    message_count_percentiles: MessagePercentiles = field(
        default_factory=MessagePercentiles
    )
    per_minute_activity: tuple[int, ...] = ()  # index = minute, zero-filled

    def to_dict(self) -> dict[str, Any]:
        return {
            "avg_messages_per_minute": self.avg_messages_per_minute,
            "avg_emotes_per_minute": self.avg_emotes_per_minute,
            "message_count_percentiles": self.message_count_percentiles.to_dict(),
            "per_minute_activity": list(self.per_minute_activity),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Baseline":
        percentiles = data.get("message_count_percentiles", {})
        return cls(
            avg_messages_per_minute=float(data.get("avg_messages_per_minute", 0.0)),
            avg_emotes_per_minute=float(data.get("avg_emotes_per_minute", 0.0)),
            message_count_percentiles=MessagePercentiles(
                p50=float(percentiles.get("p50", 0.0)),
                p75=float(percentiles.get("p75", 0.0)),
                p90=float(percentiles.get("p90", 0.0)),
                p95=float(percentiles.get("p95", 0.0)),
            ),
            per_minute_activity=tuple(
                int(v) for v in data.get("per_minute_activity", [])
            ),
        )
