"""Analysis configuration - per-call sensitivity and classification knobs."""

from dataclasses import dataclass
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SensitivityMode(str, Enum):
    """Operator-selected presets for how far from baseline a peak must be."""

    CONSERVATIVE = "conservative"
    BALANCED = "balanced"
    AGGRESSIVE = "aggressive"


@dataclass(frozen=True)
class SensitivityThresholds:
    """Adaptive threshold pair resolved from a sensitivity mode.

    message_percentile names the baseline percentile used as the message
    floor; intensity is the minimum intensity score for acceptance.
    """

    message_percentile: str
    intensity: float


SENSITIVITY_PRESETS: dict[SensitivityMode, SensitivityThresholds] = {
    SensitivityMode.CONSERVATIVE: SensitivityThresholds("p95", 2.0),
    SensitivityMode.BALANCED: SensitivityThresholds("p90", 1.5),
    SensitivityMode.AGGRESSIVE: SensitivityThresholds("p75", 1.2),
}

DEFAULT_EXCITEMENT_KEYWORDS = [
    "pog",
    "omg",
    "wow",
    "insane",
    "hype",
    "no way",
    "lets go",
    "let's go",
    "clutch",
    "crazy",
    "lol",
    "lmao",
]


class AnalysisConfig(BaseModel):
    """
    Configuration for one chat peak analysis.

    Supplied by the settings layer and treated as read-only input by the
    engine. Field bounds are checked here at construction; the engine does
    not re-validate them.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    # Thresholds
    message_threshold: int = Field(
        default=50,
        ge=1,
        le=1000,
        description="Message count floor per window before adaptation (1-1000)",
    )
    emote_threshold: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Emote count gate per window, informational (1-100)",
    )

    # Windowing
    peak_window_size: int = Field(
        default=30,
        ge=10,
        le=300,
        description="Primary window width in seconds (10-300)",
    )
    minimum_peak_distance: int = Field(
        default=120,
        ge=30,
        le=600,
        description="Base spacing between accepted peaks in seconds (30-600)",
    )

    # Detection behaviour
    sensitivity_mode: SensitivityMode = Field(
        default=SensitivityMode.BALANCED,
        description="Preset controlling adaptive thresholds",
    )
    use_adaptive_thresholds: bool = Field(
        default=True, description="Scale the message floor to the stream baseline"
    )
    multi_window_analysis: bool = Field(
        default=False, description="Corroborate peaks across several window widths"
    )
    content_analysis: bool = Field(
        default=True, description="Gate and score peaks on message content"
    )
    window_sizes: List[int] = Field(
        default_factory=lambda: [15, 30, 60],
        description="Alternate window widths used with multi-window analysis",
    )

    # Content heuristics
    excitement_keywords: List[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCITEMENT_KEYWORDS),
        description="Case-insensitive substrings that mark an excited message",
    )
    disallowed_terms: List[str] = Field(
        default_factory=list,
        description="Case-insensitive substrings that penalize a window",
    )

    @field_validator("window_sizes")
    def validate_window_sizes(cls, v):
        """Ensure alternate widths are positive."""
        if any(size <= 0 for size in v):
            raise ValueError("Window sizes must be positive")
        return v

    @property
    def thresholds(self) -> SensitivityThresholds:
        """Threshold pair for the configured sensitivity mode."""
        return SENSITIVITY_PRESETS[SensitivityMode(self.sensitivity_mode)]

    @property
    def primary_window_size(self) -> float:
        return float(self.peak_window_size)

    @property
    def configured_window_sizes(self) -> tuple[float, ...]:
        """All widths analyzed, ascending; only the primary one unless multi-window."""
        if not self.multi_window_analysis:
            return (self.primary_window_size,)
        sizes = {self.primary_window_size}
        sizes.update(float(size) for size in self.window_sizes)
        return tuple(sorted(sizes))
