"""Domain models."""

from .analysis import (
    AnalysisResult,
    ChatVelocity,
    EmoteCount,
    SummaryStats,
    UserActivity,
)
from .baseline import Baseline, MessagePercentiles
from .chat import ChatEvent, ChatLog, RecordingMetadata
from .config import (
    SENSITIVITY_PRESETS,
    AnalysisConfig,
    SensitivityMode,
    SensitivityThresholds,
)
from .peak import Peak, PeakClassification
from .timeline import ContentSignal, WindowPoint

__all__ = [
    "AnalysisConfig",
    "AnalysisResult",
    "Baseline",
    "ChatEvent",
    "ChatLog",
    "ChatVelocity",
    "ContentSignal",
    "EmoteCount",
    "MessagePercentiles",
    "Peak",
    "PeakClassification",
    "RecordingMetadata",
    "SENSITIVITY_PRESETS",
    "SensitivityMode",
    "SensitivityThresholds",
    "SummaryStats",
    "UserActivity",
    "WindowPoint",
]
