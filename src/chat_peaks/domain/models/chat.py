"""Chat log domain models - the immutable input to an analysis."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ChatEvent:
    """A single chat message posted during a recording.

    Timestamps are seconds from the start of the recording.
    """

    timestamp_seconds: float
    user_id: str
    text: str
    emote_tokens: tuple[str, ...] = ()
    is_subscriber: bool = False
    is_moderator: bool = False

    @property
    def emote_count(self) -> int:
        """Number of emote tokens in the message."""
        return len(self.emote_tokens)


@dataclass(frozen=True)
class ChatLog:
    """The complete chat replay of one recording.

    Events are ordered by non-decreasing timestamp.
    """

    recording_id: str
    events: tuple[ChatEvent, ...] = field(default_factory=tuple)
    duration_seconds: float = 0.0

    def __post_init__(self) -> None:
        # Accept any iterable of events but always store a tuple
        if not isinstance(self.events, tuple):
            object.__setattr__(self, "events", tuple(self.events))

    @property
    def is_empty(self) -> bool:
        """Check if the log has no events."""
        return not self.events

    @property
    def message_count(self) -> int:
        return len(self.events)


@dataclass(frozen=True)
class RecordingMetadata:
    """Descriptive metadata for a recording."""

    recording_id: str
    title: str = ""
