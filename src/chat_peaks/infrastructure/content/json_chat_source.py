"""File-based chat log source.

Reads chat replay exports stored as ``<chat_log_dir>/<recording_id>.json``::

    {
        "title": "Finals day",
        "duration": 3600,
        "messages": [
            {"timestamp": 12.5, "user": "viewer1", "message": "PogChamp",
             "emotes": ["PogChamp"], "is_subscriber": true, "is_moderator": false}
        ]
    }
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Iterable, Optional

from structlog import get_logger

from ...domain.exceptions import UpstreamUnavailableError
from ...domain.models.chat import ChatEvent, ChatLog, RecordingMetadata

logger = get_logger()

COLLABORATOR = "ChatLogSource"


def extract_emotes(text: str, known_emotes: Iterable[str]) -> tuple[str, ...]:
    """Whitespace-separated tokens of text that are known emotes, in order."""
    known = set(known_emotes)
    return tuple(token for token in text.split() if token in known)


class JsonChatLogSource:
    """Content fetcher backed by a directory of JSON chat exports."""

    def __init__(self, chat_log_dir: Path, known_emotes: Iterable[str] = ()):
        self.chat_log_dir = Path(chat_log_dir)
        self.known_emotes = tuple(known_emotes)

    async def fetch_chat_log(self, recording_id: str) -> Optional[ChatLog]:
        """Get the chat log for a recording, or None if there is no export."""
        data = await self._load(recording_id, "fetch_chat_log")
        if data is None:
            return None

        try:
            events = sorted(
                (self._to_event(message) for message in data.get("messages", [])),
                key=lambda e: e.timestamp_seconds,
            )
            duration = float(data.get("duration") or 0.0)
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamUnavailableError(
                COLLABORATOR, "fetch_chat_log", f"malformed export: {e!r}"
            ) from e

        if duration <= 0 and events:
            duration = events[-1].timestamp_seconds + 1

        logger.debug(
            "Loaded chat log",
            recording_id=recording_id,
            messages=len(events),
            duration_seconds=duration,
        )
        return ChatLog(
            recording_id=recording_id, events=tuple(events), duration_seconds=duration
        )

    async def fetch_metadata(self, recording_id: str) -> Optional[RecordingMetadata]:
        """Get the recording title from the export, or None if there is no export."""
        data = await self._load(recording_id, "fetch_metadata")
        if data is None:
            return None
        return RecordingMetadata(
            recording_id=recording_id, title=str(data.get("title", ""))
        )

    def _path(self, recording_id: str) -> Path:
        # Recording ids are used as file names; keep them inside the directory
        return self.chat_log_dir / f"{Path(recording_id).name}.json"

    async def _load(self, recording_id: str, operation: str) -> Optional[dict[str, Any]]:
        path = self._path(recording_id)
        try:
            raw = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except FileNotFoundError:
            logger.info("Chat log export not found", recording_id=recording_id)
            return None
        except OSError as e:
            raise UpstreamUnavailableError(COLLABORATOR, operation, str(e)) from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise UpstreamUnavailableError(
                COLLABORATOR, operation, f"invalid JSON: {e}"
            ) from e

        if not isinstance(data, dict):
            raise UpstreamUnavailableError(
                COLLABORATOR, operation, "export must be a JSON object"
            )
        return data

    def _to_event(self, message: dict[str, Any]) -> ChatEvent:
        text = str(message.get("message", ""))
        emotes = message.get("emotes")
        return ChatEvent(
            timestamp_seconds=float(message["timestamp"]),
            user_id=str(message["user"]),
            text=text,
            emote_tokens=(
                tuple(emotes) if emotes else extract_emotes(text, self.known_emotes)
            ),
            is_subscriber=bool(message.get("is_subscriber", False)),
            is_moderator=bool(message.get("is_moderator", False)),
        )
