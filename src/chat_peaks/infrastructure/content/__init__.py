"""Content source module."""

from .json_chat_source import JsonChatLogSource, extract_emotes

__all__ = ["JsonChatLogSource", "extract_emotes"]
