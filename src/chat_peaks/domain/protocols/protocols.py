"""Domain protocols - interfaces for dependency inversion."""

from typing import Optional, Protocol

from ..models.analysis import AnalysisResult
from ..models.chat import ChatLog, RecordingMetadata


class ContentFetcher(Protocol):
    """Source of recording chat logs and metadata.

    Implementations return None when the recording is unknown and raise
    UpstreamUnavailableError when the source itself fails. Callers own any
    retry policy.
    """

    async def fetch_chat_log(self, recording_id: str) -> Optional[ChatLog]:
        """Get the complete chat log for a recording."""
        ...

    async def fetch_metadata(self, recording_id: str) -> Optional[RecordingMetadata]:
        """Get descriptive metadata for a recording."""
        ...


class AnalysisRepository(Protocol):
    """Key-value store of analysis results, keyed uniquely by recording id."""

    async def upsert(self, result: AnalysisResult) -> AnalysisResult:
        """Insert or fully replace the analysis for result.recording_id."""
        ...

    async def get(self, recording_id: str) -> Optional[AnalysisResult]:
        """Get the stored analysis for a recording."""
        ...

    async def list(self, limit: int = 100, offset: int = 0) -> list[AnalysisResult]:
        """List stored analyses, most recent first."""
        ...
