"""Chat analysis orchestration.

Fetches a recording's chat log, runs the peak analysis engine off the event
loop and hands the result to the analysis store.
"""

import asyncio
from typing import Optional

from structlog import get_logger

from ...domain.exceptions import DomainException, RecordingNotFoundError
from ...domain.models.analysis import AnalysisResult
from ...domain.models.chat import ChatLog, RecordingMetadata
from ...domain.models.config import AnalysisConfig
from ...domain.protocols import AnalysisRepository, ContentFetcher
from ...domain.services.analysis_engine import PeakAnalysisEngine
from ...infrastructure.observability import traced

logger = get_logger()


class AnalysisOrchestrator:
    """Runs one analysis request end to end."""

    def __init__(
        self,
        content_fetcher: ContentFetcher,
        repository: AnalysisRepository,
        engine: Optional[PeakAnalysisEngine] = None,
    ):
        """Initialize with collaborators.

        Args:
            content_fetcher: Source of chat logs and recording metadata
            repository: Store for analysis results
            engine: Analysis engine, a single-threaded one by default
        """
        self.content_fetcher = content_fetcher
        self.repository = repository
        self.engine = engine or PeakAnalysisEngine()

    @traced("analysis.analyze")
    async def analyze(
        self,
        recording_id: str,
        config: Optional[AnalysisConfig] = None,
        chat_log: Optional[ChatLog] = None,
        metadata: Optional[RecordingMetadata] = None,
    ) -> AnalysisResult:
        """Analyze a recording's chat and store the result.

        A chat log or metadata passed in is used as is; anything missing is
        fetched from the content source.

        Args:
            recording_id: Recording to analyze
            config: Analysis configuration, defaults when omitted
            chat_log: Pre-fetched chat log
            metadata: Pre-fetched recording metadata

        Returns:
            The stored analysis result

        Raises:
            RecordingNotFoundError: The content source has no such recording
            InvalidInputError: The chat log is malformed
            UpstreamUnavailableError: The content source or store failed
        """
        config = config or AnalysisConfig()
        log = logger.bind(recording_id=recording_id)

        try:
            if chat_log is None:
                chat_log = await self.content_fetcher.fetch_chat_log(recording_id)
                if chat_log is None:
                    raise RecordingNotFoundError(recording_id, resource="Chat log")

            if metadata is None:
                metadata = await self.content_fetcher.fetch_metadata(recording_id)
                if metadata is None:
                    raise RecordingNotFoundError(
                        recording_id, resource="Recording metadata"
                    )

            log.info(
                "Starting chat analysis",
                messages=chat_log.message_count,
                duration_seconds=chat_log.duration_seconds,
                sensitivity_mode=config.sensitivity_mode.value,
                window_sizes=list(config.configured_window_sizes),
            )

            analysis = await asyncio.to_thread(self.engine.analyze, chat_log, config)

            result = AnalysisResult(
                recording_id=recording_id,
                recording_title=metadata.title,
                timelines_by_window_size=analysis.timelines_by_window_size,
                peaks=analysis.peaks,
                baseline=analysis.baseline,
                summary_stats=analysis.summary_stats,
                config=config,
            )

            stored = await self.repository.upsert(result)
        except DomainException as e:
            log.error(
                "Chat analysis failed",
                error_type=type(e).__name__,
                error=str(e),
            )
            raise

        top = stored.top_peak
        log.info(
            "Chat analysis completed",
            peaks=len(stored.peaks),
            top_peak_timestamp=top.timestamp_seconds if top else None,
            top_peak_classification=top.classification.value if top else None,
        )
        return stored

    async def get_analysis(self, recording_id: str) -> AnalysisResult:
        """Get the stored analysis for a recording.

        Raises:
            RecordingNotFoundError: No analysis has been stored for it
        """
        result = await self.repository.get(recording_id)
        if result is None:
            raise RecordingNotFoundError(recording_id, resource="Analysis")
        return result

    async def list_analyses(
        self, limit: int = 100, offset: int = 0
    ) -> list[AnalysisResult]:
        """List stored analyses, most recent first."""
        return await self.repository.list(limit=limit, offset=offset)
