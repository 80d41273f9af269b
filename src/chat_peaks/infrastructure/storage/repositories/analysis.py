"""Analysis repository implementation."""

from datetime import timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from structlog import get_logger

from ....domain.exceptions import UpstreamUnavailableError
from ....domain.models.analysis import AnalysisResult
from ...database.database import Database
from ...database.models import AnalysisModel

logger = get_logger()

COLLABORATOR = "AnalysisStore"


class AnalysisRepository:
    """SQLAlchemy implementation of the analysis repository.

    Each call runs in its own transaction. Database errors surface as
    UpstreamUnavailableError.
    """

    def __init__(self, database: Database):
        """Initialize with the database session manager."""
        self.database = database

    async def upsert(self, result: AnalysisResult) -> AnalysisResult:
        """Insert or fully replace the analysis for result.recording_id."""
        data = result.to_dict()
        try:
            async with self.database.session() as session:
                model = await session.get(AnalysisModel, result.recording_id)
                if model is None:
                    model = AnalysisModel(recording_id=result.recording_id)
                    session.add(model)

                model.recording_title = result.recording_title
                model.timelines = data["timelines_by_window_size"]
                model.peaks = data["peaks"]
                model.baseline = data["baseline"]
                model.summary_stats = data["summary_stats"]
                model.config = data["config"]
                model.peak_count = len(result.peaks)
                model.analyzed_at = result.analyzed_at
        except SQLAlchemyError as e:
            logger.error(
                "Failed to store analysis",
                recording_id=result.recording_id,
                error=str(e),
            )
            raise UpstreamUnavailableError(COLLABORATOR, "upsert", str(e)) from e

        logger.info(
            "Stored analysis",
            recording_id=result.recording_id,
            peak_count=len(result.peaks),
        )
        return result

    async def get(self, recording_id: str) -> Optional[AnalysisResult]:
        """Get the stored analysis for a recording."""
        try:
            async with self.database.session() as session:
                model = await session.get(AnalysisModel, recording_id)
                return self._to_entity(model) if model else None
        except SQLAlchemyError as e:
            raise UpstreamUnavailableError(COLLABORATOR, "get", str(e)) from e

    async def list(self, limit: int = 100, offset: int = 0) -> list[AnalysisResult]:
        """List stored analyses, most recent first."""
        try:
            async with self.database.session() as session:
                result = await session.execute(
                    select(AnalysisModel)
                    .order_by(
                        AnalysisModel.analyzed_at.desc(),
                        AnalysisModel.recording_id,
                    )
                    .limit(limit)
                    .offset(offset)
                )
                models = result.scalars().all()
                return [self._to_entity(model) for model in models]
        except SQLAlchemyError as e:
            raise UpstreamUnavailableError(COLLABORATOR, "list", str(e)) from e

    def _to_entity(self, model: AnalysisModel) -> AnalysisResult:
        """Convert database model to domain entity."""
        analyzed_at = model.analyzed_at
        # SQLite drops the offset on the way back
        if analyzed_at is not None and analyzed_at.tzinfo is None:
            analyzed_at = analyzed_at.replace(tzinfo=timezone.utc)

        return AnalysisResult.from_dict(
            {
                "recording_id": model.recording_id,
                "recording_title": model.recording_title,
                "timelines_by_window_size": model.timelines,
                "peaks": model.peaks,
                "baseline": model.baseline,
                "summary_stats": model.summary_stats,
                "config": model.config,
                "analyzed_at": analyzed_at.isoformat() if analyzed_at else None,
            }
        )
