"""SQLAlchemy models for database tables."""

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Integer, String

from .database import Base


class AnalysisModel(Base):
    """Stored chat analysis, one row per recording."""

    __tablename__ = "chat_analyses"

    recording_id = Column(String(255), primary_key=True)
    recording_title = Column(String(500), nullable=False, default="")

    # Serialized analysis parts
    timelines = Column(JSON, nullable=False, default=dict)
    peaks = Column(JSON, nullable=False, default=list)
    baseline = Column(JSON, nullable=False, default=dict)
    summary_stats = Column(JSON, nullable=False, default=dict)
    config = Column(JSON, nullable=False, default=dict)

    peak_count = Column(Integer, nullable=False, default=0)

    analyzed_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True,
    )
