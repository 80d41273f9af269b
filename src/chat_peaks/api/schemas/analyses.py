"""Analysis request/response schemas."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ...domain.models.analysis import AnalysisResult
from ...domain.models.config import AnalysisConfig


class AnalyzeRequest(BaseModel):
    """Request to analyze a recording's chat."""

    recording_id: str = Field(..., min_length=1, description="Recording to analyze")
    config: AnalysisConfig = Field(
        default_factory=AnalysisConfig,
        description="Analysis configuration; defaults apply when omitted",
    )


class AnalysisSummaryResponse(BaseModel):
    """Short description of a stored analysis."""

    recording_id: str
    recording_title: str
    peak_count: int
    top_peak: Optional[Dict[str, Any]]
    total_messages: int
    analyzed_at: datetime

    @classmethod
    def from_result(cls, result: AnalysisResult) -> "AnalysisSummaryResponse":
        top = result.top_peak
        return cls(
            recording_id=result.recording_id,
            recording_title=result.recording_title,
            peak_count=len(result.peaks),
            top_peak=top.to_dict() if top else None,
            total_messages=result.summary_stats.total_messages,
            analyzed_at=result.analyzed_at,
        )


class AnalysisListResponse(BaseModel):
    """Page of stored analyses, most recent first."""

    analyses: List[AnalysisSummaryResponse]
    limit: int
    offset: int
