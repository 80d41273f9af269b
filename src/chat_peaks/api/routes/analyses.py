"""Chat analysis endpoints."""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Query, status

from ...application.services import AnalysisOrchestrator
from ..dependencies import get_orchestrator
from ..schemas.analyses import (
    AnalysisListResponse,
    AnalysisSummaryResponse,
    AnalyzeRequest,
)

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def analyze_recording(
    request: AnalyzeRequest,
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
) -> Dict[str, Any]:
    """Analyze a recording's chat and store the result.

    Re-analyzing a recording replaces its stored analysis.

    Args:
        request: Recording id and analysis configuration.
        orchestrator: Analysis service.

    Returns:
        The full analysis result.
    """
    result = await orchestrator.analyze(request.recording_id, config=request.config)
    return result.to_dict()


@router.get("", response_model=AnalysisListResponse)
async def list_analyses(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
):
    """List stored analyses, most recent first."""
    results = await orchestrator.list_analyses(limit=limit, offset=offset)
    return AnalysisListResponse(
        analyses=[AnalysisSummaryResponse.from_result(r) for r in results],
        limit=limit,
        offset=offset,
    )


@router.get("/{recording_id}")
async def get_analysis(
    recording_id: str,
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
) -> Dict[str, Any]:
    """Get the stored analysis for a recording."""
    result = await orchestrator.get_analysis(recording_id)
    return result.to_dict()
