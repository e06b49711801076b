"""Analyze route (merge plus AI insights and fixes)."""

from fastapi import APIRouter, Request

from ..schemas import AnalyzeRequest, AnalyzeResponse
from ..services import AnalysisOrchestrator, PrecomputedScanners

router = APIRouter()


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(req: AnalyzeRequest, request: Request) -> AnalyzeResponse:
    """Full analysis: merged report + AI insights + AI fixes."""
    state = request.app.state
    orchestrator = AnalysisOrchestrator(
        PrecomputedScanners(req),
        merger=state.merger_service,
        ai_service=state.ai_service,
    )
    result = await orchestrator.analyze(
        url=req.url or req.lighthouse.get("url"),
        include_ai=req.include_ai,
        include_pa11y=req.include_pa11y and req.pa11y is not None,
        include_keyboard=req.include_keyboard and req.keyboard is not None,
    )
    return AnalyzeResponse(**result)
