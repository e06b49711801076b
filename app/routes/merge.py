"""Merge routes (scanner results in, unified report out; no AI)."""

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from ..schemas import AxeSummaryRequest, AxeSummaryResponse, MergeRequest, MergeResponse

router = APIRouter()


@router.post("/merge", response_model=MergeResponse)
def merge(req: MergeRequest, request: Request) -> MergeResponse:
    """Merge Lighthouse, Axe-Core and optional Pa11y/keyboard results."""
    report = request.app.state.merger_service.merge_request(req)
    return MergeResponse(**report.to_dict())


@router.post("/merge/text", response_class=PlainTextResponse)
def merge_text(req: MergeRequest, request: Request) -> str:
    """Same merge, rendered as a plain-text report."""
    return request.app.state.merger_service.text_report(req)


@router.post("/axe/summary", response_model=AxeSummaryResponse)
def axe_summary(req: AxeSummaryRequest, request: Request) -> AxeSummaryResponse:
    """Axe-Core results grouped by rule, principle and impact, with fix suggestions."""
    return AxeSummaryResponse(**request.app.state.merger_service.summarize_axe(req.axe))
