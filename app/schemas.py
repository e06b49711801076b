"""Pydantic request/response models."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# --- Request ---


class MergeRequest(BaseModel):
    """Scanner outputs to merge. Lighthouse and Axe are required; Pa11y and keyboard optional."""

    lighthouse: Dict[str, Any] = Field(..., description="Processed Lighthouse results (url, version, fetchTime, categories)")
    axe: Dict[str, Any] = Field(..., description="Raw Axe-Core result object")
    pa11y: Optional[Dict[str, Any]] = Field(default=None, description="Pa11y results: {issues, score, version, runner}")
    keyboard: Optional[Dict[str, Any]] = Field(default=None, description="Keyboard scan results grouped by check")
    raw_lighthouse: bool = Field(default=False, description="Treat `lighthouse` as a raw Lighthouse JSON report")
    raw_pa11y: bool = Field(default=False, description="Treat `pa11y` as raw Pa11y output")


class AnalyzeRequest(MergeRequest):
    """Merge plus optional AI insights and fixes."""

    url: Optional[str] = Field(default=None, description="Analyzed URL (defaults to the Lighthouse URL)")
    include_ai: bool = Field(default=True, description="Generate AI insights and fixes")
    include_pa11y: bool = Field(default=True)
    include_keyboard: bool = Field(default=True)


class AxeSummaryRequest(BaseModel):
    axe: Dict[str, Any] = Field(..., description="Raw Axe-Core result object")


# --- Responses ---


class ScoresOut(BaseModel):
    lighthouse: int
    axe: int
    combined: int
    grade: str
    pa11y: Optional[int] = None


class MergeResponse(BaseModel):
    """Merged report. Sections are passed through as produced by the merger."""

    url: Optional[str] = None
    timestamp: str
    scores: ScoresOut
    accessibility: Dict[str, Any]
    performance: Optional[Dict[str, Any]] = None
    bestPractices: Optional[Dict[str, Any]] = None
    seo: Optional[Dict[str, Any]] = None
    toolDetails: Dict[str, Any] = Field(default_factory=dict)


class AnalyzeResponse(MergeResponse):
    aiInsights: Optional[str] = Field(default=None, description="AI-generated insights")
    aiFixes: Optional[str] = Field(default=None, description="AI-generated code-level fixes")
    toolsEnabled: Dict[str, bool] = Field(default_factory=dict)


class AIStatusOut(BaseModel):
    available: bool
    provider: str
    model: str
    reason: str = ""


class HealthResponse(BaseModel):
    status: str = "ok"
    ai: AIStatusOut


class ErrorDetail(BaseModel):
    """Error response body."""

    success: bool = False
    error: Dict[str, Any] = Field(..., description="type, message, details, timestamp")


class AxeSummaryResponse(BaseModel):
    summary: Dict[str, Any]
    violations: List[Dict[str, Any]] = Field(default_factory=list)
    incomplete: List[Dict[str, Any]] = Field(default_factory=list)
    byPrinciple: Dict[str, List[str]] = Field(default_factory=dict)
    byImpact: Dict[str, List[str]] = Field(default_factory=dict)
    testEngine: Dict[str, Any] = Field(default_factory=dict)
    wcagLevels: Dict[str, int] = Field(default_factory=dict)
