"""Health check route."""

from fastapi import APIRouter, Request

from ..schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health(request: Request) -> HealthResponse:
    """Liveness check plus AI provider availability."""
    return HealthResponse(status="ok", ai=request.app.state.ai_service.status())
