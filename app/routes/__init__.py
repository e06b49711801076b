"""Route handlers."""

from .analyze import router as analyze_router
from .health import router as health_router
from .merge import router as merge_router

__all__ = ["health_router", "merge_router", "analyze_router"]
