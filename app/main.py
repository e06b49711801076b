"""FastAPI app: /health, /merge, /merge/text, /axe/summary, /analyze."""

from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, configure_logging, load_settings
from .errors import AuditError, audit_error_handler
from .routes import analyze_router, health_router, merge_router
from .services import AIService, MergerService
from .startup import validate_config


def create_app(settings: Optional[Settings] = None, ai_service: Optional[AIService] = None) -> FastAPI:
    """Build the app. Settings are resolved once here and shared through ``app.state``."""
    settings = settings or load_settings()
    app = FastAPI(
        title="Website Accessibility Audit API",
        description="Merges Lighthouse, Axe-Core and Pa11y results into one scored WCAG report, with optional AI insights.",
        version="0.1.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(AuditError, audit_error_handler)

    @app.on_event("startup")
    def _validate_config() -> None:
        configure_logging(settings.log_level)
        validate_config(settings)

    app.state.settings = settings
    app.state.merger_service = MergerService()
    app.state.ai_service = ai_service or AIService(settings)

    app.include_router(health_router)
    app.include_router(merge_router)
    app.include_router(analyze_router)
    return app


app = create_app()


def main() -> None:
    settings = load_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
