"""Startup validation and configuration checks."""

from deps import Path, logging

from .config import Settings

logger = logging.getLogger(__name__)


def validate_config(settings: Settings) -> None:
    """Validate config at startup and warn if .env or AI_API_KEY missing."""
    env_exists = Path(".env").exists()
    if settings.ai_enabled:
        logger.info("AI features enabled (%s, model %s)", settings.ai_provider, settings.ai_model)
        return
    if not env_exists:
        logger.warning(".env file not found. AI features will be disabled.")
        logger.warning("Create .env from .env.example and set AI_API_KEY for AI features.")
    else:
        logger.warning("AI_API_KEY not set in .env. AI features will be disabled.")
        logger.warning("Set AI_API_KEY in .env to enable AI insights and fixes.")
