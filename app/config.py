"""Configuration from environment."""

from deps import Dict, Optional, dataclass, load_dotenv, logging, os

load_dotenv()

# OpenAI-compatible chat completion endpoints.
AI_PROVIDERS: Dict[str, Dict[str, str]] = {
    "openai": {
        "name": "OpenAI",
        "base_url": "https://api.openai.com/v1",
        "default_model": "gpt-4o-mini",
    },
    "openrouter": {
        "name": "OpenRouter",
        "base_url": "https://openrouter.ai/api/v1",
        "default_model": "x-ai/grok-4-fast:free",
    },
    "groq": {
        "name": "Groq",
        "base_url": "https://api.groq.com/openai/v1",
        "default_model": "llama-3.1-8b-instant",
    },
    "together": {
        "name": "Together.ai",
        "base_url": "https://api.together.xyz/v1",
        "default_model": "deepseek-ai/DeepSeek-V3.1",
    },
    "ollama": {
        "name": "Ollama",
        "base_url": "http://localhost:11434/v1",
        "default_model": "llama3",
    },
}
DEFAULT_PROVIDER = "openrouter"


def get_ai_provider() -> str:
    """AI provider key. Unknown providers fall back to openrouter."""
    provider = os.environ.get("AI_PROVIDER", DEFAULT_PROVIDER).strip().lower()
    return provider if provider in AI_PROVIDERS else DEFAULT_PROVIDER


def get_ai_api_key() -> str:
    """API key for the provider (required for AI features, except ollama)."""
    return os.environ.get("AI_API_KEY", "").strip()


def get_ai_model(provider: str) -> str:
    return os.environ.get("AI_MODEL", "").strip() or AI_PROVIDERS[provider]["default_model"]


def get_ai_base_url(provider: str) -> str:
    return os.environ.get("AI_BASE_URL", "").strip() or AI_PROVIDERS[provider]["base_url"]


def get_log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"


def get_host() -> str:
    return os.environ.get("HOST", "0.0.0.0").strip()


def get_port() -> int:
    try:
        return int(os.environ.get("PORT", "8000"))
    except ValueError:
        return 8000


@dataclass(frozen=True)
class Settings:
    """Process-wide settings, built once at startup and passed to services."""

    ai_provider: str = DEFAULT_PROVIDER
    ai_api_key: str = ""
    ai_model: str = AI_PROVIDERS[DEFAULT_PROVIDER]["default_model"]
    ai_base_url: str = AI_PROVIDERS[DEFAULT_PROVIDER]["base_url"]
    ai_max_tokens: int = 2000
    ai_temperature: float = 0.7
    ai_timeout: float = 30.0
    max_issues_to_process: int = 5
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    @property
    def ai_enabled(self) -> bool:
        """Ollama runs locally without a key; every other provider needs one."""
        return bool(self.ai_api_key) or self.ai_provider == "ollama"


def load_settings() -> Settings:
    provider = get_ai_provider()
    return Settings(
        ai_provider=provider,
        ai_api_key=get_ai_api_key(),
        ai_model=get_ai_model(provider),
        ai_base_url=get_ai_base_url(provider),
        log_level=get_log_level(),
        host=get_host(),
        port=get_port(),
    )


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or get_log_level()), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
