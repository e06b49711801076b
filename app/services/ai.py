"""AI service: OpenAI-compatible chat completions for insights and fixes."""

from deps import Any, Dict, List, OpenAI, Optional, logging

from ..config import AI_PROVIDERS, Settings

logger = logging.getLogger(__name__)

CATEGORIES = ("performance", "accessibility", "bestPractices", "seo")


def _issues_summary(issues: List[Dict[str, Any]]) -> str:
    if not issues:
        return "No issues found."
    parts = []
    for i in issues:
        line = f"- [{i.get('severity') or i.get('type', 'issue')}] {i.get('title')}"
        if i.get("selector"):
            line += f"\n  Element: {i['selector']}"
        if i.get("description"):
            line += f"\n  Details: {str(i['description'])[:300]}"
        parts.append(line)
    return "\n".join(parts)


def _scores_summary(results: Dict[str, Any]) -> str:
    lines = []
    for category in CATEGORIES:
        section = results.get(category) or {}
        score = section.get("score")
        if score is not None:
            lines.append(f"- {category}: {round(score)}/100 ({len(section.get('issues') or [])} issues)")
    scores = results.get("scores") or {}
    if scores:
        lines.append(f"- combined accessibility: {scores.get('combined')}/100 (grade {scores.get('grade')})")
    return "\n".join(lines) or "No scores available."


class AIService:
    """Insights and fix suggestions from the configured provider.

    Every method returns None when the provider is unconfigured or the call fails.
    """

    def __init__(self, settings: Settings, client: Optional[Any] = None):
        self.settings = settings
        self._client = client

    def is_available(self) -> bool:
        return self._client is not None or self.settings.ai_enabled

    def status(self) -> Dict[str, Any]:
        provider = AI_PROVIDERS.get(self.settings.ai_provider, {}).get("name", self.settings.ai_provider)
        available = self.is_available()
        return {
            "available": available,
            "provider": provider,
            "model": self.settings.ai_model,
            "reason": "AI features available" if available else "AI_API_KEY not set",
        }

    def _get_client(self) -> Optional[Any]:
        if self._client is None and self.settings.ai_enabled:
            self._client = OpenAI(
                api_key=self.settings.ai_api_key or "ollama",
                base_url=self.settings.ai_base_url,
                timeout=self.settings.ai_timeout,
            )
        return self._client

    def _complete(self, prompt: str, purpose: str) -> Optional[str]:
        client = self._get_client()
        if client is None:
            logger.warning("AI provider not available for %s", purpose)
            return None
        try:
            r = client.chat.completions.create(
                model=self.settings.ai_model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=self.settings.ai_max_tokens,
                temperature=self.settings.ai_temperature,
            )
        except Exception as exc:
            logger.warning("AI %s failed: %s", purpose, exc)
            return None
        if r.choices and r.choices[0].message.content:
            logger.info("AI %s generated", purpose)
            return r.choices[0].message.content.strip()
        return None

    def generate_insights(self, results: Dict[str, Any]) -> Optional[str]:
        """Prose insights from a merged report's scores."""
        prompt = (
            "You are a web performance and accessibility expert. Summarize the key problems "
            "and the highest-value improvements for this audit.\n\n"
            f"Scores:\n{_scores_summary(results)}\n\n"
            "Be concise. Use short bullet points."
        )
        return self._complete(prompt, "insights")

    def generate_fixes(self, issues: List[Dict[str, Any]]) -> Optional[str]:
        """Code-level fixes for the most important issues."""
        if not issues:
            return None
        top = issues[: self.settings.max_issues_to_process]
        prompt = (
            "You are a front-end engineer. For each issue below give a concrete code-level fix "
            "(HTML, CSS or JavaScript) with a one-line explanation.\n\n"
            f"Issues:\n{_issues_summary(top)}"
        )
        return self._complete(prompt, "fixes")
