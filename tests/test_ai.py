from __future__ import annotations

from types import SimpleNamespace

from app.config import Settings
from app.services import AIService


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.requests = []

    def create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _client(completions: FakeCompletions):
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


def _results() -> dict:
    return {
        "scores": {"lighthouse": 81, "axe": 23, "combined": 52, "grade": "F"},
        "accessibility": {"score": 52, "issues": [{"title": "Images must have alternate text"}]},
        "performance": {"score": 92, "issues": []},
    }


def test_unconfigured_service_is_unavailable() -> None:
    service = AIService(Settings())

    assert service.is_available() is False
    assert service.generate_insights(_results()) is None
    status = service.status()
    assert status["available"] is False
    assert status["provider"] == "OpenRouter"
    assert status["reason"] == "AI_API_KEY not set"


def test_ollama_needs_no_key() -> None:
    assert AIService(Settings(ai_provider="ollama")).is_available() is True


def test_insights_are_generated_from_scores() -> None:
    completions = FakeCompletions(content="  Fix the images first.  ")
    settings = Settings(ai_api_key="key", ai_model="test-model", ai_max_tokens=500, ai_temperature=0.2)
    service = AIService(settings, client=_client(completions))

    assert service.generate_insights(_results()) == "Fix the images first."
    request = completions.requests[0]
    assert request["model"] == "test-model"
    assert request["max_tokens"] == 500
    assert request["temperature"] == 0.2
    prompt = request["messages"][0]["content"]
    assert "- accessibility: 52/100 (1 issues)" in prompt
    assert "- combined accessibility: 52/100 (grade F)" in prompt


def test_fixes_are_limited_to_the_first_issues() -> None:
    completions = FakeCompletions(content="Add alt text.")
    service = AIService(Settings(ai_api_key="key", max_issues_to_process=2), client=_client(completions))
    issues = [
        {"title": "Issue A", "severity": "critical", "selector": "img.a"},
        {"title": "Issue B", "severity": "serious"},
        {"title": "Issue C", "severity": "minor"},
    ]

    assert service.generate_fixes(issues) == "Add alt text."
    prompt = completions.requests[0]["messages"][0]["content"]
    assert "[critical] Issue A" in prompt
    assert "Element: img.a" in prompt
    assert "Issue B" in prompt
    assert "Issue C" not in prompt


def test_no_issues_means_no_fixes_request() -> None:
    completions = FakeCompletions(content="unused")
    service = AIService(Settings(ai_api_key="key"), client=_client(completions))

    assert service.generate_fixes([]) is None
    assert completions.requests == []


def test_provider_failure_returns_none() -> None:
    completions = FakeCompletions(error=RuntimeError("rate limited"))
    service = AIService(Settings(ai_api_key="key"), client=_client(completions))

    assert service.generate_insights(_results()) is None


def test_empty_completion_returns_none() -> None:
    service = AIService(Settings(ai_api_key="key"), client=_client(FakeCompletions(content="")))

    assert service.generate_insights(_results()) is None
