from __future__ import annotations

import copy

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app


LIGHTHOUSE = {
    "url": "https://example.com",
    "version": "11.4.0",
    "fetchTime": "2026-01-01T00:00:00.000Z",
    "accessibility": {
        "score": 81,
        "issues": [
            {
                "title": "Images must have alternate text",
                "description": "Informative elements should aim for short, descriptive alternate text.",
                "severity": "critical",
                "selector": "img.logo",
                "detectedBy": ["lighthouse"],
                "wcagCriteria": ["1.1.1"],
                "wcagLevel": "A",
            },
            {
                "title": "`<html>` element does not have a `[lang]` attribute",
                "description": "Set the lang attribute so screen readers announce the page correctly.",
                "impact": 12.5,
            },
        ],
    },
    "performance": {"score": 92, "issues": []},
    "bestPractices": {"score": 100, "issues": []},
    "seo": {"score": 90, "issues": []},
}

AXE = {
    "url": "https://example.com",
    "timestamp": "2026-01-01T00:00:00.000Z",
    "testEngine": {"name": "axe-core", "version": "4.8.2"},
    "testRunner": {"name": "axe"},
    "violations": [
        {
            "id": "image-alt",
            "help": "Images must have alternate text",
            "description": "Ensures <img> elements have alternate text or a role of none or presentation",
            "impact": "critical",
            "tags": ["cat.text-alternatives", "wcag2a", "wcag111"],
            "helpUrl": "https://dequeuniversity.com/rules/axe/4.8/image-alt",
            "nodes": [
                {
                    "target": ["img.logo"],
                    "html": '<img class="logo" src="logo.png">',
                    "failureSummary": "Fix any of the following: Element does not have an alt attribute",
                }
            ],
        },
        {
            "id": "color-contrast",
            "help": "Elements must meet minimum color contrast ratio thresholds",
            "description": "Ensures the contrast between foreground and background colors meets WCAG 2 AA thresholds",
            "impact": "serious",
            "tags": ["cat.color", "wcag2aa", "wcag143"],
            "helpUrl": "https://dequeuniversity.com/rules/axe/4.8/color-contrast",
            "nodes": [
                {
                    "target": ["p.muted"],
                    "html": '<p class="muted">Fine print</p>',
                    "failureSummary": "Fix any of the following: Element has insufficient color contrast of 2.85",
                    "any": [
                        {
                            "id": "color-contrast",
                            "data": {
                                "fgColor": "#999999",
                                "bgColor": "#ffffff",
                                "contrastRatio": 2.85,
                                "expectedContrastRatio": "4.5:1",
                            },
                        }
                    ],
                },
                {
                    "target": ["span.hint"],
                    "html": '<span class="hint">Optional</span>',
                    "failureSummary": "Fix any of the following: Element has insufficient color contrast of 3.1",
                },
            ],
        },
    ],
    "incomplete": [
        {
            "id": "video-caption",
            "help": "<video> elements must have captions",
            "description": "Ensures <video> elements have captions",
            "impact": "critical",
            "tags": ["cat.time-and-media", "wcag2a", "wcag122"],
            "helpUrl": "https://dequeuniversity.com/rules/axe/4.8/video-caption",
            "nodes": [
                {
                    "target": ["video"],
                    "html": '<video src="intro.mp4"></video>',
                    "failureSummary": "Check that captions are available",
                }
            ],
        }
    ],
    "passes": [
        {"id": "document-title", "help": "Documents must have <title> element", "tags": ["wcag2a", "wcag242"], "nodes": []},
        {"id": "html-lang-valid", "help": "<html> element must have a valid lang value", "tags": ["wcag2a", "wcag311"], "nodes": []},
    ],
}

PA11Y = {
    "issues": [
        {
            "type": "error",
            "message": "Images must have alternate text",
            "selector": "img.logo",
            "context": '<img class="logo" src="logo.png">',
            "code": "WCAG2AA.Principle1.Guideline1_1.1_1_1.H37",
            "wcagCriteria": "1.1.1",
            "wcagLevel": "AA",
        },
        {
            "type": "warning",
            "message": "Check that the title element describes the document.",
            "selector": "html > head > title",
            "context": "<title>Example</title>",
            "code": "WCAG2AA.Principle2.Guideline2_4.2_4_2.H25.2",
            "wcagCriteria": "2.4.2",
            "wcagLevel": "AA",
        },
    ],
    "score": {"score": 85, "errors": 1, "warnings": 1, "notices": 0},
    "version": "8.0.0",
    "runner": "htmlcs",
    "documentTitle": "Example",
}

KEYBOARD = {
    "interactiveElements": {
        "issues": [
            {
                "type": "tabindex",
                "severity": "serious",
                "message": "Positive tabindex disrupts focus order",
                "wcag": "2.4.3",
                "selector": "#promo",
                "element": "div",
                "details": 'tabindex="3" on a div',
                "recommendation": "Remove positive tabindex values",
            }
        ]
    },
    "focusIndicators": {
        "issues": [
            {
                "type": "focus-indicator",
                "severity": "critical",
                "message": "Focus indicator removed",
                "wcag": "2.4.7 Focus Visible",
                "selector": "a.nav",
                "className": "nav",
                "recommendation": "Do not remove outlines without a visible replacement",
            }
        ]
    },
    "keyboardTraps": {"issues": []},
    "skipLinks": {
        "issues": [
            {
                "type": "skip-link",
                "severity": "moderate",
                "message": "No skip link found",
                "recommendation": "Add a skip link as the first focusable element",
            }
        ]
    },
}


class StubAIService:
    """Stands in for AIService; records what it was asked."""

    def __init__(self, available: bool = True):
        self.available = available
        self.insight_calls = []
        self.fix_calls = []

    def is_available(self) -> bool:
        return self.available

    def status(self) -> dict:
        return {
            "available": self.available,
            "provider": "Stub",
            "model": "stub-model",
            "reason": "stubbed",
        }

    def generate_insights(self, results):
        self.insight_calls.append(results)
        return "stub insights"

    def generate_fixes(self, issues):
        self.fix_calls.append(issues)
        return "stub fixes"


@pytest.fixture
def lighthouse_payload() -> dict:
    return copy.deepcopy(LIGHTHOUSE)


@pytest.fixture
def axe_payload() -> dict:
    return copy.deepcopy(AXE)


@pytest.fixture
def pa11y_payload() -> dict:
    return copy.deepcopy(PA11Y)


@pytest.fixture
def keyboard_payload() -> dict:
    return copy.deepcopy(KEYBOARD)


@pytest.fixture
def stub_ai() -> StubAIService:
    return StubAIService()


@pytest.fixture
def client(stub_ai: StubAIService):
    app = create_app(Settings(), ai_service=stub_ai)
    with TestClient(app) as test_client:
        yield test_client
