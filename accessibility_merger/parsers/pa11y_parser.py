"""
Pa11y (HTML_CodeSniffer runner) output formatting.

Raw Pa11y issues carry a code such as
``WCAG2AA.Principle1.Guideline1_4.1_4_3.G18.Fail``; level, criterion and
principle are read from it.
"""

import re
from typing import Any, Dict, List, Optional

from ..issue import Pa11yFinding, Pa11yResults, WcagLevel
from ..scoring import get_grade, round_half_up
from ..wcag import PRINCIPLES

TYPE_WEIGHTS = {"error": 10, "warning": 5, "notice": 1}
# Weighted findings that take the score from 100 to 0.
SCORE_BASELINE = 100

_CRITERION = re.compile(r"(\d+)[._](\d+)[._](\d+)")
_PRINCIPLE = re.compile(r"Principle(\d)")


def level_from_code(code: Optional[str]) -> WcagLevel:
    code = code or ""
    if "AAA" in code:
        return WcagLevel.AAA
    if "AA" in code:
        return WcagLevel.AA
    if "A" in code:
        return WcagLevel.A
    return WcagLevel.UNKNOWN


def criterion_from_code(code: Optional[str]) -> Optional[str]:
    """Dotted criterion from ``1_4_3`` or ``1.4.3`` in the code.

    The search starts after the principle/guideline prefix so ``Guideline1_4``
    is not mistaken for a criterion.
    """
    code = code or ""
    tail = code
    if "Guideline" in code:
        tail = code.split("Guideline", 1)[1].split(".", 1)[-1]
    match = _CRITERION.search(tail)
    return ".".join(match.groups()) if match else None


def principle_from_code(code: Optional[str]) -> str:
    match = _PRINCIPLE.search(code or "")
    if match:
        return PRINCIPLES.get(match.group(1), "unknown")
    criterion = criterion_from_code(code)
    if not criterion:
        return "unknown"
    return PRINCIPLES.get(criterion.split(".")[0], "unknown")


def format_issue(raw: Dict[str, Any]) -> Pa11yFinding:
    raw = raw if isinstance(raw, dict) else {}
    code = raw.get("code") or ""
    return Pa11yFinding(
        type=str(raw.get("type") or "notice"),
        message=str(raw.get("message") or ""),
        selector=raw.get("selector") or None,
        context=raw.get("context"),
        code=code or None,
        wcag_criteria=criterion_from_code(code),
        wcag_level=level_from_code(code).value,
        principle=principle_from_code(code),
    )


def calculate_score(issues: List[Pa11yFinding]) -> Dict[str, Any]:
    counts = {t: sum(1 for i in issues if i.type == t) for t in TYPE_WEIGHTS}
    weight = sum(TYPE_WEIGHTS[t] * n for t, n in counts.items())
    score = max(0, round_half_up(100 - weight / SCORE_BASELINE * 100))
    return {
        "score": score,
        "errors": counts["error"],
        "warnings": counts["warning"],
        "notices": counts["notice"],
        "grade": get_grade(score),
    }


def format_pa11y_results(raw: Dict[str, Any], version: Optional[str] = None) -> Pa11yResults:
    """Raw Pa11y JSON -> Pa11yResults with per-issue WCAG data and a score."""
    raw = raw if isinstance(raw, dict) else {}
    issues = [format_issue(i) for i in raw.get("issues") or []]
    details = calculate_score(issues)
    return Pa11yResults(
        issues=issues,
        score=details["score"],
        url=raw.get("pageUrl") or raw.get("url"),
        document_title=raw.get("documentTitle"),
        version=version or raw.get("version"),
        runner="htmlcs",
        score_details=details,
    )

