"""
Axe-Core result parsing: rule grouping, summaries and rule-specific fix hints.
"""

import copy
from typing import Any, Dict, List, Optional

from ..issue import AxeFinding, AxeResults, WcagLevel
from ..wcag import PRINCIPLES, extract_wcag_criteria, extract_wcag_level, principle_of

# Code snippets for rules whose fix is mechanical.
_RULE_SUGGESTIONS: Dict[str, Dict[str, str]] = {
    "image-alt": {
        "title": "Add Alt Text to Images",
        "description": "All images must have alt attributes that describe the image content",
        "code": '<img src="..." alt="Descriptive text here">',
    },
    "label": {
        "title": "Associate Labels with Form Controls",
        "description": "Form inputs must have associated labels",
        "code": '<label for="input-id">Label text</label>\n<input id="input-id" type="text">',
    },
    "button-name": {
        "title": "Add Accessible Name to Button",
        "description": "Buttons must have text content or aria-label",
        "code": '<button aria-label="Descriptive action">Icon</button>',
    },
    "link-name": {
        "title": "Add Accessible Name to Link",
        "description": "Links must have text content or aria-label",
        "code": '<a href="..." aria-label="Descriptive link text">Link</a>',
    },
}


def parse_violations(violations: List[AxeFinding]) -> List[AxeFinding]:
    """Group violations by rule id, concatenating nodes of repeated rules."""
    grouped: Dict[str, AxeFinding] = {}
    for violation in violations:
        key = violation.id or violation.help
        if key in grouped:
            grouped[key].nodes = grouped[key].nodes + list(violation.nodes)
        else:
            seed = copy.copy(violation)
            seed.nodes = list(violation.nodes)
            grouped[key] = seed
    return list(grouped.values())


def _contrast_suggestion(violation: AxeFinding) -> Optional[Dict[str, Any]]:
    if not violation.nodes or not violation.nodes[0].any:
        return None
    data = violation.nodes[0].any[0].get("data")
    if not isinstance(data, dict) or "contrastRatio" not in data:
        return None
    bg = data.get("bgColor", "#ffffff")
    return {
        "title": "Improve Color Contrast",
        "description": (
            f"Current contrast ratio is {data.get('contrastRatio')}, "
            f"but needs to be at least {data.get('expectedContrastRatio')}"
        ),
        "code": f"/* Suggested colors */\ncolor: {suggest_foreground_color(bg)};\nbackground-color: {bg};",
        "automated": True,
    }


def suggest_foreground_color(bg_color: str) -> str:
    """Black or white, whichever contrasts more with a #rrggbb background."""
    value = (bg_color or "").lstrip("#")
    if len(value) != 6:
        return "#000000"
    try:
        r, g, b = (int(value[i:i + 2], 16) / 255 for i in (0, 2, 4))
    except ValueError:
        return "#000000"

    def _linear(c: float) -> float:
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    luminance = 0.2126 * _linear(r) + 0.7152 * _linear(g) + 0.0722 * _linear(b)
    # Contrast against black is (L + 0.05) / 0.05, against white 1.05 / (L + 0.05).
    return "#000000" if (luminance + 0.05) ** 2 > 0.0525 else "#ffffff"


def generate_fix_suggestions(violation: AxeFinding) -> List[Dict[str, Any]]:
    """Generic Axe help entry plus a rule-specific snippet where one is known."""
    suggestions: List[Dict[str, Any]] = [{
        "title": violation.help,
        "description": violation.description,
        "learnMore": violation.help_url,
        "automated": False,
    }]
    if violation.id == "color-contrast":
        specific = _contrast_suggestion(violation)
        if specific:
            suggestions.append(specific)
    elif violation.id in _RULE_SUGGESTIONS:
        suggestions.append(dict(_RULE_SUGGESTIONS[violation.id], automated=True))
    return suggestions


def _finding_dict(finding: AxeFinding, manual: bool = False) -> Dict[str, Any]:
    out = {
        "id": finding.id,
        "impact": finding.impact,
        "description": finding.description,
        "help": finding.help,
        "helpUrl": finding.help_url,
        "tags": list(finding.tags),
        "wcagLevel": extract_wcag_level(finding.tags).value,
        "wcagCriteria": extract_wcag_criteria(finding.tags),
        "nodeCount": len(finding.nodes),
    }
    if manual:
        out["requiresManualCheck"] = True
    else:
        out["fixSuggestions"] = generate_fix_suggestions(finding)
    return out


def summarize_axe_results(axe_results: AxeResults) -> Dict[str, Any]:
    """Frontend-ready view of an Axe run."""
    violations = parse_violations(axe_results.violations)
    formatted = [_finding_dict(v) for v in violations]

    by_principle: Dict[str, List[str]] = {name: [] for name in PRINCIPLES.values()}
    by_principle["other"] = []
    for item in formatted:
        criteria = item["wcagCriteria"]
        by_principle[principle_of(criteria[0] if criteria else None)].append(item["id"])

    by_impact: Dict[str, List[str]] = {"critical": [], "serious": [], "moderate": [], "minor": []}
    for item in formatted:
        if item["impact"] in by_impact:
            by_impact[item["impact"]].append(item["id"])

    return {
        "summary": {
            "url": axe_results.url,
            "timestamp": axe_results.timestamp,
            "violations": len(violations),
            "incomplete": len(axe_results.incomplete),
            "passes": len(axe_results.passes),
            "totalNodes": sum(len(v.nodes) for v in violations),
        },
        "violations": formatted,
        "incomplete": [_finding_dict(i, manual=True) for i in axe_results.incomplete],
        "byPrinciple": by_principle,
        "byImpact": by_impact,
        "testEngine": axe_results.test_engine,
        "wcagLevels": {
            level.value: sum(1 for v in formatted if v["wcagLevel"] == level.value)
            for level in (WcagLevel.A, WcagLevel.AA, WcagLevel.AAA)
        },
    }
