"""
Per-source adapters: each scanner's native finding -> the common Issue.

Every adapter is total: optional fields fall back to empty lists / None.
"""

import re
from typing import Dict, List

from .issue import (
    AxeFinding,
    Issue,
    KeyboardFinding,
    Node,
    Pa11yFinding,
    Recommendation,
    Severity,
    WcagLevel,
    _as_list,
)
from .scoring import map_impact_to_score
from .wcag import extract_wcag_criteria, extract_wcag_level

MANUAL_REVIEW_SUFFIX = " (Needs Manual Review)"

PA11Y_SEVERITY: Dict[str, Severity] = {
    "error": Severity.CRITICAL,
    "warning": Severity.SERIOUS,
    "notice": Severity.MODERATE,
}
# Pa11y findings use their own coarser impact scale.
PA11Y_IMPACT: Dict[str, int] = {"error": 90, "warning": 70, "notice": 50}

KEYBOARD_IMPACT: Dict[Severity, int] = {Severity.CRITICAL: 90, Severity.SERIOUS: 70}
KEYBOARD_DEFAULT_IMPACT = 50

_DOTTED_CRITERION = re.compile(r"^\d+\.\d+\.\d+$")


def _axe_nodes(finding: AxeFinding) -> List[Node]:
    return [
        Node(selector=n.selector, html=n.html, failure_summary=n.failure_summary)
        for n in finding.nodes
    ]


def convert_axe_violation(violation: AxeFinding) -> Issue:
    """Axe violation -> Issue. The first node is backfilled onto the issue."""
    nodes = _axe_nodes(violation)
    first = nodes[0] if nodes else Node()
    severity = Severity.parse(violation.impact)
    return Issue(
        title=violation.help,
        description=violation.description,
        severity=severity,
        impact=map_impact_to_score(severity),
        detected_by=["axe-core"],
        wcag_criteria=extract_wcag_criteria(violation.tags),
        wcag_level=extract_wcag_level(violation.tags),
        selector=first.selector,
        nodes=nodes,
        help_url=violation.help_url,
        html=first.html,
        failure_summary=first.failure_summary,
        recommendations=[
            Recommendation(
                description=violation.help,
                implementation=first.failure_summary,
                learn_more=violation.help_url,
            )
        ],
        extra={"ruleId": violation.id} if violation.id else {},
    )


def convert_axe_incomplete(item: AxeFinding) -> Issue:
    """Axe incomplete check -> Issue, always moderate and flagged for manual review."""
    nodes = _axe_nodes(item)
    first = nodes[0] if nodes else Node()
    return Issue(
        title=f"{item.help}{MANUAL_REVIEW_SUFFIX}",
        description=item.description,
        severity=Severity.MODERATE,
        impact=50,
        detected_by=["axe-core"],
        requires_manual_check=True,
        wcag_criteria=extract_wcag_criteria(item.tags),
        wcag_level=extract_wcag_level(item.tags),
        selector=first.selector,
        nodes=nodes,
        help_url=item.help_url,
        html=first.html,
        recommendations=[
            Recommendation(
                description=f"Manual check required: {item.help}",
                implementation=first.failure_summary,
                learn_more=item.help_url,
            )
        ],
        extra={"ruleId": item.id} if item.id else {},
    )


def convert_pa11y_issue(issue: Pa11yFinding) -> Issue:
    """Pa11y message -> Issue. error/warning/notice map to critical/serious/moderate."""
    return Issue(
        title=issue.message,
        description=issue.message,
        severity=PA11Y_SEVERITY.get(issue.type, Severity.MODERATE),
        impact=PA11Y_IMPACT.get(issue.type, 50),
        detected_by=["pa11y"],
        wcag_criteria=[str(c) for c in _as_list(issue.wcag_criteria) if c],
        wcag_level=WcagLevel.parse(issue.wcag_level),
        selector=issue.selector,
        html=issue.context,
        context=issue.context,
        code=issue.code,
        recommendations=[
            Recommendation(
                description=issue.message,
                implementation=f"Fix the issue at: {issue.selector}",
            )
        ],
    )


def convert_keyboard_issue(issue: KeyboardFinding) -> Issue:
    """Keyboard-navigation finding -> Issue. Keyboard findings are filed as level AA."""
    severity = Severity.parse(issue.severity)
    extra = {
        key: value
        for key, value in (
            ("element", issue.element),
            ("text", issue.text),
            ("className", issue.class_name),
            ("checkType", issue.type),
        )
        if value is not None
    }
    wcag = issue.wcag if isinstance(issue.wcag, str) else ""
    return Issue(
        title=issue.message,
        description=issue.details or issue.message,
        severity=severity,
        impact=KEYBOARD_IMPACT.get(severity, KEYBOARD_DEFAULT_IMPACT),
        detected_by=["keyboard"],
        wcag_criteria=[wcag] if _DOTTED_CRITERION.match(wcag) else [],
        wcag_level=WcagLevel.AA,
        selector=issue.selector,
        recommendations=[
            Recommendation(
                description=issue.recommendation,
                implementation=issue.recommendation,
            )
        ],
        extra=extra,
    )
