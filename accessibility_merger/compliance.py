"""
WCAG compliance evaluation and issue summaries over a deduplicated issue set.
"""

from typing import Dict, Iterable, List

from .issue import ComplianceReport, Issue, LevelCompliance, Severity, WcagLevel

NON_COMPLIANT = "Non-compliant"


def _compliant_level(a: int, aa: int, aaa: int) -> str:
    # Meeting a level requires meeting every lower level.
    if a == 0 and aa == 0 and aaa == 0:
        return WcagLevel.AAA.value
    if a == 0 and aa == 0:
        return WcagLevel.AA.value
    if a == 0:
        return WcagLevel.A.value
    return NON_COMPLIANT


def calculate_wcag_compliance(issues: Iterable[Issue]) -> ComplianceReport:
    """Per-level violation counts and the overall compliant level.

    Issues at level Unknown are not counted anywhere.
    """
    counts = {WcagLevel.A: 0, WcagLevel.AA: 0, WcagLevel.AAA: 0}
    for issue in issues:
        level = WcagLevel.parse(issue.wcag_level)
        if level in counts:
            counts[level] += 1
    a, aa, aaa = counts[WcagLevel.A], counts[WcagLevel.AA], counts[WcagLevel.AAA]
    return ComplianceReport(
        A=LevelCompliance(violations=a, compliant=a == 0),
        AA=LevelCompliance(violations=aa, compliant=aa == 0),
        AAA=LevelCompliance(violations=aaa, compliant=aaa == 0),
        compliant_level=_compliant_level(a, aa, aaa),
    )


def calculate_issue_summary(issues: List[Issue]) -> Dict[str, int]:
    """Total and per-severity counts."""
    summary = {"total": len(issues)}
    for severity in Severity:
        summary[severity.value] = sum(1 for i in issues if i.severity == severity)
    return summary


def categorize_by_impact(issues: Iterable[Issue]) -> Dict[str, List[Issue]]:
    """Group issues by severity, most severe first."""
    groups: Dict[str, List[Issue]] = {severity.value: [] for severity in Severity}
    for issue in issues:
        groups[Severity.parse(issue.severity).value].append(issue)
    return groups
