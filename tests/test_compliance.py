from __future__ import annotations

from accessibility_merger.compliance import (
    NON_COMPLIANT,
    calculate_issue_summary,
    calculate_wcag_compliance,
    categorize_by_impact,
)
from accessibility_merger.issue import Issue, Severity, WcagLevel


def _issue(level: str = "Unknown", severity: str = "moderate", title: str = "Issue") -> Issue:
    return Issue(
        title=title,
        description=None,
        severity=Severity.parse(severity),
        impact=50,
        detected_by=["axe-core"],
        wcag_level=WcagLevel.parse(level),
    )


def test_no_issues_is_aaa() -> None:
    report = calculate_wcag_compliance([])

    assert report.compliant_level == "AAA"
    assert report.A.compliant and report.AA.compliant and report.AAA.compliant


def test_aa_violation_caps_at_a() -> None:
    assert calculate_wcag_compliance([_issue("AA")]).compliant_level == "A"


def test_a_violation_is_non_compliant() -> None:
    report = calculate_wcag_compliance([_issue("A"), _issue("AAA")])

    assert report.compliant_level == NON_COMPLIANT
    assert report.A.violations == 1
    assert report.A.compliant is False


def test_aaa_only_violations_leave_aa() -> None:
    report = calculate_wcag_compliance([_issue("AAA"), _issue("AAA")])

    assert report.compliant_level == "AA"
    assert report.AAA.violations == 2
    assert report.AAA.compliant is False


def test_unknown_level_is_not_counted() -> None:
    report = calculate_wcag_compliance([_issue("Unknown"), _issue("bogus")])

    assert (report.A.violations, report.AA.violations, report.AAA.violations) == (0, 0, 0)
    assert report.compliant_level == "AAA"


def test_compliance_to_dict_shape() -> None:
    out = calculate_wcag_compliance([_issue("AA"), _issue("AA")]).to_dict()

    assert out == {
        "A": {"violations": 0, "compliant": True},
        "AA": {"violations": 2, "compliant": False},
        "AAA": {"violations": 0, "compliant": True},
        "overall": {"compliantLevel": "A"},
    }


def test_issue_summary_counts_severities() -> None:
    issues = [_issue(severity="critical"), _issue(severity="critical"), _issue(severity="minor"), _issue()]

    assert calculate_issue_summary(issues) == {
        "total": 4,
        "critical": 2,
        "serious": 0,
        "moderate": 1,
        "minor": 1,
    }


def test_categorize_by_impact_orders_most_severe_first() -> None:
    minor = _issue(severity="minor", title="minor")
    critical = _issue(severity="critical", title="critical")

    groups = categorize_by_impact([minor, critical])

    assert list(groups) == ["critical", "serious", "moderate", "minor"]
    assert groups["critical"] == [critical]
    assert groups["minor"] == [minor]
    assert groups["serious"] == []
