from __future__ import annotations

from accessibility_merger.issue import AxeResults, KeyboardFinding, LighthouseResults, Pa11yResults
from accessibility_merger.merger import merge_results
from accessibility_merger.reporter import ReportGenerator


def test_text_report(lighthouse_payload, axe_payload, pa11y_payload) -> None:
    report = merge_results(
        LighthouseResults.from_dict(lighthouse_payload),
        AxeResults.from_dict(axe_payload),
        Pa11yResults.from_dict(pa11y_payload),
    )

    text = ReportGenerator.generate_text_report(report)

    assert "Accessibility Report: https://example.com" in text
    assert "Scores: Lighthouse 81, Axe 23, Pa11y 85" in text
    assert "Combined: 59 (Grade F)" in text
    assert "WCAG compliance: Non-compliant" in text
    assert "CRITICAL (1):" in text
    assert "SERIOUS (2):" in text
    assert "MINOR" not in text
    assert "Detected by: lighthouse, axe-core, pa11y" in text
    assert "Selector: (page level)" in text
    assert "Needs manual review" in text
    assert "Affected elements: 2" in text
    assert text.index("CRITICAL") < text.index("SERIOUS") < text.index("MODERATE")
    assert "By source: lighthouse=2, axe=3, both=1, pa11y=2, multiple=1" in text


def test_text_report_with_loosely_typed_findings(lighthouse_payload, axe_payload) -> None:
    pa11y = Pa11yResults.from_dict(
        {"issues": [{"type": "error", "message": "Low contrast text", "selector": "p.note", "wcagCriteria": ["1.4.3"]}]}
    )
    keyboard = [KeyboardFinding.from_dict({"severity": "serious", "message": "Focus trap", "wcag": 2.4})]

    report = merge_results(
        LighthouseResults.from_dict(lighthouse_payload), AxeResults.from_dict(axe_payload), pa11y, keyboard
    )
    text = ReportGenerator.generate_text_report(report)

    contrast = next(i for i in report.accessibility.issues if i.title == "Low contrast text")
    assert contrast.wcag_criteria == ["1.4.3"]
    assert "WCAG: 1.4.3 (Level Unknown)" in text
    assert "Focus trap" in text


def test_text_report_without_issues() -> None:
    report = merge_results(LighthouseResults(url="https://example.com", accessibility_score=100), AxeResults())

    text = ReportGenerator.generate_text_report(report)

    assert "No accessibility issues found." in text
    assert "Combined: 100 (Grade A)" in text
    assert "WCAG compliance: AAA" in text
    assert "Pa11y" not in text


def test_summary_by_principle(lighthouse_payload, axe_payload) -> None:
    report = merge_results(LighthouseResults.from_dict(lighthouse_payload), AxeResults.from_dict(axe_payload))

    summary = ReportGenerator.generate_summary(report.accessibility.issues)

    assert summary == {"perceivable": 3, "operable": 0, "understandable": 0, "robust": 0, "other": 1}
