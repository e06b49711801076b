"""
Results merger: fuses Lighthouse, Axe-Core and (optionally) Pa11y and keyboard
findings into one report with a combined score, deduplicated accessibility
issues and a WCAG compliance verdict.

Pure apart from logging and the report timestamp; it never raises on
well-formed scanner records.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .compliance import calculate_issue_summary, calculate_wcag_compliance
from .dedup import deduplicate_issues
from .issue import (
    AccessibilitySection,
    AccessibilitySummary,
    AxeResults,
    Issue,
    KeyboardFinding,
    LighthouseResults,
    MergedReport,
    Pa11yResults,
    ScoreSet,
)
from .normalizer import (
    convert_axe_incomplete,
    convert_axe_violation,
    convert_keyboard_issue,
    convert_pa11y_issue,
)
from .scoring import calculate_weighted_score, get_grade, round_half_up

logger = logging.getLogger(__name__)

# Weighting policy for the combined score. Changing these moves every grade boundary.
TWO_TOOL_WEIGHTS = {"lighthouse": 0.5, "axe": 0.5}
THREE_TOOL_WEIGHTS = {"lighthouse": 0.4, "axe": 0.4, "pa11y": 0.2}


def calculate_axe_score(axe_results: AxeResults) -> int:
    return calculate_weighted_score(axe_results.violations, axe_results.incomplete, axe_results.passes)


def calculate_combined_scores(
    lighthouse_score: float,
    axe_results: AxeResults,
    pa11y_results: Optional[Pa11yResults] = None,
) -> ScoreSet:
    """Weighted combination of per-tool scores; three-tool mode only when Pa11y has a score."""
    axe_score = calculate_axe_score(axe_results)
    pa11y_score = pa11y_results.score if pa11y_results is not None else None

    if pa11y_score is not None:
        w = THREE_TOOL_WEIGHTS
        combined = round_half_up(
            lighthouse_score * w["lighthouse"] + axe_score * w["axe"] + pa11y_score * w["pa11y"]
        )
    else:
        w = TWO_TOOL_WEIGHTS
        combined = round_half_up(lighthouse_score * w["lighthouse"] + axe_score * w["axe"])

    return ScoreSet(
        lighthouse=round_half_up(lighthouse_score),
        axe=axe_score,
        combined=combined,
        grade=get_grade(combined),
        pa11y=round_half_up(pa11y_score) if pa11y_score is not None else None,
    )


def _count_source(issues: List[Issue], source: str) -> int:
    return sum(1 for i in issues if source in i.detected_by)


def summarize_sources(
    issues: List[Issue],
    include_pa11y: bool = False,
    include_keyboard: bool = False,
) -> Dict[str, int]:
    by_source = {
        "lighthouse": _count_source(issues, "lighthouse"),
        "axe": _count_source(issues, "axe-core"),
        "both": sum(
            1 for i in issues if "lighthouse" in i.detected_by and "axe-core" in i.detected_by
        ),
    }
    if include_pa11y:
        by_source["pa11y"] = _count_source(issues, "pa11y")
    if include_keyboard:
        by_source["keyboard"] = _count_source(issues, "keyboard")
    if include_pa11y or include_keyboard:
        by_source["multiple"] = sum(1 for i in issues if len(i.detected_by) > 1)
    return by_source


class ResultsMerger:
    """Combines per-tool results into a single MergedReport."""

    def merge_results(
        self,
        lighthouse_results: LighthouseResults,
        axe_results: AxeResults,
        pa11y_results: Optional[Pa11yResults] = None,
        keyboard_findings: Optional[List[KeyboardFinding]] = None,
    ) -> MergedReport:
        tools = ["Lighthouse", "Axe-Core"]
        if pa11y_results is not None:
            tools.append("Pa11y")
        if keyboard_findings is not None:
            tools.append("keyboard")
        logger.info("Merging %s results", ", ".join(tools))

        scores = calculate_combined_scores(
            lighthouse_results.accessibility_score, axe_results, pa11y_results
        )
        accessibility = self.merge_accessibility(
            lighthouse_results, axe_results, pa11y_results, keyboard_findings, scores
        )

        report = MergedReport(
            url=lighthouse_results.url
            or axe_results.url
            or (pa11y_results.url if pa11y_results is not None else None),
            timestamp=datetime.now(timezone.utc).isoformat(),
            scores=scores,
            accessibility=accessibility,
            performance=lighthouse_results.performance,
            best_practices=lighthouse_results.best_practices,
            seo=lighthouse_results.seo,
            tool_details=self._tool_details(lighthouse_results, axe_results, pa11y_results),
        )

        logger.info(
            "Results merged: %d unique issues (lighthouse=%d, axe violations=%d, pa11y=%d)",
            len(accessibility.issues),
            len(lighthouse_results.accessibility_issues),
            len(axe_results.violations),
            len(pa11y_results.issues) if pa11y_results is not None else 0,
        )
        return report

    def merge_accessibility(
        self,
        lighthouse_results: LighthouseResults,
        axe_results: AxeResults,
        pa11y_results: Optional[Pa11yResults] = None,
        keyboard_findings: Optional[List[KeyboardFinding]] = None,
        scores: Optional[ScoreSet] = None,
    ) -> AccessibilitySection:
        """Normalize, deduplicate and summarize every source's accessibility issues."""
        if scores is None:
            scores = calculate_combined_scores(
                lighthouse_results.accessibility_score, axe_results, pa11y_results
            )

        all_issues: List[Issue] = list(lighthouse_results.accessibility_issues)
        all_issues.extend(convert_axe_violation(v) for v in axe_results.violations)
        all_issues.extend(convert_axe_incomplete(i) for i in axe_results.incomplete)
        if pa11y_results is not None:
            all_issues.extend(convert_pa11y_issue(i) for i in pa11y_results.issues)
        if keyboard_findings is not None:
            all_issues.extend(convert_keyboard_issue(k) for k in keyboard_findings)

        unique = deduplicate_issues(all_issues)
        counts = calculate_issue_summary(unique)
        summary = AccessibilitySummary(
            total=counts["total"],
            critical=counts["critical"],
            serious=counts["serious"],
            moderate=counts["moderate"],
            minor=counts["minor"],
            by_source=summarize_sources(
                unique,
                include_pa11y=pa11y_results is not None,
                include_keyboard=keyboard_findings is not None,
            ),
        )
        return AccessibilitySection(
            score=scores.combined,
            issues=unique,
            summary=summary,
            wcag_compliance=calculate_wcag_compliance(unique),
        )

    @staticmethod
    def _tool_details(
        lighthouse_results: LighthouseResults,
        axe_results: AxeResults,
        pa11y_results: Optional[Pa11yResults],
    ) -> Dict[str, Any]:
        details: Dict[str, Any] = {
            "lighthouse": {
                "version": lighthouse_results.version,
                "fetchTime": lighthouse_results.fetch_time,
            },
            "axe": {
                "version": axe_results.test_engine.get("version"),
                "testRunner": axe_results.test_runner or None,
            },
        }
        if pa11y_results is not None:
            details["pa11y"] = {
                "runner": pa11y_results.runner,
                "version": pa11y_results.version,
                "documentTitle": pa11y_results.document_title,
            }
        return details


def merge_results(
    lighthouse_results: LighthouseResults,
    axe_results: AxeResults,
    pa11y_results: Optional[Pa11yResults] = None,
    keyboard_findings: Optional[List[KeyboardFinding]] = None,
) -> MergedReport:
    """Module-level shortcut for ``ResultsMerger().merge_results``."""
    return ResultsMerger().merge_results(lighthouse_results, axe_results, pa11y_results, keyboard_findings)
