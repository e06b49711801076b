"""
Report generation for merged accessibility results.
"""

from deps import Dict, List

from .compliance import categorize_by_impact
from .issue import Issue, MergedReport
from .wcag import categorize_by_principle


class ReportGenerator:
    """Generate reports from a merged report."""

    @staticmethod
    def _issue_lines(issue: Issue) -> List[str]:
        lines = [f"  {issue.title}"]
        lines.append(f"    Selector: {issue.selector or '(page level)'}")
        if issue.wcag_criteria:
            lines.append(f"    WCAG: {', '.join(issue.wcag_criteria)} (Level {issue.wcag_level.value})")
        lines.append(f"    Detected by: {', '.join(issue.detected_by)}")
        if issue.node_count > 1:
            lines.append(f"    Affected elements: {issue.node_count}")
        if issue.requires_manual_check:
            lines.append("    Needs manual review")
        if issue.recommendations and issue.recommendations[0].learn_more:
            lines.append(f"    Learn more: {issue.recommendations[0].learn_more}")
        lines.append("")
        return lines

    @staticmethod
    def generate_text_report(report: MergedReport) -> str:
        """Generate a text report."""
        scores = report.scores
        section = report.accessibility
        out = [f"\n{'='*80}"]
        out.append(f"Accessibility Report: {report.url or 'unknown URL'}")
        out.append(f"{'='*80}\n")

        score_line = f"Scores: Lighthouse {scores.lighthouse}, Axe {scores.axe}"
        if scores.pa11y is not None:
            score_line += f", Pa11y {scores.pa11y}"
        out.append(score_line)
        out.append(f"Combined: {scores.combined} (Grade {scores.grade})")
        out.append(f"WCAG compliance: {section.wcag_compliance.compliant_level}\n")

        if not section.issues:
            out.append("No accessibility issues found.")
            out.append("=" * 80)
            return "\n".join(out)

        for severity, group in categorize_by_impact(section.issues).items():
            if not group:
                continue
            out.append(f"{severity.upper()} ({len(group)}):")
            out.append("-" * 80)
            for issue in group:
                out.extend(ReportGenerator._issue_lines(issue))

        summary = section.summary
        out.append(
            f"\nSummary: {summary.critical} critical, {summary.serious} serious, "
            f"{summary.moderate} moderate, {summary.minor} minor"
        )
        sources = ", ".join(f"{k}={v}" for k, v in summary.by_source.items())
        out.append(f"By source: {sources}")
        out.append("=" * 80)
        return "\n".join(out)

    @staticmethod
    def generate_summary(issues: List[Issue]) -> Dict[str, int]:
        """Generate a summary count by WCAG principle."""
        return {name: len(group) for name, group in categorize_by_principle(issues).items()}
