"""
Accessibility results merger: fuses Lighthouse, Axe-Core, Pa11y and keyboard
scanner findings into one scored, deduplicated, WCAG-graded report.
"""

from .compliance import calculate_issue_summary, calculate_wcag_compliance, categorize_by_impact
from .dedup import deduplicate_issues
from .issue import (
    AxeFinding,
    AxeResults,
    Issue,
    KeyboardFinding,
    LighthouseResults,
    MergedReport,
    Pa11yFinding,
    Pa11yResults,
    Severity,
    WcagLevel,
)
from .merger import ResultsMerger, merge_results
from .normalizer import (
    convert_axe_incomplete,
    convert_axe_violation,
    convert_keyboard_issue,
    convert_pa11y_issue,
)
from .scoring import calculate_weighted_score, get_grade, map_impact_to_score
from .wcag import extract_wcag_criteria, extract_wcag_level

__all__ = [
    'AxeFinding',
    'AxeResults',
    'Issue',
    'KeyboardFinding',
    'LighthouseResults',
    'MergedReport',
    'Pa11yFinding',
    'Pa11yResults',
    'ResultsMerger',
    'Severity',
    'WcagLevel',
    'calculate_issue_summary',
    'calculate_wcag_compliance',
    'calculate_weighted_score',
    'categorize_by_impact',
    'convert_axe_incomplete',
    'convert_axe_violation',
    'convert_keyboard_issue',
    'convert_pa11y_issue',
    'deduplicate_issues',
    'extract_wcag_criteria',
    'extract_wcag_level',
    'get_grade',
    'map_impact_to_score',
    'merge_results',
]
