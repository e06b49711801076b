"""
Cross-source deduplication of normalized issues.
"""

import copy
from typing import Dict, Iterable, List, Tuple

from .issue import Issue
from .scoring import map_impact_to_score

NO_SELECTOR = "no-selector"


def issue_key(issue: Issue) -> Tuple[str, str]:
    """Semantic identity: title plus selector (page-level issues share a sentinel)."""
    return issue.title, issue.selector or NO_SELECTOR


def deduplicate_issues(issues: Iterable[Issue]) -> List[Issue]:
    """Collapse issues sharing a key, in first-seen order.

    The first issue for a key is copied and kept; later ones add their sources
    and replace severity/impact only when strictly more severe. Inputs are not
    modified.
    """
    merged: Dict[Tuple[str, str], Issue] = {}
    for issue in issues:
        key = issue_key(issue)
        existing = merged.get(key)
        if existing is None:
            seed = copy.copy(issue)
            seed.detected_by = list(dict.fromkeys(issue.detected_by))
            merged[key] = seed
            continue
        existing.detected_by = list(dict.fromkeys(existing.detected_by + list(issue.detected_by)))
        if map_impact_to_score(issue.severity) > map_impact_to_score(existing.severity):
            existing.severity = issue.severity
            existing.impact = issue.impact
    return list(merged.values())
