"""
WCAG tag decoding.

Axe tags encode success criteria as ``wcag`` + digits (``wcag143`` -> 1.4.3) and
conformance levels as ``wcag2a`` / ``wcag21aa`` / ``wcag2aaa`` style markers.
The criterion split is fixed after the first two digits, so principle and
guideline numbers are assumed to be single digits (true for WCAG 2.x).
"""

import re
from typing import Any, Dict, Iterable, List, Optional

from .issue import WcagLevel

_CRITERIA_TAG = re.compile(r"wcag\d{3,4}")
_CRITERIA_PARTS = re.compile(r"wcag(\d)(\d)(\d+)")

# Checked in this order: the strictest level present wins.
_LEVEL_MARKERS = (
    (WcagLevel.AAA, ("wcag2aaa", "wcag21aaa", "wcag22aaa")),
    (WcagLevel.AA, ("wcag2aa", "wcag21aa", "wcag22aa")),
    (WcagLevel.A, ("wcag2a", "wcag21a", "wcag22a")),
)

PRINCIPLES = {
    "1": "perceivable",
    "2": "operable",
    "3": "understandable",
    "4": "robust",
}


def extract_wcag_criteria(tags: Optional[Iterable[str]]) -> List[str]:
    """Dotted success criteria from tags, in input order. Case-sensitive."""
    criteria = []
    for tag in tags or []:
        if not _CRITERIA_TAG.search(tag):
            continue
        match = _CRITERIA_PARTS.search(tag)
        criteria.append(f"{match.group(1)}.{match.group(2)}.{match.group(3)}" if match else tag)
    return criteria


def extract_wcag_level(tags: Optional[Iterable[str]]) -> WcagLevel:
    """Highest conformance level marked in tags, or UNKNOWN."""
    tags = list(tags or [])
    for level, markers in _LEVEL_MARKERS:
        if any(marker in tag for tag in tags for marker in markers):
            return level
    return WcagLevel.UNKNOWN


def principle_of(criterion: Optional[str]) -> str:
    """WCAG principle name for a dotted criterion, ``other`` if it has none."""
    if not criterion:
        return "other"
    return PRINCIPLES.get(criterion.split(".")[0], "other")


def categorize_by_principle(items: Iterable[Any]) -> Dict[str, List[Any]]:
    """Group issues (anything with ``wcag_criteria``) by their first criterion's principle."""
    groups: Dict[str, List[Any]] = {name: [] for name in PRINCIPLES.values()}
    groups["other"] = []
    for item in items:
        criteria = getattr(item, "wcag_criteria", None) or []
        groups[principle_of(criteria[0] if criteria else None)].append(item)
    return groups
