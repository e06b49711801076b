"""
Scoring primitives: severity -> impact score, score -> letter grade, and the
node-weighted Axe score.
"""

import math
from typing import Any, Dict, List, Optional

IMPACT_SCORES: Dict[str, int] = {
    "critical": 100,
    "serious": 75,
    "moderate": 50,
    "minor": 25,
}
DEFAULT_IMPACT_SCORE = 50

# Per-node weight of an Axe result in the weighted score.
IMPACT_WEIGHTS: Dict[str, int] = {
    "critical": 10,
    "serious": 7,
    "moderate": 4,
    "minor": 1,
}
DEFAULT_IMPACT_WEIGHT = 1
INCOMPLETE_FACTOR = 0.5

GRADE_THRESHOLDS = ((90, "A"), (80, "B"), (70, "C"), (60, "D"))


def _key(severity: Any) -> Optional[str]:
    """Accept a Severity enum or its string value."""
    value = getattr(severity, "value", severity)
    return value if isinstance(value, str) else None


def round_half_up(value: float) -> int:
    """Round .5 toward +infinity (the builtin round() rounds half to even)."""
    return int(math.floor(value + 0.5))


def map_impact_to_score(severity: Any) -> int:
    """Map a severity label to 0-100. Total: anything unrecognised is 50."""
    return IMPACT_SCORES.get(_key(severity), DEFAULT_IMPACT_SCORE)


def get_grade(score: float) -> str:
    """Letter grade for a numeric score. Out-of-range values clamp to A / F."""
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return "F"


def _weight(item: Any) -> int:
    return IMPACT_WEIGHTS.get(_key(getattr(item, "impact", None)), DEFAULT_IMPACT_WEIGHT)


def _node_count(item: Any) -> int:
    return max(1, len(getattr(item, "nodes", None) or []))


def calculate_weighted_score(
    violations: List[Any],
    incomplete: List[Any],
    passes: List[Any],
) -> int:
    """Axe score in 0-100.

    Violations count ``weight * nodes`` against the score, incomplete checks add
    half that much evidence without failing, and each pass adds one unit.
    No evidence at all scores 100.
    """
    total_weight = 0.0
    violation_weight = 0.0

    for violation in violations or []:
        w = _weight(violation) * _node_count(violation)
        violation_weight += w
        total_weight += w

    for item in incomplete or []:
        total_weight += INCOMPLETE_FACTOR * _weight(item) * _node_count(item)

    total_weight += len(passes or [])

    if total_weight <= 0:
        return 100
    return round_half_up((total_weight - violation_weight) / total_weight * 100)
