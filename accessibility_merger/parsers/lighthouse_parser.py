"""
Lighthouse JSON report processing.

Turns a raw Lighthouse report (``audits`` + ``categories``) into
LighthouseResults: 0-100 category scores and the failing audits that account
for the bulk of each category's lost score.
"""

from typing import Any, Dict, List, Tuple

from ..issue import Issue, LighthouseResults, Node, Recommendation, Severity
from ..scoring import map_impact_to_score

# Keep the leading audits holding this share of the category's lost impact (always at least one).
IMPACT_CUTOFF = 0.8
MAX_RECOMMENDATIONS = 3

PERFORMANCE_METRICS = {
    "fcp": "first-contentful-paint",
    "lcp": "largest-contentful-paint",
    "tbt": "total-blocking-time",
    "cls": "cumulative-layout-shift",
    "si": "speed-index",
    "tti": "interactive",
}

CATEGORY_KEYS = {
    "performance": "performance",
    "accessibility": "accessibility",
    "bestPractices": "best-practices",
    "seo": "seo",
}


def _scaled(score: Any) -> float:
    return score * 100 if isinstance(score, (int, float)) and not isinstance(score, bool) else 0


def _failing_audits(
    audits: Dict[str, Any], category: Dict[str, Any]
) -> List[Tuple[Dict[str, Any], Dict[str, Any], float]]:
    """(ref, audit, normalized impact) for failing audits, biggest loss first."""
    refs = [r for r in category.get("auditRefs") or [] if r.get("id") in audits]
    max_weight = max((r.get("weight") or 0 for r in refs), default=0) or 1

    def _loss(ref: Dict[str, Any]) -> float:
        return (1 - (audits[ref["id"]].get("score") or 0)) * (ref.get("weight") or 0)

    failing = []
    for ref in sorted(refs, key=_loss, reverse=True):
        audit = audits[ref["id"]]
        score = audit.get("score")
        if score == 1 or score is None:
            continue
        weight = ref.get("weight") or 1
        impact = round((1 - (score or 0)) * (weight / max_weight) * 100, 1)
        failing.append((ref, audit, impact))

    total = sum(f[2] for f in failing)
    kept, cumulative = [], 0.0
    for entry in failing:
        cumulative += entry[2]
        if not kept or cumulative <= total * IMPACT_CUTOFF:
            kept.append(entry)
    return kept


def _items(audit: Dict[str, Any]) -> List[Dict[str, Any]]:
    details = audit.get("details") or {}
    return [i for i in details.get("items") or [] if isinstance(i, dict)]


def _recommendations(audit: Dict[str, Any]) -> List[Dict[str, Any]]:
    recs = []
    for item in _items(audit):
        node = item.get("node") or {}
        rec = {
            "snippet": node.get("snippet") or item.get("source") or "",
            "selector": node.get("selector") or "",
            "suggestion": item.get("suggestion") or audit.get("description"),
        }
        if rec["snippet"] or rec["selector"]:
            recs.append(rec)
    return recs[:MAX_RECOMMENDATIONS]


def _category_issues(audits: Dict[str, Any], category: Dict[str, Any], name: str) -> List[Dict[str, Any]]:
    return [
        {
            "type": name.lower(),
            "title": audit.get("title"),
            "description": audit.get("description"),
            "score": _scaled(audit.get("score")),
            "impact": impact,
            "weight": ref.get("weight"),
            "recommendations": _recommendations(audit),
        }
        for ref, audit, impact in _failing_audits(audits, category)
    ]


def _accessibility_issue(audit: Dict[str, Any], impact: float) -> Issue:
    """A failing accessibility audit as an Issue; severity comes from the embedded axe impact."""
    details = audit.get("details") or {}
    severity = Severity.parse((details.get("debugData") or {}).get("impact"))
    nodes = []
    for item in _items(audit):
        node = item.get("node") or {}
        if node.get("selector") or node.get("snippet"):
            nodes.append(Node(
                selector=node.get("selector") or None,
                html=node.get("snippet"),
                failure_summary=node.get("explanation"),
            ))
    return Issue(
        title=str(audit.get("title") or ""),
        description=audit.get("description"),
        severity=severity,
        impact=map_impact_to_score(severity),
        detected_by=["lighthouse"],
        selector=nodes[0].selector if nodes else None,
        nodes=nodes,
        recommendations=[
            Recommendation(
                description=rec["suggestion"],
                implementation=rec["snippet"] or None,
            )
            for rec in _recommendations(audit)
        ],
        extra={"auditId": audit.get("id"), "sourceImpact": impact},
    )


def process_lighthouse_report(report: Dict[str, Any]) -> LighthouseResults:
    """Raw Lighthouse JSON -> LighthouseResults. Missing categories are left as None."""
    report = report if isinstance(report, dict) else {}
    audits = report.get("audits") or {}
    categories = report.get("categories") or {}
    sections: Dict[str, Any] = {}

    for key, lh_key in CATEGORY_KEYS.items():
        category = categories.get(lh_key)
        if not isinstance(category, dict):
            sections[key] = None
            continue
        section: Dict[str, Any] = {
            "score": _scaled(category.get("score")),
            "issues": _category_issues(audits, category, key),
        }
        if key == "performance":
            section["metrics"] = {
                short: {
                    "score": _scaled((audits.get(audit_id) or {}).get("score")),
                    "value": (audits.get(audit_id) or {}).get("numericValue"),
                }
                for short, audit_id in PERFORMANCE_METRICS.items()
            }
        if key == "accessibility":
            refs = category.get("auditRefs") or []
            scores = [(audits.get(r.get("id")) or {}).get("score") for r in refs]
            section["audits"] = {
                "passed": sum(1 for s in scores if s == 1),
                "failed": sum(1 for s in scores if s != 1 and s is not None),
                "total": len(refs),
            }
        sections[key] = section

    a11y = categories.get("accessibility") if isinstance(categories.get("accessibility"), dict) else None
    issues = (
        [_accessibility_issue(audit, impact) for _, audit, impact in _failing_audits(audits, a11y)]
        if a11y
        else []
    )
    accessibility = sections["accessibility"]
    if accessibility is not None:
        accessibility["issues"] = [i.to_dict() for i in issues]

    return LighthouseResults(
        url=report.get("finalDisplayedUrl") or report.get("finalUrl") or report.get("requestedUrl"),
        version=report.get("lighthouseVersion"),
        fetch_time=report.get("fetchTime"),
        accessibility_score=accessibility["score"] if accessibility else 0,
        accessibility_issues=issues,
        accessibility=accessibility,
        performance=sections["performance"],
        best_practices=sections["bestPractices"],
        seo=sections["seo"],
    )
