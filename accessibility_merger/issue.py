"""
Issue data models for the accessibility results merger.

Scanner-specific records (Axe, Pa11y, keyboard, Lighthouse) are parsed from the
collaborators' JSON with ``from_dict`` and converted into the one canonical
``Issue`` by ``normalizer``. Output records render back to the wire shape with
``to_dict``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from .scoring import map_impact_to_score


class Severity(str, Enum):
    """Ordinal issue severity."""
    CRITICAL = "critical"
    SERIOUS = "serious"
    MODERATE = "moderate"
    MINOR = "minor"

    @classmethod
    def parse(cls, value: Any) -> "Severity":
        """Total parse: anything unrecognised becomes MODERATE."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.MODERATE


class WcagLevel(str, Enum):
    """WCAG conformance level an issue belongs to."""
    A = "A"
    AA = "AA"
    AAA = "AAA"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: Any) -> "WcagLevel":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


def _as_list(value: Any) -> list:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _as_dict(value: Any) -> Dict[str, Any]:
    return dict(value) if isinstance(value, dict) else {}


def _criteria(value: Any) -> Union[str, List[str], None]:
    """A criterion stays a string; a list of them becomes a list of strings."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return [str(c) for c in value if c]
    return str(value)


@dataclass
class Node:
    """One affected DOM location."""
    selector: Optional[str] = None
    html: Optional[str] = None
    failure_summary: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "selector": self.selector,
            "html": self.html,
            "failureSummary": self.failure_summary,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Node":
        data = _as_dict(data)
        return cls(
            selector=data.get("selector"),
            html=data.get("html"),
            failure_summary=data.get("failureSummary"),
        )


@dataclass
class Recommendation:
    description: Optional[str] = None
    implementation: Optional[str] = None
    learn_more: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "description": self.description,
            "implementation": self.implementation,
            "learnMore": self.learn_more,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Recommendation":
        data = _as_dict(data)
        return cls(
            description=data.get("description") or data.get("suggestion"),
            implementation=data.get("implementation") or data.get("snippet"),
            learn_more=data.get("learnMore"),
        )


# Keys Issue.from_dict consumes itself; everything else is kept in Issue.extra.
_ISSUE_KEYS = {
    "type", "title", "description", "severity", "impact", "detectedBy",
    "wcagCriteria", "wcagLevel", "selector", "nodes", "nodeCount",
    "requiresManualCheck", "recommendations", "helpUrl", "html",
    "failureSummary", "context", "code",
}


@dataclass
class Issue:
    """A normalized accessibility finding, whichever scanner produced it."""
    title: str
    description: Optional[str]
    severity: Severity
    impact: int
    detected_by: List[str]
    wcag_criteria: List[str] = field(default_factory=list)
    wcag_level: WcagLevel = WcagLevel.UNKNOWN
    selector: Optional[str] = None
    nodes: List[Node] = field(default_factory=list)
    requires_manual_check: bool = False
    recommendations: List[Recommendation] = field(default_factory=list)
    help_url: Optional[str] = None
    html: Optional[str] = None
    failure_summary: Optional[str] = None
    context: Optional[str] = None
    code: Optional[str] = None
    type: str = "accessibility"
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = dict(self.extra)
        out.update({
            "type": self.type,
            "title": self.title,
            "description": self.description,
            "severity": self.severity.value,
            "impact": self.impact,
            "detectedBy": list(self.detected_by),
            "wcagCriteria": list(self.wcag_criteria),
            "wcagLevel": self.wcag_level.value,
            "selector": self.selector,
            "nodes": [n.to_dict() for n in self.nodes],
            "nodeCount": self.node_count,
            "requiresManualCheck": self.requires_manual_check,
            "recommendations": [r.to_dict() for r in self.recommendations],
        })
        for key, value in (
            ("helpUrl", self.help_url),
            ("html", self.html),
            ("failureSummary", self.failure_summary),
            ("context", self.context),
            ("code", self.code),
        ):
            if value is not None:
                out[key] = value
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any], default_source: str = "lighthouse") -> "Issue":
        """Coerce an already-shaped issue dict (e.g. Lighthouse output) into an Issue.

        The severity is parsed totally and the impact recomputed from it; a numeric
        impact the producer attached is kept in ``extra`` as ``sourceImpact``.
        """
        data = _as_dict(data)
        severity = Severity.parse(data.get("severity"))
        detected_by = list(dict.fromkeys(str(s) for s in _as_list(data.get("detectedBy"))))
        extra = {k: v for k, v in data.items() if k not in _ISSUE_KEYS}
        if data.get("impact") is not None and "sourceImpact" not in extra:
            extra["sourceImpact"] = data["impact"]
        return cls(
            type=data.get("type") or "accessibility",
            title=str(data.get("title") or ""),
            description=data.get("description"),
            severity=severity,
            impact=map_impact_to_score(severity),
            detected_by=detected_by or [default_source],
            wcag_criteria=[str(c) for c in _as_list(data.get("wcagCriteria")) if c],
            wcag_level=WcagLevel.parse(data.get("wcagLevel")),
            selector=data.get("selector") or None,
            nodes=[Node.from_dict(n) for n in _as_list(data.get("nodes"))],
            requires_manual_check=bool(data.get("requiresManualCheck", False)),
            recommendations=[Recommendation.from_dict(r) for r in _as_list(data.get("recommendations"))],
            help_url=data.get("helpUrl"),
            html=data.get("html"),
            failure_summary=data.get("failureSummary"),
            context=data.get("context"),
            code=data.get("code"),
            extra=extra,
        )


# --- Source records ---


@dataclass
class AxeNode:
    target: List[Any] = field(default_factory=list)
    html: Optional[str] = None
    failure_summary: Optional[str] = None
    impact: Optional[str] = None
    any: List[Dict[str, Any]] = field(default_factory=list)
    all: List[Dict[str, Any]] = field(default_factory=list)
    none: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def selector(self) -> Optional[str]:
        """First target; shadow-DOM targets (nested lists) are joined with spaces."""
        if not self.target:
            return None
        first = self.target[0]
        if isinstance(first, (list, tuple)):
            return " ".join(str(part) for part in first) or None
        return str(first) if first else None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AxeNode":
        data = _as_dict(data)
        return cls(
            target=_as_list(data.get("target")),
            html=data.get("html"),
            failure_summary=data.get("failureSummary"),
            impact=data.get("impact"),
            any=[_as_dict(c) for c in _as_list(data.get("any"))],
            all=[_as_dict(c) for c in _as_list(data.get("all"))],
            none=[_as_dict(c) for c in _as_list(data.get("none"))],
        )


@dataclass
class AxeFinding:
    """One Axe rule result (violation, incomplete or pass)."""
    id: str = ""
    help: str = ""
    description: Optional[str] = None
    impact: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    help_url: Optional[str] = None
    nodes: List[AxeNode] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AxeFinding":
        data = _as_dict(data)
        return cls(
            id=str(data.get("id") or ""),
            help=str(data.get("help") or ""),
            description=data.get("description"),
            impact=data.get("impact"),
            tags=[str(t) for t in _as_list(data.get("tags"))],
            help_url=data.get("helpUrl"),
            nodes=[AxeNode.from_dict(n) for n in _as_list(data.get("nodes"))],
        )


@dataclass
class AxeResults:
    url: Optional[str] = None
    timestamp: Optional[str] = None
    violations: List[AxeFinding] = field(default_factory=list)
    incomplete: List[AxeFinding] = field(default_factory=list)
    passes: List[AxeFinding] = field(default_factory=list)
    test_engine: Dict[str, Any] = field(default_factory=dict)
    test_runner: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AxeResults":
        data = _as_dict(data)
        return cls(
            url=data.get("url"),
            timestamp=data.get("timestamp"),
            violations=[AxeFinding.from_dict(v) for v in _as_list(data.get("violations"))],
            incomplete=[AxeFinding.from_dict(v) for v in _as_list(data.get("incomplete"))],
            passes=[AxeFinding.from_dict(v) for v in _as_list(data.get("passes"))],
            test_engine=_as_dict(data.get("testEngine")),
            test_runner=_as_dict(data.get("testRunner")),
        )


@dataclass
class Pa11yFinding:
    """One Pa11y message; ``type`` is error, warning or notice."""
    type: str
    message: str
    selector: Optional[str] = None
    context: Optional[str] = None
    code: Optional[str] = None
    wcag_criteria: Union[str, List[str], None] = None
    wcag_level: Optional[str] = None
    principle: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "message": self.message,
            "selector": self.selector,
            "context": self.context,
            "code": self.code,
            "wcagCriteria": self.wcag_criteria,
            "wcagLevel": self.wcag_level,
            "principle": self.principle,
            "detectedBy": ["pa11y"],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pa11yFinding":
        data = _as_dict(data)
        return cls(
            type=str(data.get("type") or "notice"),
            message=str(data.get("message") or ""),
            selector=data.get("selector") or None,
            context=data.get("context"),
            code=data.get("code"),
            wcag_criteria=_criteria(data.get("wcagCriteria")),
            wcag_level=data.get("wcagLevel"),
            principle=data.get("principle"),
        )


@dataclass
class Pa11yResults:
    issues: List[Pa11yFinding] = field(default_factory=list)
    score: Optional[float] = None
    url: Optional[str] = None
    document_title: Optional[str] = None
    version: Optional[str] = None
    runner: str = "htmlcs"
    score_details: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pa11yResults":
        data = _as_dict(data)
        raw_score = data.get("score")
        details: Dict[str, Any] = {}
        if isinstance(raw_score, dict):
            details = dict(raw_score)
            raw_score = raw_score.get("score")
        score = raw_score if isinstance(raw_score, (int, float)) and not isinstance(raw_score, bool) else None
        return cls(
            issues=[Pa11yFinding.from_dict(i) for i in _as_list(data.get("issues"))],
            score=score,
            url=data.get("url") or data.get("pageUrl"),
            document_title=data.get("documentTitle"),
            version=data.get("version"),
            runner=data.get("runner") or "htmlcs",
            score_details=details,
        )


@dataclass
class KeyboardFinding:
    """One keyboard-navigation finding."""
    type: str
    severity: Optional[str]
    message: str
    wcag: Optional[str] = None
    details: Optional[str] = None
    recommendation: Optional[str] = None
    selector: Optional[str] = None
    element: Optional[str] = None
    text: Optional[str] = None
    class_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KeyboardFinding":
        data = _as_dict(data)
        return cls(
            type=str(data.get("type") or "keyboard"),
            severity=data.get("severity"),
            message=str(data.get("message") or ""),
            wcag=str(data["wcag"]) if data.get("wcag") is not None else None,
            details=data.get("details"),
            recommendation=data.get("recommendation"),
            selector=data.get("selector") or None,
            element=data.get("element"),
            text=data.get("text"),
            class_name=data.get("className"),
        )


@dataclass
class LighthouseResults:
    """Lighthouse output; only ``accessibility`` takes part in the merge."""
    url: Optional[str] = None
    version: Optional[str] = None
    fetch_time: Optional[str] = None
    accessibility_score: float = 0
    accessibility_issues: List[Issue] = field(default_factory=list)
    accessibility: Optional[Dict[str, Any]] = None
    performance: Optional[Dict[str, Any]] = None
    best_practices: Optional[Dict[str, Any]] = None
    seo: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LighthouseResults":
        data = _as_dict(data)
        accessibility = data.get("accessibility")
        a11y = _as_dict(accessibility)
        score = a11y.get("score")
        return cls(
            url=data.get("url"),
            version=data.get("version") or data.get("lighthouseVersion"),
            fetch_time=data.get("fetchTime"),
            accessibility_score=score if isinstance(score, (int, float)) and not isinstance(score, bool) else 0,
            accessibility_issues=[Issue.from_dict(i) for i in _as_list(a11y.get("issues"))],
            accessibility=accessibility if isinstance(accessibility, dict) else None,
            performance=data.get("performance"),
            best_practices=data.get("bestPractices"),
            seo=data.get("seo"),
        )


# --- Output records ---


@dataclass
class ScoreSet:
    lighthouse: int
    axe: int
    combined: int
    grade: str
    pa11y: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "lighthouse": self.lighthouse,
            "axe": self.axe,
            "combined": self.combined,
            "grade": self.grade,
        }
        if self.pa11y is not None:
            out["pa11y"] = self.pa11y
        return out


@dataclass
class LevelCompliance:
    violations: int
    compliant: bool

    def to_dict(self) -> Dict[str, Any]:
        return {"violations": self.violations, "compliant": self.compliant}


@dataclass
class ComplianceReport:
    A: LevelCompliance
    AA: LevelCompliance
    AAA: LevelCompliance
    compliant_level: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "A": self.A.to_dict(),
            "AA": self.AA.to_dict(),
            "AAA": self.AAA.to_dict(),
            "overall": {"compliantLevel": self.compliant_level},
        }


@dataclass
class AccessibilitySummary:
    total: int
    critical: int
    serious: int
    moderate: int
    minor: int
    by_source: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "critical": self.critical,
            "serious": self.serious,
            "moderate": self.moderate,
            "minor": self.minor,
            "bySource": dict(self.by_source),
        }


@dataclass
class AccessibilitySection:
    score: int
    issues: List[Issue]
    summary: AccessibilitySummary
    wcag_compliance: ComplianceReport

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "issues": [i.to_dict() for i in self.issues],
            "summary": self.summary.to_dict(),
            "wcagCompliance": self.wcag_compliance.to_dict(),
        }


@dataclass
class MergedReport:
    url: Optional[str]
    timestamp: str
    scores: ScoreSet
    accessibility: AccessibilitySection
    performance: Optional[Dict[str, Any]] = None
    best_practices: Optional[Dict[str, Any]] = None
    seo: Optional[Dict[str, Any]] = None
    tool_details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "timestamp": self.timestamp,
            "scores": self.scores.to_dict(),
            "accessibility": self.accessibility.to_dict(),
            "performance": self.performance,
            "bestPractices": self.best_practices,
            "seo": self.seo,
            "toolDetails": self.tool_details,
        }
