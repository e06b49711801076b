"""Merger service: turns request payloads into scanner records and merges them."""

from deps import Any, Dict, List, Optional, Tuple, logging

from accessibility_merger.issue import (
    AxeResults,
    KeyboardFinding,
    LighthouseResults,
    MergedReport,
    Pa11yResults,
)
from accessibility_merger.merger import ResultsMerger
from accessibility_merger.parsers import (
    collect_keyboard_findings,
    format_pa11y_results,
    process_lighthouse_report,
    summarize_axe_results,
)
from accessibility_merger.reporter import ReportGenerator

from ..errors import RequestValidationFailed
from ..schemas import MergeRequest

logger = logging.getLogger(__name__)

_AXE_KEYS = ("violations", "incomplete", "passes")

SourceRecords = Tuple[LighthouseResults, AxeResults, Optional[Pa11yResults], Optional[List[KeyboardFinding]]]


def parse_lighthouse(payload: Dict[str, Any], raw: bool = False) -> LighthouseResults:
    if raw:
        if "categories" not in payload:
            raise RequestValidationFailed("Raw Lighthouse report has no categories", {"source": "lighthouse"})
        return process_lighthouse_report(payload)
    return LighthouseResults.from_dict(payload)


def parse_axe(payload: Dict[str, Any]) -> AxeResults:
    if not any(key in payload for key in _AXE_KEYS):
        raise RequestValidationFailed(
            "Axe payload has none of violations, incomplete or passes", {"source": "axe"}
        )
    return AxeResults.from_dict(payload)


def parse_pa11y(payload: Optional[Dict[str, Any]], raw: bool = False) -> Optional[Pa11yResults]:
    if payload is None:
        return None
    if raw:
        return format_pa11y_results(payload)
    return Pa11yResults.from_dict(payload)


def parse_keyboard(payload: Optional[Dict[str, Any]]) -> Optional[List[KeyboardFinding]]:
    if payload is None:
        return None
    return collect_keyboard_findings(payload)


def parse_request(req: MergeRequest) -> SourceRecords:
    """Validate and convert every scanner payload in the request."""
    return (
        parse_lighthouse(req.lighthouse, raw=req.raw_lighthouse),
        parse_axe(req.axe),
        parse_pa11y(req.pa11y, raw=req.raw_pa11y),
        parse_keyboard(req.keyboard),
    )


class MergerService:
    """Wraps ResultsMerger for use by the API."""

    def __init__(self, merger: Optional[ResultsMerger] = None):
        self.merger = merger or ResultsMerger()

    def merge(
        self,
        lighthouse: LighthouseResults,
        axe: AxeResults,
        pa11y: Optional[Pa11yResults] = None,
        keyboard: Optional[List[KeyboardFinding]] = None,
    ) -> MergedReport:
        return self.merger.merge_results(lighthouse, axe, pa11y, keyboard)

    def merge_request(self, req: MergeRequest) -> MergedReport:
        return self.merge(*parse_request(req))

    def text_report(self, req: MergeRequest) -> str:
        return ReportGenerator.generate_text_report(self.merge_request(req))

    def summarize_axe(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return summarize_axe_results(parse_axe(payload))
