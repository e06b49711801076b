"""Analysis orchestrator: runs scanners concurrently, merges once, then asks the AI."""

from deps import Any, Awaitable, Callable, Dict, List, Optional, asyncio, logging, time

from accessibility_merger.issue import (
    AxeResults,
    KeyboardFinding,
    LighthouseResults,
    MergedReport,
    Pa11yResults,
)

from ..errors import AnalysisError, AuditError, ScannerError
from ..schemas import MergeRequest
from .ai import AIService
from .merger import MergerService, parse_request

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[Dict[str, Any]], None]


class PrecomputedScanners:
    """Scanner suite serving results that were collected elsewhere."""

    def __init__(self, req: MergeRequest):
        self.lighthouse, self.axe, self.pa11y, self.keyboard = parse_request(req)

    async def run_lighthouse(self, url: Optional[str]) -> LighthouseResults:
        return self.lighthouse

    async def run_axe(self, url: Optional[str]) -> AxeResults:
        return self.axe

    async def run_pa11y(self, url: Optional[str]) -> Optional[Pa11yResults]:
        return self.pa11y

    async def run_keyboard(self, url: Optional[str]) -> Optional[List[KeyboardFinding]]:
        return self.keyboard


async def _scan(tool: str, pending: Awaitable[Any]) -> Any:
    try:
        return await pending
    except AuditError:
        raise
    except Exception as exc:
        logger.error("%s scan failed: %s", tool, exc)
        raise ScannerError(tool, exc) from exc


async def _skipped() -> None:
    return None


def _all_issues(report: MergedReport) -> List[Dict[str, Any]]:
    """Issues from every category, accessibility first."""
    issues = [i.to_dict() for i in report.accessibility.issues]
    for section in (report.performance, report.best_practices, report.seo):
        if isinstance(section, dict):
            issues.extend(i for i in section.get("issues") or [] if isinstance(i, dict))
    return issues


class AnalysisOrchestrator:
    """Coordinates scanners, the merger and the AI service for one analysis."""

    def __init__(
        self,
        scanners: Any,
        merger: Optional[MergerService] = None,
        ai_service: Optional[AIService] = None,
    ):
        self.scanners = scanners
        self.merger = merger or MergerService()
        self.ai_service = ai_service

    @staticmethod
    def _progress(callback: Optional[ProgressCallback], message: str, progress: int) -> None:
        if callback is not None:
            callback({"message": message, "progress": progress})

    async def analyze(
        self,
        url: Optional[str] = None,
        include_ai: bool = True,
        include_pa11y: bool = True,
        include_keyboard: bool = True,
        on_progress: Optional[ProgressCallback] = None,
    ) -> Dict[str, Any]:
        logger.info(
            "Starting analysis url=%s ai=%s pa11y=%s keyboard=%s",
            url, include_ai, include_pa11y, include_keyboard,
        )
        self._progress(on_progress, "Starting comprehensive website analysis...", 0)
        started = time.monotonic()

        lighthouse, axe, pa11y, keyboard = await asyncio.gather(
            _scan("Lighthouse", self.scanners.run_lighthouse(url)),
            _scan("Axe-Core", self.scanners.run_axe(url)),
            _scan("Pa11y", self.scanners.run_pa11y(url)) if include_pa11y else _skipped(),
            _scan("Keyboard", self.scanners.run_keyboard(url)) if include_keyboard else _skipped(),
        )
        logger.info("Parallel scans completed in %.2fs", time.monotonic() - started)

        self._progress(on_progress, "Merging accessibility results...", 50)
        try:
            report = self.merger.merge(lighthouse, axe, pa11y, keyboard)
        except Exception as exc:
            raise AnalysisError("Merging scanner results failed", {"cause": str(exc)}) from exc

        result = report.to_dict()
        result["toolsEnabled"] = {
            "axe": True,
            "pa11y": include_pa11y,
            "keyboard": include_keyboard,
        }
        self._progress(on_progress, "Scan results merged", 70)

        insights: Optional[str] = None
        fixes: Optional[str] = None
        if include_ai and self.ai_service is not None and self.ai_service.is_available():
            self._progress(on_progress, "Generating AI insights and fixes...", 75)
            insights, fixes = await asyncio.gather(
                asyncio.to_thread(self.ai_service.generate_insights, result),
                asyncio.to_thread(self.ai_service.generate_fixes, _all_issues(report)),
            )
            self._progress(on_progress, "AI analysis completed", 95)

        result["aiInsights"] = insights
        result["aiFixes"] = fixes
        self._progress(on_progress, "Analysis complete", 100)
        logger.info(
            "Analysis completed: combined=%s grade=%s issues=%d",
            report.scores.combined, report.scores.grade, len(report.accessibility.issues),
        )
        return result
