"""Services for merging, AI integration and analysis orchestration."""

from .ai import AIService
from .merger import MergerService
from .orchestrator import AnalysisOrchestrator, PrecomputedScanners

__all__ = ["AIService", "AnalysisOrchestrator", "MergerService", "PrecomputedScanners"]
