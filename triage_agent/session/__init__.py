"""Support Triage Agent - Review session core."""

from .machine import ReviewSession
from .models import AnalysisResult, CorrectionFlags, HistoryRecord, SessionState, Suggestion
from .orchestrator import AnalysisOrchestrator
from .tracker import CorrectionTracker

__all__ = [
    "ReviewSession",
    "AnalysisOrchestrator",
    "CorrectionTracker",
    "AnalysisResult",
    "CorrectionFlags",
    "HistoryRecord",
    "SessionState",
    "Suggestion",
]
