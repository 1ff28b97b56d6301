"""Support Triage Agent - Human-in-the-loop triage of customer messages."""

__version__ = "0.1.0"

# Re-export main components for convenience
from .config import load_config, Config
from .errors import (
    TriageError,
    ValidationError,
    AnalysisError,
    StorageError,
    SessionStateError,
    ConfigError,
)
from .analyzer import build_categorizer, GeminiCategorizer, OllamaCategorizer, Categorization
from .rules import ActionTemplater, UrgencyScorer, QuickAction
from .session import (
    AnalysisOrchestrator,
    AnalysisResult,
    CorrectionTracker,
    HistoryRecord,
    ReviewSession,
    SessionState,
    Suggestion,
)
from .history import HistoryRecorder, JsonStore, SeedSlot

__all__ = [
    "load_config",
    "Config",
    "TriageError",
    "ValidationError",
    "AnalysisError",
    "StorageError",
    "SessionStateError",
    "ConfigError",
    "build_categorizer",
    "GeminiCategorizer",
    "OllamaCategorizer",
    "Categorization",
    "ActionTemplater",
    "UrgencyScorer",
    "QuickAction",
    "AnalysisOrchestrator",
    "AnalysisResult",
    "CorrectionTracker",
    "HistoryRecord",
    "ReviewSession",
    "SessionState",
    "Suggestion",
    "HistoryRecorder",
    "JsonStore",
    "SeedSlot",
]
