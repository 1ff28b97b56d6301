"""Review session state machine.

Idle -> Analyzing -> Reviewing -> Saved, with clear() returning to Idle.
A new analysis can only start from Idle or Saved, so there is at most one
in-flight or pending-review analysis per session.
"""

import dataclasses
import logging
from typing import Optional

from ..errors import SessionStateError, ValidationError
from .models import AnalysisResult, CorrectionFlags, HistoryRecord, SessionState, Suggestion
from .orchestrator import AnalysisOrchestrator
from .tracker import CorrectionTracker

logger = logging.getLogger(__name__)


class ReviewSession:
    """Single-user, single-record-in-flight triage workflow."""
    
    def __init__(
        self,
        orchestrator: AnalysisOrchestrator,
        recorder,
        tracker: Optional[CorrectionTracker] = None,
        templater=None,
        seed=None,
    ):
        self.orchestrator = orchestrator
        self.recorder = recorder
        self.tracker = tracker or CorrectionTracker()
        self.templater = templater or orchestrator.templater
        
        self._state = SessionState.IDLE
        self._message = ""
        self._result: Optional[AnalysisResult] = None
        self._saved_record: Optional[HistoryRecord] = None
        self._run_id = 0
        
        # One-shot seed: taken once here, never re-applied
        if seed is not None:
            seeded = seed.consume()
            if seeded:
                self._message = seeded
    
    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    
    @property
    def state(self) -> SessionState:
        return self._state
    
    @property
    def message(self) -> str:
        return self._message
    
    @property
    def message_length(self) -> int:
        return len(self._message)
    
    @property
    def result(self) -> Optional[AnalysisResult]:
        """A copy of the live result, or None."""
        return dataclasses.replace(self._result) if self._result else None
    
    @property
    def original(self) -> Optional[Suggestion]:
        return self.tracker.original
    
    @property
    def saved_record(self) -> Optional[HistoryRecord]:
        return self._saved_record
    
    @property
    def run_id(self) -> int:
        return self._run_id
    
    @property
    def flags(self) -> Optional[CorrectionFlags]:
        return self.tracker.flags(self._result) if self._result else None
    
    @property
    def category_options(self) -> list[str]:
        return self.tracker.available_category_options(self._result)
    
    @property
    def urgency_options(self) -> list[str]:
        return self.tracker.available_urgency_options(self._result)
    
    @property
    def input_enabled(self) -> bool:
        """Message input and the analyze control are locked while a result is in flight or pending review."""
        return self._state in (SessionState.IDLE, SessionState.SAVED)
    
    @property
    def analyze_enabled(self) -> bool:
        return self.input_enabled
    
    @property
    def clear_enabled(self) -> bool:
        return self._state is not SessionState.ANALYZING
    
    @property
    def editable(self) -> bool:
        return self._state is SessionState.REVIEWING
    
    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    
    def _require(self, allowed: tuple, action: str) -> None:
        if self._state not in allowed:
            raise SessionStateError(f"Cannot {action} while {self._state.value}")
    
    def _transition(self, new_state: SessionState) -> None:
        logger.info("Session %s -> %s", self._state.value, new_state.value)
        self._state = new_state
    
    def set_message(self, text: str) -> None:
        self._require((SessionState.IDLE, SessionState.SAVED), "edit the message")
        self._message = text
    
    async def analyze(self, message: Optional[str] = None) -> Optional[AnalysisResult]:
        """
        Run an analysis for the current (or given) message.

        Returns the new result, or None if the run was abandoned by clear()
        before its response arrived. Raises ValidationError for empty input
        (state unchanged) and re-raises provider failures after returning to
        Idle.
        """
        self._require((SessionState.IDLE, SessionState.SAVED), "start an analysis")
        if message is not None:
            self._message = message
        if not self._message.strip():
            raise ValidationError("Please enter a message to analyze")
        
        self._run_id += 1
        run_id = self._run_id
        self._result = None
        self._saved_record = None
        self.tracker.reset()
        self._transition(SessionState.ANALYZING)
        
        try:
            result = await self.orchestrator.run_analysis(self._message)
        except Exception:
            if run_id != self._run_id:
                logger.info("Discarding failure of stale run %d", run_id)
                return None
            self._transition(SessionState.IDLE)
            raise
        
        if run_id != self._run_id:
            logger.info("Discarding stale response of run %d (current run %d)", run_id, self._run_id)
            return None
        
        self._result = result
        self.tracker.capture(result)
        self._transition(SessionState.REVIEWING)
        return self.result
    
    def edit_category(self, category: str) -> None:
        """Correct the category; the reply text is replaced with the new category's template."""
        self._require((SessionState.REVIEWING,), "edit the category")
        self._result.category = category
        self._result.recommended_action = self.templater.recommend(category)
    
    def edit_urgency(self, urgency: str) -> None:
        self._require((SessionState.REVIEWING,), "edit the urgency")
        self._result.urgency = urgency
    
    def edit_action(self, text: str) -> None:
        self._require((SessionState.REVIEWING,), "edit the recommended action")
        self._result.recommended_action = text
    
    def append_quick_action(self, text: str) -> None:
        """Append text to the recommended action, separated by a blank line."""
        self._require((SessionState.REVIEWING,), "add a quick action")
        self._result.recommended_action = self._result.recommended_action + "\n\n" + text
    
    def save(self) -> HistoryRecord:
        """
        Persist the reviewed result. The session only moves to Saved once the
        recorder has confirmed the write; a StorageError leaves it in Reviewing.
        """
        self._require((SessionState.REVIEWING,), "save")
        record = HistoryRecord.finalize(self._result, self.tracker.original)
        self.recorder.append(record)
        self._saved_record = record
        self._transition(SessionState.SAVED)
        return record
    
    def clear(self) -> None:
        """Start over. Clearing an in-flight analysis abandons it."""
        if self._state is SessionState.IDLE:
            return
        if self._state is SessionState.ANALYZING:
            self._run_id += 1
        self._message = ""
        self._result = None
        self._saved_record = None
        self.tracker.reset()
        self._transition(SessionState.IDLE)
    
    def export_text(self) -> str:
        """Plain-text summary of the current result for pasting into a reply tool."""
        if self._result is None:
            raise SessionStateError("No analysis result to export")
        r = self._result
        return (
            f"Category: {r.category}\n"
            f"Urgency: {r.urgency}\n"
            f"Recommendation: {r.recommended_action}\n\n"
            f"Reasoning: {r.reasoning}"
        )
