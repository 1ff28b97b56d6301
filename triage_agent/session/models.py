"""Session data models - working result, baseline and persisted record."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


def utc_timestamp() -> str:
    """Current time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


class SessionState(Enum):
    """Review session states."""
    IDLE = "idle"
    ANALYZING = "analyzing"
    REVIEWING = "reviewing"
    SAVED = "saved"


@dataclass
class AnalysisResult:
    """The editable working record shown to the agent."""
    message: str
    category: str
    urgency: str
    recommended_action: str
    reasoning: str
    timestamp: str = field(default_factory=utc_timestamp)


@dataclass(frozen=True)
class Suggestion:
    """Original automated suggestion, the baseline for corrections."""
    category: str
    urgency: str


@dataclass(frozen=True)
class CorrectionFlags:
    """Whether each correctable field still matches the original suggestion."""
    category_matches: bool
    urgency_matches: bool


@dataclass(frozen=True)
class HistoryRecord:
    """A finalized, persisted triage."""
    message: str
    category: str
    urgency: str
    recommended_action: str
    reasoning: str
    timestamp: str
    original_category: Optional[str] = None
    original_urgency: Optional[str] = None
    
    @classmethod
    def finalize(cls, result: AnalysisResult, original: Optional[Suggestion]) -> "HistoryRecord":
        """Snapshot a result at save time with a fresh timestamp."""
        return cls(
            message=result.message,
            category=result.category,
            urgency=result.urgency,
            recommended_action=result.recommended_action,
            reasoning=result.reasoning,
            timestamp=utc_timestamp(),
            original_category=original.category if original else None,
            original_urgency=original.urgency if original else None,
        )
    
    @classmethod
    def from_dict(cls, data: dict) -> "HistoryRecord":
        """Build a record from its stored form. Older records lack the original fields."""
        return cls(
            message=data["message"],
            category=data["category"],
            urgency=data["urgency"],
            recommended_action=data["recommendedAction"],
            reasoning=data.get("reasoning", ""),
            timestamp=data["timestamp"],
            original_category=data.get("originalCategory"),
            original_urgency=data.get("originalUrgency"),
        )
    
    def to_dict(self) -> dict:
        """Convert to the stored form."""
        data = {
            "message": self.message,
            "category": self.category,
            "urgency": self.urgency,
            "recommendedAction": self.recommended_action,
            "reasoning": self.reasoning,
            "timestamp": self.timestamp,
        }
        if self.original_category is not None:
            data["originalCategory"] = self.original_category
        if self.original_urgency is not None:
            data["originalUrgency"] = self.original_urgency
        return data
    
    @property
    def category_corrected(self) -> Optional[bool]:
        """True if the agent changed the category; None without a stored baseline."""
        if self.original_category is None:
            return None
        return self.category != self.original_category
    
    @property
    def urgency_corrected(self) -> Optional[bool]:
        """True if the agent changed the urgency; None without a stored baseline."""
        if self.original_urgency is None:
            return None
        return self.urgency != self.original_urgency
