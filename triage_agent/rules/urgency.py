"""Rule-based urgency scorer."""

import logging
from typing import Iterable

from .models import UrgencyRule

logger = logging.getLogger(__name__)


DEFAULT_URGENCY_RULES = (
    UrgencyRule(
        level="High",
        keywords=[
            "urgent", "asap", "immediately", "emergency", "critical",
            "outage", "is down", "went down", "locked out", "can't log in",
            "cannot log in", "security", "breach", "hacked", "data loss",
            "charged twice",
        ],
    ),
    UrgencyRule(
        level="Medium",
        keywords=[
            "invoice", "billing", "charge", "refund", "error", "bug",
            "not working", "broken", "issue", "problem", "failed",
        ],
    ),
)


class UrgencyScorer:
    """Deterministic urgency scoring: first matching rule wins."""
    
    def __init__(self, rules: Iterable[UrgencyRule] = DEFAULT_URGENCY_RULES, default_level: str = "Low"):
        self.rules = list(rules)
        self.default_level = default_level
    
    def score(self, message: str) -> str:
        """Return the urgency level for a message. Never fails."""
        for rule in self.rules:
            if rule.matches(message or ""):
                logger.debug("Urgency rule matched: %s", rule.level)
                return rule.level
        return self.default_level
