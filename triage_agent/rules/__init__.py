"""Support Triage Agent - Deterministic suggestion rules."""

from .models import DEFAULT_CATEGORIES, DEFAULT_QUICK_ACTIONS, DEFAULT_URGENCIES, QuickAction, UrgencyRule
from .templates import ActionTemplater
from .urgency import UrgencyScorer

__all__ = [
    "DEFAULT_CATEGORIES",
    "DEFAULT_QUICK_ACTIONS",
    "DEFAULT_URGENCIES",
    "QuickAction",
    "UrgencyRule",
    "ActionTemplater",
    "UrgencyScorer",
]
