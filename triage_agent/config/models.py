"""Configuration models."""

from dataclasses import dataclass, field
from typing import Optional

from ..rules.models import DEFAULT_CATEGORIES, DEFAULT_QUICK_ACTIONS, DEFAULT_URGENCIES, QuickAction, UrgencyRule
from ..rules.templates import DEFAULT_TEMPLATE, DEFAULT_TEMPLATES
from ..rules.urgency import DEFAULT_URGENCY_RULES


@dataclass
class ProviderConfig:
    """Categorizer provider configuration."""
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"
    ollama_model: str = ""
    ollama_host: Optional[str] = None


@dataclass
class UrgencyConfig:
    """Keyword rules for the urgency scorer."""
    rules: list[UrgencyRule] = field(default_factory=lambda: list(DEFAULT_URGENCY_RULES))
    default_level: str = "Low"


@dataclass
class HistoryConfig:
    """Local history store configuration."""
    path: str = "triage_history.json"
    key: str = "triageHistory"
    seed_key: str = "exampleMessage"


@dataclass
class Config:
    """Main configuration container."""
    categories: list[str] = field(default_factory=lambda: list(DEFAULT_CATEGORIES))
    urgencies: list[str] = field(default_factory=lambda: list(DEFAULT_URGENCIES))
    quick_actions: list[QuickAction] = field(default_factory=lambda: list(DEFAULT_QUICK_ACTIONS))
    urgency: UrgencyConfig = field(default_factory=UrgencyConfig)
    templates: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_TEMPLATES))
    default_template: str = DEFAULT_TEMPLATE
    provider: ProviderConfig = field(default_factory=ProviderConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)
    log_level: str = "WARNING"
