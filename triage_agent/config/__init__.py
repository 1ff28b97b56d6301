"""Support Triage Agent - Configuration package."""

from .loader import load_config
from .models import Config, HistoryConfig, ProviderConfig, UrgencyConfig

__all__ = ["load_config", "Config", "HistoryConfig", "ProviderConfig", "UrgencyConfig"]
