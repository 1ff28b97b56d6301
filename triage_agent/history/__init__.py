"""Support Triage Agent - History package."""

from .recorder import HistoryRecorder
from .store import JsonStore, SeedSlot

__all__ = ["HistoryRecorder", "JsonStore", "SeedSlot"]
