"""History recorder - append-only log of finalized triage records."""

import logging

from ..errors import StorageError
from ..session.models import HistoryRecord
from .store import JsonStore

logger = logging.getLogger(__name__)


class HistoryRecorder:
    """Appends finalized records to the history sequence under a well-known key."""
    
    def __init__(self, store: JsonStore, key: str = "triageHistory"):
        self.store = store
        self.key = key
    
    def _load_raw(self) -> list:
        raw = self.store.get(self.key, [])
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise StorageError(f"History under {self.key!r} is not a list")
        return raw
    
    def load(self) -> list[HistoryRecord]:
        """Return all saved records in insertion order."""
        try:
            return [HistoryRecord.from_dict(item) for item in self._load_raw()]
        except (KeyError, TypeError, AttributeError) as e:
            raise StorageError(f"Malformed history record: {e}") from e
    
    def append(self, record: HistoryRecord) -> None:
        """Append one record, leaving every earlier record untouched."""
        history = self._load_raw()
        history.append(record.to_dict())
        self.store.set(self.key, history)
        logger.info("Saved history record #%d (%s / %s)", len(history), record.category, record.urgency)
