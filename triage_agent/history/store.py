"""File-backed key-value store and one-shot seed slot."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

from ..errors import StorageError

logger = logging.getLogger(__name__)

_MISSING = object()


class JsonStore:
    """
    A small key-value store persisted as one JSON object.

    Every write replaces the file atomically, so a read that follows a
    successful write always sees the complete new value.
    """
    
    def __init__(self, path: str):
        self.path = Path(path)
    
    def _read_all(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e
        if not text.strip():
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise StorageError(f"Corrupt store {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Corrupt store {self.path}: expected a JSON object")
        return data
    
    def _write_all(self, data: dict) -> None:
        try:
            # Encode up front: lone surrogates (undecodable argv bytes) fail here, not mid-write
            payload = json.dumps(data, indent=2, ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise StorageError(f"Cannot serialize store contents: {e}") from e
        
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(payload)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StorageError(f"Cannot write {self.path}: {e}") from e
    
    def get(self, key: str, default: Any = None) -> Any:
        return self._read_all().get(key, default)
    
    def set(self, key: str, value: Any) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)
    
    def remove(self, key: str) -> Any:
        """Delete a key, returning its previous value (or None)."""
        data = self._read_all()
        value = data.pop(key, _MISSING)
        if value is _MISSING:
            return None
        self._write_all(data)
        return value


class SeedSlot:
    """
    A message offered by another entry point for the next session to pick up.

    ``consume()`` returns the value once and clears the slot, so it is never
    applied twice.
    """
    
    def __init__(self, store: JsonStore, key: str = "exampleMessage"):
        self.store = store
        self.key = key
    
    def offer(self, text: str) -> None:
        self.store.set(self.key, text)
    
    def consume(self) -> Optional[str]:
        value = self.store.remove(self.key)
        if value:
            logger.info("Consumed seed message (%d chars)", len(value))
            return str(value)
        return None
