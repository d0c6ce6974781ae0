"""
storage.py — Persistent Key/Value Stores
=========================================
String-keyed, string-valued storage that survives restarts.  The reader
keeps two keys in it: the chosen speed and the JSON-encoded blacklist.

Implementations:
  • JsonFileStore – one JSON object in a file; rewritten on every set().
  • MemoryStore   – a dict; used for tests.
"""

import json
import logging
import os
import tempfile
from typing import Dict, Optional

from host.errors import StorageError

logger = logging.getLogger(__name__)


class KeyValueStore:
    """Interface: get / set string values by key."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    def __init__(self, data: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileStore(KeyValueStore):
    """
    Attributes:
        path : File holding a single JSON object {key: string value}.
    """

    def __init__(self, path: str):
        self.path = path

    def _load(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except ValueError:
            logger.warning("Store file %s is corrupt; starting empty", self.path)
            return {}
        except OSError as exc:
            raise StorageError(f"Cannot read {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            logger.warning("Store file %s does not hold an object; starting empty", self.path)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        directory = os.path.dirname(os.path.abspath(self.path))
        try:
            os.makedirs(directory, exist_ok=True)
            # write-then-rename
            fd, tmp = tempfile.mkstemp(dir=directory, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except OSError as exc:
            raise StorageError(f"Cannot write {self.path}: {exc}") from exc
