"""
blacklist.py — Deleted Texts
=============================
Texts the user deleted.  They are never offered again, across sessions.

The blacklist persists as a JSON array of strings under one store key.
A missing or corrupt value is treated as an empty list; startup never
fails because of it.  Entries are only ever appended.
"""

import json
import logging
from typing import Iterable, Iterator, List, Optional

logger = logging.getLogger(__name__)


class Blacklist:
    def __init__(self, texts: Iterable[str] = ()):
        self._texts: List[str] = []
        self._lookup: set = set()
        for text in texts:
            self.add(text)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    @classmethod
    def from_json(cls, raw: Optional[str]) -> "Blacklist":
        if not raw:
            return cls()
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring corrupt blacklist value (%d chars)", len(raw))
            return cls()
        if not isinstance(data, list):
            logger.warning("Ignoring blacklist value of type %s", type(data).__name__)
            return cls()
        return cls(item for item in data if isinstance(item, str))

    def to_json(self) -> str:
        return json.dumps(self._texts)

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------
    def add(self, text: str) -> None:
        if text in self._lookup:
            return
        self._texts.append(text)
        self._lookup.add(text)

    def __contains__(self, text: object) -> bool:
        return text in self._lookup

    def __len__(self) -> int:
        return len(self._texts)

    def __iter__(self) -> Iterator[str]:
        return iter(self._texts)
