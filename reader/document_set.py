"""
document_set.py — Ordered Document Collection
==============================================
The documents offered for reading in one session.

Responsibilities:
  1. Build from raw clipboard entries        (trim, dedupe, blacklist, min words)
  2. Lookup by id                            (get / ids / first)
  3. Deletion                                (remove, successor lookup)

Design decisions:
  - Documents are kept in a plain list; the set holds a handful of
    clipboard entries so linear scans are fine.
  - Entries that are empty, duplicated, blacklisted or too short are
    skipped silently.  Nothing reports how many were dropped.
  - Built once per session; only deletion mutates it afterwards.
"""

import logging
from typing import Iterable, Iterator, List, Optional

from config import MIN_WORDS
from reader.blacklist import Blacklist
from reader.document import Document

logger = logging.getLogger(__name__)


class DocumentSet:
    def __init__(self, documents: Iterable[Document] = ()):
        self._documents: List[Document] = list(documents)

    @classmethod
    def build(
        cls,
        entries: Iterable[str],
        blacklist: Optional[Blacklist] = None,
        min_words: int = MIN_WORDS,
        id_prefix: str = "",
    ) -> "DocumentSet":
        """
        Args:
            entries   : Raw clipboard texts, most recent first.
            blacklist : Texts to exclude (exact match on the trimmed text).
            min_words : Minimum word count for a text to be eligible.
            id_prefix : Prefix for generated ids, e.g. a session stamp.
        """
        blacklist = blacklist or Blacklist()
        documents: List[Document] = []
        seen = set()
        for offset, raw in enumerate(entries):
            text = (raw or "").strip()
            if not text or text in seen or text in blacklist:
                continue
            doc = Document.from_text(text, doc_id=f"{id_prefix}{offset}", min_words=min_words)
            if doc is None:
                continue
            seen.add(text)
            documents.append(doc)
        logger.debug("Built document set: %d documents", len(documents))
        return cls(documents)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get(self, doc_id: Optional[str]) -> Optional[Document]:
        for doc in self._documents:
            if doc.id == doc_id:
                return doc
        return None

    def ids(self) -> List[str]:
        return [doc.id for doc in self._documents]

    def first(self) -> Optional[Document]:
        return self._documents[0] if self._documents else None

    def index_of(self, doc_id: str) -> int:
        for i, doc in enumerate(self._documents):
            if doc.id == doc_id:
                return i
        return -1

    def __contains__(self, doc_id: object) -> bool:
        return self.get(doc_id) is not None

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[Document]:
        return iter(self._documents)

    # ------------------------------------------------------------------
    # Deletion
    # ------------------------------------------------------------------
    def remove(self, doc_id: str) -> Optional[Document]:
        """Remove and return the document, or None if it is not present."""
        pos = self.index_of(doc_id)
        if pos < 0:
            return None
        return self._documents.pop(pos)

    def successor_at(self, position: int) -> Optional[Document]:
        """
        The document that should take over after a removal at `position`:
        whatever now sits at that position, else the new last document.
        """
        if not self._documents:
            return None
        if position < len(self._documents):
            return self._documents[position]
        return self._documents[-1]
