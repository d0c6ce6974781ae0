"""
document.py — Document & Tokenizer
===================================
A Document is one clipboard text prepared for reading: its trimmed text
and the ordered words the engine steps through.

Design decisions:
  - Document is a frozen dataclass.  It is created once from clipboard
    text and never changes afterwards; the engine and renderer only read it.
  - Tokenisation is a plain whitespace split, so it is deterministic and
    can never yield an empty token.
  - Texts with fewer than MIN_WORDS words are not eligible; `from_text`
    returns None for them instead of raising.
"""

import uuid
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from config import MIN_WORDS, TITLE_LENGTH


def tokenize(text: str) -> List[str]:
    """Split on runs of whitespace, dropping empty tokens."""
    return text.split()


def make_title(text: str, length: int = TITLE_LENGTH) -> str:
    """List-row title: the first `length` characters, `...` when cut."""
    if len(text) > length:
        return text[:length] + "..."
    return text


@dataclass(frozen=True)
class Document:
    """
    Attributes:
        id    : Session-unique identifier.
        text  : The trimmed clipboard text.
        words : Tokenisation of `text` (never empty tokens).
    """

    id:    str
    text:  str
    words: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_text(
        cls,
        text: str,
        doc_id: Optional[str] = None,
        min_words: int = MIN_WORDS,
    ) -> Optional["Document"]:
        text = text.strip()
        words = tokenize(text)
        if len(words) < min_words:
            return None
        return cls(id=doc_id or uuid.uuid4().hex[:8], text=text, words=tuple(words))

    @property
    def word_count(self) -> int:
        return len(self.words)

    @property
    def title(self) -> str:
        return make_title(self.text)

    def word_at(self, index: int) -> str:
        if 0 <= index < len(self.words):
            return self.words[index]
        return ""
