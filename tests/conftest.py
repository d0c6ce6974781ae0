"""Shared fixtures for the reader test suite.

Sessions are built on MemoryClipboard / MemoryStore so no test touches
the real clipboard or the user's store file.
"""

from typing import List

import pytest

from engine import ReaderSession
from host import MemoryClipboard, MemoryStore

# 10 words: the shortest text that is eligible for reading
FOX = "The quick brown fox jumps over the lazy dog. Ready?"
FOX_WORDS: List[str] = FOX.split()

LOREM = (
    "Lorem ipsum dolor sit amet consectetur adipiscing elit sed do "
    "eiusmod tempor incididunt ut labore"
)
ALPHA = "alpha beta gamma delta epsilon zeta eta theta iota kappa lambda"
SHORT = "too short to read"


@pytest.fixture
def clipboard():
    return MemoryClipboard([FOX, LOREM, ALPHA])


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def session(clipboard, store):
    s = ReaderSession(clipboard=clipboard, store=store)
    s.start()
    return s


def run_to_end(session_or_engine, limit: int = 1000) -> int:
    """Fire ticks until nothing is scheduled.  Returns the number fired."""
    fired = 0
    while fired < limit:
        token = _pending_token(session_or_engine)
        if not token:
            break
        session_or_engine.tick(token)
        fired += 1
    return fired


def _pending_token(obj) -> int:
    if isinstance(obj, ReaderSession):
        return obj.pending_tick.token if obj.pending_tick else 0
    return obj.pending_token
