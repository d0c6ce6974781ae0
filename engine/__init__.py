"""
engine/
-------
Playback layer.

    from engine import PlaybackEngine, ReaderSession, PlaybackState, PlayStatus
"""

from engine.state    import (
    PlaybackState, PlayStatus, Transition,
    ScheduleTick, CancelTick, PersistValue, NotifyUser,
)
from engine.timer    import TimerSlot
from engine.playback import PlaybackEngine, word_delay_ms, validate_wpm
from engine.session  import ReaderSession, SessionView, parse_saved_wpm

__all__ = [
    "PlaybackState",
    "PlayStatus",
    "Transition",
    "ScheduleTick",
    "CancelTick",
    "PersistValue",
    "NotifyUser",
    "TimerSlot",
    "PlaybackEngine",
    "word_delay_ms",
    "validate_wpm",
    "ReaderSession",
    "SessionView",
    "parse_saved_wpm",
]
