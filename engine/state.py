"""
state.py — Playback State Snapshot & Effects
=============================================
Every engine transition produces a new PlaybackState and a list of
effects the host must carry out.  The engine never touches a timer, a
store or the UI itself.

    PlaybackState  – frozen snapshot of where reading stands
    PlayStatus     – derived status (idle / playing / paused / finished)
    Effect types   – ScheduleTick, CancelTick, PersistValue, NotifyUser
    Transition     – (state, effects) pair returned by every transition

Design decisions:
  - PlaybackState is a SNAPSHOT (frozen dataclass).  Transitions build a
    new one with dataclasses.replace; subscribers can keep old snapshots
    without them changing underneath.
  - `status` is derived, never stored, so it cannot drift from the flags.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union


# ---------------------------------------------------------------------------
# Status
# ---------------------------------------------------------------------------
class PlayStatus(Enum):
    IDLE     = "idle"
    PLAYING  = "playing"
    PAUSED   = "paused"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class PlaybackState:
    """
    Attributes:
        document_id : Selected document, or None.
        index       : 0-based index of the word on screen.
        word_count  : Number of words in the selected document.
        playing     : True while the timer is allowed to advance.
        finished    : True once the last word's delay has elapsed.
        wpm         : Reading speed in words per minute.
        token       : Id of the outstanding tick (0 = none scheduled).
    """

    document_id: Optional[str] = None
    index:       int           = 0
    word_count:  int           = 0
    playing:     bool          = False
    finished:    bool          = False
    wpm:         int           = 400
    token:       int           = 0

    @property
    def status(self) -> PlayStatus:
        if self.document_id is None or self.word_count == 0:
            return PlayStatus.IDLE
        if self.finished:
            return PlayStatus.FINISHED
        return PlayStatus.PLAYING if self.playing else PlayStatus.PAUSED

    @property
    def at_last_word(self) -> bool:
        return self.word_count > 0 and self.index >= self.word_count - 1

    def to_dict(self) -> dict:
        return {
            "document_id": self.document_id,
            "index":       self.index,
            "word_count":  self.word_count,
            "playing":     self.playing,
            "finished":    self.finished,
            "wpm":         self.wpm,
            "status":      self.status.value,
        }


# ---------------------------------------------------------------------------
# Effects
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class ScheduleTick:
    token:    int
    delay_ms: float


@dataclass(frozen=True)
class CancelTick:
    token: int


@dataclass(frozen=True)
class PersistValue:
    key:   str
    value: str


@dataclass(frozen=True)
class NotifyUser:
    title:   str
    style:   str = "success"     # "success" | "failure"
    message: str = ""


Effect = Union[ScheduleTick, CancelTick, PersistValue, NotifyUser]


@dataclass(frozen=True)
class Transition:
    state:   PlaybackState
    effects: Tuple[Effect, ...] = field(default_factory=tuple)
