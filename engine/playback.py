"""
playback.py — Word Playback Engine
===================================
The PlaybackEngine owns the word pointer for the selected document and
decides when it moves.  It is the only writer of PlaybackState.

State machine:
    IDLE     →  load(words)   →  PLAYING
    PLAYING  →  pause()       →  PAUSED
    PAUSED   →  play()        →  PLAYING
    PLAYING  →  tick(last)    →  FINISHED
    FINISHED →  toggle()      →  PLAYING  (from word 0)
    any      →  clear()       →  IDLE

Timing:
    Each word stays on screen for 60000 / wpm ms; words ending a sentence
    (".", "!" or "?") stay twice as long.  The host runs one single-shot
    timer per word and calls tick(token) when it fires.

Every transition returns a Transition (new snapshot + effects) and fires
the subscribed listeners with the new snapshot.  Anything that changes
the index, selection, speed or play flag re-arms the timer slot, so the
previous tick's token is dead before a new one exists.

Thread safety:
  Not thread-safe on its own; ReaderSession serialises access.
"""

import logging
from dataclasses import replace
from typing import Callable, List, Optional, Sequence, Tuple

from config import DEFAULT_WPM, SPEED_KEY, WPM_OPTIONS
from engine.state import Effect, PersistValue, PlaybackState, PlayStatus, Transition
from engine.timer import TimerSlot

logger = logging.getLogger(__name__)

SENTENCE_END = (".", "!", "?")

StateListener = Callable[[PlaybackState], None]


def word_delay_ms(word: str, wpm: int) -> float:
    """How long `word` stays on screen at `wpm` words per minute."""
    base = 60000 / wpm
    if word.endswith(SENTENCE_END):
        return base * 2
    return base


def validate_wpm(wpm: object) -> int:
    """Coerce to int and check against the speed menu; ValueError otherwise."""
    try:
        value = int(wpm)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f"Invalid speed: {wpm!r}") from None
    if value not in WPM_OPTIONS:
        raise ValueError(f"Speed must be one of {WPM_OPTIONS}, got {value}")
    return value


class PlaybackEngine:
    """
    Attributes:
        state : The current PlaybackState snapshot.
        words : Words of the selected document (empty when idle).
    """

    def __init__(self, wpm: int = DEFAULT_WPM, on_state: Optional[StateListener] = None):
        self.state: PlaybackState = PlaybackState(wpm=validate_wpm(wpm))
        self.words: Tuple[str, ...] = ()
        self._timer = TimerSlot()
        self._listeners: List[StateListener] = []
        if on_state:
            self.subscribe(on_state)

    def subscribe(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, document_id: str, words: Sequence[str]) -> Transition:
        """Select a document: back to word 0 and playing."""
        self.words = tuple(words)
        new = replace(
            self.state,
            document_id=document_id,
            index=0,
            word_count=len(self.words),
            playing=bool(self.words),
            finished=False,
        )
        logger.debug("Loaded document %s (%d words)", document_id, len(self.words))
        return self._commit(new)

    def clear(self) -> Transition:
        """No document selected."""
        self.words = ()
        new = replace(self.state, document_id=None, index=0, word_count=0,
                      playing=False, finished=False)
        return self._commit(new)

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> Transition:
        if self.state.status == PlayStatus.IDLE or self.state.playing:
            return Transition(self.state)
        if self.state.finished:
            return self.restart()
        return self._commit(replace(self.state, playing=True))

    def pause(self) -> Transition:
        if not self.state.playing:
            return Transition(self.state)
        return self._commit(replace(self.state, playing=False))

    def toggle(self) -> Transition:
        if self.state.status == PlayStatus.IDLE:
            return Transition(self.state)
        if self.state.at_last_word:
            return self.restart()
        return self.pause() if self.state.playing else self.play()

    def restart(self) -> Transition:
        if self.state.status == PlayStatus.IDLE:
            return Transition(self.state)
        return self._commit(replace(self.state, index=0, playing=True, finished=False))

    def jump_to(self, index: int) -> Transition:
        """Show word `index` (clamped); the play flag is kept."""
        if self.state.status == PlayStatus.IDLE:
            return Transition(self.state)
        index = max(0, min(int(index), self.state.word_count - 1))
        return self._commit(replace(self.state, index=index, finished=False))

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, wpm: object) -> Transition:
        value = validate_wpm(wpm)
        persist = PersistValue(SPEED_KEY, str(value))
        return self._commit(replace(self.state, wpm=value), [persist])

    # ------------------------------------------------------------------
    # Tick  (the host calls this when the scheduled delay elapses)
    # ------------------------------------------------------------------
    def tick(self, token: int) -> Transition:
        spent = self._timer.consume(token)
        if spent is None:
            logger.debug("Ignoring stale tick %s (current %s)", token, self._timer.current)
            return Transition(self.state)
        if not self.state.playing:
            return self._commit(self.state, [spent])

        nxt = self.state.index + 1
        if nxt >= self.state.word_count:
            return self._commit(replace(self.state, playing=False, finished=True), [spent])
        return self._commit(replace(self.state, index=nxt), [spent])

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_word(self) -> str:
        if 0 <= self.state.index < len(self.words):
            return self.words[self.state.index]
        return ""

    @property
    def pending_token(self) -> int:
        return self._timer.current

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _commit(self, new: PlaybackState, effects: Sequence[Effect] = ()) -> Transition:
        out: List[Effect] = list(effects)
        if new.playing and new.word_count > 0:
            word = self.words[new.index]
            out.extend(self._timer.arm(word_delay_ms(word, new.wpm)))
        else:
            out.extend(self._timer.cancel())
        new = replace(new, token=self._timer.current)
        self.state = new
        for listener in self._listeners:
            listener(new)
        return Transition(new, tuple(out))
