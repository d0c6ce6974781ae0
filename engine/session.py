"""
session.py — Reader Session
============================
The ReaderSession is the ONLY object the host talks to.  It owns every
piece of per-session state: the document set, the blacklist, the
playback engine, the latest frame, the pending tick and the queue of
user notifications.

Usage:
    session = ReaderSession(clipboard=SystemClipboard(), store=JsonFileStore(path))
    session.start()                    # reads clipboard + store once
    session.toggle()
    session.tick(session.pending_tick.token)   # when the host timer fires

Effects:
    Engine transitions return effects; the session carries them out:
      • PersistValue  → store.set (a failure becomes a notification)
      • NotifyUser    → queued until the host drains it
      • ScheduleTick  → kept as `pending_tick` for the host timer
      • CancelTick    → clears `pending_tick`

Thread safety:
  Every public method holds one re-entrant lock, so a tick always sees
  the state left by the last completed command and never one from
  before a cancellation.
"""

import logging
import threading
import time
from typing import List, NamedTuple, Optional

from config import (
    BLACKLIST_KEY,
    CLIPBOARD_SCAN_COUNT,
    DEFAULT_WPM,
    MIN_WORDS,
    SPEED_KEY,
    WPM_OPTIONS,
)
from engine.playback import PlaybackEngine
from engine.state import (
    CancelTick,
    NotifyUser,
    PersistValue,
    PlaybackState,
    ScheduleTick,
    Transition,
)
from host.clipboard import ClipboardSource
from host.errors import HostError
from host.storage import KeyValueStore
from reader import Blacklist, Document, DocumentSet
from ui.frame import Frame, render_frame

logger = logging.getLogger(__name__)


class SessionView(NamedTuple):
    """A consistent read of the session for the host."""
    state:         PlaybackState
    frame:         Frame
    pending_tick:  Optional[ScheduleTick]
    notifications: List[NotifyUser]
    documents:     List[Document]


def parse_saved_wpm(raw: Optional[str], default: int = DEFAULT_WPM) -> int:
    """Persisted speed, or `default` when absent or not on the speed menu."""
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        logger.warning("Ignoring saved speed %r", raw)
        return default
    if value not in WPM_OPTIONS:
        logger.warning("Ignoring saved speed %d (not in %s)", value, WPM_OPTIONS)
        return default
    return value


class ReaderSession:
    """
    Attributes:
        documents     : DocumentSet for this session.
        blacklist     : Texts the user deleted.
        engine        : The PlaybackEngine.
        frame         : Frame for the latest snapshot.
        pending_tick  : The one outstanding ScheduleTick, or None.
        notifications : User notifications not yet shown by the host.
    """

    def __init__(
        self,
        clipboard: ClipboardSource,
        store: KeyValueStore,
        scan_count: int = CLIPBOARD_SCAN_COUNT,
        min_words: int = MIN_WORDS,
        default_wpm: int = DEFAULT_WPM,
    ):
        self.clipboard   = clipboard
        self.store       = store
        self.scan_count  = scan_count
        self.min_words   = min_words
        self.default_wpm = default_wpm

        self.documents:     DocumentSet            = DocumentSet()
        self.blacklist:     Blacklist              = Blacklist()
        self.engine:        PlaybackEngine         = PlaybackEngine(wpm=default_wpm)
        self.frame:         Frame                  = render_frame(None)
        self.pending_tick:  Optional[ScheduleTick] = None
        self.notifications: List[NotifyUser]       = []

        self.started = False
        self._lock = threading.RLock()
        self.engine.subscribe(self._on_state)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> PlaybackState:
        """Load speed, blacklist and clipboard; select the first document."""
        with self._lock:
            if self.started:
                raise RuntimeError("Session already started")
            self.started = True

            try:
                wpm = parse_saved_wpm(self.store.get(SPEED_KEY), self.default_wpm)
                self.blacklist = Blacklist.from_json(self.store.get(BLACKLIST_KEY))
            except HostError as exc:
                return self._start_failed("Failed to read saved settings", exc)

            if wpm != self.engine.state.wpm:
                # restoring the saved value; its PersistValue is not carried out
                self.engine.set_speed(wpm)

            try:
                self._scan_clipboard()
            except HostError as exc:
                return self._start_failed("Failed to read clipboard", exc)
            logger.info("Session started: %d documents at %d wpm", len(self.documents), wpm)
            return self.engine.state

    def reload(self) -> PlaybackState:
        """
        Rescan the clipboard as a fresh start would, keeping the speed and
        blacklist already loaded.  On failure the current documents stay.
        """
        with self._lock:
            if not self.started:
                raise RuntimeError("Session not started")
            try:
                self._scan_clipboard()
            except HostError as exc:
                logger.error("Failed to read clipboard: %s", exc)
                self._notify(NotifyUser("Failed to read clipboard", "failure", str(exc)))
                return self.engine.state
            logger.info("Reloaded %d documents", len(self.documents))
            return self.engine.state

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def select_document(self, doc_id: str) -> PlaybackState:
        with self._lock:
            doc = self.documents.get(doc_id)
            if doc is None:
                logger.debug("select_document: unknown id %s", doc_id)
                return self.engine.state
            self._apply(self.engine.load(doc.id, doc.words))
            return self.engine.state

    def toggle(self) -> PlaybackState:
        with self._lock:
            self._apply(self.engine.toggle())
            return self.engine.state

    def play(self) -> PlaybackState:
        with self._lock:
            self._apply(self.engine.play())
            return self.engine.state

    def pause(self) -> PlaybackState:
        with self._lock:
            self._apply(self.engine.pause())
            return self.engine.state

    def restart(self) -> PlaybackState:
        with self._lock:
            self._apply(self.engine.restart())
            return self.engine.state

    def jump_to(self, index: int) -> PlaybackState:
        with self._lock:
            self._apply(self.engine.jump_to(index))
            return self.engine.state

    def set_speed(self, wpm: object) -> PlaybackState:
        """Raises ValueError for speeds outside the menu."""
        with self._lock:
            self._apply(self.engine.set_speed(wpm))
            return self.engine.state

    def tick(self, token: int) -> PlaybackState:
        with self._lock:
            self._apply(self.engine.tick(token))
            return self.engine.state

    def delete_document(self, doc_id: str) -> PlaybackState:
        """
        Blacklist the document's text and drop it from the set.  The
        in-memory removal stands even if persisting the blacklist fails.
        """
        with self._lock:
            position = self.documents.index_of(doc_id)
            doc = self.documents.remove(doc_id)
            if doc is None:
                return self.engine.state

            self.blacklist.add(doc.text)
            self._persist(BLACKLIST_KEY, self.blacklist.to_json())

            if self.engine.state.document_id == doc.id:
                successor = self.documents.successor_at(position)
                if successor is None:
                    self._apply(self.engine.clear())
                else:
                    self._apply(self.engine.load(successor.id, successor.words))

            logger.info("Deleted document %s", doc.id)
            self._notify(NotifyUser("Deleted"))
            return self.engine.state

    def copy_document(self, doc_id: Optional[str] = None) -> bool:
        """Put a document's text (default: the selected one) on the clipboard."""
        with self._lock:
            doc = self.documents.get(doc_id or self.engine.state.document_id)
            if doc is None:
                return False
            try:
                self.clipboard.write_text(doc.text)
            except HostError as exc:
                logger.error("Copy failed: %s", exc)
                self._notify(NotifyUser("Failed to copy", "failure", str(exc)))
                return False
            self._notify(NotifyUser("Copied to clipboard"))
            return True

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def state(self) -> PlaybackState:
        return self.engine.state

    @property
    def selected(self) -> Optional[Document]:
        return self.documents.get(self.engine.state.document_id)

    def current_word(self) -> str:
        return self.engine.current_word

    def drain_notifications(self) -> List[NotifyUser]:
        with self._lock:
            pending, self.notifications = self.notifications, []
            return pending

    def snapshot(self, drain: bool = True) -> SessionView:
        """State, frame, pending tick and notifications read under one lock."""
        with self._lock:
            notes = self.drain_notifications() if drain else []
            return SessionView(
                state=self.engine.state,
                frame=self.frame,
                pending_tick=self.pending_tick,
                notifications=notes,
                documents=list(self.documents),
            )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _scan_clipboard(self) -> None:
        """Rebuild the document set and select its first document."""
        entries = self.clipboard.read_entries(self.scan_count)
        stamp = int(time.time() * 1000)
        self.documents = DocumentSet.build(
            entries, self.blacklist, min_words=self.min_words, id_prefix=f"{stamp}-"
        )
        first = self.documents.first()
        if first is None:
            self._apply(self.engine.clear())
        else:
            self._apply(self.engine.load(first.id, first.words))

    def _start_failed(self, title: str, exc: Exception) -> PlaybackState:
        logger.error("%s: %s", title, exc)
        self._notify(NotifyUser(title, "failure", str(exc)))
        self._apply(self.engine.clear())
        return self.engine.state

    def _on_state(self, state: PlaybackState) -> None:
        # one frame per snapshot
        self.frame = render_frame(self.engine.current_word, state.index, state.word_count)

    def _apply(self, transition: Transition) -> None:
        for effect in transition.effects:
            if isinstance(effect, ScheduleTick):
                self.pending_tick = effect
            elif isinstance(effect, CancelTick):
                if self.pending_tick and self.pending_tick.token == effect.token:
                    self.pending_tick = None
            elif isinstance(effect, PersistValue):
                self._persist(effect.key, effect.value)
            elif isinstance(effect, NotifyUser):
                self._notify(effect)

    def _persist(self, key: str, value: str) -> None:
        try:
            self.store.set(key, value)
        except HostError as exc:
            logger.error("Failed to save %s: %s", key, exc)
            self._notify(NotifyUser("Failed to save", "failure", str(exc)))

    def _notify(self, note: NotifyUser) -> None:
        self.notifications.append(note)
