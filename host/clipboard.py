"""
clipboard.py — Clipboard Sources
=================================
The reader needs the last few clipboard entries as plain text, most
recent first, and a way to put text back on the clipboard.

Implementations:
  • SystemClipboard – the OS clipboard via pyperclip.  The OS only exposes
                      the current entry, so this keeps the history it has
                      observed during the process lifetime.  Call
                      start_monitoring() to poll in the background.
  • MemoryClipboard – a fixed list of entries; used for tests and demos.
"""

import logging
import threading
from collections import deque
from typing import Deque, Iterable, List, Optional

import pyperclip

from host.errors import ClipboardError

logger = logging.getLogger(__name__)


class ClipboardSource:
    """Interface: read recent entries, write one entry."""

    def read_entries(self, max_count: int) -> List[str]:
        raise NotImplementedError

    def write_text(self, text: str) -> None:
        raise NotImplementedError


class SystemClipboard(ClipboardSource):
    def __init__(self, history_size: int = 50, update_interval: float = 0.5):
        self.update_interval = update_interval
        self._history: Deque[str] = deque(maxlen=history_size)
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._monitor: Optional[threading.Thread] = None

    def observe(self) -> None:
        """Record the current clipboard content if it changed."""
        try:
            current = pyperclip.paste()
        except pyperclip.PyperclipException as exc:
            raise ClipboardError(str(exc)) from exc
        self._record(current)

    def read_entries(self, max_count: int) -> List[str]:
        self.observe()
        with self._lock:
            return list(self._history)[:max_count]

    def write_text(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as exc:
            raise ClipboardError(str(exc)) from exc
        self._record(text)

    # ------------------------------------------------------------------
    # Background monitoring
    # ------------------------------------------------------------------
    @property
    def monitoring(self) -> bool:
        return self._monitor is not None and self._monitor.is_alive()

    def start_monitoring(self) -> None:
        if self.monitoring:
            return
        self._stop.clear()
        self._monitor = threading.Thread(
            target=self._monitor_loop, name="clipboard-monitor", daemon=True
        )
        self._monitor.start()
        logger.info("Monitoring clipboard every %.1fs", self.update_interval)

    def stop_monitoring(self) -> None:
        self._stop.set()
        if self._monitor is not None:
            self._monitor.join()
            self._monitor = None

    def _monitor_loop(self) -> None:
        while not self._stop.is_set():
            try:
                self.observe()
            except ClipboardError as exc:
                logger.warning("Clipboard unavailable, monitoring stopped: %s", exc)
                return
            self._stop.wait(self.update_interval)

    def _record(self, text: str) -> None:
        with self._lock:
            if text and (not self._history or self._history[0] != text):
                self._history.appendleft(text)
                logger.debug("Observed new clipboard entry (%d chars)", len(text))


class MemoryClipboard(ClipboardSource):
    def __init__(self, entries: Iterable[str] = ()):
        self.entries: List[str] = list(entries)

    def read_entries(self, max_count: int) -> List[str]:
        return self.entries[:max_count]

    def write_text(self, text: str) -> None:
        self.entries.insert(0, text)
