"""
controls.py — UI Panels
========================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • playback_controls  – play/pause, restart, word counter
  • speed_selector     – WPM dropdown
  • document_list      – clipboard texts, selected row highlighted
  • frame_panel        – the current word frame (or the fallback message)
  • empty_view         – shown when no clipboard text is eligible

Design:
  - All panels are stateless render functions.
  - State is passed in as arguments.
  - Output is raw HTML strings; clipboard text is escaped.
  - The main app stitches them together.
"""

import html
from typing import Iterable, Optional

from config import WPM_OPTIONS
from engine.state import PlaybackState, PlayStatus
from reader import Document
from ui.frame import Frame


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(state: PlaybackState) -> str:
    play_icon = "⏸" if state.playing else "▶"
    play_label = "Pause" if state.playing else "Play"
    shown = state.index + 1 if state.word_count else 0
    finished = state.status == PlayStatus.FINISHED

    return f"""
    <div class="panel playback-controls">
      <div class="button-row">
        <button id="btn-restart" title="Restart">⏮</button>
        <button id="btn-play" title="{play_label} (Space)">{play_icon}</button>
      </div>
      <div class="step-info">
        Word <span id="current-word">{shown}</span> / <span id="total-words">{state.word_count}</span>
        {' <span class="finished-badge">FINISHED</span>' if finished else ''}
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Speed Selector
# ---------------------------------------------------------------------------
def speed_selector(wpm: int) -> str:
    options = []
    for speed in WPM_OPTIONS:
        sel = "selected" if speed == wpm else ""
        options.append(f'<option value="{speed}" {sel}>{speed} WPM</option>')

    return f"""
    <div class="speed-control">
      <select id="speed-selector" title="Select Speed">
        {''.join(options)}
      </select>
    </div>
    """


# ---------------------------------------------------------------------------
# Document List
# ---------------------------------------------------------------------------
def document_list(documents: Iterable[Document], selected_id: Optional[str]) -> str:
    rows = []
    for doc in documents:
        active = "selected" if doc.id == selected_id else ""
        rows.append(
            f'<li class="doc-row {active}" data-id="{html.escape(doc.id)}">'
            f'<span class="doc-title">{html.escape(doc.title)}</span>'
            f'<span class="doc-meta">{doc.word_count} words</span>'
            f'<button class="btn-copy" title="Copy (Ctrl+C)">⧉</button>'
            f'<button class="btn-delete" title="Delete (Ctrl+Backspace)">🗑</button>'
            f'</li>'
        )
    if not rows:
        return empty_view()
    return f'<ul id="doc-list">{"".join(rows)}</ul>'


def empty_view() -> str:
    return """
    <div class="empty-view">
      <h3>Nothing to Parse.</h3>
      <p>Copy some text first, then open Parse</p>
    </div>
    """


# ---------------------------------------------------------------------------
# Frame
# ---------------------------------------------------------------------------
def frame_panel(frame: Frame) -> str:
    if frame.fallback:
        return """
        <div class="frame fallback">
          <h1>No Text Found</h1>
          <p>Copy some text to your clipboard</p>
        </div>
        """
    return (
        f'<div class="frame">'
        f'<img src="{html.escape(frame.data_uri)}" alt="{html.escape(frame.alt)}">'
        f'</div>'
    )
