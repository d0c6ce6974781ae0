"""
ui/
---
Presentation layer.

    from ui import render_frame, FrameConfig
    from ui import playback_controls, speed_selector, document_list, …
"""

from ui.frame import (
    Frame,
    FrameConfig,
    render_frame,
    displayable_word,
    orp_index,
    progress_fraction,
)

from ui.controls import (
    playback_controls,
    speed_selector,
    document_list,
    empty_view,
    frame_panel,
)

__all__ = [
    "Frame",
    "FrameConfig",
    "render_frame",
    "displayable_word",
    "orp_index",
    "progress_fraction",
    "playback_controls",
    "speed_selector",
    "document_list",
    "empty_view",
    "frame_panel",
]
