"""
frame.py — RSVP Word Frame Renderer
====================================
Pure rendering function: (word, index, total) → Frame.

The renderer consumes:
  • word    – the word currently on screen (raw, before filtering)
  • index   – its position in the document
  • total   – number of words in the document
  • config  – visual config (canvas size, advance width, colors, …)

And produces a Frame: the SVG, its data URI and a markdown snippet the
host can drop into a detail pane.

Design decisions:
  - NO state.  The caller passes everything in and gets a value back.
  - Monospace layout with a fixed advance per character.  The word is
    positioned so its ORP character (the middle one) is always centred
    on the canvas, whatever the word's length.
  - Words that are too long, or that look like markup, are replaced by
    an em dash instead of being laid out.
  - The progress bar never moves or resizes; only its fill changes.
"""

import html
import math
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote


# ---------------------------------------------------------------------------
# Visual Config — canvas, glyph metrics, colors
# ---------------------------------------------------------------------------
class FrameConfig:
    # canvas
    width:  int = 600
    height: int = 400

    # glyphs
    font_size:   int = 56
    font_weight: str = "500"
    font_family: str = "SF Mono, Menlo, Monaco, monospace"
    char_width:  int = 34
    baseline_offset: int = 50     # below vertical centre

    # colors
    orp_color:  str = "#ef4444"
    text_color: str = "#e5e5e5"

    # progress bar
    bar_width:  int = 200
    bar_height: int = 2
    bar_bottom: int = 40          # distance from the bottom edge
    bar_track:  str = "#333"
    bar_fill:   str = "#ef4444"

    # filtering
    max_word_length: int = 15
    noise_chars:     str = "[]()!#*`"
    placeholder:     str = "—"


CONFIG = FrameConfig()

FALLBACK_MARKDOWN = "# No Text Found\n\nCopy some text to your clipboard"


@dataclass(frozen=True)
class Frame:
    """
    Attributes:
        word     : Word as displayed (the placeholder if the original was filtered).
        orp      : Index of the highlighted character in `word`.
        svg      : Raw SVG markup ("" for the fallback frame).
        data_uri : `svg` as a data: URI.
        markdown : `![word](data_uri)`, or the fallback message.
        fallback : True when there was no word to show.
    """

    word:     str
    orp:      int
    svg:      str
    data_uri: str
    markdown: str
    fallback: bool = False

    @property
    def alt(self) -> str:
        return self.word


# ---------------------------------------------------------------------------
# Word filtering & ORP
# ---------------------------------------------------------------------------
def displayable_word(word: str, config: FrameConfig = CONFIG) -> str:
    """The word itself, or the placeholder if it is too long or has noise characters."""
    if len(word) > config.max_word_length:
        return config.placeholder
    if any(ch in config.noise_chars for ch in word):
        return config.placeholder
    return word


def orp_index(word: str) -> int:
    """Optical recognition point: the middle character, left of centre for even lengths."""
    return len(word) // 2


def progress_fraction(index: int, total: int) -> float:
    if total <= 1:
        return 0.0
    return index / (total - 1)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _num(value: float) -> str:
    # 300.0 -> "300", 283.5 -> "283.5"
    return f"{value:g}"


# ---------------------------------------------------------------------------
# SVG
# ---------------------------------------------------------------------------
def render_word_svg(
    word: str,
    orp: int,
    index: int,
    total: int,
    config: FrameConfig = CONFIG,
) -> str:
    """Lay out `word` glyph by glyph with character `orp` pinned to the centre."""
    center_x = config.width / 2
    center_y = config.height / 2 + config.baseline_offset
    start_x = center_x - (orp * config.char_width + config.char_width / 2)

    svg_parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{config.width}" '
        f'height="{config.height}" viewBox="0 0 {config.width} {config.height}">'
    ]

    for i, ch in enumerate(word):
        fill = config.orp_color if i == orp else config.text_color
        x = start_x + i * config.char_width
        svg_parts.append(
            f'<text x="{_num(x)}" y="{_num(center_y)}" fill="{fill}" '
            f'font-size="{config.font_size}" font-weight="{config.font_weight}" '
            f'font-family="{config.font_family}" dominant-baseline="central">'
            f'{html.escape(ch, quote=False)}</text>'
        )

    svg_parts.append(_render_progress_bar(index, total, config))
    svg_parts.append("</svg>")
    return "".join(svg_parts)


def _render_progress_bar(index: int, total: int, config: FrameConfig) -> str:
    bar_x = (config.width - config.bar_width) / 2
    bar_y = config.height - config.bar_bottom
    filled = _round_half_up(config.bar_width * progress_fraction(index, total))
    return (
        f'<rect x="{_num(bar_x)}" y="{bar_y}" width="{config.bar_width}" '
        f'height="{config.bar_height}" fill="{config.bar_track}" rx="1"/>'
        f'<rect x="{_num(bar_x)}" y="{bar_y}" width="{filled}" '
        f'height="{config.bar_height}" fill="{config.bar_fill}" rx="1"/>'
    )


def svg_data_uri(svg: str) -> str:
    # same escaping as JavaScript's encodeURIComponent
    return "data:image/svg+xml;utf8," + quote(svg, safe="-_.!~*'()")


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_frame(
    word: Optional[str],
    index: int = 0,
    total: int = 0,
    config: FrameConfig = CONFIG,
) -> Frame:
    """
    Returns the Frame for one word.

    Args:
        word   : Raw word at `index`, or None/"" when nothing is selected.
        index  : Position of the word in its document.
        total  : Number of words in the document.
    """
    if not word:
        return Frame(word="", orp=0, svg="", data_uri="", markdown=FALLBACK_MARKDOWN, fallback=True)

    shown = displayable_word(word, config)
    orp = orp_index(shown)
    svg = render_word_svg(shown, orp, index, total, config)
    uri = svg_data_uri(svg)
    return Frame(word=shown, orp=orp, svg=svg, data_uri=uri, markdown=f"![{shown}]({uri})")
