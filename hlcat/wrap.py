"""Visual line wrapping for ANSI-styled text.

Segments are bounded by display width; escapes cost nothing and never break.
A code point is never split, so a wide glyph can leave a segment one cell short.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .ansi import Text, iter_tokens
from .width import DEFAULT_TAB_WIDTH, char_width


@dataclass
class WrapState:
    """Accumulator for the segment currently being built."""

    tab_width: int = DEFAULT_TAB_WIDTH
    col: int = 0
    chunk: list[str] = field(default_factory=list)
    segments: list[str] = field(default_factory=list)

    def flush(self) -> None:
        self.segments.append("".join(self.chunk))
        self.chunk = []
        self.col = 0


def wrap_line(line: str, width: int, tab_width: int = DEFAULT_TAB_WIDTH) -> list[str]:
    """Wrap a styled line into segments that fit ``width`` display columns.

    Concatenating the result gives back ``line``. ``width <= 0`` disables
    wrapping and returns ``[line]``; an empty line yields ``[""]``. A code
    point wider than ``width`` still gets a segment of its own.
    """
    if width <= 0:
        return [line]

    state = WrapState(tab_width=tab_width)
    for token in iter_tokens(line):
        if not isinstance(token, Text):
            state.chunk.append(token.raw)
            continue
        w = char_width(token.char, state.col, tab_width)
        if state.col + w > width and state.col > 0:
            state.flush()
        state.chunk.append(token.char)
        state.col += w

    if state.chunk:
        state.flush()
    return state.segments or [""]
