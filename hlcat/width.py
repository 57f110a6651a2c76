"""Terminal cell widths for single code points.

East Asian wide ranges are kept as a sorted table and searched with ``bisect``.
Tabs expand to the next stop relative to the current visual column.
"""

from __future__ import annotations

from bisect import bisect_right

from .ansi import strip_ansi

DEFAULT_TAB_WIDTH = 8

# Inclusive, ordered, non-overlapping. U+303F is carved out of the CJK block.
WIDE_RANGES: tuple[tuple[int, int], ...] = (
    (0x1100, 0x115F),
    (0x2329, 0x2329),
    (0x232A, 0x232A),
    (0x2E80, 0x303E),
    (0x3040, 0xA4CF),
    (0xAC00, 0xD7A3),
    (0xF900, 0xFAFF),
    (0xFE10, 0xFE19),
    (0xFE30, 0xFE6F),
    (0xFF00, 0xFF60),
    (0xFFE0, 0xFFE6),
    (0x1B000, 0x1B001),
    (0x1F300, 0x1F64F),
    (0x1F900, 0x1F9FF),
    (0x20000, 0x2FFFD),
    (0x30000, 0x3FFFD),
)
_RANGE_STARTS = tuple(start for start, _ in WIDE_RANGES)


def is_wide(codepoint: int) -> bool:
    """Return whether ``codepoint`` falls in the East Asian wide table."""
    idx = bisect_right(_RANGE_STARTS, codepoint) - 1
    return idx >= 0 and codepoint <= WIDE_RANGES[idx][1]


def char_width(ch: str, col: int, tab_width: int = DEFAULT_TAB_WIDTH) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next ``tab_width`` stop (8 when ``tab_width <= 0``),
    C0 controls and DEL take no columns, and wide code points take two.
    """
    if ch == "\t":
        stop = tab_width if tab_width > 0 else DEFAULT_TAB_WIDTH
        return stop - (col % stop)
    code = ord(ch)
    if code < 0x20 or code == 0x7F:
        return 0
    if code >= 0x1100 and is_wide(code):
        return 2
    return 1


def text_width(text: str, tab_width: int = DEFAULT_TAB_WIDTH) -> int:
    """Return the display width of ``text`` with escape sequences ignored."""
    col = 0
    for ch in strip_ansi(text):
        col += char_width(ch, col, tab_width)
    return col
