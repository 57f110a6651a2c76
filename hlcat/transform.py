"""Per-line marker transforms that keep escape sequences intact.

Handles ``cat -T`` tab markers, ``cat -E`` end markers, and blank detection.
Blank detection always runs on the untouched line so markers never hide blanks.
"""

from __future__ import annotations

from .ansi import ESC, Escape, Text, iter_tokens, strip_ansi

TAB_MARKER = "^I"
END_MARKER = "$"


def is_blank_line(line: str) -> bool:
    """Return whether ``line`` has nothing but whitespace once escapes are removed."""
    return strip_ansi(line).strip() == ""


def show_tabs(line: str) -> str:
    """Replace every literal TAB code point with ``^I``."""
    if "\t" not in line:
        return line
    if ESC not in line:
        return line.replace("\t", TAB_MARKER)
    return "".join(
        TAB_MARKER if isinstance(token, Text) and token.char == "\t" else token.raw
        for token in iter_tokens(line)
    )


def insert_end_marker(line: str, marker: str = END_MARKER) -> str:
    """Add ``marker`` at the visible end of ``line``.

    When the line finishes with an escape sequence (typically a color reset),
    the marker goes right before that final sequence so it renders in the
    line's last style instead of after the reset.
    """
    last_start = -1
    last: Escape | Text | None = None
    pos = 0
    for token in iter_tokens(line):
        last_start = pos
        last = token
        pos += len(token.raw)
    if isinstance(last, Escape):
        return line[:last_start] + marker + line[last_start:]
    return line + marker


def transform_line(line: str, show_tabs_enabled: bool = False, show_ends: bool = False) -> str:
    """Apply enabled tab and end markers to one logical line."""
    if show_tabs_enabled:
        line = show_tabs(line)
    if show_ends:
        line = insert_end_marker(line)
    return line
