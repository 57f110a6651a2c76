"""Output-terminal probing used by automatic color and wrap modes."""

from __future__ import annotations

import os
import shutil
from typing import TextIO

DEFAULT_COLUMNS = 80


def is_tty(stream: TextIO) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def color_capable(stream: TextIO) -> bool:
    """Return whether ``stream`` should receive ANSI colors in ``auto`` mode.

    ``NO_COLOR`` (any value, even empty) and ``TERM=dumb`` disable color.
    """
    if "NO_COLOR" in os.environ:
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return is_tty(stream)


def terminal_columns() -> int:
    """Resolve current terminal width, defaulting to 80 columns."""
    size = shutil.get_terminal_size((DEFAULT_COLUMNS, 24))
    return size.columns if size.columns > 0 else DEFAULT_COLUMNS
