"""Render loop that turns highlighted text into final terminal rows.

Owns blank squeezing, line numbering, gutter indentation, and wrapping.
``RenderConfig`` is immutable; ``RenderContext`` lives for one file only.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .ansi import RESET
from .transform import is_blank_line, transform_line
from .width import DEFAULT_TAB_WIDTH
from .wrap import wrap_line

NUMBER_NONE = "none"
NUMBER_ALL = "all"
NUMBER_NONBLANK = "nonblank"
NUMBER_MODES = (NUMBER_NONE, NUMBER_ALL, NUMBER_NONBLANK)

NUMBER_STYLE = "\x1b[2;37m"


@dataclass(frozen=True)
class RenderConfig:
    """Process-wide rendering options, resolved once from flags and config."""

    number_mode: str = NUMBER_NONE
    show_tabs: bool = False
    show_ends: bool = False
    squeeze_blank: bool = False
    wrap: bool = False
    wrap_width: int = 80
    tab_width: int = DEFAULT_TAB_WIDTH
    color: bool = False
    theme: str = "monokai"
    language: str | None = None
    titles: bool = False
    title_numbers: bool = False

    @property
    def numbering(self) -> bool:
        return self.number_mode != NUMBER_NONE


@dataclass
class RenderContext:
    """Cross-line state for rendering a single file or stream."""

    total_lines: int
    number_width: int = 0
    line_number: int = 0
    prev_blank: bool = False
    rows_emitted: int = 0
    lines_skipped: int = 0

    @classmethod
    def for_lines(cls, total_lines: int, config: RenderConfig) -> RenderContext:
        number_width = len(str(total_lines)) + 1 if config.numbering else 0
        return cls(total_lines=total_lines, number_width=number_width)


def split_logical_lines(text: str) -> list[str]:
    """Split text on ``\\n``; a final newline ends the last line instead of opening one."""
    if not text:
        return []
    if text.endswith("\n"):
        text = text[:-1]
    return text.split("\n")


def _number_prefix(line_number: int, context: RenderContext, config: RenderConfig) -> str:
    digits = f"{line_number:>{context.number_width - 1}}"
    if config.color:
        return f"{NUMBER_STYLE}{digits}{RESET} "
    return f"{digits} "


def render_line(line: str, config: RenderConfig, context: RenderContext) -> list[str]:
    """Render one logical line into zero or more output rows (without newlines).

    Updates ``context`` in place: the counter only moves for numbered lines,
    and a squeezed blank line produces no rows at all.
    """
    blank = is_blank_line(line)
    if config.squeeze_blank and blank and context.prev_blank:
        context.lines_skipped += 1
        return []
    context.prev_blank = blank

    numbered = config.number_mode == NUMBER_ALL or (config.number_mode == NUMBER_NONBLANK and not blank)
    if numbered:
        context.line_number += 1

    display = transform_line(line, config.show_tabs, config.show_ends)
    if config.wrap and context.number_width < config.wrap_width:
        segments = wrap_line(display, config.wrap_width - context.number_width, config.tab_width)
    else:
        segments = [display]

    indent = " " * context.number_width
    rows: list[str] = []
    for idx, segment in enumerate(segments):
        if numbered and idx == 0:
            rows.append(_number_prefix(context.line_number, context, config) + segment)
        else:
            rows.append(indent + segment)
    context.rows_emitted += len(rows)
    return rows


def render_lines(
    lines: Iterable[str],
    config: RenderConfig,
    context: RenderContext,
) -> Iterator[str]:
    """Yield newline-terminated output rows for each logical line."""
    for line in lines:
        for row in render_line(line, config, context):
            yield row + "\n"


def render_text(text: str, config: RenderConfig) -> tuple[str, RenderContext]:
    """Render a whole highlighted document, returning output and final counters."""
    lines = split_logical_lines(text)
    context = RenderContext.for_lines(len(lines), config)
    return "".join(render_lines(lines, config, context)), context
