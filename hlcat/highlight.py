"""Source decoding and Pygments syntax highlighting.

Produces the ANSI-annotated text consumed by the render loop.
With color disabled the source passes through untouched.
"""

from __future__ import annotations

import logging
import sys

from pygments import highlight as pygments_highlight
from pygments.formatters import TerminalTrueColorFormatter
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_all_lexers, get_lexer_by_name, get_lexer_for_filename, guess_lexer
from pygments.styles import get_all_styles, get_style_by_name
from pygments.util import ClassNotFound

from .errors import ConfigError, HighlightError

logger = logging.getLogger(__name__)

DEFAULT_THEME = "monokai"

# Lexers strip leading/trailing newlines by default, which would drop blank lines.
_LEXER_OPTIONS = {"stripnl": False}
_FORMATTERS: dict[str, TerminalTrueColorFormatter] = {}
SURROGATE_ERRORS = "surrogateescape"


def read_text(data: bytes) -> str:
    """Decode raw file bytes as UTF-8, dropping a leading BOM.

    Invalid bytes become lone surrogates so that writing with
    ``errors="surrogateescape"`` reproduces them exactly; valid characters
    around them keep their real widths.
    """
    return data.decode("utf-8-sig", errors=SURROGATE_ERRORS)


def available_themes() -> list[str]:
    return sorted(get_all_styles())


def available_languages() -> list[tuple[str, tuple[str, ...], tuple[str, ...]]]:
    """Return ``(name, aliases, filename patterns)`` for every Pygments lexer."""
    return sorted(
        ((name, tuple(aliases), tuple(filenames)) for name, aliases, filenames, _ in get_all_lexers()),
        key=lambda item: item[0].lower(),
    )


def validate_theme(theme: str) -> str:
    """Return ``theme`` when Pygments knows it, else raise ``ConfigError``."""
    try:
        get_style_by_name(theme)
    except ClassNotFound as exc:
        raise ConfigError(f"unknown theme {theme!r}") from exc
    return theme


def _formatter_for_theme(theme: str) -> TerminalTrueColorFormatter:
    """Return cached true-color terminal formatter for theme name."""
    formatter = _FORMATTERS.get(theme)
    if formatter is None:
        formatter = TerminalTrueColorFormatter(style=theme)
        _FORMATTERS[theme] = formatter
    return formatter


def select_lexer(source: str, name: str, language: str | None = None) -> Lexer:
    """Pick a lexer: explicit language, then filename, then content guess, then plain text.

    An unknown ``language`` is reported on stderr and detection continues.
    """
    if language:
        try:
            return get_lexer_by_name(language, **_LEXER_OPTIONS)
        except ClassNotFound:
            sys.stderr.write(f"hlcat: unknown language {language!r}, falling back to autodetect\n")
    try:
        return get_lexer_for_filename(name, source, **_LEXER_OPTIONS)
    except ClassNotFound:
        pass
    try:
        return guess_lexer(source, **_LEXER_OPTIONS)
    except ClassNotFound:
        return TextLexer(**_LEXER_OPTIONS)


def highlight(
    source: str,
    name: str,
    language: str | None = None,
    theme: str = DEFAULT_THEME,
    color: bool = True,
) -> str:
    """Return ``source`` with ANSI SGR sequences for syntax coloring.

    When ``color`` is false the text is returned unchanged so that no escapes
    reach uncolored output. Pygments failures raise ``HighlightError``.
    """
    if not color or not source:
        return source

    lexer = select_lexer(source, name, language)
    logger.debug("highlighting %s with lexer %s, theme %s", name, lexer.name, theme)
    try:
        return pygments_highlight(source, lexer, _formatter_for_theme(theme))
    except Exception as exc:
        raise HighlightError(f"highlight error in {name}: {exc}") from exc
