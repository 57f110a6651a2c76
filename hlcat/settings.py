"""Resolve command-line flags into one immutable ``RenderConfig``.

Precedence is flag, then persisted config, then built-in default.
``cat`` combination flags (``-A``, ``-e``, ``-t``, ``-p``) are folded in here.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TextIO

from . import config as config_store
from .errors import ConfigError
from .highlight import DEFAULT_THEME, validate_theme
from .render import NUMBER_ALL, NUMBER_NONBLANK, NUMBER_NONE, RenderConfig
from .terminal import color_capable, terminal_columns
from .width import DEFAULT_TAB_WIDTH

logger = logging.getLogger(__name__)


def _resolve_color(mode: str, stdout: TextIO, to_file: bool) -> bool:
    if to_file:
        return False
    if mode == "always":
        return True
    if mode == "never":
        return False
    return color_capable(stdout)


def _resolve_wrap(mode: str, wrap_width: int | None, stdout: TextIO) -> bool:
    if wrap_width is not None and wrap_width > 0:
        return True
    if mode == "character":
        return True
    if mode == "never":
        return False
    return color_capable(stdout)


def _resolve_number_mode(args: argparse.Namespace) -> str:
    if args.plain:
        return NUMBER_NONE
    if args.number_nonblank:
        return NUMBER_NONBLANK
    if args.number:
        return NUMBER_ALL
    return NUMBER_NONE


def build_render_config(args: argparse.Namespace, stdout: TextIO | None = None) -> RenderConfig:
    """Build the render configuration for this process.

    Raises ``ConfigError`` for an unknown theme or a non-positive tab width.
    """
    stdout = stdout if stdout is not None else sys.stdout

    theme = args.theme or config_store.load_theme_name() or DEFAULT_THEME
    validate_theme(theme)

    tab_width = args.tabs if args.tabs is not None else (config_store.load_tab_width() or DEFAULT_TAB_WIDTH)
    if tab_width < 1:
        raise ConfigError(f"invalid tab width {tab_width}")

    color_mode = args.color or config_store.load_color_mode() or "auto"
    wrap_mode = args.wrap or config_store.load_wrap_mode() or "auto"

    show_ends = args.show_ends or args.show_all or args.e
    show_tabs = args.show_tabs or args.show_all or args.t
    titles = (args.title or args.title_number) and not args.plain

    resolved = RenderConfig(
        number_mode=_resolve_number_mode(args),
        show_tabs=show_tabs,
        show_ends=show_ends,
        squeeze_blank=args.squeeze_blank,
        wrap=_resolve_wrap(wrap_mode, args.wrap_width, stdout),
        wrap_width=args.wrap_width if args.wrap_width else terminal_columns(),
        tab_width=tab_width,
        color=_resolve_color(color_mode, stdout, to_file=bool(args.output)),
        theme=theme,
        language=args.language or None,
        titles=titles,
        title_numbers=titles and args.title_number,
    )
    logger.debug("resolved render config: %s", resolved)
    return resolved
