"""Command-line front door for hlcat.

Parses ``cat``-style options, reads each input fully, highlights and renders it.
A failing file is reported on stderr and skipped; the rest still print.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import TextIO

from . import config as config_store
from .errors import ConfigError, HlcatError
from .highlight import (
    SURROGATE_ERRORS,
    available_languages,
    available_themes,
    highlight,
    read_text,
    validate_theme,
)
from .render import RenderConfig, render_text
from .settings import build_render_config
from .terminal import is_tty

logger = logging.getLogger(__name__)

STDIN_NAME = "<stdin>"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hlcat",
        description="Concatenate files to standard output with syntax highlighting, wrapping and numbering.",
    )
    parser.add_argument("files", nargs="*", metavar="FILE", help="Files to print; '-' reads standard input.")

    # cat
    parser.add_argument("-n", "--number", action="store_true", help="number all output lines")
    parser.add_argument(
        "-b", "--number-nonblank", action="store_true", help="number nonempty output lines, overrides -n"
    )
    parser.add_argument("-E", "--show-ends", action="store_true", help="display $ at end of each line")
    parser.add_argument("-T", "--show-tabs", action="store_true", help="display TAB characters as ^I")
    parser.add_argument("-s", "--squeeze-blank", action="store_true", help="suppress repeated empty output lines")
    parser.add_argument("-A", "--show-all", action="store_true", help="equivalent to -TE")
    parser.add_argument("-e", "--show-nonprinting-ends", dest="e", action="store_true", help="equivalent to -E")
    parser.add_argument("-t", "--show-nonprinting-tabs", dest="t", action="store_true", help="equivalent to -T")
    parser.add_argument("-u", dest="u", action="store_true", help="ignored (POSIX compatibility)")

    # highlighting and layout
    parser.add_argument(
        "--color", choices=config_store.MODE_CHOICES, default=None, help="when to use colors (default: auto)"
    )
    parser.add_argument("-S", "--theme", default=None, help="Pygments style used for highlighting.")
    parser.add_argument("-l", "--language", default=None, help="explicitly set the language for highlighting")
    parser.add_argument(
        "--wrap", choices=config_store.WRAP_CHOICES, default=None, help="text-wrapping mode (default: auto)"
    )
    parser.add_argument(
        "--wrap-width",
        type=_positive_int,
        default=None,
        help="wrap width (default: terminal width); implies --wrap=character",
    )
    parser.add_argument("--tabs", type=_positive_int, default=None, help="tab width (default: 8)")
    parser.add_argument("--title", action="store_true", help="print a title header for each file")
    parser.add_argument(
        "--title-number", action="store_true", help="include file number in title (implies --title)"
    )
    parser.add_argument("-o", "--output", default=None, help="write output to file instead of stdout")
    parser.add_argument(
        "-p", "--plain", action="store_true", help="no titles and no line numbers (color still applies)"
    )

    # housekeeping
    parser.add_argument("--list-themes", action="store_true", help="display list of supported themes")
    parser.add_argument("--list-languages", action="store_true", help="display list of supported languages")
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="persist the given --theme/--tabs/--color/--wrap as defaults and exit",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug details to stderr")
    return parser


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format="hlcat: %(name)s: %(message)s")


def _print_themes(out: TextIO) -> None:
    for name in available_themes():
        out.write(f"- {name}\n")


def _print_languages(out: TextIO) -> None:
    for name, aliases, filenames in available_languages():
        out.write(f"- {name:<20} aliases={','.join(aliases):<30} files={','.join(filenames)}\n")


def _save_defaults(args: argparse.Namespace, out: TextIO) -> None:
    if args.theme is not None:
        validate_theme(args.theme)
    saved = config_store.save_defaults(
        {"theme": args.theme, "tabs": args.tabs, "color": args.color, "wrap": args.wrap}
    )
    out.write(f"saved defaults to {config_store.CONFIG_PATH}: {saved}\n")


def _reconfigure_stdout() -> None:
    """Let undecodable input bytes pass through to stdout unchanged."""
    reconfigure = getattr(sys.stdout, "reconfigure", None)
    if reconfigure is not None:
        reconfigure(errors=SURROGATE_ERRORS)


def title_line(name: str, index: int, config: RenderConfig) -> str:
    if config.title_numbers:
        return f"== [#{index + 1}: {name}] ==\n"
    return f"== [{name}] ==\n"


def read_input(target: str) -> tuple[str, str]:
    """Return ``(display name, decoded text)`` for a path or ``-``."""
    if target == "-":
        return STDIN_NAME, read_text(sys.stdin.buffer.read())
    return target, read_text(Path(target).read_bytes())


def render_document(source: str, name: str, index: int, config: RenderConfig) -> str:
    """Highlight and render one file into the exact text to write.

    Everything is built in memory first so a failure leaves no partial output.
    """
    highlighted = highlight(source, name, config.language, config.theme, config.color)
    rendered, context = render_text(highlighted, config)
    logger.debug(
        "%s: %d lines, %d numbered, %d rows, %d squeezed",
        name,
        context.total_lines,
        context.line_number,
        context.rows_emitted,
        context.lines_skipped,
    )
    if config.titles:
        return title_line(name, index, config) + rendered
    return rendered


def cat_inputs(targets: list[str], config: RenderConfig, out: TextIO) -> bool:
    """Render every target to ``out``; return whether all of them succeeded."""
    ok = True
    for index, target in enumerate(targets):
        try:
            name, source = read_input(target)
            document = render_document(source, name, index, config)
        except OSError as exc:
            sys.stderr.write(f"hlcat: cant open file {target}: {exc.strerror or exc}\n")
            ok = False
            continue
        except HlcatError as exc:
            sys.stderr.write(f"hlcat: {exc}\n")
            ok = False
            continue
        try:
            out.write(document)
            out.flush()
        except BrokenPipeError:
            raise
        except OSError as exc:
            sys.stderr.write(f"hlcat: write error on {name}: {exc}\n")
            ok = False
    return ok


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments and print every requested input.

    Returns the process exit status: ``0`` when every input rendered, ``1`` if
    any of them failed. Configuration problems exit immediately.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.list_themes:
        _print_themes(sys.stdout)
        return 0
    if args.list_languages:
        _print_languages(sys.stdout)
        return 0

    try:
        if args.save_defaults:
            _save_defaults(args, sys.stdout)
            return 0
        config = build_render_config(args)
    except ConfigError as exc:
        raise SystemExit(f"hlcat: {exc}") from exc
    except OSError as exc:
        raise SystemExit(f"hlcat: cant write config {config_store.CONFIG_PATH}: {exc}") from exc

    targets = list(args.files)
    if not targets:
        if is_tty(sys.stdin):
            raise SystemExit("hlcat: no files given")
        targets = ["-"]

    try:
        if args.output:
            try:
                out = open(args.output, "w", encoding="utf-8", errors=SURROGATE_ERRORS, newline="")
            except OSError as exc:
                raise SystemExit(f"hlcat: cant open output file {args.output}: {exc}") from exc
            with out:
                ok = cat_inputs(targets, config, out)
        else:
            _reconfigure_stdout()
            ok = cat_inputs(targets, config, sys.stdout)
    except BrokenPipeError:
        # Later flushes at interpreter exit would hit the closed pipe again.
        sys.stdout = open(os.devnull, "w", encoding="utf-8")
        return 0
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
