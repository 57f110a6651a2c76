"""Exception types raised at the boundaries of the rendering core."""

from __future__ import annotations


class HlcatError(Exception):
    """Base class for errors reported to the user as ``hlcat: <message>``."""


class ConfigError(HlcatError):
    """Invalid option combination or unknown theme; fatal for the whole run."""


class HighlightError(HlcatError):
    """Pygments could not tokenize or format a file; fatal for that file only."""
