"""ANSI escape-sequence scanning.

Splits styled text into zero-width escape tokens and single code points.
Every other rendering stage consumes these tokens so escapes are never split.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

ESC = "\x1b"
CSI = ESC + "["
RESET = CSI + "0m"
# A missing final byte lets the sequence run to the end of input.
ANSI_ESCAPE_RE = re.compile(r"\x1b\[[^\x40-\x7e]*[\x40-\x7e]?")


@dataclass(frozen=True)
class Text:
    """One visible (or control) code point."""

    char: str

    @property
    def raw(self) -> str:
        return self.char


@dataclass(frozen=True)
class Escape:
    """An opaque CSI sequence, including its final byte when present."""

    raw: str


Token = Text | Escape


def escape_end(text: str, pos: int) -> int:
    """Return the end offset of the CSI sequence starting at ``pos``.

    Returns ``pos`` when ``text[pos:]`` does not start with ``ESC [``. A
    sequence without a final byte in ``0x40..0x7E`` runs to the end of input.
    """
    match = ANSI_ESCAPE_RE.match(text, pos)
    return match.end() if match else pos


def next_token(text: str, pos: int) -> tuple[Token, int]:
    """Classify the unit at ``pos`` and return it with the next offset."""
    end = escape_end(text, pos)
    if end > pos:
        return Escape(text[pos:end]), end
    return Text(text[pos]), pos + 1


def iter_tokens(text: str) -> Iterator[Token]:
    """Yield every token of ``text`` left to right."""
    pos = 0
    n = len(text)
    while pos < n:
        token, pos = next_token(text, pos)
        yield token


def tokenize(text: str) -> list[Token]:
    return list(iter_tokens(text))


def strip_ansi(text: str) -> str:
    """Remove all CSI sequences, keeping only text code points."""
    if ESC not in text:
        return text
    return "".join(token.char for token in iter_tokens(text) if isinstance(token, Text))
