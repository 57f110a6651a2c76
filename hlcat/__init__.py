"""Public package surface for hlcat.

Exports ``main`` for programmatic CLI invocation.
The rendering core lives in ``ansi``, ``width``, ``transform``, ``wrap`` and ``render``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
