"""Module entrypoint for ``python -m hlcat``.

This keeps module-mode execution behavior identical to the console script.
All argument parsing and file handling happen in ``hlcat.cli``.
"""

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
