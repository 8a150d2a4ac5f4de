"""Console entrypoint for easel.

Delegates to :mod:`easel.cli` so that ``python -m easel`` and the installed
``easel`` console script run the same code.
"""

from __future__ import annotations

import sys

from easel.cli import main as cli_main


def main() -> None:
    """Application entrypoint (delegates to :func:`easel.cli.main`)."""
    sys.exit(cli_main())


if __name__ == "__main__":
    main()
